from __future__ import annotations

from typing import Iterable

from PySide6.QtGui import QAction, QActionGroup
from PySide6.QtWidgets import QApplication, QMainWindow, QStackedWidget

from scavenger_hunt.core.activity_log import ActivityLogger
from scavenger_hunt.core.location import LocationProvider
from scavenger_hunt.core.settings import AppSettings
from scavenger_hunt.core.task import HuntTask
from scavenger_hunt.gui.controllers import HuntController
from scavenger_hunt.gui.pages import TaskDetailPage, TaskListPage
from scavenger_hunt.gui.theme import apply_theme, normalize_theme
from scavenger_hunt.gui.widgets.log_viewer import LogViewerDialog

class MainWindow(QMainWindow):
    def __init__(
        self,
        settings: AppSettings,
        tasks: Iterable[HuntTask],
        hunt_name: str = "Scavenger Hunt",
        location_provider: LocationProvider | None = None,
        logger: ActivityLogger | None = None,
    ) -> None:
        super().__init__()
        self.settings = settings
        self.logger = logger or ActivityLogger()
        self.setWindowTitle(hunt_name)
        self.resize(520, 760)
        self.setMinimumSize(420, 560)

        self.controller = HuntController(
            settings=settings,
            tasks=tasks,
            location_provider=location_provider,
            logger=self.logger,
            parent=self,
        )
        self.controller.location_status.connect(lambda msg: self.statusBar().showMessage(msg, 5000))

        self._build_ui(hunt_name)
        self._build_menu()
        self.controller.start_location_updates()

    def _build_ui(self, hunt_name: str) -> None:
        self.stack = QStackedWidget()
        self.setCentralWidget(self.stack)

        self.list_page = TaskListPage(self.controller, title=hunt_name)
        self.list_page.task_selected.connect(self.open_task)
        self.detail_page = TaskDetailPage(self.controller)
        self.detail_page.back_requested.connect(self.show_list)

        self.stack.addWidget(self.list_page)
        self.stack.addWidget(self.detail_page)
        self.stack.setCurrentWidget(self.list_page)

    def _build_menu(self) -> None:
        view_menu = self.menuBar().addMenu("View")
        log_action = QAction("Activity Log…", self)
        log_action.triggered.connect(self._show_log)
        view_menu.addAction(log_action)

        theme_menu = view_menu.addMenu("Theme")
        group = QActionGroup(self)
        current = normalize_theme(self.settings.ui_theme)
        for mode in ("light", "dark"):
            act = QAction(mode.title(), self, checkable=True)
            act.setChecked(mode == current)
            act.triggered.connect(lambda _checked=False, m=mode: self._on_theme_changed(m))
            group.addAction(act)
            theme_menu.addAction(act)

    def open_task(self, index: int) -> None:
        self.detail_page.show_task(index)
        self.stack.setCurrentWidget(self.detail_page)

    def show_list(self) -> None:
        self.stack.setCurrentWidget(self.list_page)

    def _show_log(self) -> None:
        LogViewerDialog(self.logger.path, self).exec()

    def _on_theme_changed(self, theme: str) -> None:
        app = QApplication.instance()
        if app is None:
            return
        self.settings.ui_theme = apply_theme(app, theme)

    def closeEvent(self, event) -> None:
        self.controller.shutdown()
        super().closeEvent(event)
