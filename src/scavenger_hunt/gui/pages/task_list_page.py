from __future__ import annotations

from PySide6.QtCore import QModelIndex, Signal
from PySide6.QtWidgets import QLabel, QListView, QVBoxLayout, QWidget

from scavenger_hunt.gui.controllers import HuntController
from scavenger_hunt.gui.models.task_list_model import TaskListModel


class TaskListPage(QWidget):
    task_selected = Signal(int)

    def __init__(self, controller: HuntController, title: str = "Scavenger Hunt", parent=None) -> None:
        super().__init__(parent)
        self.controller = controller

        layout = QVBoxLayout(self)
        layout.setContentsMargins(20, 16, 20, 16)
        layout.setSpacing(12)

        self.title_label = QLabel(title)
        title_font = self.title_label.font()
        title_font.setBold(True)
        title_font.setPointSize(title_font.pointSize() + 8)
        self.title_label.setFont(title_font)
        layout.addWidget(self.title_label)

        self.progress_label = QLabel()
        self.progress_label.setProperty("muted", True)
        layout.addWidget(self.progress_label)

        self.model = TaskListModel(controller)
        self.list_view = QListView()
        self.list_view.setModel(self.model)
        self.list_view.setSpacing(4)
        self.list_view.setUniformItemSizes(True)
        self.list_view.activated.connect(self._on_activated)
        self.list_view.clicked.connect(self._on_activated)
        layout.addWidget(self.list_view, 1)

        self.controller.task_changed.connect(lambda _row: self._refresh_progress())
        self._refresh_progress()

    def _on_activated(self, index: QModelIndex) -> None:
        if index.isValid():
            self.task_selected.emit(index.row())

    def _refresh_progress(self) -> None:
        tasks = self.controller.tasks
        done = sum(1 for t in tasks if t.is_completed)
        uploaded = sum(1 for t in tasks if t.uploaded)
        self.progress_label.setText(f"{done} of {len(tasks)} found, {uploaded} uploaded")
