from __future__ import annotations

from PySide6.QtCore import QAbstractListModel, QModelIndex, Qt
from PySide6.QtGui import QColor, QFont
from PySide6.QtWidgets import QApplication, QStyle

from scavenger_hunt.core.task import HuntTask
from scavenger_hunt.gui.controllers import HuntController

TaskIdRole = Qt.UserRole + 1
StatusRole = Qt.UserRole + 2

class TaskListModel(QAbstractListModel):
    def __init__(self, controller: HuntController) -> None:
        super().__init__()
        self.controller = controller
        self.controller.task_changed.connect(self._on_task_changed)

    def rowCount(self, parent: QModelIndex = QModelIndex()) -> int:
        if parent.isValid():
            return 0
        return len(self.controller.store)

    def data(self, index: QModelIndex, role: int = Qt.DisplayRole):
        if not index.isValid():
            return None
        row = index.row()
        task = self.controller.store.task(row)
        if role == Qt.DisplayRole:
            return task.title
        if role == Qt.ToolTipRole:
            return task.description
        if role == Qt.FontRole:
            font = QFont()
            font.setStrikeOut(task.is_completed)
            return font
        if role == Qt.ForegroundRole:
            return QColor(128, 128, 128) if task.is_completed else None
        if role == Qt.DecorationRole:
            if not task.is_completed:
                return None
            return QApplication.style().standardIcon(QStyle.SP_DialogApplyButton)
        if role == TaskIdRole:
            return task.id
        if role == StatusRole:
            return status_label(task, self.controller.is_uploading(row))
        return None

    def _on_task_changed(self, row: int) -> None:
        idx = self.index(row, 0)
        self.dataChanged.emit(idx, idx)


def status_label(task: HuntTask, uploading: bool = False) -> str:
    if uploading:
        return "Uploading..."
    if task.uploaded:
        return "Uploaded"
    if task.is_completed:
        return "Photo attached"
    return "Open"
