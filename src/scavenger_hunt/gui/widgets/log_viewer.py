from __future__ import annotations

from pathlib import Path

from PySide6.QtWidgets import QDialog, QVBoxLayout, QLabel, QTextEdit, QDialogButtonBox, QPushButton

from scavenger_hunt.util.platform import open_in_file_manager


class LogViewerDialog(QDialog):
    def __init__(self, log_path: Path | None, parent=None) -> None:
        super().__init__(parent)
        self.log_path = log_path
        self.setWindowTitle("Activity Log")
        self.resize(640, 420)

        layout = QVBoxLayout(self)
        layout.addWidget(QLabel(str(log_path) if log_path else "Activity logging is disabled."))

        self.text = QTextEdit()
        self.text.setReadOnly(True)
        self.text.setPlainText(_read_log(log_path))
        layout.addWidget(self.text, 1)

        buttons = QDialogButtonBox(QDialogButtonBox.Close)
        if log_path is not None:
            reveal_btn = QPushButton("Show in Folder")
            reveal_btn.clicked.connect(lambda: open_in_file_manager(log_path.parent))
            buttons.addButton(reveal_btn, QDialogButtonBox.ActionRole)
        buttons.rejected.connect(self.reject)
        layout.addWidget(buttons)


def _read_log(path: Path | None) -> str:
    if path is None:
        return ""
    if not path.exists():
        return "No activity yet."
    try:
        return path.read_text(encoding="utf-8", errors="replace")
    except OSError as exc:
        return f"Unable to read log: {exc}"
