from __future__ import annotations

from pathlib import Path

from PySide6.QtCore import Qt, Signal
from PySide6.QtWidgets import (
    QFileDialog,
    QHBoxLayout,
    QLabel,
    QMessageBox,
    QPushButton,
    QVBoxLayout,
    QWidget,
)

from scavenger_hunt.core.upload import UploadResult
from scavenger_hunt.gui.controllers import HuntController
from scavenger_hunt.gui.widgets.image_preview import ImagePreview
from scavenger_hunt.gui.widgets.map_panel import MapPanel
from scavenger_hunt.util.paths import image_file_filter, is_image


class TaskDetailPage(QWidget):
    back_requested = Signal()

    def __init__(self, controller: HuntController, parent=None) -> None:
        super().__init__(parent)
        self.controller = controller
        self.task_index: int | None = None
        self._upload_errors: dict[str, str] = {}

        self.controller.task_changed.connect(self._on_task_changed)
        self.controller.upload_finished.connect(self._on_upload_finished)
        self.controller.photo_failed.connect(self._on_photo_failed)

        layout = QVBoxLayout(self)
        layout.setContentsMargins(20, 16, 20, 16)
        layout.setSpacing(10)

        header = QHBoxLayout()
        back_btn = QPushButton("Back")
        back_btn.clicked.connect(self._go_back)
        header.addWidget(back_btn)
        header.addStretch(1)
        layout.addLayout(header)

        self.title_label = QLabel()
        title_font = self.title_label.font()
        title_font.setBold(True)
        title_font.setPointSize(title_font.pointSize() + 10)
        self.title_label.setFont(title_font)
        self.title_label.setAlignment(Qt.AlignCenter)
        layout.addWidget(self.title_label)

        self.description_label = QLabel()
        self.description_label.setWordWrap(True)
        self.description_label.setAlignment(Qt.AlignCenter)
        layout.addWidget(self.description_label)

        self.preview = ImagePreview()
        layout.addWidget(self.preview, 0, Qt.AlignCenter)

        self.location_label = QLabel()
        self.location_label.setProperty("muted", True)
        self.location_label.setAlignment(Qt.AlignCenter)
        layout.addWidget(self.location_label)

        self.upload_status = QLabel()
        self.upload_status.setAlignment(Qt.AlignCenter)
        layout.addWidget(self.upload_status)

        self.upload_btn = QPushButton("Upload Photo")
        self.upload_btn.setProperty("photoAction", "upload")
        self.upload_btn.clicked.connect(self._upload)
        layout.addWidget(self.upload_btn, 0, Qt.AlignCenter)

        photo_row = QHBoxLayout()
        photo_row.addStretch(1)
        self.add_photo_btn = QPushButton("Add Photo")
        self.add_photo_btn.setProperty("photoAction", "library")
        self.add_photo_btn.clicked.connect(self._add_photo)
        self.take_photo_btn = QPushButton("Take Photo")
        self.take_photo_btn.setProperty("photoAction", "camera")
        self.take_photo_btn.clicked.connect(self._take_photo)
        photo_row.addWidget(self.add_photo_btn)
        photo_row.addWidget(self.take_photo_btn)
        photo_row.addStretch(1)
        layout.addLayout(photo_row)

        self.map_panel = MapPanel(span_degrees=controller.settings.map_span_degrees)
        layout.addWidget(self.map_panel)
        layout.addStretch(1)

    def show_task(self, index: int) -> None:
        self.controller.store.task(index)  # validates the index
        self.task_index = index
        self.refresh()

    def refresh(self) -> None:
        if self.task_index is None:
            return
        index = self.task_index
        task = self.controller.store.task(index)
        uploading = self.controller.is_uploading(index)
        loading = self.controller.is_loading_photo(index)

        self.title_label.setText(task.title)
        self.description_label.setText(task.description)
        self.preview.set_image_data(task.image)

        if not task.is_completed:
            self.location_label.setText("Loading photo…" if loading else "")
        elif task.has_location:
            self.location_label.setText(f"Location: {task.location.format()}")
        else:
            self.location_label.setText("No location found for this photo.")

        error = self._upload_errors.get(task.id)
        if task.uploaded:
            self._set_upload_status("✅ Photo Uploaded!", "done")
        elif uploading:
            self._set_upload_status("Uploading...", "busy")
        elif error:
            self._set_upload_status(f"Upload failed: {error}", "failed")
        else:
            self._set_upload_status("", "")

        # One upload per photo: the button disappears while in flight and once done.
        self.upload_btn.setVisible(task.is_completed and not task.uploaded and not uploading)
        self.upload_btn.setText("Retry Upload" if error else "Upload Photo")
        self.add_photo_btn.setEnabled(not uploading)
        self.take_photo_btn.setEnabled(not uploading)

        self.map_panel.setVisible(task.map_ready)
        self.map_panel.set_location(task.location if task.map_ready else None)

    def _set_upload_status(self, text: str, state: str) -> None:
        self.upload_status.setText(text)
        self.upload_status.setVisible(bool(text))
        self.upload_status.setProperty("uploadState", state)
        self.upload_status.style().unpolish(self.upload_status)
        self.upload_status.style().polish(self.upload_status)

    # ---- actions ----

    def _go_back(self) -> None:
        if self.task_index is not None:
            # Leaving the page abandons any pending upload for this task.
            self.controller.cancel_upload(self.task_index)
        self.back_requested.emit()

    def _add_photo(self) -> None:
        if self.task_index is None:
            return
        start_dir = self.controller.settings.last_photo_dir or str(Path.home())
        path, _ = QFileDialog.getOpenFileName(self, "Add Photo", start_dir, image_file_filter())
        if not path:
            return
        if not is_image(Path(path)):
            QMessageBox.warning(self, "Photo", f"{Path(path).name} is not a supported image file.")
            return
        self.controller.attach_library_photo(self.task_index, Path(path))
        self.refresh()

    def _take_photo(self) -> None:
        if self.task_index is None:
            return
        from scavenger_hunt.gui.widgets.camera_dialog import CameraCaptureDialog

        dlg = CameraCaptureDialog(self)
        if dlg.exec() and dlg.captured:
            self.controller.attach_camera_photo(self.task_index, dlg.captured)

    def _upload(self) -> None:
        if self.task_index is None:
            return
        task = self.controller.store.task(self.task_index)
        self._upload_errors.pop(task.id, None)
        self.controller.upload(self.task_index)

    # ---- controller signals ----

    def _on_task_changed(self, index: int) -> None:
        if index == self.task_index:
            self.refresh()

    def _on_upload_finished(self, index: int, result: UploadResult) -> None:
        if not result.ok:
            self._upload_errors[result.task_id] = result.message or result.outcome.value
        if index == self.task_index:
            self.refresh()

    def _on_photo_failed(self, index: int, message: str) -> None:
        if index != self.task_index:
            return
        self.refresh()
        QMessageBox.warning(self, "Photo", message)
