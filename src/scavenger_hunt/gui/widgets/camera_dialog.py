from __future__ import annotations

from PySide6.QtGui import QImage
from PySide6.QtMultimedia import QCamera, QImageCapture, QMediaCaptureSession, QMediaDevices
from PySide6.QtMultimediaWidgets import QVideoWidget
from PySide6.QtWidgets import QDialog, QDialogButtonBox, QLabel, QPushButton, QVBoxLayout

from scavenger_hunt.gui.widgets.image_preview import qimage_to_jpeg


class CameraCaptureDialog(QDialog):
    """Captures exactly one still from the default camera.

    After exec(), `captured` holds JPEG bytes, or None if the user cancelled
    or no camera was available. The capture carries no location metadata.
    """

    def __init__(self, parent=None) -> None:
        super().__init__(parent)
        self.setWindowTitle("Take Photo")
        self.resize(640, 520)
        self.captured: bytes | None = None
        self.camera: QCamera | None = None

        layout = QVBoxLayout(self)
        self.viewfinder = QVideoWidget()
        self.viewfinder.setMinimumHeight(360)
        layout.addWidget(self.viewfinder, 1)

        self.status_label = QLabel("")
        self.status_label.setWordWrap(True)
        layout.addWidget(self.status_label)

        buttons = QDialogButtonBox(QDialogButtonBox.Cancel)
        self.capture_btn = QPushButton("Capture")
        self.capture_btn.setProperty("photoAction", "camera")
        self.capture_btn.clicked.connect(self._capture)
        buttons.addButton(self.capture_btn, QDialogButtonBox.ActionRole)
        buttons.rejected.connect(self.reject)
        layout.addWidget(buttons)

        self.session = QMediaCaptureSession(self)
        self.image_capture = QImageCapture(self)
        self.session.setImageCapture(self.image_capture)
        self.session.setVideoOutput(self.viewfinder)
        self.image_capture.imageCaptured.connect(self._on_image_captured)
        self.image_capture.errorOccurred.connect(self._on_capture_error)

        devices = QMediaDevices.videoInputs()
        if not devices:
            self.status_label.setText("No camera found. Use Add Photo to pick an image instead.")
            self.capture_btn.setEnabled(False)
            return
        self.camera = QCamera(devices[0], self)
        self.session.setCamera(self.camera)
        self.camera.errorOccurred.connect(self._on_camera_error)
        self.camera.start()

    @property
    def has_camera(self) -> bool:
        return self.camera is not None

    def _capture(self) -> None:
        if not self.image_capture.isReadyForCapture():
            self.status_label.setText("Camera is not ready yet.")
            return
        self.capture_btn.setEnabled(False)
        self.image_capture.capture()

    def _on_image_captured(self, _request_id: int, image: QImage) -> None:
        try:
            self.captured = qimage_to_jpeg(image)
        except ValueError as e:
            self.status_label.setText(str(e))
            self.capture_btn.setEnabled(True)
            return
        self.accept()

    def _on_capture_error(self, _request_id: int, _error, message: str) -> None:
        self.status_label.setText(f"Capture failed: {message}")
        self.capture_btn.setEnabled(self.has_camera)

    def _on_camera_error(self, _error, message: str) -> None:
        # Denied camera permission ends up here; treat it as "nothing captured".
        self.status_label.setText(f"Camera unavailable: {message}")
        self.capture_btn.setEnabled(False)

    def done(self, result: int) -> None:
        if self.camera is not None:
            self.camera.stop()
        super().done(result)
