from __future__ import annotations

from PySide6.QtCore import QBuffer, QByteArray, QIODevice, Qt
from PySide6.QtGui import QImage, QPixmap
from PySide6.QtWidgets import QLabel

PREVIEW_HEIGHT = 200


def qimage_to_jpeg(image: QImage, quality: int = 90) -> bytes:
    buf = QByteArray()
    device = QBuffer(buf)
    device.open(QIODevice.WriteOnly)
    if not image.save(device, "JPEG", quality):
        raise ValueError("Unable to encode captured image as JPEG.")
    device.close()
    return bytes(buf.data())


class ImagePreview(QLabel):
    """Fixed-height, aspect-preserving preview of an image payload."""

    def __init__(self, parent=None) -> None:
        super().__init__(parent)
        self.setAlignment(Qt.AlignCenter)
        self.setFixedHeight(PREVIEW_HEIGHT)
        self.setMinimumWidth(PREVIEW_HEIGHT)

    def set_image_data(self, data: bytes | None) -> bool:
        if not data:
            self.clear()
            self.setVisible(False)
            return False
        pixmap = QPixmap()
        self.setVisible(True)
        if not pixmap.loadFromData(data):
            self.setPixmap(QPixmap())
            self.setText("Preview unavailable")
            return False
        self.setText("")
        self.setPixmap(pixmap.scaledToHeight(PREVIEW_HEIGHT, Qt.SmoothTransformation))
        return True
