from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

from PySide6.QtCore import QThread, Signal

from scavenger_hunt.core.location import LocationResolver
from scavenger_hunt.core.task import GeoCoordinate


@dataclass(frozen=True)
class LoadedPhoto:
    task_id: str
    token: int
    path: Path
    data: bytes
    location: GeoCoordinate | None


class LibraryPhotoWorker(QThread):
    """Reads a picked library photo and its EXIF location off the GUI thread."""
    loaded = Signal(object)  # LoadedPhoto
    failed = Signal(str, int, str)  # task_id, token, error

    def __init__(self, task_id: str, token: int, path: Path, resolver: LocationResolver) -> None:
        super().__init__()
        self.task_id = task_id
        self.token = token
        self.path = path
        self.resolver = resolver

    def run(self) -> None:
        try:
            data = self.path.read_bytes()
            if not data:
                self.failed.emit(self.task_id, self.token, f"{self.path.name} is empty.")
                return
            location = self.resolver.resolve_library(data)
            self.loaded.emit(
                LoadedPhoto(
                    task_id=self.task_id,
                    token=self.token,
                    path=self.path,
                    data=data,
                    location=location,
                )
            )
        except Exception as e:
            self.failed.emit(self.task_id, self.token, str(e))
