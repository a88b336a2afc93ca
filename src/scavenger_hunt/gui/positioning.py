from __future__ import annotations

from PySide6.QtCore import QObject, Signal
from PySide6.QtPositioning import QGeoPositionInfo, QGeoPositionInfoSource

from scavenger_hunt.core.location import LiveLocationFeed
from scavenger_hunt.core.task import GeoCoordinate


class QtPositionFeed(QObject):
    """Pushes Qt Positioning updates into a LiveLocationFeed.

    If the platform has no position source, or the user denies access, the
    feed simply never receives a value.
    """
    status_changed = Signal(str)

    def __init__(self, feed: LiveLocationFeed, parent: QObject | None = None) -> None:
        super().__init__(parent)
        self.feed = feed
        self.source = QGeoPositionInfoSource.createDefaultSource(self)
        if self.source is not None:
            self.source.positionUpdated.connect(self._on_position)
            self.source.errorOccurred.connect(self._on_error)

    @property
    def available(self) -> bool:
        return self.source is not None

    def start(self) -> None:
        if self.source is None:
            self.status_changed.emit("Device location unavailable.")
            return
        self.source.startUpdates()
        self.status_changed.emit("Waiting for device location…")

    def stop(self) -> None:
        if self.source is not None:
            self.source.stopUpdates()

    def _on_position(self, info: QGeoPositionInfo) -> None:
        coord = info.coordinate()
        if not coord.isValid():
            return
        try:
            self.feed.update(GeoCoordinate(coord.latitude(), coord.longitude()))
        except ValueError:
            return
        self.status_changed.emit("Device location available.")

    def _on_error(self, error) -> None:
        # Access denied and closed sources behave like "no fix yet".
        self.status_changed.emit(f"Device location unavailable ({getattr(error, 'name', error)}).")
