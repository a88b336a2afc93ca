from __future__ import annotations

import threading
from dataclasses import dataclass
from typing import Protocol

from scavenger_hunt.core.activity_log import ActivityLogger
from scavenger_hunt.core.task import GeoCoordinate, PhotoSource
from scavenger_hunt.exif.gps_reader import read_gps_coordinate


class LocationProvider(Protocol):
    def current_location(self) -> GeoCoordinate | None: ...


class FixedLocationProvider:
    """Always reports the same reading (or none)."""

    def __init__(self, coordinate: GeoCoordinate | None = None) -> None:
        self.coordinate = coordinate

    def current_location(self) -> GeoCoordinate | None:
        return self.coordinate


class LiveLocationFeed:
    """Latest device position, updated by a sensor adapter and read by the resolver.

    Never having received a value (no permission, no fix) reads as None.
    """

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._latest: GeoCoordinate | None = None

    def update(self, coordinate: GeoCoordinate | None) -> None:
        with self._lock:
            self._latest = coordinate

    def clear(self) -> None:
        self.update(None)

    def current_location(self) -> GeoCoordinate | None:
        with self._lock:
            return self._latest


@dataclass(frozen=True)
class AcquiredPhoto:
    data: bytes
    source: PhotoSource


class LocationResolver:
    """Derives an optional location for a newly acquired photo.

    Library photos use their embedded EXIF GPS block; camera photos use the
    device reading at capture time. The two paths never fall back to each other.
    """

    def __init__(self, provider: LocationProvider, logger: ActivityLogger | None = None) -> None:
        self.provider = provider
        self.logger = logger or ActivityLogger()

    def resolve(self, photo: AcquiredPhoto) -> GeoCoordinate | None:
        if photo.source == PhotoSource.CAMERA:
            return self.resolve_camera()
        return self.resolve_library(photo.data)

    def resolve_library(self, data: bytes) -> GeoCoordinate | None:
        coord = read_gps_coordinate(data)
        if coord is None:
            self.logger.log("Library photo has no usable GPS metadata.")
        return coord

    def resolve_camera(self) -> GeoCoordinate | None:
        coord = self.provider.current_location()
        if coord is None:
            self.logger.log("No device location available for camera photo.")
        return coord
