from __future__ import annotations

import math
import uuid
from dataclasses import dataclass, field
from enum import Enum


class PhotoSource(str, Enum):
    LIBRARY = "library"
    CAMERA = "camera"


@dataclass(frozen=True)
class GeoCoordinate:
    """A (latitude, longitude) pair in signed degrees (negative = South/West)."""
    latitude: float
    longitude: float

    def __post_init__(self) -> None:
        lat = float(self.latitude)
        lon = float(self.longitude)
        if not (math.isfinite(lat) and math.isfinite(lon)):
            raise ValueError(f"Coordinate must be finite: {self.latitude}, {self.longitude}")
        if not -90.0 <= lat <= 90.0:
            raise ValueError(f"Latitude out of range: {lat}")
        if not -180.0 <= lon <= 180.0:
            raise ValueError(f"Longitude out of range: {lon}")
        object.__setattr__(self, "latitude", lat)
        object.__setattr__(self, "longitude", lon)

    def format(self, precision: int = 6) -> str:
        return f"{self.latitude:.{precision}f}, {self.longitude:.{precision}f}"


def _new_task_id() -> str:
    return uuid.uuid4().hex


@dataclass
class HuntTask:
    """One scavenger-hunt objective.

    - id/title/description are fixed at creation
    - image/image_source/location/is_completed are set by TaskStore.complete_task
    - uploaded is set once an upload succeeds
    """
    title: str
    description: str
    id: str = field(default_factory=_new_task_id)

    is_completed: bool = False
    image: bytes | None = None
    image_source: PhotoSource | None = None
    location: GeoCoordinate | None = None
    uploaded: bool = False

    @property
    def has_location(self) -> bool:
        return self.location is not None

    @property
    def map_ready(self) -> bool:
        return self.uploaded and self.location is not None
