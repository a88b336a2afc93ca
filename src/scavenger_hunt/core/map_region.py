from __future__ import annotations

from dataclasses import dataclass
from urllib.parse import urlencode

from scavenger_hunt.core.task import GeoCoordinate

DEFAULT_SPAN_DEGREES = 0.05
OSM_VIEW_URL = "https://www.openstreetmap.org/"


@dataclass(frozen=True)
class MapRegion:
    center: GeoCoordinate
    span_degrees: float = DEFAULT_SPAN_DEGREES

    def bounding_box(self) -> tuple[float, float, float, float]:
        """(min_lon, min_lat, max_lon, max_lat), clamped to valid ranges."""
        half = abs(self.span_degrees) / 2.0
        lat = self.center.latitude
        lon = self.center.longitude
        return (
            max(-180.0, lon - half),
            max(-90.0, lat - half),
            min(180.0, lon + half),
            min(90.0, lat + half),
        )


def osm_view_url(coordinate: GeoCoordinate, zoom: int = 14) -> str:
    lat = f"{coordinate.latitude:.6f}"
    lon = f"{coordinate.longitude:.6f}"
    return f"{OSM_VIEW_URL}?{urlencode({'mlat': lat, 'mlon': lon})}#map={zoom}/{lat}/{lon}"
