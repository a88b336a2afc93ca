from __future__ import annotations

import io
from typing import Any

from PIL import Image

from scavenger_hunt.core.task import GeoCoordinate

GPS_IFD = 0x8825

GPS_LATITUDE_REF = 1
GPS_LATITUDE = 2
GPS_LONGITUDE_REF = 3
GPS_LONGITUDE = 4


def read_gps_coordinate(data: bytes) -> GeoCoordinate | None:
    """Decode the EXIF GPS block of an image payload.

    Returns None when the payload is not an image, carries no GPS block,
    or is missing latitude/longitude. Missing hemisphere references default
    to N/E; S negates latitude and W negates longitude.
    """
    if not data:
        return None
    try:
        gps = read_gps_tags(data)
    except Exception:
        # Undecodable images and malformed EXIF both mean "no location".
        return None
    return coordinate_from_gps_tags(gps)


def read_gps_tags(data: bytes) -> dict[int, Any]:
    with Image.open(io.BytesIO(data)) as img:
        exif = img.getexif()
        if not exif:
            return {}
        return dict(exif.get_ifd(GPS_IFD))


def coordinate_from_gps_tags(gps: dict[int, Any]) -> GeoCoordinate | None:
    if not gps:
        return None
    lat = _to_degrees(gps.get(GPS_LATITUDE))
    lon = _to_degrees(gps.get(GPS_LONGITUDE))
    if lat is None or lon is None:
        return None

    lat_ref = _ref(gps.get(GPS_LATITUDE_REF), default="N")
    lon_ref = _ref(gps.get(GPS_LONGITUDE_REF), default="E")
    if lat_ref == "S":
        lat = -lat
    if lon_ref == "W":
        lon = -lon
    try:
        return GeoCoordinate(lat, lon)
    except ValueError:
        return None


def _to_degrees(value: Any) -> float | None:
    """Convert an EXIF GPS value (D, M, S rationals or a single number) to degrees."""
    if value is None:
        return None
    try:
        if isinstance(value, (tuple, list)):
            if not value:
                return None
            parts = [float(v) for v in value[:3]]
            while len(parts) < 3:
                parts.append(0.0)
            d, m, s = parts
            return abs(d) + m / 60.0 + s / 3600.0
        return abs(float(value))
    except (TypeError, ValueError, ZeroDivisionError):
        return None


def _ref(value: Any, default: str) -> str:
    if value is None:
        return default
    if isinstance(value, bytes):
        value = value.decode("ascii", errors="ignore")
    text = str(value).strip("\x00 ").upper()
    return text[:1] or default
