from __future__ import annotations

from urllib.parse import parse_qs, urlparse

import pytest

from scavenger_hunt.core.map_region import MapRegion, osm_view_url
from scavenger_hunt.core.task import GeoCoordinate


def test_bounding_box_uses_half_span_each_side() -> None:
    region = MapRegion(GeoCoordinate(37.0, -122.0))
    min_lon, min_lat, max_lon, max_lat = region.bounding_box()
    assert min_lat == pytest.approx(36.975)
    assert max_lat == pytest.approx(37.025)
    assert min_lon == pytest.approx(-122.025)
    assert max_lon == pytest.approx(-121.975)


def test_bounding_box_is_clamped_at_the_poles() -> None:
    region = MapRegion(GeoCoordinate(89.99, 179.99), span_degrees=0.05)
    _min_lon, _min_lat, max_lon, max_lat = region.bounding_box()
    assert max_lat == 90.0
    assert max_lon == 180.0


def test_view_url_centres_on_coordinate() -> None:
    url = osm_view_url(GeoCoordinate(10, 20), zoom=12)
    parsed = urlparse(url)
    assert parsed.netloc == "www.openstreetmap.org"
    assert parse_qs(parsed.query) == {"mlat": ["10.000000"], "mlon": ["20.000000"]}
    assert parsed.fragment == "map=12/10.000000/20.000000"
