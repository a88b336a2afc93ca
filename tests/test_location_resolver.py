from __future__ import annotations

import threading

from scavenger_hunt.core.location import (
    AcquiredPhoto,
    FixedLocationProvider,
    LiveLocationFeed,
    LocationResolver,
)
from scavenger_hunt.core.task import GeoCoordinate, PhotoSource


def test_camera_photo_uses_device_reading(plain_jpeg) -> None:
    resolver = LocationResolver(FixedLocationProvider(GeoCoordinate(10, 20)))
    photo = AcquiredPhoto(data=plain_jpeg, source=PhotoSource.CAMERA)
    assert resolver.resolve(photo) == GeoCoordinate(10, 20)


def test_camera_photo_without_device_reading_has_no_location(plain_jpeg) -> None:
    resolver = LocationResolver(FixedLocationProvider(None))
    assert resolver.resolve(AcquiredPhoto(plain_jpeg, PhotoSource.CAMERA)) is None


def test_camera_path_never_reads_metadata(jpeg_with_gps) -> None:
    data = jpeg_with_gps(37.0, "N", 122.0, "W")
    resolver = LocationResolver(FixedLocationProvider(None))
    assert resolver.resolve(AcquiredPhoto(data, PhotoSource.CAMERA)) is None


def test_library_path_never_falls_back_to_device(plain_jpeg) -> None:
    resolver = LocationResolver(FixedLocationProvider(GeoCoordinate(10, 20)))
    assert resolver.resolve(AcquiredPhoto(plain_jpeg, PhotoSource.LIBRARY)) is None


def test_library_path_reads_metadata(jpeg_with_gps) -> None:
    data = jpeg_with_gps(37.0, "S", 122.0, "E")
    resolver = LocationResolver(FixedLocationProvider(GeoCoordinate(10, 20)))
    assert resolver.resolve(AcquiredPhoto(data, PhotoSource.LIBRARY)) == GeoCoordinate(-37.0, 122.0)


def test_camera_reading_is_taken_at_capture_time(plain_jpeg) -> None:
    feed = LiveLocationFeed()
    resolver = LocationResolver(feed)
    feed.update(GeoCoordinate(1, 2))
    first = resolver.resolve_camera()
    feed.update(GeoCoordinate(3, 4))
    assert first == GeoCoordinate(1, 2)
    assert resolver.resolve_camera() == GeoCoordinate(3, 4)


def test_live_feed_starts_empty_and_can_be_cleared() -> None:
    feed = LiveLocationFeed()
    assert feed.current_location() is None
    feed.update(GeoCoordinate(5, 6))
    assert feed.current_location() == GeoCoordinate(5, 6)
    feed.clear()
    assert feed.current_location() is None


def test_live_feed_reads_whole_values_while_updated_from_another_thread() -> None:
    feed = LiveLocationFeed()
    values = [GeoCoordinate(i % 90, -(i % 180)) for i in range(500)]

    def _writer() -> None:
        for v in values:
            feed.update(v)

    t = threading.Thread(target=_writer)
    t.start()
    seen = [feed.current_location() for _ in range(500)]
    t.join()
    assert all(v is None or v in values for v in seen)
    assert feed.current_location() == values[-1]


def test_missing_location_is_logged(tmp_path, plain_jpeg) -> None:
    from scavenger_hunt.core.activity_log import ActivityLogger

    log_path = tmp_path / "activity_log.txt"
    resolver = LocationResolver(FixedLocationProvider(None), logger=ActivityLogger(log_path))
    resolver.resolve_library(plain_jpeg)
    resolver.resolve_camera()
    lines = log_path.read_text(encoding="utf-8").splitlines()
    assert lines[0].endswith("Library photo has no usable GPS metadata.")
    assert lines[1].endswith("No device location available for camera photo.")
