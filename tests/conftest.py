from __future__ import annotations

import io
from typing import Callable

import pytest
from PIL import Image
from PIL.TiffImagePlugin import IFDRational

from scavenger_hunt.core.task import HuntTask
from scavenger_hunt.core.upload import SimulatedUploadTransport


class ManualScheduler:
    """Deterministic stand-in for the Qt timer scheduler: time moves only via advance()."""

    class Handle:
        def __init__(self, scheduler: "ManualScheduler", entry: list) -> None:
            self._scheduler = scheduler
            self._entry = entry

        def cancel(self) -> None:
            self._entry[2] = True

    def __init__(self) -> None:
        self.now = 0.0
        self._entries: list[list] = []  # [due, callback, cancelled]

    def call_later(self, delay_seconds: float, callback: Callable[[], None]) -> "ManualScheduler.Handle":
        entry = [self.now + delay_seconds, callback, False]
        self._entries.append(entry)
        return ManualScheduler.Handle(self, entry)

    def pending(self) -> int:
        return sum(1 for e in self._entries if not e[2])

    def advance(self, seconds: float) -> None:
        target = self.now + seconds
        while True:
            due = sorted((e for e in self._entries if not e[2] and e[0] <= target), key=lambda e: e[0])
            if not due:
                break
            entry = due[0]
            entry[2] = True
            self.now = max(self.now, entry[0])
            entry[1]()
        self.now = target


def gps_rational(degrees: float, minutes: float = 0, seconds: float = 0) -> tuple:
    return (
        IFDRational(int(round(degrees * 1000)), 1000),
        IFDRational(int(round(minutes * 1000)), 1000),
        IFDRational(int(round(seconds * 1000)), 1000),
    )


def build_jpeg(gps: dict | None = None) -> bytes:
    img = Image.new("RGB", (8, 8), (200, 30, 30))
    buf = io.BytesIO()
    if gps is None:
        img.save(buf, "JPEG")
    else:
        exif = Image.Exif()
        exif[0x8825] = gps
        img.save(buf, "JPEG", exif=exif)
    return buf.getvalue()


@pytest.fixture
def scheduler() -> ManualScheduler:
    return ManualScheduler()


@pytest.fixture
def transport(scheduler: ManualScheduler) -> SimulatedUploadTransport:
    return SimulatedUploadTransport(scheduler, delay_seconds=2.0)


@pytest.fixture
def hunt_tasks() -> list[HuntTask]:
    return [
        HuntTask(title="Find a red flower", description="Take a photo of a red flower"),
        HuntTask(title="Capture a sunset", description="Take a photo of the sunset"),
        HuntTask(title="Spot a squirrel", description="Take a photo of a squirrel"),
    ]


@pytest.fixture
def jpeg_with_gps() -> Callable[..., bytes]:
    def _make(lat: float, lat_ref: str | None, lon: float, lon_ref: str | None) -> bytes:
        gps: dict = {2: gps_rational(lat), 4: gps_rational(lon)}
        if lat_ref is not None:
            gps[1] = lat_ref
        if lon_ref is not None:
            gps[3] = lon_ref
        return build_jpeg(gps)

    return _make


@pytest.fixture
def plain_jpeg() -> bytes:
    return build_jpeg()


@pytest.fixture
def jpeg_from_gps() -> Callable[[dict], bytes]:
    return build_jpeg


@pytest.fixture
def dms() -> Callable[..., tuple]:
    return gps_rational
