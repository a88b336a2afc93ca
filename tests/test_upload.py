from __future__ import annotations

import random

import pytest

from scavenger_hunt.core.upload import SimulatedUploadTransport, UploadOutcome, UploadResult
from scavenger_hunt.util.errors import UploadFailedError


def test_simulated_upload_succeeds_after_delay(scheduler) -> None:
    transport = SimulatedUploadTransport(scheduler, delay_seconds=2.0)
    calls = []
    transport.upload("t1", b"12345", lambda outcome, msg: calls.append((outcome, msg)))
    scheduler.advance(1.99)
    assert calls == []
    scheduler.advance(0.02)
    assert calls == [(UploadOutcome.SUCCESS, "Uploaded 5 bytes.")]


def test_simulated_upload_can_be_cancelled(scheduler) -> None:
    transport = SimulatedUploadTransport(scheduler)
    calls = []
    handle = transport.upload("t1", b"x", lambda outcome, msg: calls.append(outcome))
    handle.cancel()
    scheduler.advance(10)
    assert calls == []


def test_failure_rate_is_applied(scheduler) -> None:
    transport = SimulatedUploadTransport(scheduler, delay_seconds=0, failure_rate=0.5, rng=random.Random(7))
    outcomes = []
    for i in range(200):
        transport.upload(f"t{i}", b"x", lambda outcome, msg: outcomes.append(outcome))
    scheduler.advance(0)
    assert len(outcomes) == 200
    failed = outcomes.count(UploadOutcome.FAILED)
    assert 60 < failed < 140


@pytest.mark.parametrize("kwargs", [{"delay_seconds": -1}, {"failure_rate": 1.5}, {"failure_rate": -0.1}])
def test_invalid_transport_settings(scheduler, kwargs) -> None:
    with pytest.raises(ValueError):
        SimulatedUploadTransport(scheduler, **kwargs)


def test_upload_result_raise_for_outcome() -> None:
    UploadResult("t", UploadOutcome.SUCCESS).raise_for_outcome()
    with pytest.raises(UploadFailedError) as exc:
        UploadResult("t", UploadOutcome.TIMEOUT, "Upload timed out.").raise_for_outcome()
    assert exc.value.outcome == UploadOutcome.TIMEOUT
    assert "timed out" in str(exc.value)
