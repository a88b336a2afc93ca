from __future__ import annotations

import random
from dataclasses import dataclass
from enum import Enum
from typing import Callable, Protocol

from scavenger_hunt.util.errors import UploadFailedError

DEFAULT_UPLOAD_DELAY_SECONDS = 2.0


class UploadOutcome(str, Enum):
    SUCCESS = "success"
    FAILED = "failed"
    TIMEOUT = "timeout"


@dataclass(frozen=True)
class UploadResult:
    task_id: str
    outcome: UploadOutcome
    message: str = ""

    @property
    def ok(self) -> bool:
        return self.outcome == UploadOutcome.SUCCESS

    def raise_for_outcome(self) -> None:
        if not self.ok:
            raise UploadFailedError(self.outcome, self.message)


class Cancellable(Protocol):
    def cancel(self) -> None: ...


class Scheduler(Protocol):
    """Runs a callback later on the thread that owns the task store."""

    def call_later(self, delay_seconds: float, callback: Callable[[], None]) -> Cancellable: ...


class UploadTransport(Protocol):
    """Accepts a task's image payload and reports the outcome asynchronously.

    `done` must be called at most once, on the scheduler's thread.
    """

    def upload(
        self,
        task_id: str,
        image: bytes,
        done: Callable[[UploadOutcome, str], None],
    ) -> Cancellable: ...


class SimulatedUploadTransport:
    """Completes every upload after a fixed delay, modelling network latency.

    With failure_rate > 0 a share of uploads report FAILED instead.
    """

    def __init__(
        self,
        scheduler: Scheduler,
        delay_seconds: float = DEFAULT_UPLOAD_DELAY_SECONDS,
        failure_rate: float = 0.0,
        rng: random.Random | None = None,
    ) -> None:
        if delay_seconds < 0:
            raise ValueError("delay_seconds must be >= 0")
        if not 0.0 <= failure_rate <= 1.0:
            raise ValueError("failure_rate must be between 0 and 1")
        self.scheduler = scheduler
        self.delay_seconds = delay_seconds
        self.failure_rate = failure_rate
        self._rng = rng or random.Random()

    def upload(
        self,
        task_id: str,
        image: bytes,
        done: Callable[[UploadOutcome, str], None],
    ) -> Cancellable:
        size = len(image)

        def _finish() -> None:
            if self.failure_rate and self._rng.random() < self.failure_rate:
                done(UploadOutcome.FAILED, f"Simulated failure uploading {size} bytes.")
            else:
                done(UploadOutcome.SUCCESS, f"Uploaded {size} bytes.")

        return self.scheduler.call_later(self.delay_seconds, _finish)
