from __future__ import annotations

from typing import Callable

from PySide6.QtCore import QObject, QTimer


class _TimerHandle:
    def __init__(self, scheduler: "QtScheduler", timer: QTimer) -> None:
        self._scheduler = scheduler
        self._timer = timer

    def cancel(self) -> None:
        self._scheduler._release(self._timer)


class QtScheduler(QObject):
    """Single-shot QTimer scheduling; callbacks run on this object's thread."""

    def __init__(self, parent: QObject | None = None) -> None:
        super().__init__(parent)
        self._timers: set[QTimer] = set()

    def call_later(self, delay_seconds: float, callback: Callable[[], None]) -> _TimerHandle:
        timer = QTimer(self)
        timer.setSingleShot(True)

        def _fire() -> None:
            self._release(timer)
            callback()

        timer.timeout.connect(_fire)
        self._timers.add(timer)
        timer.start(max(0, int(round(delay_seconds * 1000))))
        return _TimerHandle(self, timer)

    def _release(self, timer: QTimer) -> None:
        if timer not in self._timers:
            return
        self._timers.discard(timer)
        timer.stop()
        timer.deleteLater()
