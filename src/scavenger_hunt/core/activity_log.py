from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from pathlib import Path

from appdirs import user_log_dir


def default_log_path() -> Path:
    return Path(user_log_dir(appname="ScavengerHunt", appauthor=False)) / "activity_log.txt"


@dataclass
class ActivityLogger:
    """Appends one timestamped line per event to the session activity log.

    path=None keeps the logger silent (tests, headless use).
    """
    path: Path | None = None

    def log(self, message: str) -> None:
        if self.path is None:
            return
        self.path.parent.mkdir(parents=True, exist_ok=True)
        ts = datetime.now().strftime("%Y-%m-%d %H:%M:%S")
        with self.path.open("a", encoding="utf-8") as f:
            f.write(f"[{ts}] {message}\n")
