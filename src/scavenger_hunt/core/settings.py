from __future__ import annotations

from dataclasses import asdict, dataclass, fields
from pathlib import Path
import json
import math
from appdirs import user_config_dir

from scavenger_hunt.core.map_region import DEFAULT_SPAN_DEGREES
from scavenger_hunt.core.upload import DEFAULT_UPLOAD_DELAY_SECONDS

def _config_path() -> Path:
    cfg_dir = Path(user_config_dir(appname="ScavengerHunt", appauthor=False))
    cfg_dir.mkdir(parents=True, exist_ok=True)
    return cfg_dir / "settings.json"

@dataclass
class AppSettings:
    """User-persistent settings.

    Stored in: ~/Library/Application Support/ScavengerHunt/settings.json (macOS)
    Task progress itself is never persisted.
    """
    upload_delay_seconds: float = DEFAULT_UPLOAD_DELAY_SECONDS
    upload_timeout_seconds: float = 0.0  # 0 = no timeout
    upload_failure_rate: float = 0.0
    map_span_degrees: float = DEFAULT_SPAN_DEGREES
    ui_theme: str = "light"
    last_photo_dir: str = ""
    hunt_path: str = ""
    activity_log_enabled: bool = True

    @classmethod
    def load(cls) -> "AppSettings":
        p = _config_path()
        if not p.exists():
            return cls()
        try:
            data = json.loads(p.read_text(encoding="utf-8"))
        except Exception:
            # Fail safe: a broken settings file must not keep the app from starting.
            return cls()
        if not isinstance(data, dict):
            return cls()

        # Unknown keys are dropped; unusable values fall back to the field default.
        values = {}
        for f in fields(cls):
            if f.name not in data:
                continue
            value = _coerce(data[f.name], f.default)
            if value is not None:
                values[f.name] = _clamp(f.name, value)
        return cls(**values)

    def save(self) -> None:
        p = _config_path()
        p.write_text(json.dumps(asdict(self), indent=2), encoding="utf-8")


# (min, max) per numeric field; None = unbounded.
_LIMITS = {
    "upload_delay_seconds": (0.0, None),
    "upload_timeout_seconds": (0.0, None),
    "upload_failure_rate": (0.0, 1.0),
    "map_span_degrees": (0.0, 180.0),
}

def _coerce(value, default):
    """Convert a stored value to the type of its default, or None if it cannot be."""
    if isinstance(default, bool):
        return value if isinstance(value, bool) else None
    if isinstance(default, float):
        if isinstance(value, bool):
            return None
        try:
            number = float(value)
        except (TypeError, ValueError):
            return None
        return number if math.isfinite(number) else None
    if isinstance(default, str):
        return value if isinstance(value, str) else None
    return value

def _clamp(name: str, value):
    lo, hi = _LIMITS.get(name, (None, None))
    if lo is not None and value < lo:
        return lo
    if hi is not None and value > hi:
        return hi
    return value
