from __future__ import annotations

from pathlib import Path
import sys

IMAGE_SUFFIXES = {".jpg", ".jpeg", ".png", ".heic", ".heif", ".tif", ".tiff", ".webp"}

def is_image(p: Path) -> bool:
    return p.suffix.lower() in IMAGE_SUFFIXES

def image_file_filter() -> str:
    patterns = " ".join(f"*{s}" for s in sorted(IMAGE_SUFFIXES))
    return f"Images ({patterns})"

def resource_path(relative: str | Path) -> Path:
    """Return a filesystem path to a packaged resource (PyInstaller-safe).

    Resources live inside the scavenger_hunt package so checkouts, editable
    installs and wheels all resolve them the same way.
    """
    if getattr(sys, "_MEIPASS", None):
        return Path(sys._MEIPASS) / relative
    package_root = Path(__file__).resolve().parents[1]
    return package_root / relative
