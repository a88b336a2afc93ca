from __future__ import annotations

import subprocess
import sys
from pathlib import Path

APP_NAME = "ScavengerHunt"
ORG_NAME = "ScavengerHunt"

def configure_app_identity(app) -> None:
    """Set the Qt application identity used for window titles and QSettings."""
    app.setApplicationName(APP_NAME)
    app.setOrganizationName(ORG_NAME)
    app.setApplicationDisplayName("Scavenger Hunt")

def open_in_file_manager(path: Path) -> None:
    """Open a folder in Finder/Explorer/the desktop file manager; best-effort."""
    try:
        if sys.platform == "darwin":
            subprocess.run(["open", str(path)], check=False)
        elif sys.platform.startswith("linux"):
            subprocess.run(["xdg-open", str(path)], check=False)
        elif sys.platform.startswith("win"):
            subprocess.run(["explorer", str(path)], check=False)
    except OSError:
        pass
