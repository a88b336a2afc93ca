"""Application entrypoint.

Run in development:
    python -m scavenger_hunt.app

Options override the saved settings for this session only, e.g.
    python -m scavenger_hunt.app --fixed-location 37.0,-122.0 --upload-delay 1
"""

from __future__ import annotations

import argparse
import sys
from dataclasses import replace
from pathlib import Path

from scavenger_hunt.core.activity_log import ActivityLogger, default_log_path
from scavenger_hunt.core.location import FixedLocationProvider
from scavenger_hunt.core.settings import AppSettings
from scavenger_hunt.core.task import GeoCoordinate
from scavenger_hunt.hunts.hunt_manager import HuntManager


def parse_coordinate(text: str) -> GeoCoordinate:
    """Parse "LAT,LON" in signed decimal degrees."""
    parts = [p.strip() for p in text.split(",")]
    if len(parts) != 2:
        raise argparse.ArgumentTypeError(f"Expected LAT,LON but got {text!r}.")
    try:
        return GeoCoordinate(float(parts[0]), float(parts[1]))
    except ValueError as e:
        raise argparse.ArgumentTypeError(str(e)) from e


def _rate(text: str) -> float:
    value = float(text)
    if not 0.0 <= value <= 1.0:
        raise argparse.ArgumentTypeError("Failure rate must be between 0 and 1.")
    return value


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="scavenger-hunt", description="Photo scavenger hunt.")
    parser.add_argument("--hunt", type=Path, help="Hunt definition JSON file.")
    parser.add_argument(
        "--fixed-location",
        type=parse_coordinate,
        metavar="LAT,LON",
        help="Use a fixed device location instead of the platform position source.",
    )
    parser.add_argument("--upload-delay", type=float, metavar="SECONDS", help="Simulated upload latency.")
    parser.add_argument("--upload-failure-rate", type=_rate, metavar="RATE", help="Share of simulated uploads that fail.")
    parser.add_argument("--theme", choices=["light", "dark"])
    parser.add_argument("--no-log", action="store_true", help="Do not write the activity log.")
    return parser


def apply_overrides(settings: AppSettings, args: argparse.Namespace) -> AppSettings:
    if args.upload_delay is not None:
        settings.upload_delay_seconds = max(0.0, args.upload_delay)
    if args.upload_failure_rate is not None:
        settings.upload_failure_rate = args.upload_failure_rate
    if args.theme:
        settings.ui_theme = args.theme
    if args.hunt is not None:
        settings.hunt_path = str(args.hunt)
    if args.no_log:
        settings.activity_log_enabled = False
    return settings


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    if args.hunt is not None and not args.hunt.exists():
        parser.error(f"hunt file not found: {args.hunt}")

    from PySide6.QtWidgets import QApplication

    from scavenger_hunt.gui.main_window import MainWindow
    from scavenger_hunt.gui.theme import apply_theme
    from scavenger_hunt.util.platform import configure_app_identity

    app = QApplication(sys.argv[:1])
    configure_app_identity(app)

    saved = AppSettings.load()
    settings = apply_overrides(replace(saved), args)
    apply_theme(app, settings.ui_theme)

    hunt = HuntManager(user_hunt_path=Path(settings.hunt_path) if settings.hunt_path else None)
    logger = ActivityLogger(default_log_path() if settings.activity_log_enabled else None)
    logger.log(f"Session started: {hunt.name} ({len(hunt.definitions)} tasks from {hunt.source_path}).")

    provider = FixedLocationProvider(args.fixed_location) if args.fixed_location else None
    win = MainWindow(
        settings=settings,
        tasks=hunt.build_tasks(),
        hunt_name=hunt.name,
        location_provider=provider,
        logger=logger,
    )
    win.show()

    code = app.exec()
    # Only choices made in the window outlive the session; option overrides do not.
    saved.last_photo_dir = settings.last_photo_dir
    if settings.ui_theme != (args.theme or saved.ui_theme):
        saved.ui_theme = settings.ui_theme
    saved.save()
    logger.log("Session ended.")
    return code


if __name__ == "__main__":
    raise SystemExit(main())
