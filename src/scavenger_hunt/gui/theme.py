from __future__ import annotations

from PySide6.QtGui import QPalette, QColor
from PySide6.QtWidgets import QApplication, QStyleFactory

# Action buttons carry a "photoAction" property (library|camera|upload) and get these fills.
_SHARED = {
    "action_fg": "#ffffff",
    "library": "#1e6fe0",
    "camera": "#1e7d34",
    "upload": "#a35200",
    "disabled": "#8a8a8a",
}

_THEMES = {
    "light": {
        "window_bg": "#f6f6f8",
        "base_bg": "#ffffff",
        "button_bg": "#ececee",
        "text_primary": "#141414",
        "text_muted": "#6b6b6b",
        "status_done": "#1e7d34",
        "status_busy": "#a35200",
        "status_failed": "#b3261e",
        "highlight": "#1e6fe0",
    },
    "dark": {
        "window_bg": "#161618",
        "base_bg": "#202022",
        "button_bg": "#303032",
        "text_primary": "#ebebeb",
        "text_muted": "#9a9a9a",
        "status_done": "#5cd67a",
        "status_busy": "#ffb347",
        "status_failed": "#ff6b61",
        "highlight": "#1e6fe0",
    },
}


def normalize_theme(theme: str | None) -> str:
    mode = (theme or "light").strip().lower()
    return mode if mode in _THEMES else "light"


def get_theme_colors(theme: str) -> dict[str, str]:
    return {**_SHARED, **_THEMES[normalize_theme(theme)]}


def apply_theme(app: QApplication, theme: str) -> str:
    mode = normalize_theme(theme)
    app.setStyle(QStyleFactory.create("Fusion"))
    app.setPalette(_build_palette(mode))
    app.setStyleSheet(build_style_sheet(mode))
    return mode


def build_style_sheet(theme: str) -> str:
    c = get_theme_colors(theme)
    parts = []
    for role in ("library", "camera", "upload"):
        parts.append(
            f"QPushButton[photoAction=\"{role}\"] {{"
            f"  background: {c[role]}; color: {c['action_fg']}; border: none;"
            "  border-radius: 10px; padding: 8px 16px; font-weight: 600;"
            "}"
            f"QPushButton[photoAction=\"{role}\"]:disabled {{ background: {c['disabled']}; }}"
        )
    parts.append(f"QLabel[muted=\"true\"] {{ color: {c['text_muted']}; }}")
    parts.append(f"QLabel[uploadState=\"done\"] {{ color: {c['status_done']}; font-weight: 600; }}")
    parts.append(f"QLabel[uploadState=\"busy\"] {{ color: {c['status_busy']}; }}")
    parts.append(f"QLabel[uploadState=\"failed\"] {{ color: {c['status_failed']}; }}")
    return "".join(parts)


def _build_palette(mode: str) -> QPalette:
    c = get_theme_colors(mode)
    window = QColor(c["window_bg"])
    text = QColor(c["text_primary"])
    highlight = QColor(c["highlight"])

    palette = QPalette()
    palette.setColor(QPalette.Window, window)
    palette.setColor(QPalette.WindowText, text)
    palette.setColor(QPalette.Base, QColor(c["base_bg"]))
    palette.setColor(QPalette.AlternateBase, window)
    palette.setColor(QPalette.Text, text)
    palette.setColor(QPalette.Button, QColor(c["button_bg"]))
    palette.setColor(QPalette.ButtonText, text)
    palette.setColor(QPalette.Highlight, highlight)
    palette.setColor(QPalette.HighlightedText, contrast_text(highlight))
    palette.setColor(QPalette.Disabled, QPalette.Text, QColor(c["text_muted"]))
    palette.setColor(QPalette.Disabled, QPalette.ButtonText, QColor(c["text_muted"]))
    return palette


def contrast_text(color: QColor) -> QColor:
    # Relative luminance to keep highlighted rows readable.
    luminance = (0.2126 * color.redF()) + (0.7152 * color.greenF()) + (0.0722 * color.blueF())
    return QColor(0, 0, 0) if luminance > 0.6 else QColor(255, 255, 255)
