"""Light and dark stylesheets for the calendar window and dialogs."""

from __future__ import annotations

from PySide6.QtWidgets import QApplication
from loguru import logger

from app.views.constants import THEME_DARK, THEME_LIGHT

_PALETTES: dict[str, dict[str, str]] = {
    THEME_LIGHT: {
        "window": "#f9fafb",
        "cell": "#ffffff",
        "cell_hover": "#f3f4f6",
        "blank": "#f9fafb",
        "grid": "#e5e7eb",
        "text": "#1f2937",
        "muted": "#4b5563",
        "accent": "#3b82f6",
        "photo": "#22c55e",
        "danger": "#dc2626",
    },
    THEME_DARK: {
        "window": "#111827",
        "cell": "#1a202c",
        "cell_hover": "#1f2937",
        "blank": "#1f2937",
        "grid": "#374151",
        "text": "#f3f4f6",
        "muted": "#9ca3af",
        "accent": "#60a5fa",
        "photo": "#4ade80",
        "danger": "#f87171",
    },
}

_TEMPLATE = """
QWidget {{ background: {window}; color: {text}; }}
QLabel#monthTitle {{ font-size: 24px; font-weight: bold; }}
QLabel#weekdayHeader {{ color: {muted}; font-weight: bold; padding: 8px; }}
QFrame#dayCell {{ background: {cell}; border: 1px solid {grid}; }}
QFrame#dayCell:hover {{ background: {cell_hover}; }}
QFrame#blankCell {{ background: {blank}; border: 1px solid {grid}; }}
QLabel#todayBadge {{ background: {accent}; color: white; border-radius: 14px; }}
QLabel#contentDot {{ background: {accent}; border-radius: 4px; }}
QLabel#notePreview {{ color: {muted}; font-size: 11px; background: transparent; }}
QLabel#linkCount {{ color: {accent}; font-size: 11px; background: transparent; }}
QLabel#photoCount {{ color: {photo}; font-size: 11px; background: transparent; }}
QLabel#errorLabel {{ color: {danger}; }}
QPushButton#dangerButton {{ color: {danger}; }}
"""


def stylesheet(theme: str) -> str:
    """Return the stylesheet for `theme`, falling back to light."""
    palette = _PALETTES.get(theme)
    if palette is None:
        logger.warning("Unknown theme {}, using {}", theme, THEME_LIGHT)
        palette = _PALETTES[THEME_LIGHT]
    return _TEMPLATE.format(**palette)


def apply_theme(theme: str) -> str:
    """Apply `theme` application-wide and return the theme actually used."""
    used = theme if theme in _PALETTES else THEME_LIGHT
    app = QApplication.instance()
    if app is not None:
        app.setStyleSheet(stylesheet(used))  # type: ignore[attr-defined]
    logger.info("Theme set to {}", used)
    return used


def toggled(theme: str) -> str:
    return THEME_LIGHT if theme == THEME_DARK else THEME_DARK
