"""
UI/view constants centralized for reuse across view modules.
"""

from __future__ import annotations

# Calendar grid
CELL_MIN_WIDTH_PX: int = 110
CELL_MIN_HEIGHT_PX: int = 96
GRID_SPACING_PX: int = 1
TODAY_BADGE_PX: int = 28
CONTENT_DOT_PX: int = 8

# Day dialog
DIALOG_MIN_WIDTH_PX: int = 560
DIALOG_MAX_HEIGHT_RATIO: float = 0.9
NOTE_EDITOR_ROWS: int = 4
DEFAULT_THUMB_SIZE: int = 96  # overridable by settings.json
DEFAULT_THUMB_MEM_CACHE: int = 128

WINDOW_SIZE_RATIO: float = 0.6
WINDOW_TITLE: str = "DayNotes"

THEME_LIGHT: str = "light"
THEME_DARK: str = "dark"
