"""Month grid generation for a Sunday-first calendar view.

Months are 1-based throughout (1 = January). The grid is always 6 weeks of
7 days so the calendar keeps a constant height; slots outside the month are
blank (`None`) and never show dates of the neighbouring months.
"""

from __future__ import annotations

import calendar
from datetime import MAXYEAR, MINYEAR, date

from core.errors import InvalidDateError

GRID_ROWS = 6
GRID_COLUMNS = 7
GRID_SIZE = GRID_ROWS * GRID_COLUMNS

WEEKDAY_HEADERS: list[str] = ["Sun", "Mon", "Tue", "Wed", "Thu", "Fri", "Sat"]

CalendarGrid = list[date | None]


def _validate(year: int, month: int) -> None:
    if not isinstance(month, int) or isinstance(month, bool) or not 1 <= month <= 12:
        raise InvalidDateError(f"Month must be in 1..12, got {month!r}")
    if not isinstance(year, int) or isinstance(year, bool) or not MINYEAR <= year <= MAXYEAR:
        raise InvalidDateError(f"Year must be in {MINYEAR}..{MAXYEAR}, got {year!r}")


def first_weekday_index(year: int, month: int) -> int:
    """Sunday-first weekday (0=Sunday..6=Saturday) of the 1st of the month."""
    _validate(year, month)
    # date.weekday() is Monday-first
    return (date(year, month, 1).weekday() + 1) % 7


def days_in_month(year: int, month: int) -> int:
    """Number of days in the month, leap years included."""
    _validate(year, month)
    return calendar.monthrange(year, month)[1]


def generate(year: int, month: int) -> CalendarGrid:
    """Return the 42-slot grid for `month` of `year`.

    Raises:
        InvalidDateError: If `month` is outside 1..12 or `year` cannot be
            represented as a calendar date.
    """
    start = first_weekday_index(year, month)
    grid: CalendarGrid = [None] * GRID_SIZE
    for offset in range(days_in_month(year, month)):
        grid[start + offset] = date(year, month, offset + 1)
    return grid


def shift_month(year: int, month: int, delta: int) -> tuple[int, int]:
    """Move `delta` months from (year, month), carrying into the year.

    The result is not range-checked; `generate` rejects unsupported years.
    """
    _validate(MINYEAR, month)
    years, month_index = divmod(month - 1 + delta, 12)
    return year + years, month_index + 1


def month_title(year: int, month: int) -> str:
    """Header text such as "March 2024"."""
    _validate(year, month)
    return f"{calendar.month_name[month]} {year}"
