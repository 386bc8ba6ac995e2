"""ViewModel for month navigation and per-day cell state."""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from datetime import date

from loguru import logger

from core.services import grid_service
from core.services.annotation_store import AnnotationStore

NOTE_PREVIEW_CHARS = 40


@dataclass(frozen=True)
class DayCellVM:
    """Everything a calendar cell needs to render itself."""

    day: date | None
    is_today: bool = False
    has_content: bool = False
    note_preview: str = ""
    link_count: int = 0
    photo_count: int = 0

    @property
    def is_blank(self) -> bool:
        """True for padding slots outside the displayed month."""
        return self.day is None

    @property
    def day_number(self) -> str:
        """Day of month as text, empty for blank slots."""
        return str(self.day.day) if self.day else ""

    @property
    def links_label(self) -> str:
        return f"{self.link_count} link(s)" if self.link_count else ""

    @property
    def photos_label(self) -> str:
        return f"{self.photo_count} photo(s)" if self.photo_count else ""


def _preview(note: str | None) -> str:
    text = " ".join((note or "").split())
    if len(text) <= NOTE_PREVIEW_CHARS:
        return text
    return text[: NOTE_PREVIEW_CHARS - 1] + "…"


class CalendarVM:
    """Main calendar view-model.

    Mediates between the annotation store, the grid generator and the
    calendar window. Navigation wraps months and carries the year.
    """

    def __init__(
        self,
        store: AnnotationStore,
        today_provider: Callable[[], date] | None = None,
    ) -> None:
        """Create a CalendarVM showing the current month.

        Args:
            store: Session-owned annotation store.
            today_provider: Returns "today"; injectable for tests.
        """
        self._store = store
        self._today = today_provider or date.today
        current = self._today()
        self.year: int = current.year
        self.month: int = current.month

    @property
    def store(self) -> AnnotationStore:
        return self._store

    @property
    def title(self) -> str:
        """Header text for the displayed month."""
        return grid_service.month_title(self.year, self.month)

    @property
    def weekday_headers(self) -> list[str]:
        return list(grid_service.WEEKDAY_HEADERS)

    def today(self) -> date:
        return self._today()

    def previous_month(self) -> None:
        self._shift(-1)

    def next_month(self) -> None:
        self._shift(1)

    def go_to_today(self) -> None:
        current = self._today()
        self.year, self.month = current.year, current.month

    def _shift(self, delta: int) -> None:
        year, month = grid_service.shift_month(self.year, self.month, delta)
        # Validate before committing so navigation past year 9999 keeps state
        grid_service.generate(year, month)
        self.year, self.month = year, month
        logger.debug("Navigated to {}-{:02d}", year, month)

    def cells(self) -> list[DayCellVM]:
        """42 cell view-models for the displayed month."""
        today = self._today()
        result: list[DayCellVM] = []
        for day in grid_service.generate(self.year, self.month):
            if day is None:
                result.append(DayCellVM(day=None))
                continue
            annotation = self._store.get(day)
            if annotation is None:
                result.append(DayCellVM(day=day, is_today=day == today))
                continue
            result.append(
                DayCellVM(
                    day=day,
                    is_today=day == today,
                    has_content=annotation.has_content(),
                    note_preview=_preview(annotation.note),
                    link_count=len(annotation.links),
                    photo_count=len(annotation.photos),
                )
            )
        return result
