"""Core domain models for calendar days and their annotations."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date, datetime

DATE_KEY_FMT = "%Y-%m-%d"


def normalize_date(value: date | datetime) -> date:
    """Return the date-only part of `value`.

    A `datetime` keeps its own wall-clock date; no time-zone conversion is
    applied, so an evening timestamp never shifts to the next day.
    """
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    raise TypeError(f"Expected date or datetime, got {type(value).__name__}")


def date_key(value: date | datetime) -> str:
    """Canonical `YYYY-MM-DD` key for the calendar day of `value`."""
    d = normalize_date(value)
    # strftime does not zero-pad years below 1000 on every platform
    return f"{d.year:04d}-{d.month:02d}-{d.day:02d}"


def parse_date_key(key: str) -> date:
    """Parse a `YYYY-MM-DD` key back into a date.

    Raises:
        ValueError: If `key` is not a well-formed, existing calendar day.
    """
    if len(key) != 10 or key[4] != "-" or key[7] != "-":
        raise ValueError(f"Malformed date key: {key!r}")
    parsed = datetime.strptime(key, DATE_KEY_FMT).date()
    # strptime tolerates space padding; only the canonical spelling is a key
    if date_key(parsed) != key:
        raise ValueError(f"Non-canonical date key: {key!r}")
    return parsed


@dataclass
class Annotation:
    """Content attached to a single calendar day.

    Photos are opaque strings: either a remote URL or an embedded
    `data:` URI produced by image ingestion.
    """

    note: str | None = None
    links: list[str] = field(default_factory=list)
    photos: list[str] = field(default_factory=list)

    def has_content(self) -> bool:
        """True if any field carries something worth an indicator."""
        return bool((self.note or "").strip()) or bool(self.links) or bool(self.photos)

    def copy(self) -> Annotation:
        """Return a copy whose lists are independent of this instance."""
        return Annotation(note=self.note, links=list(self.links), photos=list(self.photos))


def has_content(annotation: Annotation | None) -> bool:
    """Indicator predicate usable on possibly missing annotations."""
    return annotation is not None and annotation.has_content()
