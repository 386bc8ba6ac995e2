"""Day-keyed annotation store with write-through persistence.

The store owns the mapping from `YYYY-MM-DD` keys to `Annotation` records for
one application session. Every mutation is serialized and handed to the
persistence adapter before the call returns; there is no dirty state.
"""

from __future__ import annotations

from collections.abc import Iterator
from datetime import date, datetime

from loguru import logger

from core.errors import PersistenceWriteError
from core.models import Annotation, date_key
from core.services.annotation_codec import decode_annotations, encode_annotations
from core.services.interfaces import IPersistenceAdapter

_UNSET = object()


class AnnotationStore:
    """Mapping of calendar days to annotations backed by a persistence adapter.

    Callers always pass dates; key derivation happens only here so that the
    same calendar day reached through different code paths resolves to the
    same entry.
    """

    def __init__(self, adapter: IPersistenceAdapter) -> None:
        """Create an empty store; call `load()` to read persisted data.

        Args:
            adapter: Durable blob storage used by `load` and every mutation.
        """
        self._adapter = adapter
        self._entries: dict[str, Annotation] = {}

    def load(self) -> dict[str, Annotation]:
        """Replace in-memory state with the persisted mapping and return a copy.

        Raises:
            CorruptStateError: If the persisted blob is malformed. The store is
                left empty so the caller may choose to continue without data.
        """
        self._entries = {}
        blob = self._adapter.load_blob()
        if blob is None:
            logger.info("No persisted calendar data found; starting empty")
            return {}
        self._entries = decode_annotations(blob)
        logger.info("Loaded annotations for {} day(s)", len(self._entries))
        return {key: value.copy() for key, value in self._entries.items()}

    def get(self, day: date | datetime) -> Annotation | None:
        """Return a copy of the annotation stored for `day`, or None."""
        found = self._entries.get(date_key(day))
        return found.copy() if found is not None else None

    def set(self, day: date | datetime, annotation: Annotation) -> None:
        """Replace the whole entry for `day` and persist.

        Raises:
            PersistenceWriteError: If persisting fails; memory is already updated.
        """
        key = date_key(day)
        self._entries[key] = annotation.copy()
        logger.debug("Set annotation for {}", key)
        self._persist()

    def merge(
        self,
        day: date | datetime,
        *,
        note: str | None | object = _UNSET,
        links: list[str] | object = _UNSET,
        photos: list[str] | object = _UNSET,
    ) -> Annotation:
        """Update only the given fields of the entry for `day` and persist.

        A day without an entry starts from an empty annotation. Returns a copy
        of the resulting record.
        """
        key = date_key(day)
        current = self._entries.get(key)
        updated = current.copy() if current is not None else Annotation()
        if note is not _UNSET:
            updated.note = note  # type: ignore[assignment]
        if links is not _UNSET:
            updated.links = list(links)  # type: ignore[call-overload]
        if photos is not _UNSET:
            updated.photos = list(photos)  # type: ignore[call-overload]
        self._entries[key] = updated
        logger.debug("Merged annotation fields for {}", key)
        self._persist()
        return updated.copy()

    def clear(self, day: date | datetime) -> None:
        """Remove the entry for `day` and persist; absent entries are a no-op."""
        key = date_key(day)
        if self._entries.pop(key, None) is None:
            return
        logger.debug("Cleared annotation for {}", key)
        self._persist()

    def has_content(self, day: date | datetime) -> bool:
        """True if `day` has an entry with any non-empty field."""
        found = self._entries.get(date_key(day))
        return found is not None and found.has_content()

    def keys(self) -> list[str]:
        """Sorted date keys currently stored."""
        return sorted(self._entries)

    def __contains__(self, day: object) -> bool:
        if not isinstance(day, date):
            return False
        return date_key(day) in self._entries

    def __len__(self) -> int:
        return len(self._entries)

    def __iter__(self) -> Iterator[str]:
        return iter(self.keys())

    def _persist(self) -> None:
        blob = encode_annotations(self._entries)
        try:
            self._adapter.save_blob(blob)
        except PersistenceWriteError:
            logger.error("Failed to persist {} annotation(s)", len(self._entries))
            raise
        except OSError as ex:
            logger.error("Failed to persist {} annotation(s): {}", len(self._entries), ex)
            raise PersistenceWriteError(str(ex)) from ex
