"""ViewModel for editing the annotation of a single day.

Holds working copies of note, links and photos for one dialog session.
Nothing reaches the store until `save()` or `clear_day()`; `save()` always
hands the complete record to `AnnotationStore.set`.
"""

from __future__ import annotations

from datetime import date
from pathlib import Path
from typing import Protocol
from urllib.parse import urlparse

from loguru import logger

from core.errors import ImageIngestionError, ImageTooLargeError, PersistenceWriteError
from core.models import Annotation
from core.services.annotation_store import AnnotationStore

INVALID_URL_MESSAGE = "Please enter a valid URL"
INVALID_IMAGE_URL_MESSAGE = "Please enter a valid image URL"
UPLOAD_FAILED_MESSAGE = "Failed to upload image"
SAVE_FAILED_MESSAGE = "Could not save changes: {}"


def is_valid_url(text: str) -> bool:
    """True for absolute URLs with a scheme and a location (or a data URI)."""
    candidate = text.strip()
    if not candidate or any(ch.isspace() for ch in candidate):
        return False
    try:
        parsed = urlparse(candidate)
    except ValueError:
        return False
    if not parsed.scheme:
        return False
    if parsed.scheme in ("data", "mailto"):
        return bool(parsed.path)
    return bool(parsed.netloc)


def format_size_limit(limit_bytes: int) -> str:
    """Human text such as "5MB" for the upload cap."""
    mb = limit_bytes / (1024 * 1024)
    return f"{mb:g}MB" if mb >= 1 else f"{limit_bytes // 1024}KB"


class ImageIngestion(Protocol):
    """Protocol for turning a local image file into a photo reference."""

    @property
    def max_bytes(self) -> int:
        """Upload cap in bytes."""
        ...

    def ingest_file(self, path: str | Path) -> str:
        """Return a photo reference for the image at `path`."""
        ...


class DayEditorVM:
    """Edit session for one calendar day."""

    def __init__(
        self, store: AnnotationStore, day: date, ingestion: ImageIngestion | None = None
    ) -> None:
        """Create an editor for `day`.

        Args:
            store: Session-owned annotation store.
            day: Calendar day being viewed or edited.
            ingestion: Image ingestion service; uploads are disabled without one.
        """
        self._store = store
        self.day = day
        self._ingestion = ingestion
        self.note: str = ""
        self.links: list[str] = []
        self.photos: list[str] = []
        self.error: str = ""
        self._stored: Annotation | None = None
        self._reload()
        # A day without an entry opens straight into editing
        self.is_edit_mode: bool = self._stored is None

    @property
    def has_entry(self) -> bool:
        return self._stored is not None

    @property
    def stored(self) -> Annotation | None:
        return self._stored.copy() if self._stored is not None else None

    @property
    def upload_hint(self) -> str:
        if self._ingestion is None:
            return ""
        return f"Max size: {format_size_limit(self._ingestion.max_bytes)}"

    def _reload(self) -> None:
        self._stored = self._store.get(self.day)
        if self._stored is not None:
            self.note = self._stored.note or ""
            self.links = list(self._stored.links)
            self.photos = list(self._stored.photos)
        else:
            self.note = ""
            self.links = []
            self.photos = []

    def begin_edit(self) -> None:
        self.is_edit_mode = True

    def add_link(self, url: str) -> bool:
        """Append `url` if it is a valid URL; otherwise set `error`."""
        if not is_valid_url(url):
            self.error = INVALID_URL_MESSAGE
            return False
        self.links.append(url.strip())
        self.error = ""
        return True

    def remove_link(self, index: int) -> None:
        if 0 <= index < len(self.links):
            del self.links[index]

    def add_photo_url(self, url: str) -> bool:
        """Append an image URL if valid; otherwise set `error`."""
        if not is_valid_url(url):
            self.error = INVALID_IMAGE_URL_MESSAGE
            return False
        self.photos.append(url.strip())
        self.error = ""
        return True

    def add_photo_file(self, path: str | Path) -> bool:
        """Ingest a local image file and append its embedded reference."""
        if self._ingestion is None:
            self.error = UPLOAD_FAILED_MESSAGE
            return False
        try:
            reference = self._ingestion.ingest_file(path)
        except ImageTooLargeError as ex:
            self.error = f"Image size should be less than {format_size_limit(ex.limit_bytes)}"
            return False
        except ImageIngestionError as ex:
            logger.warning("Upload failed for {}: {}", path, ex)
            self.error = UPLOAD_FAILED_MESSAGE
            return False
        self.photos.append(reference)
        self.error = ""
        return True

    def remove_photo(self, index: int) -> None:
        if 0 <= index < len(self.photos):
            del self.photos[index]

    def build_annotation(self) -> Annotation:
        return Annotation(note=self.note, links=list(self.links), photos=list(self.photos))

    def save(self) -> bool:
        """Replace the day's entry with the working copy.

        On a persistence failure the error is reported, the editor stays in
        edit mode, and the store keeps the new value in memory for a retry.
        """
        try:
            self._store.set(self.day, self.build_annotation())
        except PersistenceWriteError as ex:
            self.error = SAVE_FAILED_MESSAGE.format(ex)
            return False
        self._stored = self._store.get(self.day)
        self.error = ""
        self.is_edit_mode = False
        return True

    def cancel(self) -> bool:
        """Discard working changes.

        Returns True when the dialog should close (there was no stored entry),
        False when it should fall back to view mode.
        """
        self.error = ""
        if self._stored is None:
            return True
        self._reload()
        self.is_edit_mode = False
        return False

    def clear_day(self) -> bool:
        """Remove the day's entry entirely."""
        try:
            self._store.clear(self.day)
        except PersistenceWriteError as ex:
            self.error = SAVE_FAILED_MESSAGE.format(ex)
            return False
        self._reload()
        self.error = ""
        return True
