"""Thumbnail decoding and caching for photo references shown in dialogs.

Embedded `data:` references are decoded locally. Remote URLs are not fetched;
the dialog shows them as text.
"""

from __future__ import annotations

from collections import OrderedDict
from dataclasses import dataclass
import hashlib

from PySide6.QtCore import Qt
from PySide6.QtGui import QImage
from loguru import logger

from app.views.constants import DEFAULT_THUMB_MEM_CACHE, DEFAULT_THUMB_SIZE
from infrastructure.image_service import decode_data_uri, is_data_uri


def _compute_cache_key(reference: str, side: int) -> str:
    """Stable cache key from the reference text and requested side."""
    return hashlib.sha1(f"{side}|{reference}".encode("utf-8", errors="ignore")).hexdigest()


@dataclass
class _MemCacheItem:
    key: str
    image: QImage


class _LRUCache:
    def __init__(self, capacity: int) -> None:
        self._cap = max(1, int(capacity or 1))
        self._data: OrderedDict[str, _MemCacheItem] = OrderedDict()

    def get(self, key: str) -> QImage | None:
        """Return cached QImage for key, moving it to the MRU position."""
        item = self._data.get(key)
        if not item:
            return None
        self._data.move_to_end(key)
        return item.image

    def put(self, key: str, image: QImage) -> None:
        """Insert or update `key` with `image`, evicting LRU when over capacity."""
        self._data[key] = _MemCacheItem(key, image)
        self._data.move_to_end(key)
        while len(self._data) > self._cap:
            self._data.popitem(last=False)


class PhotoThumbnailCache:
    """Decodes embedded photo references into scaled QImages."""

    def __init__(self, settings: object | None = None) -> None:
        self.thumb_size = DEFAULT_THUMB_SIZE
        capacity = DEFAULT_THUMB_MEM_CACHE
        if settings is not None:
            self.thumb_size = settings.get_int("photos.thumbnail_size", DEFAULT_THUMB_SIZE)  # type: ignore[attr-defined]
            capacity = settings.get_int("photos.thumbnail_mem_cache", DEFAULT_THUMB_MEM_CACHE)  # type: ignore[attr-defined]
        self._cache = _LRUCache(capacity)

    def thumbnail(self, reference: str) -> QImage | None:
        """Scaled image for an embedded reference, or None if not displayable."""
        if not is_data_uri(reference):
            return None
        key = _compute_cache_key(reference, self.thumb_size)
        cached = self._cache.get(key)
        if cached is not None:
            return cached
        try:
            _mime, payload = decode_data_uri(reference)
        except ValueError as ex:
            logger.warning("Undecodable photo reference: {}", ex)
            return None
        img = QImage()
        if not img.loadFromData(payload):
            logger.warning("Qt could not decode embedded photo ({} bytes)", len(payload))
            return None
        img = img.scaled(
            self.thumb_size, self.thumb_size, Qt.KeepAspectRatio, Qt.SmoothTransformation
        )
        self._cache.put(key, img)
        return img
