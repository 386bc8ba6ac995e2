"""Image ingestion: turn local image files into embeddable photo references.

Uploaded files become `data:<mime>;base64,...` strings so a day's photos stay
self-contained inside the persisted blob. Pillow identifies the image format;
HEIC/HEIF files (through pillow-heif) are transcoded to JPEG because most
viewers, Qt included, cannot decode them.
"""

from __future__ import annotations

import base64
import binascii
from io import BytesIO
import os
from pathlib import Path

from PIL import Image, ImageOps, UnidentifiedImageError
from loguru import logger
from pillow_heif import register_heif_opener

from core.errors import ImageIngestionError, ImageTooLargeError

register_heif_opener()

DEFAULT_MAX_UPLOAD_BYTES = 5 * 1024 * 1024
TRANSCODE_FORMATS = {"HEIF", "HEIC", "AVIF"}
JPEG_QUALITY = 90


def is_data_uri(reference: str) -> bool:
    """True if `reference` embeds image bytes rather than pointing to a URL."""
    return reference.startswith("data:")


def build_data_uri(payload: bytes, mime_type: str) -> str:
    """Encode `payload` as a base64 data URI."""
    encoded = base64.b64encode(payload).decode("ascii")
    return f"data:{mime_type};base64,{encoded}"


def decode_data_uri(reference: str) -> tuple[str, bytes]:
    """Split a base64 data URI into (mime_type, payload).

    Raises:
        ValueError: If `reference` is not a base64 data URI.
    """
    if not is_data_uri(reference) or "," not in reference:
        raise ValueError("Not a data URI")
    header, _, body = reference.partition(",")
    meta = header[len("data:") :].split(";")
    if "base64" not in meta[1:]:
        raise ValueError("Only base64 data URIs are supported")
    try:
        payload = base64.b64decode(body, validate=True)
    except binascii.Error as ex:
        raise ValueError(f"Invalid base64 payload: {ex}") from ex
    return meta[0] or "application/octet-stream", payload


class ImageIngestionService:
    """Converts user-selected image files into photo reference strings."""

    def __init__(self, settings: object | None = None) -> None:
        """Read the upload size cap from settings (`photos.max_upload_bytes`)."""
        self._max_bytes = DEFAULT_MAX_UPLOAD_BYTES
        if settings is not None:
            try:
                self._max_bytes = int(
                    settings.get("photos.max_upload_bytes", DEFAULT_MAX_UPLOAD_BYTES)  # type: ignore[attr-defined]
                    or DEFAULT_MAX_UPLOAD_BYTES
                )
            except (ValueError, TypeError):
                self._max_bytes = DEFAULT_MAX_UPLOAD_BYTES

    @property
    def max_bytes(self) -> int:
        """Configured upload cap in bytes."""
        return self._max_bytes

    def ingest_file(self, path: str | Path) -> str:
        """Return a data URI for the image at `path`.

        Raises:
            ImageTooLargeError: If the file exceeds the upload cap.
            ImageIngestionError: If the file cannot be read or is not an image.
        """
        path = Path(path)
        try:
            size = os.path.getsize(path)
        except OSError as ex:
            raise ImageIngestionError(f"Cannot access {path}: {ex}") from ex
        if size > self._max_bytes:
            logger.info("Rejected {} ({} bytes > {} bytes)", path, size, self._max_bytes)
            raise ImageTooLargeError(size, self._max_bytes)

        try:
            with Image.open(path) as im:
                fmt = (im.format or "").upper()
                if fmt in TRANSCODE_FORMATS:
                    return build_data_uri(self._transcode_to_jpeg(im), "image/jpeg")
                im.verify()
            mime = Image.MIME.get(fmt)
            if not mime:
                raise ImageIngestionError(f"Unsupported image format: {fmt or 'unknown'}")
            payload = path.read_bytes()
        except (UnidentifiedImageError, OSError, SyntaxError) as ex:
            logger.warning("Image ingestion failed for {}: {}", path, ex)
            raise ImageIngestionError(f"Cannot read image {path}: {ex}") from ex

        logger.info("Ingested {} as {} ({} bytes)", path.name, mime, size)
        return build_data_uri(payload, mime)

    @staticmethod
    def _transcode_to_jpeg(im: Image.Image) -> bytes:
        oriented = ImageOps.exif_transpose(im)
        if oriented.mode not in ("RGB", "L"):
            oriented = oriented.convert("RGB")
        buf = BytesIO()
        oriented.save(buf, format="JPEG", quality=JPEG_QUALITY)
        return buf.getvalue()
