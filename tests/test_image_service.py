"""
test_image_service.py
---------------------
Unit tests for infrastructure.image_service image ingestion.
"""
import base64

import pytest

from core.errors import ImageIngestionError, ImageTooLargeError
from infrastructure.image_service import (
    DEFAULT_MAX_UPLOAD_BYTES,
    ImageIngestionService,
    build_data_uri,
    decode_data_uri,
    is_data_uri,
)


class TestDataUri:
    """Test data URI helpers."""

    def test_build_and_decode(self):
        """Test payload and mime survive a round trip."""
        uri = build_data_uri(b"\x89PNG", "image/png")
        assert uri == "data:image/png;base64," + base64.b64encode(b"\x89PNG").decode("ascii")
        assert decode_data_uri(uri) == ("image/png", b"\x89PNG")

    def test_is_data_uri(self):
        """Test URL and embedded references are told apart."""
        assert is_data_uri("data:image/png;base64,AA==")
        assert not is_data_uri("https://example.com/a.png")

    @pytest.mark.parametrize(
        "reference",
        [
            "https://example.com/a.png",
            "data:image/png,rawtext",
            "data:image/png;base64,@@@",
            "data:image/png;base64",
        ],
    )
    def test_decode_rejects_unsupported(self, reference):
        """Test non-base64 or non-data references raise ValueError."""
        with pytest.raises(ValueError):
            decode_data_uri(reference)


class TestImageIngestionService:
    """Test ingest_file."""

    def test_png_becomes_data_uri(self, png_file):
        """Test a PNG is embedded byte-for-byte."""
        uri = ImageIngestionService().ingest_file(png_file)
        mime, payload = decode_data_uri(uri)
        assert mime == "image/png"
        assert payload == png_file.read_bytes()

    def test_default_limit_is_5mb(self):
        """Test the default upload cap."""
        assert ImageIngestionService().max_bytes == DEFAULT_MAX_UPLOAD_BYTES == 5 * 1024 * 1024

    def test_limit_from_settings(self, fake_settings):
        """Test the cap is read from settings."""
        service = ImageIngestionService(fake_settings({"photos.max_upload_bytes": 1024}))
        assert service.max_bytes == 1024

    def test_bad_limit_setting_falls_back(self, fake_settings):
        """Test an unparsable cap uses the default."""
        service = ImageIngestionService(fake_settings({"photos.max_upload_bytes": "lots"}))
        assert service.max_bytes == DEFAULT_MAX_UPLOAD_BYTES

    def test_oversized_file_rejected(self, png_file, fake_settings):
        """Test the size cap is enforced before decoding."""
        service = ImageIngestionService(fake_settings({"photos.max_upload_bytes": 10}))
        with pytest.raises(ImageTooLargeError) as excinfo:
            service.ingest_file(png_file)
        assert excinfo.value.limit_bytes == 10
        assert excinfo.value.size_bytes == png_file.stat().st_size

    def test_non_image_rejected(self, tmp_path):
        """Test arbitrary files are not accepted as photos."""
        path = tmp_path / "notes.txt"
        path.write_text("just text", encoding="utf-8")
        with pytest.raises(ImageIngestionError):
            ImageIngestionService().ingest_file(path)

    def test_missing_file_rejected(self, tmp_path):
        """Test a vanished file raises ImageIngestionError."""
        with pytest.raises(ImageIngestionError):
            ImageIngestionService().ingest_file(tmp_path / "gone.png")

    def test_too_large_is_an_ingestion_error(self):
        """Test callers can catch every failure with one type."""
        assert issubclass(ImageTooLargeError, ImageIngestionError)
