"""
test_settings.py
----------------
Unit tests for infrastructure.settings.JsonSettings and path helpers.
"""
import json
from pathlib import Path

import pytest

from infrastructure.settings import (
    APP_DIR_NAME,
    DEFAULT_DATA_FILE_NAME,
    JsonSettings,
    expand_path,
    get_app_data_directory,
)


def _write_settings(tmp_path, data):
    path = tmp_path / "settings.json"
    path.write_text(json.dumps(data), encoding="utf-8")
    return path


class TestJsonSettings:
    """Test dotted-key access."""

    def test_dotted_get(self, tmp_path):
        """Test nested keys resolve."""
        settings = JsonSettings(_write_settings(tmp_path, {"ui": {"theme": "dark"}}))
        assert settings.get("ui.theme") == "dark"

    def test_missing_key_returns_default(self, tmp_path):
        """Test absent keys fall back."""
        settings = JsonSettings(_write_settings(tmp_path, {"ui": {}}))
        assert settings.get("ui.theme", "light") == "light"
        assert settings.get("nothing.here") is None

    def test_get_int_falls_back_on_bad_values(self, tmp_path):
        """Test non-numeric values use the default."""
        settings = JsonSettings(
            _write_settings(tmp_path, {"photos": {"thumbnail_size": "big", "max": "2048"}})
        )
        assert settings.get_int("photos.thumbnail_size", 96) == 96
        assert settings.get_int("photos.max", 1) == 2048

    def test_missing_file_raises(self, tmp_path):
        """Test a missing settings file is an error."""
        with pytest.raises(FileNotFoundError):
            JsonSettings(tmp_path / "settings.json")

    def test_default_data_file(self, tmp_path):
        """Test an empty storage path uses the per-user data directory."""
        settings = JsonSettings(_write_settings(tmp_path, {"storage": {"data_file": ""}}))
        assert settings.data_file_path() == get_app_data_directory() / DEFAULT_DATA_FILE_NAME

    def test_data_file_expands_env_vars(self, tmp_path, monkeypatch):
        """Test environment variables in paths are expanded."""
        monkeypatch.setenv("DAYNOTES_TEST_DIR", str(tmp_path))
        settings = JsonSettings(
            _write_settings(tmp_path, {"storage": {"data_file": "$DAYNOTES_TEST_DIR/cal.json"}})
        )
        assert settings.data_file_path() == tmp_path / "cal.json"

    def test_shipped_settings_file_loads(self):
        """Test the repository settings.json is valid."""
        settings = JsonSettings(Path(__file__).parent.parent / "settings.json")
        assert settings.get_int("photos.max_upload_bytes", 0) == 5 * 1024 * 1024


class TestPaths:
    """Test path helpers."""

    def test_app_data_directory_name(self):
        """Test the directory ends with the app name."""
        assert get_app_data_directory().name == APP_DIR_NAME

    @pytest.mark.parametrize("raw", [None, "", "   ", 5])
    def test_expand_path_default(self, raw):
        """Test unusable values give the default."""
        assert expand_path(raw, Path("fallback")) == Path("fallback")
