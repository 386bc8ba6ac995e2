"""
conftest.py
-----------
Shared pytest fixtures for DayNotes tests.

Provides fixtures for:
- In-memory persistence and annotation stores
- A fixed "today" for view-model tests
- Sample images on disk
"""
from datetime import date

import pytest
from PIL import Image

from core.models import Annotation
from core.services.annotation_store import AnnotationStore
from infrastructure.blob_storage import MemoryBlobAdapter


# ----- Store Fixtures -----

@pytest.fixture
def memory_adapter():
    """Empty in-memory blob adapter."""
    return MemoryBlobAdapter()


@pytest.fixture
def store(memory_adapter):
    """Loaded, empty annotation store backed by memory_adapter."""
    s = AnnotationStore(memory_adapter)
    s.load()
    return s


@pytest.fixture
def dentist_annotation():
    """Annotation with every field populated."""
    return Annotation(
        note="Dentist 3pm",
        links=["https://example.com/clinic"],
        photos=["https://example.com/map.png"],
    )


# ----- Date Fixtures -----

@pytest.fixture
def fixed_today():
    """Deterministic "today": Friday, March 15, 2024."""
    return date(2024, 3, 15)


# ----- Image Fixtures -----

@pytest.fixture
def png_file(tmp_path):
    """Small PNG image on disk."""
    path = tmp_path / "pixel.png"
    Image.new("RGB", (4, 4), color=(255, 0, 0)).save(path, format="PNG")
    return path


class FakeSettings:
    """Dict-backed stand-in for JsonSettings.get."""

    def __init__(self, values):
        self._values = values

    def get(self, key, default=None):
        return self._values.get(key, default)


@pytest.fixture
def fake_settings():
    """Factory for FakeSettings instances."""
    return FakeSettings
