"""
test_models.py
--------------
Unit tests for core.models: date keys and the Annotation record.
"""
from datetime import date, datetime, timedelta, timezone

import pytest

from core.models import Annotation, date_key, has_content, normalize_date, parse_date_key


class TestDateKey:
    """Test date_key normalization."""

    def test_zero_pads_month_and_day(self):
        """Test single-digit month and day are padded."""
        assert date_key(date(2024, 3, 5)) == "2024-03-05"

    def test_zero_pads_small_years(self):
        """Test years below 1000 keep four digits."""
        assert date_key(date(999, 1, 5)) == "0999-01-05"

    def test_datetime_drops_time_of_day(self):
        """Test a datetime maps to its own calendar day."""
        assert date_key(datetime(2024, 3, 15, 23, 59, 59)) == "2024-03-15"

    def test_aware_datetime_keeps_wall_clock_date(self):
        """Test no time-zone conversion shifts the day."""
        late = datetime(2024, 3, 15, 23, 30, tzinfo=timezone(timedelta(hours=-8)))
        assert date_key(late) == "2024-03-15"

    def test_differently_constructed_dates_collide(self):
        """Test equal calendar days give equal keys."""
        from_ordinal = date.fromordinal(date(2024, 3, 15).toordinal())
        from_iso = date.fromisoformat("2024-03-15")
        from_dt = datetime(2024, 3, 15, 8, 0).date()
        assert date_key(from_ordinal) == date_key(from_iso) == date_key(from_dt)

    def test_rejects_non_dates(self):
        """Test strings are not accepted as dates."""
        with pytest.raises(TypeError):
            date_key("2024-03-15")


class TestParseDateKey:
    """Test parse_date_key validation."""

    def test_round_trip(self):
        """Test a key parses back into its date."""
        assert parse_date_key("2024-02-29") == date(2024, 2, 29)

    @pytest.mark.parametrize(
        "key", ["2024-3-05", "2024/03/05", "2023-02-29", "2024-13-01", "", "2024-03- 1", "2024- 3-01"]
    )
    def test_rejects_malformed_keys(self, key):
        """Test malformed or non-existent days raise ValueError."""
        with pytest.raises(ValueError):
            parse_date_key(key)


class TestNormalizeDate:
    """Test normalize_date."""

    def test_date_passes_through(self):
        """Test plain dates are returned unchanged."""
        d = date(2024, 1, 1)
        assert normalize_date(d) is d

    def test_datetime_becomes_date(self):
        """Test datetimes are reduced to their date."""
        result = normalize_date(datetime(2024, 1, 1, 12))
        assert type(result) is date
        assert result == date(2024, 1, 1)


class TestAnnotation:
    """Test Annotation helpers."""

    def test_defaults_are_empty(self):
        """Test a new annotation has no content."""
        a = Annotation()
        assert a.note is None
        assert a.links == []
        assert a.photos == []
        assert not a.has_content()

    def test_blank_note_is_not_content(self):
        """Test whitespace-only notes do not count."""
        assert not Annotation(note="   \n").has_content()

    @pytest.mark.parametrize(
        "annotation",
        [
            Annotation(note="x"),
            Annotation(links=["https://example.com"]),
            Annotation(photos=["data:image/png;base64,AA=="]),
        ],
    )
    def test_any_field_is_content(self, annotation):
        """Test each field alone makes the annotation non-empty."""
        assert annotation.has_content()

    def test_copy_is_independent(self):
        """Test mutating a copy does not touch the original."""
        original = Annotation(note="a", links=["https://a.example"])
        clone = original.copy()
        clone.links.append("https://b.example")
        assert original.links == ["https://a.example"]
        assert clone == Annotation(note="a", links=["https://a.example", "https://b.example"])

    def test_has_content_handles_none(self):
        """Test the module predicate accepts missing annotations."""
        assert not has_content(None)
        assert has_content(Annotation(note="x"))
