"""
test_annotation_codec.py
------------------------
Unit tests for core.services.annotation_codec blob encoding and validation.
"""
import json

import pytest

from core.errors import CorruptStateError
from core.models import Annotation
from core.services.annotation_codec import decode_annotations, encode_annotations


class TestEncode:
    """Test encode_annotations output shape."""

    def test_shape_keyed_by_date(self):
        """Test the blob is an object of per-day objects."""
        blob = encode_annotations(
            {"2024-03-15": Annotation(note="Dentist 3pm", links=["https://a.example"])}
        )
        assert json.loads(blob) == {
            "2024-03-15": {"note": "Dentist 3pm", "links": ["https://a.example"], "photos": []}
        }

    def test_unset_note_is_omitted(self):
        """Test a None note is not written."""
        blob = encode_annotations({"2024-03-15": Annotation(links=["https://a.example"])})
        assert "note" not in json.loads(blob)["2024-03-15"]

    def test_output_is_stable(self):
        """Test insertion order does not change the blob."""
        a = {"2024-03-02": Annotation(note="b"), "2024-03-01": Annotation(note="a")}
        b = {"2024-03-01": Annotation(note="a"), "2024-03-02": Annotation(note="b")}
        assert encode_annotations(a) == encode_annotations(b)

    def test_unicode_is_preserved(self):
        """Test non-ASCII notes survive encoding."""
        mapping = {"2024-03-15": Annotation(note="Café ☕")}
        assert decode_annotations(encode_annotations(mapping)) == mapping


class TestDecode:
    """Test decode_annotations parsing and validation."""

    def test_missing_fields_default_to_empty(self):
        """Test entries may omit any field."""
        result = decode_annotations('{"2024-03-15": {}}')
        assert result == {"2024-03-15": Annotation()}

    def test_null_fields_are_accepted(self):
        """Test null note and lists decode as empty."""
        result = decode_annotations('{"2024-03-15": {"note": null, "links": null}}')
        assert result["2024-03-15"] == Annotation()

    def test_unknown_fields_are_ignored(self):
        """Test extra fields do not make the blob corrupt."""
        result = decode_annotations('{"2024-03-15": {"note": "x", "mood": "happy"}}')
        assert result["2024-03-15"] == Annotation(note="x")

    @pytest.mark.parametrize("blob", ["", "   \n"])
    def test_empty_blob_is_empty_mapping(self, blob):
        """Test blank storage decodes to no data."""
        assert decode_annotations(blob) == {}

    def test_empty_object(self):
        """Test an empty JSON object."""
        assert decode_annotations("{}") == {}

    @pytest.mark.parametrize(
        "blob",
        [
            "not json",
            "{",
            "[]",
            '"2024-03-15"',
            '{"2024-3-15": {}}',
            '{"2024-02-30": {}}',
            '{"2024-03- 1": {"note": "x"}}',
            '{" 024-03-01": {}}',
            '{"tomorrow": {}}',
            '{"2024-03-15": "Dentist"}',
            '{"2024-03-15": {"note": 42}}',
            '{"2024-03-15": {"links": "https://a.example"}}',
            '{"2024-03-15": {"photos": [1, 2]}}',
        ],
    )
    def test_malformed_blobs_raise_corrupt_state(self, blob):
        """Test every shape violation is signalled."""
        with pytest.raises(CorruptStateError):
            decode_annotations(blob)

    def test_space_padded_key_is_not_a_day(self):
        """Test a key strptime would accept but date_key never writes is rejected."""
        with pytest.raises(CorruptStateError) as excinfo:
            decode_annotations('{"2024-03- 1": {"note": "x"}}')
        assert "2024-03- 1" in excinfo.value.reason

    def test_corrupt_state_error_carries_reason(self):
        """Test the reason names the offending key."""
        with pytest.raises(CorruptStateError) as excinfo:
            decode_annotations('{"2024-03-15": {"note": 42}}')
        assert "2024-03-15" in excinfo.value.reason
