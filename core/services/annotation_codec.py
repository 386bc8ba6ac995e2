"""JSON serialization of the annotation mapping.

The blob is a JSON object keyed by `YYYY-MM-DD`; each value is an object with
an optional `note` string and `links`/`photos` string arrays. Encoding sorts
keys so identical mappings always produce identical blobs.
"""

from __future__ import annotations

import json
from typing import Any

from loguru import logger

from core.errors import CorruptStateError
from core.models import Annotation, parse_date_key

KNOWN_FIELDS = {"note", "links", "photos"}


def annotation_to_dict(annotation: Annotation) -> dict[str, Any]:
    """Plain-dict form of `annotation`; `note` is omitted when unset."""
    data: dict[str, Any] = {}
    if annotation.note is not None:
        data["note"] = annotation.note
    data["links"] = list(annotation.links)
    data["photos"] = list(annotation.photos)
    return data


def _string_list(key: str, field_name: str, value: Any) -> list[str]:
    if value is None:
        return []
    if not isinstance(value, list) or not all(isinstance(v, str) for v in value):
        raise CorruptStateError(f"{key}: '{field_name}' must be a list of strings")
    return list(value)


def annotation_from_dict(key: str, raw: Any) -> Annotation:
    """Build an Annotation from its decoded JSON value stored under `key`."""
    if not isinstance(raw, dict):
        raise CorruptStateError(f"{key}: entry must be an object, got {type(raw).__name__}")
    note = raw.get("note")
    if note is not None and not isinstance(note, str):
        raise CorruptStateError(f"{key}: 'note' must be a string")
    unknown = set(raw) - KNOWN_FIELDS
    if unknown:
        logger.debug("Ignoring unknown fields for {}: {}", key, sorted(unknown))
    return Annotation(
        note=note,
        links=_string_list(key, "links", raw.get("links")),
        photos=_string_list(key, "photos", raw.get("photos")),
    )


def encode_annotations(mapping: dict[str, Annotation]) -> str:
    """Serialize the full mapping to a JSON blob."""
    payload = {key: annotation_to_dict(mapping[key]) for key in sorted(mapping)}
    return json.dumps(payload, ensure_ascii=False, sort_keys=True)


def decode_annotations(blob: str) -> dict[str, Annotation]:
    """Parse a blob produced by `encode_annotations`.

    An empty or whitespace-only blob decodes to an empty mapping.

    Raises:
        CorruptStateError: If the blob is not JSON or does not have the
            expected mapping shape.
    """
    if not blob.strip():
        logger.warning("Persisted calendar blob is empty; treating as no data")
        return {}
    try:
        decoded = json.loads(blob)
    except json.JSONDecodeError as ex:
        raise CorruptStateError(f"invalid JSON ({ex.msg} at line {ex.lineno})") from ex
    if not isinstance(decoded, dict):
        raise CorruptStateError(f"root must be an object, got {type(decoded).__name__}")

    result: dict[str, Annotation] = {}
    for key, raw in decoded.items():
        try:
            parse_date_key(key)
        except ValueError as ex:
            raise CorruptStateError(f"invalid date key {key!r}") from ex
        result[key] = annotation_from_dict(key, raw)
    return result
