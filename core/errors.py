"""Error taxonomy shared by the core services and infrastructure adapters."""

from __future__ import annotations


class DayNotesError(Exception):
    """Base class for all DayNotes errors."""


class InvalidDateError(DayNotesError, ValueError):
    """A month or year outside the supported range was requested."""


class CorruptStateError(DayNotesError):
    """A persisted blob exists but cannot be parsed into annotations.

    Attributes:
        reason: Short human-readable description of what failed to parse.
    """

    def __init__(self, reason: str) -> None:
        super().__init__(f"Persisted calendar data is corrupt: {reason}")
        self.reason = reason


class PersistenceWriteError(DayNotesError):
    """The persistence adapter could not write the serialized mapping."""


class PersistenceReadError(DayNotesError):
    """The persistence adapter could not read an existing blob."""


class ImageIngestionError(DayNotesError):
    """A local image file could not be turned into a photo reference."""


class ImageTooLargeError(ImageIngestionError):
    """The selected image exceeds the configured upload size cap.

    Attributes:
        size_bytes: Actual file size.
        limit_bytes: Configured maximum.
    """

    def __init__(self, size_bytes: int, limit_bytes: int) -> None:
        super().__init__(f"Image is {size_bytes} bytes, limit is {limit_bytes} bytes")
        self.size_bytes = size_bytes
        self.limit_bytes = limit_bytes
