"""Core service interfaces.

The annotation store only talks to durable storage through the
`IPersistenceAdapter` boundary defined here; concrete adapters live in the
infrastructure layer.
"""

from __future__ import annotations


class IPersistenceAdapter:
    """Interface for durable single-blob storage of the annotation mapping."""

    def load_blob(self) -> str | None:
        """Return the stored blob, or None when nothing has been saved yet.

        Implementations raise `CorruptStateError` when stored bytes are not
        text, and `PersistenceReadError` when storage cannot be read at all.
        """
        raise NotImplementedError

    def save_blob(self, blob: str) -> None:
        """Durably store `blob`, replacing any previous content.

        Implementations raise `PersistenceWriteError` when the write fails.
        """
        raise NotImplementedError
