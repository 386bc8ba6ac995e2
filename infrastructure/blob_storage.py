"""Persistence adapters storing the serialized annotation mapping.

`JsonFileBlobAdapter` keeps the blob in a single UTF-8 file and replaces it
atomically on every save so a crash mid-write never leaves a truncated file.
"""

from __future__ import annotations

from datetime import datetime
import os
from pathlib import Path
import tempfile

from loguru import logger

from core.errors import CorruptStateError, PersistenceReadError, PersistenceWriteError
from core.services.interfaces import IPersistenceAdapter


class JsonFileBlobAdapter(IPersistenceAdapter):
    """File-backed blob storage."""

    def __init__(self, path: str | Path) -> None:
        self._path = Path(path)

    @property
    def path(self) -> Path:
        """Location of the blob file."""
        return self._path

    def load_blob(self) -> str | None:
        """Return file contents, or None if the file does not exist.

        Raises:
            CorruptStateError: If the file is not valid UTF-8.
            PersistenceReadError: If the file exists but cannot be read.
        """
        if not self._path.exists():
            return None
        try:
            return self._path.read_text(encoding="utf-8")
        except UnicodeDecodeError as ex:
            logger.error("{} is not valid UTF-8: {}", self._path, ex)
            raise CorruptStateError(f"not valid UTF-8 text: {ex}") from ex
        except OSError as ex:
            logger.error("Reading {} failed: {}", self._path, ex)
            raise PersistenceReadError(f"Cannot read {self._path}: {ex}") from ex

    def save_blob(self, blob: str) -> None:
        """Atomically replace the file with `blob`."""
        tmp_name: str | None = None
        try:
            self._path.parent.mkdir(parents=True, exist_ok=True)
            fd, tmp_name = tempfile.mkstemp(
                prefix=f".{self._path.name}.", suffix=".tmp", dir=str(self._path.parent)
            )
            with os.fdopen(fd, "w", encoding="utf-8", newline="") as f:
                f.write(blob)
                f.flush()
                os.fsync(f.fileno())
            os.replace(tmp_name, self._path)
            tmp_name = None
        except OSError as ex:
            logger.error("Writing {} failed: {}", self._path, ex)
            raise PersistenceWriteError(f"Cannot write {self._path}: {ex}") from ex
        finally:
            if tmp_name is not None:
                try:
                    os.unlink(tmp_name)
                except OSError:
                    pass

    def quarantine(self) -> Path | None:
        """Rename the current file aside so a fresh one can be started.

        Returns the new location, or None when there was nothing to move.
        """
        if not self._path.exists():
            return None
        stamp = datetime.now().strftime("%Y%m%d-%H%M%S")
        target = self._path.with_name(f"{self._path.stem}.corrupt-{stamp}{self._path.suffix}")
        try:
            os.replace(self._path, target)
        except OSError as ex:
            raise PersistenceWriteError(f"Cannot move {self._path} aside: {ex}") from ex
        logger.warning("Moved unreadable calendar data to {}", target)
        return target


class MemoryBlobAdapter(IPersistenceAdapter):
    """In-process blob storage; every saved blob is kept in `history`."""

    def __init__(self, blob: str | None = None) -> None:
        self.blob = blob
        self.history: list[str] = []
        self.fail_writes = False

    def load_blob(self) -> str | None:
        return self.blob

    def save_blob(self, blob: str) -> None:
        if self.fail_writes:
            raise PersistenceWriteError("Simulated write failure")
        self.blob = blob
        self.history.append(blob)
