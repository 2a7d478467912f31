from __future__ import annotations

import contextlib
import json
import logging
import os
import tempfile
from abc import ABC, abstractmethod
from pathlib import Path
from threading import RLock
from typing import Any, Optional

from .errors import StorageError
from .models import Document
from .settings import Settings, get_settings

logger = logging.getLogger(__name__)


def serialize_document(doc: Document) -> str:
    """Pretty-printed JSON text of a document, as written to disk."""
    return json.dumps(doc.to_storage(), indent=2, ensure_ascii=False)


def parse_document(raw: Optional[str]) -> Document:
    """
    Parse document text, degrading to an empty document.

    Missing text, invalid JSON and a non-object root yield ``Document()``.
    Records that do not fit the schema are carried as raw JSON, see
    ``Document.from_storage``.
    """
    if raw is None or not raw.strip():
        return Document()
    try:
        data: Any = json.loads(raw)
    except ValueError as exc:
        logger.warning("Document is not valid JSON, using an empty document: %s", exc)
        return Document()
    if not isinstance(data, dict):
        if data is not None:
            logger.warning("Document root is %s, not an object; using an empty document", type(data).__name__)
        return Document()
    return Document.from_storage(data)


# PUBLIC_INTERFACE
class DocumentStore(ABC):
    """Abstract contract for where the single JSON document lives."""

    @abstractmethod
    def read_text(self) -> Optional[str]:
        """
        Return the raw stored text, or None if nothing has been stored yet.

        Raises:
            StorageError if stored text exists but cannot be read.
        """

    @abstractmethod
    def write_text(self, text: str) -> None:
        """
        Replace the stored text in one step.

        Raises:
            StorageError if the write fails; the previous contents stay intact.
        """

    def load(self) -> Document:
        """Read the document. Never raises; unreadable content loads as empty."""
        try:
            raw = self.read_text()
        except StorageError as exc:
            logger.warning("Could not read document, using an empty document: %s", exc)
            return Document()
        return parse_document(raw)

    def save(self, doc: Document) -> None:
        """Persist the full document, overwriting prior contents."""
        self.write_text(serialize_document(doc))


class JsonFileStore(DocumentStore):
    """
    Document store backed by one JSON file.

    Writes go to a temporary file in the same directory which is then renamed
    over the target, so readers see either the old or the new file.
    """

    def __init__(self, path: os.PathLike | str) -> None:
        self._path = Path(path)

    @property
    def path(self) -> Path:
        return self._path

    def read_text(self) -> Optional[str]:
        if not self._path.exists():
            return None
        try:
            return self._path.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as exc:
            raise StorageError(f"cannot read {self._path}: {exc}") from exc

    def write_text(self, text: str) -> None:
        directory = self._path.parent
        tmp_name: Optional[str] = None
        try:
            directory.mkdir(parents=True, exist_ok=True)
            fd, tmp_name = tempfile.mkstemp(prefix=f".{self._path.name}.", suffix=".tmp", dir=str(directory))
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                f.write(text)
                f.flush()
                os.fsync(f.fileno())
            os.replace(tmp_name, self._path)
        except OSError as exc:
            if tmp_name is not None:
                with contextlib.suppress(OSError):
                    os.unlink(tmp_name)
            logger.error("Failed to write %s: %s", self._path, exc)
            raise StorageError(f"cannot write {self._path}: {exc}") from exc
        logger.debug("Wrote %d bytes to %s", len(text), self._path)


class InMemoryDocumentStore(DocumentStore):
    """
    Thread-safe in-memory store suitable for testing.
    """

    def __init__(self, text: Optional[str] = None) -> None:
        self._lock = RLock()
        self._text = text
        self.writes = 0

    def read_text(self) -> Optional[str]:
        with self._lock:
            return self._text

    def write_text(self, text: str) -> None:
        with self._lock:
            self._text = text
            self.writes += 1


# PUBLIC_INTERFACE
def get_store(settings: Optional[Settings] = None) -> DocumentStore:
    """Factory returning the file store at the configured data path."""
    settings = settings or get_settings()
    return JsonFileStore(settings.data_file)
