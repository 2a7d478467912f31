from __future__ import annotations

import logging
from contextlib import contextmanager
from threading import RLock
from typing import Iterator, Optional

from .events import ChangeNotifier
from .models import Document
from .store import DocumentStore

logger = logging.getLogger(__name__)


# PUBLIC_INTERFACE
class DocumentService:
    """
    Access point for the document, injected into every request handler.

    Reads load a fresh copy. Writes go through ``transaction()``, which runs
    load -> modify -> save under one coarse lock so overlapping requests cannot
    overwrite each other's changes, then emits ``data-changed`` once the save
    has succeeded.
    """

    def __init__(self, store: DocumentStore, notifier: Optional[ChangeNotifier] = None) -> None:
        self._store = store
        self._notifier = notifier or ChangeNotifier()
        self._lock = RLock()

    @property
    def store(self) -> DocumentStore:
        return self._store

    @property
    def notifier(self) -> ChangeNotifier:
        return self._notifier

    @property
    def lock(self) -> RLock:
        return self._lock

    def read(self) -> Document:
        return self._store.load()

    @contextmanager
    def transaction(self) -> Iterator[Document]:
        """
        Yield a freshly loaded document for in-place modification.

        If the block raises, nothing is saved and no event fires. A save
        failure propagates as StorageError, also without an event.
        """
        with self._lock:
            doc = self._store.load()
            yield doc
            self._store.save(doc)
        self._notifier.emit()
