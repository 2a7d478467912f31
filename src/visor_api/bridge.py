"""
Entry points for the desktop shell.

The shell owns the window and the UI state; it reads and writes the same
document as the HTTP API through these calls and reloads its view whenever
``data-changed`` fires, whichever side caused the change.
"""
from __future__ import annotations

import json
import logging
from typing import Callable

from .errors import StorageError
from .events import Listener
from .service import DocumentService

logger = logging.getLogger(__name__)

NO_DOCUMENT = "null"


# PUBLIC_INTERFACE
class DesktopBridge:
    def __init__(self, service: DocumentService) -> None:
        self._service = service

    def load_document(self) -> str:
        """
        Return the stored document text verbatim, or ``"null"`` when nothing
        has been saved yet.

        Raises:
            StorageError if the file exists but cannot be read.
        """
        raw = self._service.store.read_text()
        return NO_DOCUMENT if raw is None else raw

    def save_document(self, text: str) -> bool:
        """
        Replace the stored document with ``text`` and notify listeners.

        Returns False without writing when ``text`` is not a JSON object, and
        False when the write fails.
        """
        try:
            data = json.loads(text)
        except ValueError as exc:
            logger.warning("Refusing to save document that is not JSON: %s", exc)
            return False
        if not isinstance(data, dict):
            logger.warning("Refusing to save document whose root is %s", type(data).__name__)
            return False

        try:
            with self._service.lock:
                self._service.store.write_text(text)
        except StorageError as exc:
            logger.error("Desktop save failed: %s", exc)
            return False
        self._service.notifier.emit()
        return True

    def on_data_changed(self, listener: Listener) -> Callable[[], None]:
        """Subscribe to ``data-changed``. Returns an unsubscribe callable."""
        return self._service.notifier.subscribe(listener)
