from __future__ import annotations

import logging
from threading import Lock
from typing import Callable, List

logger = logging.getLogger(__name__)

DATA_CHANGED = "data-changed"

Listener = Callable[[], None]


class ChangeNotifier:
    """
    Fan-out of the payload-less ``data-changed`` event to subscribers
    (the desktop shell reloads its view when it fires).
    """

    def __init__(self) -> None:
        self._lock = Lock()
        self._listeners: List[Listener] = []
        self.emitted = 0

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        """Register a listener. Returns a callable that unsubscribes it."""
        with self._lock:
            self._listeners.append(listener)

        def _unsubscribe() -> None:
            with self._lock:
                if listener in self._listeners:
                    self._listeners.remove(listener)

        return _unsubscribe

    def emit(self) -> None:
        with self._lock:
            listeners = list(self._listeners)
            self.emitted += 1
        logger.debug("Emitting %s to %d listener(s)", DATA_CHANGED, len(listeners))
        for listener in listeners:
            # The document is already saved; a broken listener must not fail the request.
            try:
                listener()
            except Exception:
                logger.exception("%s listener %r failed", DATA_CHANGED, listener)
