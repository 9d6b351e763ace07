"""Implementation of SharedStore living in the memory of a single process"""

import logging
from collections import defaultdict
from copy import deepcopy
from typing import Optional

from src.core.exceptions import StoreUnavailableError
from src.store.shared_store import Document, Listener, merge_fields

logger = logging.getLogger(__name__)


class InMemoryStore:
    """
    Documents kept in a dictionary.
    ----

    Both players of a hot-seat game (or a test) can share one instance.
    With auto_deliver=False notifications are held back until flush(). Only the latest state of every path is delivered then,
    the same way a remote store may skip intermediate states when writes follow each other closely.
    """

    def __init__(self, auto_deliver: bool = True) -> None:
        self._documents: dict[str, Document] = {}
        self._listeners: dict[str, list[Listener]] = defaultdict(list)
        self._pending: set[str] = set()
        self.auto_deliver = auto_deliver
        self.available = True

    def write(self, path: str, value: Document) -> None:
        self._ensure_available()
        self._documents[path] = deepcopy(value)
        self._changed(path)

    def patch(self, path: str, fields: Document) -> None:
        self._ensure_available()
        self._documents[path] = merge_fields(self._documents.get(path), fields)
        self._changed(path)

    def read(self, path: str) -> Optional[Document]:
        self._ensure_available()
        return deepcopy(self._documents.get(path))

    def subscribe(self, path: str, listener: Listener) -> None:
        self._ensure_available()
        self._listeners[path].append(listener)
        # a new subscriber always receives the current state first
        listener(deepcopy(self._documents.get(path)))

    def unsubscribe(self, path: str, listener: Listener) -> None:
        listeners = self._listeners.get(path, [])
        if listener in listeners:
            listeners.remove(listener)

    def flush(self) -> None:
        """Deliver held back notifications (latest state per path)."""
        pending, self._pending = self._pending, set()
        for path in sorted(pending):
            self._notify(path)

    def clear(self) -> None:
        """Clear the store (useful in between tests)"""
        self._documents.clear()
        self._listeners.clear()
        self._pending.clear()

    def _changed(self, path: str) -> None:
        if self.auto_deliver:
            self._notify(path)
        else:
            self._pending.add(path)

    def _notify(self, path: str) -> None:
        # copy: a listener may (un)subscribe while being notified
        for listener in list(self._listeners.get(path, [])):
            listener(deepcopy(self._documents.get(path)))

    def _ensure_available(self) -> None:
        if not self.available:
            logger.warning("In-memory store is offline")
            raise StoreUnavailableError("Store is offline.")
