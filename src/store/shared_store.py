"""Protocol of the remote shared-document store (can be backed by SQLAlchemy / an in-process dict / a realtime database SDK etc.)"""

from collections.abc import Callable
from copy import deepcopy
from typing import Any, Optional, Protocol

Document = dict[str, Any]
Listener = Callable[[Optional[Document]], None]


class SharedStore(Protocol):
    """
    Documents addressed by slash separated paths, ex. "games/AB12CD".

    Writes are independent operations, there is no transaction or compare-and-set across them.
    Operations raise StoreUnavailableError on connectivity failure.
    """

    def write(self, path: str, value: Document) -> None:
        """Replace the document at path."""
        ...

    def patch(self, path: str, fields: Document) -> None:
        """Merge the named fields into the document, leaving untouched fields alone. Keys may address nested fields: "players/white"."""
        ...

    def read(self, path: str) -> Optional[Document]:
        """Current document, or None if nothing is stored at path."""
        ...

    def subscribe(self, path: str, listener: Listener) -> None:
        """Call listener with the latest full document whenever it changes (at least once, not necessarily for every write)."""
        ...

    def unsubscribe(self, path: str, listener: Listener) -> None:
        """Stop calling the listener."""
        ...


def merge_fields(document: Optional[Document], fields: Document) -> Document:
    """Patch semantics shared by the store implementations. Returns a new document."""
    merged = deepcopy(document) if document else {}
    for key, value in fields.items():
        *parents, leaf = key.split("/")
        target = merged
        for parent in parents:
            child = target.get(parent)
            if not isinstance(child, dict):
                child = {}
                target[parent] = child
            target = child
        target[leaf] = deepcopy(value)
    return merged
