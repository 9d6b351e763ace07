"""Implementation of SharedStore using SQLAlchemy"""

import logging
from collections import defaultdict
from collections.abc import Iterator
from contextlib import contextmanager
from copy import deepcopy
from typing import Optional

from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from src.core.exceptions import StoreUnavailableError
from src.store.schema import DBDocument
from src.store.shared_store import Document, Listener, merge_fields

logger = logging.getLogger(__name__)


class SQLDocumentStore:
    """
    Documents stored as JSON rows / methods implemented using SQLAlchemy
    ----

    SQL has no push notifications. Changes made through this instance are delivered right after they are committed,
    changes made by other processes sharing the database are picked up by poll().
    """

    def __init__(self, db_session: Session) -> None:
        self.db = db_session
        self._listeners: dict[str, list[Listener]] = defaultdict(list)
        self._seen_versions: dict[str, int] = {}

    def write(self, path: str, value: Document) -> None:
        with self._transaction():
            document_db = self._fetch_document(path)
            if document_db is None:
                self.db.add(DBDocument(path=path, value=deepcopy(value), version=1))
            else:
                document_db.value = deepcopy(value)
                document_db.version += 1
        self.poll()

    def patch(self, path: str, fields: Document) -> None:
        with self._transaction():
            document_db = self._fetch_document(path)
            if document_db is None:
                self.db.add(
                    DBDocument(path=path, value=merge_fields(None, fields), version=1)
                )
            else:
                # assign a new dict: in-place mutation of a JSON column goes unnoticed by the session
                document_db.value = merge_fields(document_db.value, fields)
                document_db.version += 1
        self.poll()

    def read(self, path: str) -> Optional[Document]:
        value, _ = self._snapshot(path)
        return value

    def subscribe(self, path: str, listener: Listener) -> None:
        value, version = self._snapshot(path)
        self._listeners[path].append(listener)
        self._seen_versions[path] = version
        listener(value)

    def unsubscribe(self, path: str, listener: Listener) -> None:
        listeners = self._listeners.get(path, [])
        if listener in listeners:
            listeners.remove(listener)
        if not listeners:
            self._listeners.pop(path, None)
            self._seen_versions.pop(path, None)

    def poll(self) -> int:
        """Deliver the latest document of every watched path whose version moved on. Returns the number of paths delivered."""
        delivered = 0
        for path in list(self._listeners):
            value, version = self._snapshot(path)
            if version <= self._seen_versions.get(path, 0):
                continue
            self._seen_versions[path] = version
            for listener in list(self._listeners.get(path, [])):
                listener(deepcopy(value))
            delivered += 1
        return delivered

    def _snapshot(self, path: str) -> tuple[Optional[Document], int]:
        """Document and its version (0 if nothing is stored)."""
        with self._transaction():
            document_db = self._fetch_document(path)
            if document_db is None:
                return None, 0
            return deepcopy(document_db.value), document_db.version

    def _fetch_document(self, path: str) -> DBDocument | None:
        # populate_existing: another session (process) may have changed the row since we loaded it
        query = (
            select(DBDocument)
            .where(DBDocument.path == path)
            .execution_options(populate_existing=True)
        )
        return self.db.scalar(query)

    @contextmanager
    def _transaction(self) -> Iterator[None]:
        try:
            yield
            self.db.commit()
        except SQLAlchemyError as exc:
            self.db.rollback()
            logger.warning("Shared store operation failed: %s", exc)
            raise StoreUnavailableError(f"Shared store unavailable: {exc}") from exc
