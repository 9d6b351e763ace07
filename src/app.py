"""Entrypoint for a presentation layer: wire configuration, logging, store and coordinator together."""

from typing import Optional

from src.core.config import Settings, configure_logging
from src.services.session_service import SessionCoordinator
from src.store.database import build_store
from src.store.shared_store import SharedStore


def build_coordinator(
    settings: Optional[Settings] = None, store: Optional[SharedStore] = None
) -> SessionCoordinator:
    """Pass a store to share one between coordinators (ex. two players on the same machine)."""
    settings = settings or Settings.from_env()
    configure_logging(settings.log_level)
    if store is None:
        store = build_store(settings)
    return SessionCoordinator(store, settings=settings)
