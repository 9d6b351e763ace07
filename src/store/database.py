"""Generate database sessions / pick the shared store implementation from the configuration"""

import logging
from typing import Optional

from sqlalchemy import Engine, create_engine
from sqlalchemy.orm import Session, sessionmaker

from src.core.config import MEMORY_STORE_URL, Settings
from src.store.memory_store import InMemoryStore
from src.store.schema import Base
from src.store.shared_store import SharedStore
from src.store.sql_store import SQLDocumentStore

logger = logging.getLogger(__name__)


def create_store_engine(database_url: str, echo: bool = False) -> Engine:
    connect_args = (
        {"check_same_thread": False} if database_url.startswith("sqlite") else {}
    )
    engine = create_engine(database_url, echo=echo, connect_args=connect_args)

    # Ensure all tables are created
    Base.metadata.create_all(bind=engine)
    return engine


def open_session(engine: Engine) -> Session:
    SessionLocal = sessionmaker(bind=engine)
    return SessionLocal()


def build_store(settings: Settings) -> Optional[SharedStore]:
    """None when no store is configured (every session operation will then report the store as unavailable)."""
    if settings.store_url is None:
        logger.warning("No shared store configured (REVERSI_STORE_URL is not set)")
        return None

    if settings.store_url == MEMORY_STORE_URL:
        logger.info("Using in-memory shared store")
        return InMemoryStore()

    engine = create_store_engine(settings.store_url, echo=settings.sql_echo)
    logger.info("Using SQL shared store at %s", engine.url.render_as_string(hide_password=True))
    return SQLDocumentStore(open_session(engine))
