"""
Pytest will auto-discover / import this file called 'conftest.py'.
This file defines fixtures/variables required for testing multiple layers.
"""

from collections.abc import Iterator

import pytest
from sqlalchemy import StaticPool, create_engine
from sqlalchemy.orm import Session, sessionmaker

from src.store.memory_store import InMemoryStore
from src.store.schema import Base

# Setup an in-memory SQLite database for testing
DATABASE_URL = "sqlite:///:memory:"
engine = create_engine(
    DATABASE_URL,
    connect_args={"check_same_thread": False},
    poolclass=StaticPool,
)

TestingSessionLocal = sessionmaker(autoflush=False, bind=engine)


@pytest.fixture
def db_session_repo() -> Iterator[Session]:
    """Connection to a test database. Tables are removed at teardown to make unit tests of the store independent of each other."""
    Base.metadata.create_all(bind=engine)
    db = TestingSessionLocal()
    try:
        yield db
    finally:
        db.close()
        Base.metadata.drop_all(bind=engine)


@pytest.fixture
def db_session_pair() -> Iterator[tuple[Session, Session]]:
    """Two connections to the same tables. Mock two participants (processes) sharing one database."""
    Base.metadata.create_all(bind=engine)
    first = TestingSessionLocal()
    second = TestingSessionLocal()
    try:
        yield first, second
    finally:
        first.close()
        second.close()
        Base.metadata.drop_all(bind=engine)


@pytest.fixture
def memory_store() -> Iterator[InMemoryStore]:
    """Ensures to clear the store between tests"""
    store = InMemoryStore()
    try:
        yield store
    finally:
        store.clear()
