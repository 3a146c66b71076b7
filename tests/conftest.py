"""Test configuration and fixtures."""

import random
from typing import Generator

import pytest
from sqlalchemy.orm import Session, sessionmaker

from exquisite_corpse.api import app
from exquisite_corpse.db.base import Base, create_db_engine, get_db
from exquisite_corpse.poems.lifecycle import PoemLifecycle

# Shared in-memory SQLite database for all tests
TEST_DATABASE_URL = "sqlite:///:memory:"
test_engine = create_db_engine(TEST_DATABASE_URL)
TestSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=test_engine)


def override_get_db() -> Generator[Session, None, None]:
    """Override the get_db dependency for testing."""
    db = TestSessionLocal()
    try:
        yield db
    finally:
        db.close()


app.dependency_overrides[get_db] = override_get_db


@pytest.fixture(autouse=True)
def setup_database() -> Generator[None, None, None]:
    """Give every test a clean schema."""
    from exquisite_corpse.db import models  # noqa: F401

    Base.metadata.drop_all(bind=test_engine)
    Base.metadata.create_all(bind=test_engine)
    yield
    Base.metadata.drop_all(bind=test_engine)


@pytest.fixture
def db_session() -> Generator[Session, None, None]:
    db = TestSessionLocal()
    try:
        yield db
    finally:
        db.close()


@pytest.fixture
def lifecycle(db_session: Session) -> PoemLifecycle:
    """Lifecycle with a seeded RNG so seed lines and titles are repeatable."""
    return PoemLifecycle(db_session, rng=random.Random(1234))


def fill_poem(lifecycle: PoemLifecycle, poem_id: str, count: int) -> int:
    """Append ``count`` lines in turn and return the resulting version."""
    version = lifecycle.get_poem(poem_id).version
    for i in range(count):
        result = lifecycle.add_line(poem_id, f"verse number {i} drifting home", version)
        version = result.version
    return version
