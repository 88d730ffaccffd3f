# =============================================================================================
# TESTS/CONFTEST.PY - SHARED FIXTURES
# =============================================================================================
# TEST STRATEGY:
# - Use an SQLite in-memory database (fast, isolated, no cleanup needed)
# - StaticPool: every session (test code and request threads) shares one connection,
#   otherwise each thread would see its own empty in-memory database
# - Override FastAPI dependencies (get_db, get_settings) to use the test database and a
#   known signing secret
#
# RUNNING TESTS:
#   pytest -v
# =============================================================================================

import os

from helpers import TEST_SECRET

# Must be set before app modules are imported (Settings requires JWT_SECRET)
os.environ.setdefault("JWT_SECRET", TEST_SECRET)
os.environ.setdefault("DATABASE_URL", "sqlite:///:memory:")

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine, event
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from app.core.config import Settings, get_settings
from app.core.db import Base, get_db, set_sqlite_pragma
from app.main import app  # importing the app registers every model on Base.metadata


# -------------------------
# Test database setup
# -------------------------
@pytest.fixture
def engine():
    """Fresh in-memory database with all tables, dropped after the test."""
    test_engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    # Foreign keys ON so deleting a user cascades to chirps and refresh tokens
    event.listen(test_engine, "connect", set_sqlite_pragma)
    Base.metadata.create_all(bind=test_engine)
    try:
        yield test_engine
    finally:
        Base.metadata.drop_all(bind=test_engine)
        test_engine.dispose()


@pytest.fixture
def session_factory(engine):
    return sessionmaker(autocommit=False, autoflush=False, bind=engine)


@pytest.fixture
def db_session(session_factory):
    session = session_factory()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def settings():
    return Settings(JWT_SECRET=TEST_SECRET, PLATFORM="prod")


# -------------------------
# FastAPI test client with dependency overrides
# -------------------------
@pytest.fixture
def client(session_factory, settings):
    """
    Test client wired to the test database and test settings.

    Tests that need different settings (e.g. PLATFORM=dev) can replace
    app.dependency_overrides[get_settings] themselves.
    """
    def override_get_db():
        session = session_factory()
        try:
            yield session
        finally:
            session.close()

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_settings] = lambda: settings

    yield TestClient(app)

    app.dependency_overrides.clear()

