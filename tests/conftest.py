"""
- Spins up temp test DB
- Create tables before tests run
- Provide a db_session fixture and override FastAPI’s get_db so routes use the test session.
- Provide a client fixture (TestClient(app)) that already has the DB override applied.
"""
import os
import pytest
from typing import Generator

from fastapi.testclient import TestClient
from sqlalchemy import create_engine, text
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

# Ensure the app does NOT run dev-only startup hooks (e.g., auto-create tables against a real DB)
os.environ.setdefault("APP_ENV", "test")
# Never reach out to random.org from tests
os.environ.setdefault("MASTERMIND_RANDOM_SOURCE", "local")

from mastermind.db import Base, get_db
from mastermind.main import app
from mastermind import models  # noqa: F401  (registers tables)

# Use SQLite in-memory for tests (fast, isolated)
TEST_DATABASE_URL = "sqlite+pysqlite:///:memory:"

@pytest.fixture(scope="session")
def engine():
    # StaticPool + check_same_thread=False lets Starlette's TestClient and SQLAlchemy
    # share ONE in-memory SQLite database across threads. Otherwise each thread would
    # see a different empty DB.
    engine = create_engine(
        TEST_DATABASE_URL,
        future=True,
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(bind=engine)
    yield engine
    Base.metadata.drop_all(bind=engine)

@pytest.fixture
def db_session(engine) -> Generator:
    """Provide a clean session per test with rollback."""
    TestingSessionLocal = sessionmaker(bind=engine, autoflush=False, autocommit=False, future=True)
    db = TestingSessionLocal()
    try:
        yield db
        # Roll back uncommitted changes in this session
        db.rollback()
    finally:
        db.close()

@pytest.fixture(autouse=True)
def _clean_db(engine):
    """
    Keep tests independent:
    The repository commits inside requests, so data would leak between tests.
    We delete rows before each test to ensure a clean slate.
    """
    with engine.begin() as conn:
        conn.execute(text("DELETE FROM snapshots"))
    yield

@pytest.fixture(autouse=True)
def override_dep(db_session):
    """Force the app to use our test session for every request."""
    def _get_db_for_tests():
        try:
            yield db_session
        finally:
            pass

    app.dependency_overrides[get_db] = _get_db_for_tests
    yield
    app.dependency_overrides.clear()

@pytest.fixture
def client():
    # This client talks to the FastAPI app in-process. Because we’ve overridden get_db,
    # every request uses our SQLite in-memory session.
    return TestClient(app)

@pytest.fixture
def fixed_secret():
    """Generator that ignores randomness: 0, 1, 2, ... wrapped to the palette."""
    def _generate(length: int, alphabet_size: int):
        return [i % alphabet_size for i in range(length)]
    return _generate
