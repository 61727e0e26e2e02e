"""
Shared fixtures.

Every test that touches the database gets a fresh in-memory SQLite
database with the membership schema, and API tests get a TestClient
bound to an application built around that database.
"""

import pytest
from fastapi.testclient import TestClient

from roster.core.config import Settings
from roster.core.database import Database, build_engine
from roster.main import create_app

FAST_HASH_ROUNDS = 1_000


@pytest.fixture
def test_settings() -> Settings:
    """Settings for tests: in-memory database, no rate limit, cheap hashing."""
    return Settings(
        database_url="sqlite://",
        rate_limit_enabled=False,
        password_hash_rounds=FAST_HASH_ROUNDS,
        log_level="WARNING",
    )


@pytest.fixture
def database() -> Database:
    db = Database(build_engine("sqlite://"))
    db.create_schema()
    yield db
    db.dispose()


@pytest.fixture
def client(test_settings: Settings, database: Database) -> TestClient:
    app = create_app(app_settings=test_settings, database=database)
    return TestClient(app)
