"""
Basic application tests.

Validates that the FastAPI app starts correctly, the health endpoint
responds as expected, and the cross-cutting middleware (security
headers, rate limiting) is wired in. Also covers the database DSN.
"""

import logging

import pytest
from fastapi.testclient import TestClient

from roster.core.config import Settings
from roster.core.database import Database
from roster.main import create_app
from roster.shared.logging import SQL_LOGGER, configure_logging


class TestHealthEndpoint:
    """Tests for the health check endpoint."""

    def test_health_returns_200(self, client: TestClient) -> None:
        """Health endpoint must return HTTP 200 with status ok."""
        response = client.get("/api/v1/health")
        assert response.status_code == 200

    def test_health_response_body(self, client: TestClient) -> None:
        """Health endpoint must return status, version and database fields."""
        body = client.get("/api/v1/health").json()
        assert body["status"] == "ok"
        assert body["version"] == "0.1.0"
        assert body["database"] == "ok"


class TestSecurityHeaders:
    """Every response carries the secure headers."""

    def test_headers_on_success(self, client: TestClient) -> None:
        response = client.get("/api/v1/health")
        assert response.headers["X-Content-Type-Options"] == "nosniff"
        assert response.headers["X-Frame-Options"] == "DENY"
        assert response.headers["Referrer-Policy"] == "no-referrer"
        assert response.headers["Cache-Control"] == "no-store"
        assert "default-src 'none'" in response.headers["Content-Security-Policy"]

    def test_headers_on_error(self, client: TestClient) -> None:
        response = client.get("/api/v1/teams?page_size=-1")
        assert response.status_code == 400
        assert response.headers["X-Content-Type-Options"] == "nosniff"


class TestRateLimiting:
    """Default limit applied to every route by an app-wide dependency."""

    @staticmethod
    def _limited_client(database: Database) -> TestClient:
        limited = Settings(
            database_url="sqlite://",
            rate_limit_enabled=True,
            rate_limit_default="2/minute",
            log_level="WARNING",
        )
        return TestClient(create_app(app_settings=limited, database=database))

    def test_limit_exceeded_returns_error_code(self, database: Database) -> None:
        client = self._limited_client(database)

        statuses = [client.get("/api/v1/health").status_code for _ in range(3)]

        assert statuses[:2] == [200, 200]
        assert statuses[2] == 429
        assert client.get("/api/v1/health").json() == [{"code": "rate-limit-exceeded"}]

    def test_limit_covers_membership_routes(self, database: Database) -> None:
        client = self._limited_client(database)

        statuses = [client.get("/api/v1/teams").status_code for _ in range(3)]

        assert statuses == [200, 200, 429]

    def test_limit_is_shared_across_routes(self, database: Database) -> None:
        client = self._limited_client(database)

        client.get("/api/v1/health")
        client.get("/api/v1/users")

        assert client.get("/api/v1/auth-users").status_code == 429

    def test_disabled_limiter_never_blocks(self, client: TestClient) -> None:
        statuses = {client.get("/api/v1/health").status_code for _ in range(80)}
        assert statuses == {200}


class TestDatabaseDsn:
    """PostgreSQL DSNs always name the installed psycopg2 driver."""

    def test_dsn_built_from_postgres_values(self) -> None:
        settings = Settings(
            database_url=None,
            postgres_user="app",
            postgres_password="secret",
            postgres_host="db",
            postgres_port=5433,
            postgres_db="roster",
        )
        assert settings.get_database_dsn() == "postgresql+psycopg2://app:secret@db:5433/roster"

    def test_bare_postgresql_url_is_pinned_to_psycopg2(self) -> None:
        settings = Settings(database_url="postgresql://u:p@localhost:5432/roster")
        assert settings.get_database_dsn() == "postgresql+psycopg2://u:p@localhost:5432/roster"

    @pytest.mark.parametrize(
        "url",
        ["sqlite://", "postgresql+psycopg2://u:p@h/db", "postgresql+asyncpg://u:p@h/db"],
    )
    def test_explicit_driver_is_kept(self, url: str) -> None:
        assert Settings(database_url=url).get_database_dsn() == url


class TestLoggingConfiguration:
    """SQL statement logging follows the settings flag."""

    def test_sql_logging_off_by_default(self) -> None:
        configure_logging("WARNING")
        assert logging.getLogger(SQL_LOGGER).level == logging.WARNING

    def test_sql_echo_turns_statement_logging_on(self) -> None:
        configure_logging("WARNING", sql_echo=True)
        assert logging.getLogger(SQL_LOGGER).level == logging.INFO
        configure_logging("WARNING")
