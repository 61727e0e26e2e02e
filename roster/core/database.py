"""
Database handle.

Wraps the SQLAlchemy engine (and its connection pool) in an object
that is built once at startup, handed to repositories per request,
and disposed at shutdown. Nothing here is a module-level singleton.
"""

import logging

from sqlalchemy import create_engine, event
from sqlalchemy.engine import Engine
from sqlalchemy.pool import StaticPool

from roster.core.config import Settings

logger = logging.getLogger(__name__)


def _enable_sqlite_foreign_keys(dbapi_connection, _connection_record) -> None:
    cursor = dbapi_connection.cursor()
    cursor.execute("PRAGMA foreign_keys = ON")
    cursor.close()


def build_engine(
    dsn: str,
    pool_size: int = 5,
    max_overflow: int = 10,
) -> Engine:
    """Build a SQLAlchemy engine for the given DSN.

    In-memory SQLite gets a StaticPool so every checkout sees the same
    database. SQLite connections enforce foreign keys. Bound parameters
    (emails, password hashes) are kept out of logs and error messages.
    SQL statement logging is switched on through configure_logging.
    """
    if dsn.startswith("sqlite"):
        kwargs = {
            "connect_args": {"check_same_thread": False},
            "hide_parameters": True,
        }
        if dsn in ("sqlite://", "sqlite:///:memory:"):
            kwargs["poolclass"] = StaticPool
        engine = create_engine(dsn, **kwargs)
        event.listen(engine, "connect", _enable_sqlite_foreign_keys)
        return engine

    return create_engine(
        dsn,
        pool_pre_ping=True,
        pool_size=pool_size,
        max_overflow=max_overflow,
        hide_parameters=True,
    )


class Database:
    """Owner of the connection pool shared by all requests.

    Args:
        engine: A ready SQLAlchemy engine.
    """

    def __init__(self, engine: Engine) -> None:
        self._engine = engine

    @classmethod
    def from_settings(cls, settings: Settings) -> "Database":
        """Build the database handle from application settings."""
        return cls(
            build_engine(
                settings.get_database_dsn(),
                pool_size=settings.db_pool_size,
                max_overflow=settings.db_max_overflow,
            )
        )

    @property
    def engine(self) -> Engine:
        return self._engine

    def create_schema(self) -> None:
        """Create every membership table that does not exist yet."""
        from roster.infrastructure.membership.tables import metadata

        metadata.create_all(self._engine)
        logger.info("Database schema ensured on %s", self._engine.url.get_backend_name())

    def dispose(self) -> None:
        """Close every pooled connection."""
        self._engine.dispose()
        logger.info("Database connection pool disposed.")
