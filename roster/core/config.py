"""
Application configuration.

Loads settings from environment variables and .env file.
All configuration is centralized here. No scattered magic strings.
"""

from typing import Optional

from pydantic_settings import BaseSettings, SettingsConfigDict

POSTGRES_SCHEME = "postgresql://"
PSYCOPG2_SCHEME = "postgresql+psycopg2://"


class Settings(BaseSettings):
    """Application settings loaded from environment.

    Attributes:
        project_name: Display name for the API.
        version: Current API version string.
        debug: Enable debug mode. Must be False in production.
        log_level: Logging level (DEBUG, INFO, WARNING, ERROR).
        host: Interface the server binds to.
        port: Port the server listens on.
        rate_limit_enabled: Turn request rate limiting on or off.
        rate_limit_default: Default rate limit for all endpoints.
        database_url: Explicit SQLAlchemy DSN. Overrides the postgres_* values.
        db_pool_size: Number of pooled connections kept open.
        db_max_overflow: Extra connections allowed above db_pool_size.
        db_echo: Log every SQL statement (development only).
        create_schema_on_startup: Create missing tables when the app starts.
        password_hash_rounds: PBKDF2 iterations used to hash auth user passwords.
    """

    model_config = SettingsConfigDict(
        env_prefix="ROSTER_", env_file=".env", env_file_encoding="utf-8"
    )

    project_name: str = "Roster"
    version: str = "0.1.0"
    debug: bool = False
    log_level: str = "INFO"
    host: str = "127.0.0.1"
    port: int = 8000
    rate_limit_enabled: bool = True
    rate_limit_default: str = "60/minute"

    database_url: Optional[str] = None
    postgres_user: str = "postgres"
    postgres_password: str = "postgres"
    postgres_host: str = "localhost"
    postgres_port: int = 5432
    postgres_db: str = "roster"
    db_pool_size: int = 5
    db_max_overflow: int = 10
    db_echo: bool = False
    create_schema_on_startup: bool = True
    password_hash_rounds: int = 600_000

    def get_database_dsn(self) -> str:
        """Return the effective database DSN.

        Priority:
        1. Explicit `ROSTER_DATABASE_URL`.
        2. DSN built from the postgres_* values (Docker Compose or local setups).

        A bare `postgresql://` scheme is pinned to the psycopg2 driver, which
        is the one installed with the package.
        """
        if self.database_url:
            if self.database_url.startswith(POSTGRES_SCHEME):
                return PSYCOPG2_SCHEME + self.database_url[len(POSTGRES_SCHEME):]
            return self.database_url
        return (
            f"{PSYCOPG2_SCHEME}{self.postgres_user}:{self.postgres_password}@"
            f"{self.postgres_host}:{self.postgres_port}/{self.postgres_db}"
        )


settings = Settings()
