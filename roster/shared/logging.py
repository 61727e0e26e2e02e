"""
Logging configuration for the application.

Sets up structured logging with a consistent format, on stdout, for the
application, uvicorn and SQLAlchemy alike. SQL statement logging is a
logger level, not an engine flag, so statements share the same handler
and format as everything else.

Logging must not change program behavior.
Never logs sensitive data (request bodies, passwords, bound SQL parameters).
"""

import logging
import sys

LOG_FORMAT = "%(asctime)s | %(levelname)-8s | %(name)s | %(message)s"
LOG_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

SQL_LOGGER = "sqlalchemy.engine"

# Per-request chatter that would drown the membership logs.
_QUIET_LOGGERS = ("uvicorn.access", "sqlalchemy.pool")


def configure_logging(level: str = "INFO", sql_echo: bool = False) -> None:
    """Configure structured logging for the application.

    Args:
        level: The log level string (DEBUG, INFO, WARNING, ERROR).
        sql_echo: Log every SQL statement at INFO. Bound parameters stay
            hidden (see build_engine).
    """
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format=LOG_FORMAT,
        datefmt=LOG_DATE_FORMAT,
        stream=sys.stdout,
        force=True,
    )

    for name in _QUIET_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)
    logging.getLogger(SQL_LOGGER).setLevel(logging.INFO if sql_echo else logging.WARNING)
