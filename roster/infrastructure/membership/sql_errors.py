"""
Mapping from SQLAlchemy exceptions to domain persistence errors.

Repositories wrap every database round trip in `persistence_errors()`
so that no SQLAlchemy exception type leaks past the infrastructure layer.
"""

import logging
from collections.abc import Iterator
from contextlib import contextmanager

from sqlalchemy import exc as sa_exc

from roster.domain.membership.errors import PersistenceError, PersistenceErrorKind

logger = logging.getLogger(__name__)


def classify_sqlalchemy_error(error: Exception) -> PersistenceErrorKind:
    """Return the persistence kind for a SQLAlchemy (or row-mapping) exception.

    Order matters: the SQLAlchemy hierarchy nests DataError under DBAPIError
    under StatementError, and NoResultFound / PendingRollbackError under
    InvalidRequestError.
    """
    if isinstance(error, sa_exc.NoResultFound):
        return PersistenceErrorKind.NOT_FOUND
    if isinstance(error, sa_exc.PendingRollbackError):
        return PersistenceErrorKind.ROLLBACK_TRANSACTION
    if isinstance(error, sa_exc.DataError):
        return PersistenceErrorKind.INVALID_STRING
    if isinstance(error, sa_exc.DBAPIError):
        return PersistenceErrorKind.DATABASE
    if isinstance(error, sa_exc.StatementError):
        return PersistenceErrorKind.SERIALIZATION
    if isinstance(error, (sa_exc.ArgumentError, sa_exc.CompileError)):
        return PersistenceErrorKind.QUERY_BUILDER
    if isinstance(error, sa_exc.InvalidRequestError) and "already" in str(error):
        return PersistenceErrorKind.ALREADY_IN_TRANSACTION
    if isinstance(error, (KeyError, TypeError, ValueError)):
        return PersistenceErrorKind.DESERIALIZATION
    return PersistenceErrorKind.OTHER


def to_persistence_error(error: Exception) -> PersistenceError:
    kind = classify_sqlalchemy_error(error)
    return PersistenceError(kind, detail=f"{type(error).__name__}: {error}")


@contextmanager
def persistence_errors(operation: str) -> Iterator[None]:
    """Convert any SQLAlchemy exception raised inside the block.

    Args:
        operation: Short label used in the log line (e.g. "teams.insert").

    Raises:
        PersistenceError: Carrying the classified kind.
    """
    try:
        yield
    except sa_exc.SQLAlchemyError as error:
        persistence_error = to_persistence_error(error)
        logger.error(
            "Database failure during %s: kind=%s",
            operation,
            persistence_error.kind.value,
            exc_info=True,
        )
        raise persistence_error from error


def map_row(operation: str, mapper, row):
    """Apply a row-to-entity mapper, reporting failures as DESERIALIZATION."""
    try:
        return mapper(row)
    except (KeyError, TypeError, ValueError) as error:
        logger.error("Could not map row during %s", operation, exc_info=True)
        raise PersistenceError(
            PersistenceErrorKind.DESERIALIZATION,
            detail=f"{type(error).__name__}: {error}",
        ) from error
