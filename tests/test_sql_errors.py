"""
Tests for the SQLAlchemy exception mapping.

Every database failure must surface as a PersistenceError carrying
one of the closed set of kinds.
"""

import pytest
from sqlalchemy import exc as sa_exc

from roster.domain.membership.errors import PersistenceError, PersistenceErrorKind
from roster.infrastructure.membership.sql_errors import (
    classify_sqlalchemy_error,
    map_row,
    persistence_errors,
)


def _dbapi(cls: type[sa_exc.DBAPIError]) -> sa_exc.DBAPIError:
    return cls("SELECT 1", {}, Exception("driver message"))


class TestClassifySqlalchemyError:
    """Most specific SQLAlchemy class wins."""

    @pytest.mark.parametrize(
        ("error", "kind"),
        [
            (sa_exc.NoResultFound(), PersistenceErrorKind.NOT_FOUND),
            (sa_exc.PendingRollbackError("rollback first"), PersistenceErrorKind.ROLLBACK_TRANSACTION),
            (_dbapi(sa_exc.DataError), PersistenceErrorKind.INVALID_STRING),
            (_dbapi(sa_exc.IntegrityError), PersistenceErrorKind.DATABASE),
            (_dbapi(sa_exc.OperationalError), PersistenceErrorKind.DATABASE),
            (
                sa_exc.StatementError("bad bind", "SELECT 1", {}, ValueError("x")),
                PersistenceErrorKind.SERIALIZATION,
            ),
            (sa_exc.ArgumentError("bad column"), PersistenceErrorKind.QUERY_BUILDER),
            (sa_exc.CompileError("cannot compile"), PersistenceErrorKind.QUERY_BUILDER),
            (
                sa_exc.InvalidRequestError("a transaction is already begun"),
                PersistenceErrorKind.ALREADY_IN_TRANSACTION,
            ),
            (KeyError("id"), PersistenceErrorKind.DESERIALIZATION),
            (RuntimeError("surprise"), PersistenceErrorKind.OTHER),
        ],
    )
    def test_kind(self, error: Exception, kind: PersistenceErrorKind) -> None:
        assert classify_sqlalchemy_error(error) is kind


class TestPersistenceErrorsContext:
    """The context manager converts and chains SQLAlchemy exceptions."""

    def test_converts_sqlalchemy_error(self) -> None:
        original = _dbapi(sa_exc.OperationalError)
        with pytest.raises(PersistenceError) as exc_info:
            with persistence_errors("teams.count"):
                raise original
        assert exc_info.value.kind is PersistenceErrorKind.DATABASE
        assert exc_info.value.__cause__ is original

    def test_leaves_other_errors_alone(self) -> None:
        with pytest.raises(LookupError):
            with persistence_errors("teams.count"):
                raise LookupError("not a database error")

    def test_no_error_passes_through(self) -> None:
        with persistence_errors("teams.count"):
            value = 1
        assert value == 1


class TestMapRow:
    """Row mapping failures are deserialization errors."""

    def test_mapping_failure(self) -> None:
        with pytest.raises(PersistenceError) as exc_info:
            map_row("teams.get_by_id", lambda row: row["missing"], {})
        assert exc_info.value.kind is PersistenceErrorKind.DESERIALIZATION

    def test_mapping_success(self) -> None:
        assert map_row("teams.get_by_id", lambda row: row["id"], {"id": 7}) == 7
