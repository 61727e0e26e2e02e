"""
Error taxonomy translator.

Turns any membership failure into a non-empty list of stable error
codes and picks the HTTP response class it belongs to. Pure mapping,
no side effects. Codes are machine-readable and never carry driver
messages; those are logged by the caller instead.
"""

from dataclasses import dataclass
from enum import Enum

from roster.domain.membership.errors import (
    DeletedDuplicationError,
    DuplicationError,
    EntityNotFoundError,
    FieldViolation,
    InputValidationError,
    InvalidPaginationError,
    MembershipDomainError,
    PersistenceError,
    PersistenceErrorKind,
    ReasonError,
    UncompensatedDeletionError,
)

OBJECT_NOT_FOUND = "object-not-found"
DUPLICATION_ERROR = "duplication-error"
DELETED_DUPLICATION_ERROR = "deleted-duplication-error"
PAGINATION_ERROR = "pagination-error"
COMPENSATION_FAILED = "compensation-failed"
INTERNAL_SERVER_ERROR = "internal-server-error"

PERSISTENCE_ERROR_CODES: dict[PersistenceErrorKind, str] = {
    PersistenceErrorKind.DATABASE: "database-error",
    PersistenceErrorKind.NOT_FOUND: OBJECT_NOT_FOUND,
    PersistenceErrorKind.SERIALIZATION: "serialization-error",
    PersistenceErrorKind.DESERIALIZATION: "deserialization-error",
    PersistenceErrorKind.QUERY_BUILDER: "query-builder-error",
    PersistenceErrorKind.ROLLBACK_TRANSACTION: "rollback-transaction",
    PersistenceErrorKind.ALREADY_IN_TRANSACTION: "already-in-transaction",
    PersistenceErrorKind.INVALID_STRING: "invalid-string",
    PersistenceErrorKind.OTHER: "unexpected-database-error",
}

_unmapped = set(PersistenceErrorKind) - set(PERSISTENCE_ERROR_CODES)
if _unmapped:
    raise RuntimeError(f"Persistence error kinds without a code: {_unmapped}")


class ResponseClass(Enum):
    """HTTP-facing class of a failed response, valued by status code."""

    BAD_REQUEST = 400
    NOT_FOUND = 404
    INTERNAL_SERVER_ERROR = 500


@dataclass(frozen=True)
class ErrorCode:
    """One discrete failure reason."""

    code: str

    def to_dict(self) -> dict[str, str]:
        return {"code": self.code}


def codes_for_reason(reason: str) -> list[ErrorCode]:
    return [ErrorCode(reason)]


def codes_for_persistence_error(error: PersistenceError) -> list[ErrorCode]:
    """Return exactly one code naming the persistence failure kind."""
    return [ErrorCode(PERSISTENCE_ERROR_CODES[error.kind])]


def codes_for_violations(violations: list[FieldViolation]) -> list[ErrorCode]:
    """Return one code per violated field rule, in input order."""
    return [ErrorCode(v.code) for v in violations]


def translate(error: MembershipDomainError) -> list[ErrorCode]:
    """Translate a domain error into its ordered list of error codes.

    Args:
        error: Any error raised by the membership context.

    Returns:
        A non-empty list of ErrorCode.
    """
    if isinstance(error, PersistenceError):
        return codes_for_persistence_error(error)
    if isinstance(error, InputValidationError):
        codes = codes_for_violations(error.violations)
        return codes or codes_for_reason(INTERNAL_SERVER_ERROR)
    if isinstance(error, UncompensatedDeletionError):
        return codes_for_reason(COMPENSATION_FAILED) + translate(error.cause)
    if isinstance(error, EntityNotFoundError):
        return codes_for_reason(OBJECT_NOT_FOUND)
    if isinstance(error, DuplicationError):
        return codes_for_reason(DUPLICATION_ERROR)
    if isinstance(error, DeletedDuplicationError):
        return codes_for_reason(DELETED_DUPLICATION_ERROR)
    if isinstance(error, InvalidPaginationError):
        return codes_for_reason(PAGINATION_ERROR)
    if isinstance(error, ReasonError):
        return codes_for_reason(error.reason)
    return codes_for_reason(INTERNAL_SERVER_ERROR)


def classify(error: MembershipDomainError) -> ResponseClass:
    """Pick the response class a domain error is reported with."""
    if isinstance(
        error,
        (
            InputValidationError,
            InvalidPaginationError,
            DuplicationError,
            DeletedDuplicationError,
        ),
    ):
        return ResponseClass.BAD_REQUEST
    if isinstance(error, EntityNotFoundError):
        return ResponseClass.NOT_FOUND
    if isinstance(error, PersistenceError) and error.kind is PersistenceErrorKind.NOT_FOUND:
        return ResponseClass.NOT_FOUND
    return ResponseClass.INTERNAL_SERVER_ERROR


@dataclass(frozen=True)
class ErrorResponse:
    """A classified failure ready to be serialized."""

    response_class: ResponseClass
    codes: list[ErrorCode]

    @property
    def status_code(self) -> int:
        return self.response_class.value

    def body(self) -> list[dict[str, str]]:
        return [c.to_dict() for c in self.codes]


def to_error_response(error: MembershipDomainError) -> ErrorResponse:
    """Translate and classify a domain error in one step."""
    return ErrorResponse(response_class=classify(error), codes=translate(error))
