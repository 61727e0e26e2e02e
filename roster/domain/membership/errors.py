"""
Domain-specific errors for the membership bounded context.

All errors raised from the domain and application layers are defined here.
They are translated into error codes and HTTP responses at the edge
(see roster.shared.errors). No framework imports allowed.
"""

from dataclasses import dataclass
from enum import Enum
from uuid import UUID


class PersistenceErrorKind(Enum):
    """Closed set of failure kinds reported by the persistence layer."""

    DATABASE = "database"
    NOT_FOUND = "not_found"
    SERIALIZATION = "serialization"
    DESERIALIZATION = "deserialization"
    QUERY_BUILDER = "query_builder"
    ROLLBACK_TRANSACTION = "rollback_transaction"
    ALREADY_IN_TRANSACTION = "already_in_transaction"
    INVALID_STRING = "invalid_string"
    OTHER = "other"


@dataclass(frozen=True)
class FieldViolation:
    """A single violated rule on an input field.

    Attributes:
        field: Dotted path of the offending field (e.g. "email", "0.name").
        code: Machine-readable rule code (e.g. "email-format-error").
    """

    field: str
    code: str


class MembershipDomainError(Exception):
    """Base error for all membership domain errors."""

    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(self.message)


class ReasonError(MembershipDomainError):
    """Failure identified only by a stable reason code such as "db-error"."""

    def __init__(self, reason: str) -> None:
        super().__init__(f"Operation failed: {reason}")
        self.reason = reason


class PersistenceError(MembershipDomainError):
    """Raised when the persistence layer fails.

    The driver-level detail is kept for logging only; it never reaches
    clients.
    """

    def __init__(self, kind: PersistenceErrorKind, detail: str = "") -> None:
        super().__init__(f"Persistence failure ({kind.value}): {detail}")
        self.kind = kind
        self.detail = detail


class EntityNotFoundError(MembershipDomainError):
    """Raised when an entity lookup by id matches no row."""

    def __init__(self, entity: str, entity_id: UUID) -> None:
        super().__init__(f"{entity} not found: {entity_id}")
        self.entity = entity
        self.entity_id = entity_id


class DuplicationError(MembershipDomainError):
    """Raised when an insert would duplicate an existing unique key."""

    def __init__(self, entity: str, key: str) -> None:
        super().__init__(f"Duplicate {entity}: {key}")
        self.entity = entity
        self.key = key


class DeletedDuplicationError(MembershipDomainError):
    """Raised when an insert duplicates a key that only exists in expired rows."""

    def __init__(self, entity: str, key: str) -> None:
        super().__init__(f"Duplicate of an expired {entity}: {key}")
        self.entity = entity
        self.key = key


class InvalidPaginationError(MembershipDomainError):
    """Raised when page_size or offset is negative."""

    def __init__(self, page_size: int, offset: int) -> None:
        super().__init__(
            f"Invalid pagination: page_size={page_size}, offset={offset}. "
            "Both must be between zero and 2**63 - 1."
        )
        self.page_size = page_size
        self.offset = offset


class InputValidationError(MembershipDomainError):
    """Raised when submitted fields violate one or more rules."""

    def __init__(self, violations: list[FieldViolation]) -> None:
        fields = ", ".join(v.field for v in violations)
        super().__init__(f"Invalid input fields: {fields}")
        self.violations = violations


class CompensatedDeletionError(ReasonError):
    """Dependent deletion failed and the primary entities were restored.

    The data is consistent: nothing was removed.
    """

    def __init__(self, entity: str, restored: int) -> None:
        super().__init__("db-error")
        self.entity = entity
        self.restored = restored


class UncompensatedDeletionError(MembershipDomainError):
    """Dependent deletion failed and restoring the primary entities failed too.

    The data is inconsistent: the primary entities are gone while their
    dependents remain. Operators must intervene.
    """

    def __init__(self, entity: str, lost: int, cause: MembershipDomainError) -> None:
        super().__init__(
            f"Failed to restore {lost} deleted {entity} rows: {cause.message}"
        )
        self.entity = entity
        self.lost = lost
        self.cause = cause
