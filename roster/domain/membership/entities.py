"""
Domain entities for the membership bounded context.

Entities represent core business objects with identity and lifecycle.
Each persisted entity has a "New" counterpart carrying only the
writable fields; the server assigns the identifier at creation.
They contain no framework imports and no IO operations.
"""

from dataclasses import dataclass, field
from datetime import datetime
from typing import Generic, TypeVar
from uuid import UUID

from roster.domain.membership.errors import InvalidPaginationError

T = TypeVar("T")

# Largest value a LIMIT or OFFSET can carry (signed 64-bit).
MAX_PAGE_BOUND = 2**63 - 1


@dataclass(frozen=True)
class User:
    """A registered user of the platform."""

    id: UUID
    email: str
    name: str


@dataclass(frozen=True)
class NewUser:
    """Writable subset of a User, used for creation."""

    email: str
    name: str


@dataclass(frozen=True)
class AuthUser:
    """A user holding login credentials.

    Only the password hash is ever stored. Auth users are the primary
    entities of the cascading "delete all" workflow: members reference
    them through ``Member.user_id``.
    """

    id: UUID
    email: str
    name: str
    password_hash: str = field(repr=False)


@dataclass(frozen=True)
class NewAuthUser:
    """Writable subset of an AuthUser. Carries the plain-text password."""

    email: str
    name: str
    password: str = field(repr=False)


@dataclass(frozen=True)
class Team:
    """A named group of members."""

    id: UUID
    name: str
    description: str


@dataclass(frozen=True)
class NewTeam:
    """Writable subset of a Team, used for creation."""

    name: str
    description: str


@dataclass(frozen=True)
class Member:
    """Assignment of an auth user to a team over a validity window.

    Attributes:
        assigned_at: When the membership started. Set by the server.
        expired_at: When the membership ends. None means open-ended.
        modification_date: Last time the row was written.
    """

    id: UUID
    team_id: UUID
    user_id: UUID
    name: str
    identity_num: str
    role: str
    assigned_at: datetime
    expired_at: datetime | None = None
    modification_date: datetime | None = None

    def is_active(self, at: datetime) -> bool:
        """Return True if the membership has not expired at the given time."""
        return self.expired_at is None or self.expired_at > at


@dataclass(frozen=True)
class NewMember:
    """Writable subset of a Member, used for creation."""

    team_id: UUID
    user_id: UUID
    name: str
    identity_num: str
    role: str
    expired_at: datetime | None = None


@dataclass(frozen=True)
class PageRequest:
    """Bounds of a paginated list request.

    Both values default to zero, so an explicit page_size is needed
    to get a non-empty page.

    Raises:
        InvalidPaginationError: If page_size or offset is negative or
            larger than MAX_PAGE_BOUND.
    """

    page_size: int = 0
    offset: int = 0

    def __post_init__(self) -> None:
        bounds = (self.page_size, self.offset)
        if any(value < 0 or value > MAX_PAGE_BOUND for value in bounds):
            raise InvalidPaginationError(self.page_size, self.offset)


@dataclass(frozen=True)
class Page(Generic[T]):
    """One bounded page of results plus the total number of matching rows."""

    items: list[T]
    count: int
