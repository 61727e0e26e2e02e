"""
Pydantic schemas for membership API request/response validation.

These schemas enforce input validation and define the API contract.
Rule violations surface as error codes: the pydantic error type of
each failed rule becomes the code (e.g. "missing", "uuid_parsing"),
and custom rules raise their own stable code ("email-format-error").
No business logic belongs here.
"""

from datetime import datetime
from typing import Annotated, Generic, TypeVar
from uuid import UUID

from email_validator import EmailNotValidError, validate_email
from pydantic import AfterValidator, BaseModel, ConfigDict, Field
from pydantic_core import PydanticCustomError

from roster.domain.membership.entities import NewAuthUser, NewMember, NewTeam, NewUser

T = TypeVar("T")

NAME_MAX_LEN = 200
PASSWORD_MIN_LEN = 8


def _check_email_format(value: str) -> str:
    try:
        validate_email(value, check_deliverability=False)
    except EmailNotValidError as exc:
        raise PydanticCustomError("email-format-error", "Invalid email format") from exc
    return value


Email = Annotated[str, AfterValidator(_check_email_format)]
Name = Annotated[str, Field(min_length=1, max_length=NAME_MAX_LEN)]


# ── Envelopes ─────────────────────────────────────────────────────────


class ErrorCodeSchema(BaseModel):
    """One machine-readable failure reason."""

    code: str


class SuccessResponse(BaseModel, Generic[T]):
    """Uniform wrapper for every successful operation."""

    message: str
    data: T


class PaginatedResponse(BaseModel, Generic[T]):
    """One page of items plus the total number of matching rows."""

    items: list[T]
    count: int


# ── Users ─────────────────────────────────────────────────────────────


class UserSchema(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: UUID
    email: str
    name: str


class NewUserRequest(BaseModel):
    """Request schema for creating a user.

    Attributes:
        email: Must be a well-formed address ("email-format-error" otherwise).
        name: Display name (1-200 chars).
    """

    email: Email
    name: Name

    def to_domain(self) -> NewUser:
        return NewUser(email=self.email, name=self.name)


# ── Auth users ────────────────────────────────────────────────────────


class AuthUserSchema(BaseModel):
    """Public view of an auth user. The password hash is never exposed."""

    model_config = ConfigDict(from_attributes=True)

    id: UUID
    email: str
    name: str


class NewAuthUserRequest(BaseModel):
    """Request schema for creating an auth user."""

    email: Email
    name: Name
    password: str = Field(..., min_length=PASSWORD_MIN_LEN, repr=False)

    def to_domain(self) -> NewAuthUser:
        return NewAuthUser(email=self.email, name=self.name, password=self.password)


# ── Teams ─────────────────────────────────────────────────────────────


class TeamSchema(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: UUID
    name: str
    description: str


class NewTeamRequest(BaseModel):
    name: Name
    description: str = Field(..., max_length=2000)

    def to_domain(self) -> NewTeam:
        return NewTeam(name=self.name, description=self.description)


# ── Members ───────────────────────────────────────────────────────────


class MemberSchema(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: UUID
    team_id: UUID
    user_id: UUID
    name: str
    identity_num: str
    role: str
    assigned_at: datetime
    expired_at: datetime | None = None
    modification_date: datetime | None = None


class NewMemberRequest(BaseModel):
    """Request schema for assigning an auth user to a team.

    Attributes:
        team_id: Existing team id.
        user_id: Auth user id.
        expired_at: Optional end of the membership. Naive values are UTC.
    """

    team_id: UUID
    user_id: UUID
    name: Name
    identity_num: str = Field(..., min_length=1, max_length=64)
    role: str = Field(..., min_length=1, max_length=64)
    expired_at: datetime | None = None

    def to_domain(self) -> NewMember:
        return NewMember(
            team_id=self.team_id,
            user_id=self.user_id,
            name=self.name,
            identity_num=self.identity_num,
            role=self.role,
            expired_at=self.expired_at,
        )


ERROR_RESPONSES = {
    400: {"model": list[ErrorCodeSchema], "description": "Bad request"},
    404: {"model": list[ErrorCodeSchema], "description": "Not found"},
    500: {"model": list[ErrorCodeSchema], "description": "Internal server error"},
}
