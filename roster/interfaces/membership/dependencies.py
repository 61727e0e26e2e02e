"""
Dependency injection for the membership bounded context.

Provides FastAPI dependency functions that wire infrastructure
adapters into use cases via constructor injection. Every adapter is
built per request on top of the Database held by the application.
"""

from fastapi import Depends, Request

from roster.application.membership.delete_all_auth_users import (
    DeleteAllAuthUsersUseCase,
)
from roster.core.config import Settings
from roster.core.database import Database
from roster.domain.membership.ports import (
    AuthUserRepository,
    MemberRepository,
    TeamRepository,
    UserRepository,
)
from roster.infrastructure.membership.auth_user_repository import (
    AuthUserRepositoryAdapter,
)
from roster.infrastructure.membership.member_repository import MemberRepositoryAdapter
from roster.infrastructure.membership.team_repository import TeamRepositoryAdapter
from roster.infrastructure.membership.user_repository import UserRepositoryAdapter


def get_database(request: Request) -> Database:
    """Return the Database created at application startup."""
    return request.app.state.database


def get_settings(request: Request) -> Settings:
    return request.app.state.settings


def get_user_repository(database: Database = Depends(get_database)) -> UserRepository:
    return UserRepositoryAdapter(database.engine)


def get_auth_user_repository(
    database: Database = Depends(get_database),
    settings: Settings = Depends(get_settings),
) -> AuthUserRepository:
    return AuthUserRepositoryAdapter(
        database.engine, hash_rounds=settings.password_hash_rounds
    )


def get_team_repository(database: Database = Depends(get_database)) -> TeamRepository:
    return TeamRepositoryAdapter(database.engine)


def get_member_repository(
    database: Database = Depends(get_database),
) -> MemberRepository:
    return MemberRepositoryAdapter(database.engine)


def get_delete_all_auth_users_use_case(
    auth_user_repo: AuthUserRepository = Depends(get_auth_user_repository),
    member_repo: MemberRepository = Depends(get_member_repository),
) -> DeleteAllAuthUsersUseCase:
    """Build DeleteAllAuthUsersUseCase with its infrastructure dependencies."""
    return DeleteAllAuthUsersUseCase(
        auth_user_repo=auth_user_repo,
        member_repo=member_repo,
    )
