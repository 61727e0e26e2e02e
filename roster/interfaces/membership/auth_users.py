"""
FastAPI routes for auth users.

All routes delegate to use cases. No business logic here.
Input validation is handled by Pydantic schemas.
Error mapping is handled by centralized error handlers.
"""

from uuid import UUID

from fastapi import APIRouter, Depends

from roster.application.membership.create_entities_bulk import CreateEntitiesBulkUseCase
from roster.application.membership.create_entity import CreateEntityUseCase
from roster.application.membership.delete_all_auth_users import (
    DeleteAllAuthUsersUseCase,
)
from roster.application.membership.delete_entity import DeleteEntityUseCase
from roster.application.membership.dtos import ListEntitiesQuery
from roster.application.membership.get_entity import GetEntityUseCase
from roster.application.membership.list_entities import ListEntitiesUseCase
from roster.domain.membership.ports import AuthUserRepository
from roster.interfaces.membership.dependencies import (
    get_auth_user_repository,
    get_delete_all_auth_users_use_case,
)
from roster.interfaces.membership.schemas import (
    ERROR_RESPONSES,
    AuthUserSchema,
    NewAuthUserRequest,
    PaginatedResponse,
    SuccessResponse,
)

router = APIRouter(prefix="/auth-users", tags=["auth users"])


@router.get(
    "",
    response_model=SuccessResponse[PaginatedResponse[AuthUserSchema]],
    responses=ERROR_RESPONSES,
    summary="List auth users",
    description="Return one page of auth users and the total number of auth users.",
)
def list_auth_users(
    page_size: int = 0,
    offset: int = 0,
    repository: AuthUserRepository = Depends(get_auth_user_repository),
) -> SuccessResponse[PaginatedResponse[AuthUserSchema]]:
    page = ListEntitiesUseCase(repository).execute(
        ListEntitiesQuery(page_size=page_size, offset=offset)
    )
    return SuccessResponse[PaginatedResponse[AuthUserSchema]](
        message="Successfully retrieved all auth users.",
        data=PaginatedResponse[AuthUserSchema](
            items=[AuthUserSchema.model_validate(u) for u in page.items],
            count=page.count,
        ),
    )


@router.get(
    "/{auth_user_id}",
    response_model=SuccessResponse[AuthUserSchema],
    responses=ERROR_RESPONSES,
    summary="Find an auth user",
)
def find_auth_user(
    auth_user_id: UUID,
    repository: AuthUserRepository = Depends(get_auth_user_repository),
) -> SuccessResponse[AuthUserSchema]:
    auth_user = GetEntityUseCase(repository).execute(auth_user_id)
    return SuccessResponse[AuthUserSchema](
        message="Successfully found the auth user.",
        data=AuthUserSchema.model_validate(auth_user),
    )


@router.post(
    "",
    response_model=SuccessResponse[AuthUserSchema],
    responses=ERROR_RESPONSES,
    summary="Create an auth user",
)
def create_auth_user(
    request: NewAuthUserRequest,
    repository: AuthUserRepository = Depends(get_auth_user_repository),
) -> SuccessResponse[AuthUserSchema]:
    auth_user = CreateEntityUseCase(repository).execute(request.to_domain())
    return SuccessResponse[AuthUserSchema](
        message="Successfully added the new auth user.",
        data=AuthUserSchema.model_validate(auth_user),
    )


@router.post(
    "/bulk",
    response_model=SuccessResponse[list[AuthUserSchema]],
    responses=ERROR_RESPONSES,
    summary="Create several auth users",
    description="Insert all auth users in one transaction, or none of them.",
)
def create_auth_users_bulk(
    requests: list[NewAuthUserRequest],
    repository: AuthUserRepository = Depends(get_auth_user_repository),
) -> SuccessResponse[list[AuthUserSchema]]:
    auth_users = CreateEntitiesBulkUseCase(repository).execute([r.to_domain() for r in requests])
    return SuccessResponse[list[AuthUserSchema]](
        message="Successfully added the bulk of auth users.",
        data=[AuthUserSchema.model_validate(u) for u in auth_users],
    )


@router.delete(
    "/{auth_user_id}",
    response_model=SuccessResponse[bool],
    responses=ERROR_RESPONSES,
    summary="Delete an auth user",
    description="Delete one auth user. Its memberships are left untouched.",
)
def remove_auth_user(
    auth_user_id: UUID,
    repository: AuthUserRepository = Depends(get_auth_user_repository),
) -> SuccessResponse[bool]:
    DeleteEntityUseCase(repository).execute(auth_user_id)
    return SuccessResponse[bool](message="Successfully deleted the auth user.", data=True)


@router.delete(
    "",
    response_model=SuccessResponse[bool],
    responses=ERROR_RESPONSES,
    summary="Delete all auth users",
    description=(
        "Delete every auth user, then every member referencing them. If the "
        "members cannot be deleted the auth users are restored and the call "
        'fails with "db-error"; if restoring fails too, the call fails with '
        '"compensation-failed" followed by the restore error codes.'
    ),
)
def remove_all_auth_users(
    use_case: DeleteAllAuthUsersUseCase = Depends(get_delete_all_auth_users_use_case),
) -> SuccessResponse[bool]:
    use_case.execute()
    return SuccessResponse[bool](message="Successfully deleted all auth users.", data=True)
