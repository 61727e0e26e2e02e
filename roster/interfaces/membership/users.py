"""
FastAPI routes for users.

All routes delegate to use cases. No business logic here.
Input validation is handled by Pydantic schemas.
Error mapping is handled by centralized error handlers.
"""

from uuid import UUID

from fastapi import APIRouter, Depends

from roster.application.membership.create_entities_bulk import CreateEntitiesBulkUseCase
from roster.application.membership.create_entity import CreateEntityUseCase
from roster.application.membership.delete_all_entities import DeleteAllEntitiesUseCase
from roster.application.membership.delete_entity import DeleteEntityUseCase
from roster.application.membership.dtos import ListEntitiesQuery
from roster.application.membership.get_entity import GetEntityUseCase
from roster.application.membership.list_entities import ListEntitiesUseCase
from roster.domain.membership.ports import UserRepository
from roster.interfaces.membership.dependencies import get_user_repository
from roster.interfaces.membership.schemas import (
    ERROR_RESPONSES,
    NewUserRequest,
    PaginatedResponse,
    SuccessResponse,
    UserSchema,
)

router = APIRouter(prefix="/users", tags=["users"])


@router.get(
    "",
    response_model=SuccessResponse[PaginatedResponse[UserSchema]],
    responses=ERROR_RESPONSES,
    summary="List users",
    description="Return one page of users and the total number of users.",
)
def list_users(
    page_size: int = 0,
    offset: int = 0,
    repository: UserRepository = Depends(get_user_repository),
) -> SuccessResponse[PaginatedResponse[UserSchema]]:
    page = ListEntitiesUseCase(repository).execute(
        ListEntitiesQuery(page_size=page_size, offset=offset)
    )
    return SuccessResponse[PaginatedResponse[UserSchema]](
        message="Successfully retrieved all users.",
        data=PaginatedResponse[UserSchema](
            items=[UserSchema.model_validate(u) for u in page.items],
            count=page.count,
        ),
    )


@router.get(
    "/{user_id}",
    response_model=SuccessResponse[UserSchema],
    responses=ERROR_RESPONSES,
    summary="Find a user",
)
def find_user(
    user_id: UUID,
    repository: UserRepository = Depends(get_user_repository),
) -> SuccessResponse[UserSchema]:
    user = GetEntityUseCase(repository).execute(user_id)
    return SuccessResponse[UserSchema](
        message="Successfully found the user.",
        data=UserSchema.model_validate(user),
    )


@router.post(
    "",
    response_model=SuccessResponse[UserSchema],
    responses=ERROR_RESPONSES,
    summary="Create a user",
)
def create_user(
    request: NewUserRequest,
    repository: UserRepository = Depends(get_user_repository),
) -> SuccessResponse[UserSchema]:
    user = CreateEntityUseCase(repository).execute(request.to_domain())
    return SuccessResponse[UserSchema](
        message="Successfully added the new user.",
        data=UserSchema.model_validate(user),
    )


@router.post(
    "/bulk",
    response_model=SuccessResponse[list[UserSchema]],
    responses=ERROR_RESPONSES,
    summary="Create several users",
    description="Insert all users in one transaction, or none. Emails must be unique.",
)
def create_users_bulk(
    requests: list[NewUserRequest],
    repository: UserRepository = Depends(get_user_repository),
) -> SuccessResponse[list[UserSchema]]:
    users = CreateEntitiesBulkUseCase(repository).execute([r.to_domain() for r in requests])
    return SuccessResponse[list[UserSchema]](
        message="Successfully added the bulk of users.",
        data=[UserSchema.model_validate(u) for u in users],
    )


@router.delete(
    "/{user_id}",
    response_model=SuccessResponse[bool],
    responses=ERROR_RESPONSES,
    summary="Delete a user",
    description="Delete a user. Team memberships reference auth users, not users.",
)
def remove_user(
    user_id: UUID,
    repository: UserRepository = Depends(get_user_repository),
) -> SuccessResponse[bool]:
    DeleteEntityUseCase(repository).execute(user_id)
    return SuccessResponse[bool](message="Successfully deleted the user.", data=True)


@router.delete(
    "",
    response_model=SuccessResponse[bool],
    responses=ERROR_RESPONSES,
    summary="Delete all users",
)
def remove_all_users(
    repository: UserRepository = Depends(get_user_repository),
) -> SuccessResponse[bool]:
    DeleteAllEntitiesUseCase(repository).execute()
    return SuccessResponse[bool](message="Successfully deleted all users.", data=True)
