"""
FastAPI routes for members.

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
from roster.domain.membership.ports import MemberRepository
from roster.interfaces.membership.dependencies import get_member_repository
from roster.interfaces.membership.schemas import (
    ERROR_RESPONSES,
    MemberSchema,
    NewMemberRequest,
    PaginatedResponse,
    SuccessResponse,
)

router = APIRouter(prefix="/members", tags=["members"])


@router.get(
    "",
    response_model=SuccessResponse[PaginatedResponse[MemberSchema]],
    responses=ERROR_RESPONSES,
    summary="List members",
    description="Return one page of members and the total number of members.",
)
def list_members(
    page_size: int = 0,
    offset: int = 0,
    repository: MemberRepository = Depends(get_member_repository),
) -> SuccessResponse[PaginatedResponse[MemberSchema]]:
    page = ListEntitiesUseCase(repository).execute(
        ListEntitiesQuery(page_size=page_size, offset=offset)
    )
    return SuccessResponse[PaginatedResponse[MemberSchema]](
        message="Successfully retrieved all members.",
        data=PaginatedResponse[MemberSchema](
            items=[MemberSchema.model_validate(m) for m in page.items],
            count=page.count,
        ),
    )


@router.get(
    "/{member_id}",
    response_model=SuccessResponse[MemberSchema],
    responses=ERROR_RESPONSES,
    summary="Find a member",
)
def find_member(
    member_id: UUID,
    repository: MemberRepository = Depends(get_member_repository),
) -> SuccessResponse[MemberSchema]:
    member = GetEntityUseCase(repository).execute(member_id)
    return SuccessResponse[MemberSchema](
        message="Successfully found the member.",
        data=MemberSchema.model_validate(member),
    )


@router.post(
    "",
    response_model=SuccessResponse[MemberSchema],
    responses=ERROR_RESPONSES,
    summary="Create a member",
)
def create_member(
    request: NewMemberRequest,
    repository: MemberRepository = Depends(get_member_repository),
) -> SuccessResponse[MemberSchema]:
    member = CreateEntityUseCase(repository).execute(request.to_domain())
    return SuccessResponse[MemberSchema](
        message="Successfully added the new member.",
        data=MemberSchema.model_validate(member),
    )


@router.post(
    "/bulk",
    response_model=SuccessResponse[list[MemberSchema]],
    responses=ERROR_RESPONSES,
    summary="Create several members",
    description=(
        "Insert all members in one transaction, or none of them. A (team, user) "
        "pair may hold only one active membership."
    ),
)
def create_members_bulk(
    requests: list[NewMemberRequest],
    repository: MemberRepository = Depends(get_member_repository),
) -> SuccessResponse[list[MemberSchema]]:
    members = CreateEntitiesBulkUseCase(repository).execute([r.to_domain() for r in requests])
    return SuccessResponse[list[MemberSchema]](
        message="Successfully added the bulk of members.",
        data=[MemberSchema.model_validate(m) for m in members],
    )


@router.delete(
    "/{member_id}",
    response_model=SuccessResponse[bool],
    responses=ERROR_RESPONSES,
    summary="Delete a member",
    description="End a membership by removing it.",
)
def remove_member(
    member_id: UUID,
    repository: MemberRepository = Depends(get_member_repository),
) -> SuccessResponse[bool]:
    DeleteEntityUseCase(repository).execute(member_id)
    return SuccessResponse[bool](message="Successfully deleted the member.", data=True)


@router.delete(
    "",
    response_model=SuccessResponse[bool],
    responses=ERROR_RESPONSES,
    summary="Delete all members",
)
def remove_all_members(
    repository: MemberRepository = Depends(get_member_repository),
) -> SuccessResponse[bool]:
    DeleteAllEntitiesUseCase(repository).execute()
    return SuccessResponse[bool](message="Successfully deleted all members.", data=True)
