"""
FastAPI routes for teams.

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
from roster.domain.membership.ports import TeamRepository
from roster.interfaces.membership.dependencies import get_team_repository
from roster.interfaces.membership.schemas import (
    ERROR_RESPONSES,
    NewTeamRequest,
    PaginatedResponse,
    SuccessResponse,
    TeamSchema,
)

router = APIRouter(prefix="/teams", tags=["teams"])


@router.get(
    "",
    response_model=SuccessResponse[PaginatedResponse[TeamSchema]],
    responses=ERROR_RESPONSES,
    summary="List teams",
    description="Return one page of teams and the total number of teams.",
)
def list_teams(
    page_size: int = 0,
    offset: int = 0,
    repository: TeamRepository = Depends(get_team_repository),
) -> SuccessResponse[PaginatedResponse[TeamSchema]]:
    page = ListEntitiesUseCase(repository).execute(
        ListEntitiesQuery(page_size=page_size, offset=offset)
    )
    return SuccessResponse[PaginatedResponse[TeamSchema]](
        message="Successfully retrieved all teams.",
        data=PaginatedResponse[TeamSchema](
            items=[TeamSchema.model_validate(t) for t in page.items],
            count=page.count,
        ),
    )


@router.get(
    "/{team_id}",
    response_model=SuccessResponse[TeamSchema],
    responses=ERROR_RESPONSES,
    summary="Find a team",
)
def find_team(
    team_id: UUID,
    repository: TeamRepository = Depends(get_team_repository),
) -> SuccessResponse[TeamSchema]:
    team = GetEntityUseCase(repository).execute(team_id)
    return SuccessResponse[TeamSchema](
        message="Successfully found the team.",
        data=TeamSchema.model_validate(team),
    )


@router.post(
    "",
    response_model=SuccessResponse[TeamSchema],
    responses=ERROR_RESPONSES,
    summary="Create a team",
)
def create_team(
    request: NewTeamRequest,
    repository: TeamRepository = Depends(get_team_repository),
) -> SuccessResponse[TeamSchema]:
    team = CreateEntityUseCase(repository).execute(request.to_domain())
    return SuccessResponse[TeamSchema](
        message="Successfully added the new team.",
        data=TeamSchema.model_validate(team),
    )


@router.post(
    "/bulk",
    response_model=SuccessResponse[list[TeamSchema]],
    responses=ERROR_RESPONSES,
    summary="Create several teams",
    description="Insert all teams in one transaction, or none of them.",
)
def create_teams_bulk(
    requests: list[NewTeamRequest],
    repository: TeamRepository = Depends(get_team_repository),
) -> SuccessResponse[list[TeamSchema]]:
    teams = CreateEntitiesBulkUseCase(repository).execute([r.to_domain() for r in requests])
    return SuccessResponse[list[TeamSchema]](
        message="Successfully added the bulk of teams.",
        data=[TeamSchema.model_validate(t) for t in teams],
    )


@router.delete(
    "/{team_id}",
    response_model=SuccessResponse[bool],
    responses=ERROR_RESPONSES,
    summary="Delete a team",
    description="Delete a team and, through the database cascade, its members.",
)
def remove_team(
    team_id: UUID,
    repository: TeamRepository = Depends(get_team_repository),
) -> SuccessResponse[bool]:
    DeleteEntityUseCase(repository).execute(team_id)
    return SuccessResponse[bool](message="Successfully deleted the team.", data=True)


@router.delete(
    "",
    response_model=SuccessResponse[bool],
    responses=ERROR_RESPONSES,
    summary="Delete all teams",
)
def remove_all_teams(
    repository: TeamRepository = Depends(get_team_repository),
) -> SuccessResponse[bool]:
    DeleteAllEntitiesUseCase(repository).execute()
    return SuccessResponse[bool](message="Successfully deleted all teams.", data=True)
