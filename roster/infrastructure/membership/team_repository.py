"""
Adapter: Team persistence.

Implements TeamRepository port on the `teams` table.
Members of a deleted team are removed by the ON DELETE CASCADE
foreign key, in the same statement.
"""

from typing import Any
from uuid import uuid4

from sqlalchemy.engine import RowMapping

from roster.domain.membership.entities import NewTeam, Team
from roster.domain.membership.ports import TeamRepository
from roster.infrastructure.membership.sql_repository import SqlRepository
from roster.infrastructure.membership.tables import teams


class TeamRepositoryAdapter(SqlRepository[Team, NewTeam], TeamRepository):
    """SQL implementation of the TeamRepository port."""

    table = teams
    entity_name = "team"

    def _to_entity(self, row: RowMapping) -> Team:
        return Team(id=row["id"], name=row["name"], description=row["description"])

    def _to_values(self, entity: Team) -> dict[str, Any]:
        return {"id": entity.id, "name": entity.name, "description": entity.description}

    def _build(self, new_entity: NewTeam) -> Team:
        return Team(id=uuid4(), name=new_entity.name, description=new_entity.description)
