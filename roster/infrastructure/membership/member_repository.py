"""
Adapter: Member persistence.

Implements MemberRepository port on the `members` table.
A (team, user) pair may only hold one active membership; a pair whose
memberships have all expired is reported as a deleted duplicate.
"""

from collections.abc import Callable
from datetime import datetime, timezone
from typing import Any
from uuid import UUID, uuid4

from sqlalchemy import and_, delete, select
from sqlalchemy.engine import Connection, Engine, RowMapping

from roster.domain.membership.entities import Member, NewMember
from roster.domain.membership.errors import DeletedDuplicationError, DuplicationError
from roster.domain.membership.ports import MemberRepository
from roster.infrastructure.membership.sql_errors import persistence_errors
from roster.infrastructure.membership.sql_repository import SqlRepository
from roster.infrastructure.membership.tables import members


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


def _as_utc(value: datetime | None) -> datetime | None:
    """Normalize to aware UTC. Naive values (SQLite drops offsets) are UTC."""
    if value is None:
        return None
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


class MemberRepositoryAdapter(SqlRepository[Member, NewMember], MemberRepository):
    """SQL implementation of the MemberRepository port.

    Args:
        engine: Engine of the shared Database.
        clock: Returns the current aware datetime. Stamps assigned_at.
    """

    table = members
    entity_name = "member"

    def __init__(self, engine: Engine, clock: Callable[[], datetime] = _utcnow) -> None:
        super().__init__(engine)
        self._clock = clock

    def _to_entity(self, row: RowMapping) -> Member:
        return Member(
            id=row["id"],
            team_id=row["team_id"],
            user_id=row["user_id"],
            name=row["name"],
            identity_num=row["identity_num"],
            role=row["role"],
            assigned_at=_as_utc(row["assigned_at"]),
            expired_at=_as_utc(row["expired_at"]),
            modification_date=_as_utc(row["modification_date"]),
        )

    def _to_values(self, entity: Member) -> dict[str, Any]:
        return {
            "id": entity.id,
            "team_id": entity.team_id,
            "user_id": entity.user_id,
            "name": entity.name,
            "identity_num": entity.identity_num,
            "role": entity.role,
            "assigned_at": entity.assigned_at,
            "expired_at": entity.expired_at,
            "modification_date": entity.modification_date,
        }

    def _build(self, new_entity: NewMember) -> Member:
        now = self._clock()
        return Member(
            id=uuid4(),
            team_id=new_entity.team_id,
            user_id=new_entity.user_id,
            name=new_entity.name,
            identity_num=new_entity.identity_num,
            role=new_entity.role,
            assigned_at=now,
            expired_at=_as_utc(new_entity.expired_at),
            modification_date=now,
        )

    def _check_duplicates(self, conn: Connection, entities: list[Member]) -> None:
        now = self._clock()
        seen: set[tuple[UUID, UUID]] = set()
        for entity in entities:
            pair = (entity.team_id, entity.user_id)
            key = f"team={entity.team_id} user={entity.user_id}"
            if pair in seen:
                raise DuplicationError(self.entity_name, key)
            seen.add(pair)

            rows = conn.execute(
                select(self.table).where(
                    and_(
                        self.table.c.team_id == entity.team_id,
                        self.table.c.user_id == entity.user_id,
                    )
                )
            ).mappings().all()
            if not rows:
                continue
            existing = [self._to_entity(row) for row in rows]
            if any(m.is_active(now) for m in existing):
                raise DuplicationError(self.entity_name, key)
            raise DeletedDuplicationError(self.entity_name, key)

    def delete_by_user_ids(self, user_ids: list[UUID]) -> int:
        if not user_ids:
            return 0
        statement = delete(self.table).where(self.table.c.user_id.in_(user_ids))
        with persistence_errors(self._operation("delete_by_user_ids")):
            with self._engine.begin() as conn:
                result = conn.execute(statement)
        return result.rowcount
