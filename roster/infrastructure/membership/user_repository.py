"""
Adapter: User persistence.

Implements UserRepository port on the `users` table.
Emails are unique across users.
"""

from typing import Any
from uuid import uuid4

from sqlalchemy import Table, select
from sqlalchemy.engine import Connection, RowMapping

from roster.domain.membership.entities import NewUser, User
from roster.domain.membership.errors import DuplicationError
from roster.domain.membership.ports import UserRepository
from roster.infrastructure.membership.sql_repository import SqlRepository
from roster.infrastructure.membership.tables import users


def ensure_unique_emails(
    conn: Connection, table: Table, entity_name: str, emails: list[str]
) -> None:
    """Raise DuplicationError if an email repeats in the batch or already exists.

    Args:
        conn: Open connection inside the inserting transaction.
        table: Table with a unique `email` column.
        entity_name: Entity name reported in the error.
        emails: Emails about to be inserted.
    """
    seen: set[str] = set()
    for email in emails:
        if email in seen:
            raise DuplicationError(entity_name, email)
        seen.add(email)

    existing = conn.execute(
        select(table.c.email).where(table.c.email.in_(emails)).limit(1)
    ).scalar_one_or_none()
    if existing is not None:
        raise DuplicationError(entity_name, existing)


class UserRepositoryAdapter(SqlRepository[User, NewUser], UserRepository):
    """SQL implementation of the UserRepository port."""

    table = users
    entity_name = "user"

    def _to_entity(self, row: RowMapping) -> User:
        return User(id=row["id"], email=row["email"], name=row["name"])

    def _to_values(self, entity: User) -> dict[str, Any]:
        return {"id": entity.id, "email": entity.email, "name": entity.name}

    def _build(self, new_entity: NewUser) -> User:
        return User(id=uuid4(), email=new_entity.email, name=new_entity.name)

    def _check_duplicates(self, conn: Connection, entities: list[User]) -> None:
        ensure_unique_emails(conn, self.table, self.entity_name, [e.email for e in entities])
