"""
Adapter: Auth user persistence.

Implements AuthUserRepository port on the `auth_users` table.
Plain-text passwords are hashed before they reach the database and
never leave this module.
"""

import logging
from typing import Any
from uuid import uuid4

from passlib.context import CryptContext
from sqlalchemy import insert
from sqlalchemy.engine import Connection, Engine, RowMapping

from roster.domain.membership.entities import AuthUser, NewAuthUser
from roster.domain.membership.ports import AuthUserRepository
from roster.infrastructure.membership.sql_errors import persistence_errors
from roster.infrastructure.membership.sql_repository import SqlRepository
from roster.infrastructure.membership.tables import auth_users
from roster.infrastructure.membership.user_repository import ensure_unique_emails

logger = logging.getLogger(__name__)

DEFAULT_HASH_ROUNDS = 600_000


def build_password_context(rounds: int = DEFAULT_HASH_ROUNDS) -> CryptContext:
    """Return the PBKDF2-SHA256 context used for auth user passwords.

    Hashes carry their own rounds and salt, so a context built with any
    round count verifies hashes made by another.
    """
    return CryptContext(
        schemes=["pbkdf2_sha256"],
        deprecated="auto",
        pbkdf2_sha256__default_rounds=rounds,
    )


class AuthUserRepositoryAdapter(SqlRepository[AuthUser, NewAuthUser], AuthUserRepository):
    """SQL implementation of the AuthUserRepository port.

    Args:
        engine: Engine of the shared Database.
        hash_rounds: PBKDF2 iteration count for new passwords.
    """

    table = auth_users
    entity_name = "auth user"

    def __init__(self, engine: Engine, hash_rounds: int = DEFAULT_HASH_ROUNDS) -> None:
        super().__init__(engine)
        self._password_context = build_password_context(hash_rounds)

    def _to_entity(self, row: RowMapping) -> AuthUser:
        return AuthUser(
            id=row["id"],
            email=row["email"],
            name=row["name"],
            password_hash=row["password_hash"],
        )

    def _to_values(self, entity: AuthUser) -> dict[str, Any]:
        return {
            "id": entity.id,
            "email": entity.email,
            "name": entity.name,
            "password_hash": entity.password_hash,
        }

    def _build(self, new_entity: NewAuthUser) -> AuthUser:
        return AuthUser(
            id=uuid4(),
            email=new_entity.email,
            name=new_entity.name,
            password_hash=self._password_context.hash(new_entity.password),
        )

    def _check_duplicates(self, conn: Connection, entities: list[AuthUser]) -> None:
        ensure_unique_emails(conn, self.table, self.entity_name, [e.email for e in entities])

    def restore_bulk(self, auth_users: list[AuthUser]) -> list[AuthUser]:
        """Reinsert captured auth users unchanged, ids and hashes included."""
        if not auth_users:
            return []
        with persistence_errors(self._operation("restore_bulk")):
            with self._engine.begin() as conn:
                conn.execute(insert(self.table), [self._to_values(u) for u in auth_users])
        logger.info("Restored %d auth user rows.", len(auth_users))
        return list(auth_users)
