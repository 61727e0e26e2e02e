"""
Port interfaces (ABCs) for the membership bounded context.

Ports define the contracts that the domain requires from the outside world.
Infrastructure adapters implement these interfaces.
The domain layer never depends on concrete implementations.

Every method may raise PersistenceError when the underlying store fails.
"""

from abc import ABC, abstractmethod
from typing import Generic, TypeVar
from uuid import UUID

from roster.domain.membership.entities import (
    AuthUser,
    Member,
    NewAuthUser,
    NewMember,
    NewTeam,
    NewUser,
    PageRequest,
    Team,
    User,
)

E = TypeVar("E")
N = TypeVar("N")


class EntityRepository(ABC, Generic[E, N]):
    """Port shared by every entity store.

    Attributes:
        entity_name: Human-readable entity name used in logs and errors.
    """

    entity_name: str = "entity"

    @abstractmethod
    def count(self) -> int:
        """Return the total number of stored rows."""
        raise NotImplementedError

    @abstractmethod
    def list_page(self, page: PageRequest) -> list[E]:
        """Return at most page.page_size rows, skipping page.offset.

        Rows come back in a deterministic order so repeated calls against
        unchanged data return the same page.
        """
        raise NotImplementedError

    @abstractmethod
    def get_by_id(self, entity_id: UUID) -> E:
        """Return the entity with the given id.

        Raises:
            EntityNotFoundError: If no row has that id.
        """
        raise NotImplementedError

    @abstractmethod
    def insert(self, new_entity: N) -> E:
        """Persist a new entity and return it with its assigned id."""
        raise NotImplementedError

    @abstractmethod
    def insert_bulk(self, new_entities: list[N]) -> list[E]:
        """Persist several new entities atomically, in input order."""
        raise NotImplementedError

    @abstractmethod
    def delete_by_id(self, entity_id: UUID) -> bool:
        """Delete one entity. Return False if nothing matched."""
        raise NotImplementedError

    @abstractmethod
    def delete_all(self) -> list[E]:
        """Delete every row and return what was deleted."""
        raise NotImplementedError


class UserRepository(EntityRepository[User, NewUser]):
    """Port for persisting users."""


class TeamRepository(EntityRepository[Team, NewTeam]):
    """Port for persisting teams. Deleting a team removes its members."""


class AuthUserRepository(EntityRepository[AuthUser, NewAuthUser]):
    """Port for persisting auth users."""

    @abstractmethod
    def restore_bulk(self, auth_users: list[AuthUser]) -> list[AuthUser]:
        """Reinsert previously deleted auth users with their original ids.

        Used to compensate a failed cascading delete.
        """
        raise NotImplementedError


class MemberRepository(EntityRepository[Member, NewMember]):
    """Port for persisting team members."""

    @abstractmethod
    def delete_by_user_ids(self, user_ids: list[UUID]) -> int:
        """Delete every member referencing one of the given auth users.

        Returns:
            Number of deleted members.
        """
        raise NotImplementedError
