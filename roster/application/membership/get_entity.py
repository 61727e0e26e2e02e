"""
Use case: Fetch a single entity by id.

Input: UUID
Output: the entity
Side effects: None.
Failure cases: EntityNotFoundError, PersistenceError.
"""

from typing import Generic, TypeVar
from uuid import UUID

from roster.domain.membership.ports import EntityRepository

E = TypeVar("E")


class GetEntityUseCase(Generic[E]):
    """Looks up one entity through its repository."""

    def __init__(self, repository: EntityRepository[E, object]) -> None:
        self._repository = repository

    def execute(self, entity_id: UUID) -> E:
        return self._repository.get_by_id(entity_id)
