"""
Use case: Create one entity.

Input: a New* entity (writable fields only)
Output: the persisted entity with its server-assigned id
Side effects: Inserts one row.
Failure cases: DuplicationError, DeletedDuplicationError, PersistenceError.
"""

import logging
from typing import Generic, TypeVar

from roster.domain.membership.ports import EntityRepository

logger = logging.getLogger(__name__)

E = TypeVar("E")
N = TypeVar("N")


class CreateEntityUseCase(Generic[E, N]):
    """Persists a single new entity."""

    def __init__(self, repository: EntityRepository[E, N]) -> None:
        self._repository = repository

    def execute(self, new_entity: N) -> E:
        """Run the create use case.

        Args:
            new_entity: Writable fields of the entity to create.

        Returns:
            The stored entity, including its new id.
        """
        entity = self._repository.insert(new_entity)
        logger.info("Created %s id=%s", self._repository.entity_name, entity.id)
        return entity
