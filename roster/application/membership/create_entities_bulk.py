"""
Use case: Create several entities at once.

Input: list of New* entities
Output: list of persisted entities, in input order
Side effects: Inserts all rows in one transaction, or none.
Failure cases: DuplicationError, DeletedDuplicationError, PersistenceError.
"""

import logging
from typing import Generic, TypeVar

from roster.domain.membership.ports import EntityRepository

logger = logging.getLogger(__name__)

E = TypeVar("E")
N = TypeVar("N")


class CreateEntitiesBulkUseCase(Generic[E, N]):
    """Persists a batch of new entities atomically."""

    def __init__(self, repository: EntityRepository[E, N]) -> None:
        self._repository = repository

    def execute(self, new_entities: list[N]) -> list[E]:
        entities = self._repository.insert_bulk(new_entities)
        logger.info(
            "Bulk-created %d %s rows", len(entities), self._repository.entity_name
        )
        return entities
