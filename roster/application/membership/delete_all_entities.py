"""
Use case: Delete every entity of one kind.

Input: None
Output: number of deleted rows
Side effects: Deletes all rows in one transaction. For teams, the
members of each team go with it (database cascade).
Failure cases: PersistenceError.
"""

import logging
from typing import Generic, TypeVar

from roster.domain.membership.ports import EntityRepository

logger = logging.getLogger(__name__)

E = TypeVar("E")


class DeleteAllEntitiesUseCase(Generic[E]):
    """Removes every row of one entity kind in a single statement."""

    def __init__(self, repository: EntityRepository[E, object]) -> None:
        self._repository = repository

    def execute(self) -> int:
        deleted = self._repository.delete_all()
        logger.info("Deleted all %s rows (%d)", self._repository.entity_name, len(deleted))
        return len(deleted)
