"""
Use case: Delete one entity by id.

Input: UUID
Output: True
Side effects: Deletes at most one row.
Failure cases: EntityNotFoundError when nothing matched (so a repeated
delete reports not-found instead of failing), PersistenceError.
"""

import logging
from typing import Generic, TypeVar
from uuid import UUID

from roster.domain.membership.errors import EntityNotFoundError
from roster.domain.membership.ports import EntityRepository

logger = logging.getLogger(__name__)

E = TypeVar("E")


class DeleteEntityUseCase(Generic[E]):
    """Removes a single entity through its repository."""

    def __init__(self, repository: EntityRepository[E, object]) -> None:
        self._repository = repository

    def execute(self, entity_id: UUID) -> bool:
        if not self._repository.delete_by_id(entity_id):
            raise EntityNotFoundError(self._repository.entity_name, entity_id)
        logger.info("Deleted %s id=%s", self._repository.entity_name, entity_id)
        return True
