"""
Use case: List one page of entities together with the total count.

Input: ListEntitiesQuery (page_size, offset)
Output: Page (items, count)
Side effects: None.
Failure cases: InvalidPaginationError, PersistenceError.
"""

import logging
from typing import Generic, TypeVar

from roster.application.membership.dtos import ListEntitiesQuery
from roster.domain.membership.entities import Page, PageRequest
from roster.domain.membership.ports import EntityRepository

logger = logging.getLogger(__name__)

E = TypeVar("E")


class ListEntitiesUseCase(Generic[E]):
    """Orchestrates the two-step list protocol shared by every entity.

    The total is computed by a dedicated count query, independent of the
    page bounds. If counting fails the page is never fetched; a count is
    never returned without its page.
    """

    def __init__(self, repository: EntityRepository[E, object]) -> None:
        self._repository = repository

    def execute(self, query: ListEntitiesQuery) -> Page[E]:
        """Run the list use case.

        Args:
            query: Requested page bounds.

        Returns:
            The bounded page and the total number of rows.

        Raises:
            InvalidPaginationError: If page_size or offset is negative.
            PersistenceError: If counting or listing fails.
        """
        page = PageRequest(page_size=query.page_size, offset=query.offset)

        count = self._repository.count()
        items = self._repository.list_page(page)

        logger.info(
            "Listed %d of %d %s rows (page_size=%d, offset=%d)",
            len(items),
            count,
            self._repository.entity_name,
            page.page_size,
            page.offset,
        )
        return Page(items=items, count=count)
