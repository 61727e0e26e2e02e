"""
Base adapter: SQLAlchemy Core repository.

Implements the operations shared by every entity store on top of a
single table whose primary key column is `id`. Concrete adapters supply
the table, the row/entity conversions and the duplicate checks.
"""

import logging
from typing import Any, Generic, TypeVar
from uuid import UUID

from sqlalchemy import Table, delete, func, insert, select
from sqlalchemy.engine import Connection, Engine, RowMapping

from roster.domain.membership.entities import PageRequest
from roster.domain.membership.errors import EntityNotFoundError
from roster.infrastructure.membership.sql_errors import map_row, persistence_errors

logger = logging.getLogger(__name__)

E = TypeVar("E")
N = TypeVar("N")


class SqlRepository(Generic[E, N]):
    """Shared CRUD implementation for one table.

    Attributes:
        table: The SQLAlchemy table backing the entity.
        entity_name: Human-readable entity name used in logs and errors.
    """

    table: Table
    entity_name: str = "entity"

    def __init__(self, engine: Engine) -> None:
        self._engine = engine

    # -- hooks -------------------------------------------------------------

    def _to_entity(self, row: RowMapping) -> E:
        raise NotImplementedError

    def _to_values(self, entity: E) -> dict[str, Any]:
        raise NotImplementedError

    def _build(self, new_entity: N) -> E:
        """Turn a writable entity into a full one with a fresh id."""
        raise NotImplementedError

    def _check_duplicates(self, conn: Connection, entities: list[E]) -> None:
        """Raise a duplication error if any entity clashes. Default: no check."""

    # -- port implementation ----------------------------------------------

    def _operation(self, name: str) -> str:
        return f"{self.table.name}.{name}"

    def count(self) -> int:
        query = select(func.count()).select_from(self.table)
        with persistence_errors(self._operation("count")):
            with self._engine.connect() as conn:
                return conn.execute(query).scalar_one()

    def list_page(self, page: PageRequest) -> list[E]:
        query = (
            select(self.table)
            .order_by(self.table.c.id)
            .limit(page.page_size)
            .offset(page.offset)
        )
        operation = self._operation("list_page")
        with persistence_errors(operation):
            with self._engine.connect() as conn:
                rows = conn.execute(query).mappings().all()
        return [map_row(operation, self._to_entity, row) for row in rows]

    def get_by_id(self, entity_id: UUID) -> E:
        query = select(self.table).where(self.table.c.id == entity_id)
        operation = self._operation("get_by_id")
        with persistence_errors(operation):
            with self._engine.connect() as conn:
                row = conn.execute(query).mappings().first()
        if row is None:
            raise EntityNotFoundError(self.entity_name, entity_id)
        return map_row(operation, self._to_entity, row)

    def insert(self, new_entity: N) -> E:
        return self.insert_bulk([new_entity])[0]

    def insert_bulk(self, new_entities: list[N]) -> list[E]:
        entities = [self._build(n) for n in new_entities]
        if not entities:
            return []
        with persistence_errors(self._operation("insert")):
            with self._engine.begin() as conn:
                self._check_duplicates(conn, entities)
                conn.execute(insert(self.table), [self._to_values(e) for e in entities])
        logger.info("Inserted %d %s rows.", len(entities), self.entity_name)
        return entities

    def delete_by_id(self, entity_id: UUID) -> bool:
        statement = delete(self.table).where(self.table.c.id == entity_id)
        with persistence_errors(self._operation("delete_by_id")):
            with self._engine.begin() as conn:
                result = conn.execute(statement)
        return result.rowcount > 0

    def delete_all(self) -> list[E]:
        """Delete every row in one transaction and return the deleted entities.

        Rows are mapped before the delete runs, so a mapping failure rolls
        the whole transaction back.
        """
        operation = self._operation("delete_all")
        with persistence_errors(operation):
            with self._engine.begin() as conn:
                rows = conn.execute(
                    select(self.table).order_by(self.table.c.id)
                ).mappings().all()
                deleted = [map_row(operation, self._to_entity, row) for row in rows]
                conn.execute(delete(self.table))
        logger.info("Deleted %d %s rows.", len(deleted), self.entity_name)
        return deleted
