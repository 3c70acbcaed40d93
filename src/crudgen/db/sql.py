"""ResourceStore over a single SQLAlchemy table, using the async Core API."""

from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import Any

from sqlalchemy import ColumnElement, Table, delete, insert, select, update
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncEngine

from crudgen.core.errors import DomainError, ErrorKind
from crudgen.core.ports.store import Predicate

logger = logging.getLogger(__name__)


class SqlAlchemyStore:
    def __init__(self, engine: AsyncEngine, table: Table) -> None:
        self.engine = engine
        self.table = table

    def _column(self, name: str) -> Any:
        if name not in self.table.c:
            raise DomainError(ErrorKind.UNKNOWN_FIELD, f"Unknown column {self.table.name}.{name}")
        return self.table.c[name]

    def _bind(self, name: str, value: Any) -> Any:
        # Path and query parameters arrive as strings.
        column = self._column(name)
        if not isinstance(value, str):
            return value
        try:
            python_type = column.type.python_type
        except NotImplementedError:
            return value
        if python_type in (int, float):
            try:
                return python_type(value)
            except ValueError:
                return value
        return value

    def _values(self, row: Mapping[str, Any]) -> dict[str, Any]:
        return {name: self._bind(name, value) for name, value in row.items()}

    def _where(self, predicate: Predicate) -> list[ColumnElement[bool]]:
        clauses = [self._column(k) == self._bind(k, v) for k, v in predicate.equals.items()]
        clauses += [self._column(k) != self._bind(k, v) for k, v in predicate.not_equals.items()]
        return clauses

    def _translate(self, exc: SQLAlchemyError) -> DomainError:
        if isinstance(exc, IntegrityError):
            return DomainError(ErrorKind.CONSTRAINT_VIOLATION, str(exc.orig))
        return DomainError(ErrorKind.STORAGE_FAILURE, str(exc))

    async def _fetch_by_id(self, conn: Any, row_id: Any) -> dict[str, Any] | None:
        result = await conn.execute(select(self.table).where(self.table.c.id == row_id))
        found = result.mappings().first()
        return dict(found) if found is not None else None

    def _written(self, row: dict[str, Any] | None, row_id: Any) -> dict[str, Any]:
        if row is None:
            raise DomainError(ErrorKind.STORAGE_FAILURE, f"{self.table.name} {row_id} vanished after writing")
        return row

    async def fetch_all(self, predicate: Predicate) -> list[dict[str, Any]]:
        try:
            async with self.engine.connect() as conn:
                result = await conn.execute(select(self.table).where(*self._where(predicate)))
                return [dict(r) for r in result.mappings().all()]
        except SQLAlchemyError as exc:
            raise self._translate(exc) from exc

    async def fetch_one(self, predicate: Predicate) -> dict[str, Any] | None:
        try:
            async with self.engine.connect() as conn:
                result = await conn.execute(select(self.table).where(*self._where(predicate)).limit(1))
                found = result.mappings().first()
                return dict(found) if found is not None else None
        except SQLAlchemyError as exc:
            raise self._translate(exc) from exc

    async def insert(self, row: dict[str, Any]) -> dict[str, Any]:
        values = self._values({k: v for k, v in row.items() if k != "id"})
        try:
            async with self.engine.begin() as conn:
                result = await conn.execute(insert(self.table).values(**values))
                row_id = result.inserted_primary_key[0]
                created = await self._fetch_by_id(conn, row_id)
        except SQLAlchemyError as exc:
            raise self._translate(exc) from exc
        return self._written(created, row_id)

    async def replace(self, row: dict[str, Any]) -> dict[str, Any]:
        values = self._values(row)
        row_id = values.pop("id")
        try:
            async with self.engine.begin() as conn:
                result = await conn.execute(update(self.table).where(self.table.c.id == row_id).values(**values))
                if result.rowcount == 0:
                    raise DomainError(ErrorKind.NO_ROWS_UPDATED, f"No {self.table.name} with id {row_id} to update")
                updated = await self._fetch_by_id(conn, row_id)
        except SQLAlchemyError as exc:
            raise self._translate(exc) from exc
        return self._written(updated, row_id)

    async def delete_one(self, predicate: Predicate) -> None:
        await self._delete(predicate)

    async def delete_all(self, predicate: Predicate) -> None:
        await self._delete(predicate)

    async def _delete(self, predicate: Predicate) -> None:
        try:
            async with self.engine.begin() as conn:
                result = await conn.execute(delete(self.table).where(*self._where(predicate)))
                logger.debug("Deleted %d row(s) from %s", result.rowcount, self.table.name)
        except SQLAlchemyError as exc:
            raise self._translate(exc) from exc

    async def dispose(self) -> None:
        await self.engine.dispose()
