from __future__ import annotations

import copy
from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any

from crudgen.core.errors import DomainError, ErrorKind
from crudgen.core.ports.store import Predicate


@dataclass(frozen=True)
class ForeignKey:
    """``column`` must reference the id of an existing row in ``target``."""

    column: str
    target: InMemoryStore


class InMemoryStore:
    def __init__(self, name: str = "resource", foreign_keys: tuple[ForeignKey, ...] = ()) -> None:
        self.name = name
        self.rows: dict[int, dict[str, Any]] = {}
        self.foreign_keys = foreign_keys
        self.dependents: list[tuple[InMemoryStore, str]] = []
        self._next_id = 1
        for fk in foreign_keys:
            fk.target.dependents.append((self, fk.column))

    def _check_references(self, row: Mapping[str, Any]) -> None:
        for fk in self.foreign_keys:
            value = row.get(fk.column)
            if value is None:
                continue
            if not any(Predicate(equals={"id": value}).matches(r) for r in fk.target.rows.values()):
                raise DomainError(
                    ErrorKind.CONSTRAINT_VIOLATION,
                    f"{self.name}.{fk.column} references missing {fk.target.name} {value}",
                )

    def _check_not_referenced(self, row_id: int) -> None:
        for store, column in self.dependents:
            if any(Predicate(equals={column: row_id}).matches(r) for r in store.rows.values()):
                raise DomainError(
                    ErrorKind.CONSTRAINT_VIOLATION,
                    f"Cannot delete {self.name} {row_id}: referenced by {store.name}.{column}",
                )

    def _matching(self, predicate: Predicate) -> list[dict[str, Any]]:
        return [row for row in self.rows.values() if predicate.matches(row)]

    async def fetch_all(self, predicate: Predicate) -> list[dict[str, Any]]:
        return [copy.deepcopy(row) for row in self._matching(predicate)]

    async def fetch_one(self, predicate: Predicate) -> dict[str, Any] | None:
        rows = self._matching(predicate)
        return copy.deepcopy(rows[0]) if rows else None

    async def insert(self, row: dict[str, Any]) -> dict[str, Any]:
        self._check_references(row)
        row_id = self._next_id
        self._next_id += 1
        stored = {**copy.deepcopy(row), "id": row_id}
        self.rows[row_id] = stored
        return copy.deepcopy(stored)

    async def replace(self, row: dict[str, Any]) -> dict[str, Any]:
        row_id = row.get("id")
        if row_id not in self.rows:
            raise DomainError(ErrorKind.NO_ROWS_UPDATED, f"No {self.name} with id {row_id} to update")
        self._check_references(row)
        self.rows[row_id] = copy.deepcopy(row)
        return copy.deepcopy(row)

    async def delete_one(self, predicate: Predicate) -> None:
        # Check every row before deleting any.
        doomed = [row["id"] for row in self._matching(predicate)]
        for row_id in doomed:
            self._check_not_referenced(row_id)
        for row_id in doomed:
            del self.rows[row_id]

    async def delete_all(self, predicate: Predicate) -> None:
        await self.delete_one(predicate)

    async def dispose(self) -> None:
        self.rows.clear()
