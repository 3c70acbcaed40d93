from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any, Protocol


def _same(stored: Any, wanted: Any) -> bool:
    # Route and query parameters arrive as strings.
    return bool(stored == wanted or str(stored) == str(wanted))


@dataclass(frozen=True)
class Predicate:
    """Equality and inequality clauses over internal (snake_case) column names."""

    equals: Mapping[str, Any] = field(default_factory=dict)
    not_equals: Mapping[str, Any] = field(default_factory=dict)

    @classmethod
    def always_true(cls, equals: Mapping[str, Any] | None = None) -> Predicate:
        """``equals`` plus an ``id != 0`` clause, so a bulk delete never runs with an empty where clause."""
        return cls(equals=dict(equals or {}), not_equals={"id": 0})

    @property
    def is_empty(self) -> bool:
        return not self.equals and not self.not_equals

    def matches(self, row: Mapping[str, Any]) -> bool:
        if any(not _same(row.get(k), v) for k, v in self.equals.items()):
            return False
        return all(not _same(row.get(k), v) for k, v in self.not_equals.items())


class ResourceStore(Protocol):
    async def fetch_all(self, predicate: Predicate) -> list[dict[str, Any]]: ...

    async def fetch_one(self, predicate: Predicate) -> dict[str, Any] | None: ...

    async def insert(self, row: dict[str, Any]) -> dict[str, Any]: ...

    async def replace(self, row: dict[str, Any]) -> dict[str, Any]: ...

    async def delete_one(self, predicate: Predicate) -> None: ...

    async def delete_all(self, predicate: Predicate) -> None: ...

    async def dispose(self) -> None: ...
