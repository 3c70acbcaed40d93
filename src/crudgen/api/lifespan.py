from __future__ import annotations

from collections.abc import AsyncIterator, Iterable
from contextlib import asynccontextmanager
from typing import Any

from fastapi import FastAPI

from crudgen.core.ports.store import ResourceStore


def make_lifespan(stores: Iterable[ResourceStore]) -> Any:
    @asynccontextmanager
    async def lifespan(_app: FastAPI) -> AsyncIterator[None]:
        yield
        for store in stores:
            await store.dispose()

    return lifespan
