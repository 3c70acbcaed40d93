from __future__ import annotations

from fastapi import APIRouter

from crudgen.api.generator import CrudGenerator
from crudgen.api.schemas import ResourceLink, RootResponse

API_TITLE = "crudgen demo API"
API_VERSION = "0.1.0"


def make_root_router(generator: CrudGenerator) -> APIRouter:
    router = APIRouter()

    @router.get("/", response_model=RootResponse)
    async def root() -> RootResponse:
        """Root discovery endpoint listing the generated resources."""
        return RootResponse(
            title=API_TITLE,
            version=API_VERSION,
            resources=[ResourceLink(name=r.name, path=r.base_path) for r in generator.resources],
        )

    return router
