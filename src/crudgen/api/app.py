from __future__ import annotations

from fastapi import FastAPI

from crudgen.api import demo
from crudgen.api.generator import CrudGenerator
from crudgen.api.lifespan import make_lifespan
from crudgen.api.routes.health import router as health_router
from crudgen.api.routes.root import API_TITLE, API_VERSION, make_root_router
from crudgen.core.options import CrudOptions
from crudgen.core.ports.store import ResourceStore


def create_app(
    stores: dict[str, ResourceStore] | None = None,
    options: CrudOptions | None = None,
) -> FastAPI:
    stores = stores if stores is not None else demo.memory_stores()
    app = FastAPI(
        title=API_TITLE,
        description="REST resources generated from declarative field specs.",
        version=API_VERSION,
        lifespan=make_lifespan(stores.values()),
    )

    generator = CrudGenerator(app, options or CrudOptions.from_env())
    for descriptor in demo.descriptors(stores):
        generator.crud(descriptor)
    app.state.crud = generator

    app.include_router(make_root_router(generator), include_in_schema=False)
    app.include_router(health_router, include_in_schema=False)

    return app
