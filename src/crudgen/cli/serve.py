from __future__ import annotations

import asyncio
import logging
from typing import Annotated, Optional

import typer
from rich.console import Console
from sqlalchemy.ext.asyncio import AsyncEngine

console = Console()


async def _prepare_schema(engine: AsyncEngine) -> None:
    from crudgen.api import demo

    await demo.init_schema(engine)
    # Pool connections are bound to this loop; uvicorn starts its own.
    await engine.dispose()


def serve(
    host: str = "127.0.0.1",
    port: int = 8000,
    memory: Annotated[bool, typer.Option("--memory", help="Use in-memory stores instead of DATABASE_URL.")] = False,
    database_url: Annotated[
        Optional[str],  # noqa: UP007
        typer.Option(help="Overrides the DATABASE_URL environment variable."),
    ] = None,
    log_level: str = "info",
) -> None:
    """Start the demo API server."""
    import uvicorn

    from crudgen.api import demo
    from crudgen.api.app import create_app
    from crudgen.db.engine import get_engine

    logging.basicConfig(level=log_level.upper())
    if memory:
        stores = demo.memory_stores()
        console.print("[yellow]Using in-memory stores[/yellow]")
    else:
        engine = get_engine(database_url)
        asyncio.run(_prepare_schema(engine))
        stores = demo.sql_stores(engine)

    app = create_app(stores)
    console.print(f"[green]Starting API server on {host}:{port}[/green]")
    uvicorn.run(app, host=host, port=port, log_level=log_level)
