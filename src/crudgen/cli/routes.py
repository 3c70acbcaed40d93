from __future__ import annotations

from rich.console import Console
from rich.table import Table

from crudgen.api.app import create_app
from crudgen.api.demo import memory_stores
from crudgen.api.generator import CrudGenerator

console = Console()


def routes() -> None:
    """Print the routes generated for the demo resources."""
    app = create_app(memory_stores())
    generator: CrudGenerator = app.state.crud

    table = Table(title="Generated routes")
    table.add_column("Method")
    table.add_column("Path")
    table.add_column("Name")
    table.add_column("Allowed")
    for info in generator.routes:
        allowed = "[green]yes[/green]" if info.allowed else "[red]no[/red]"
        table.add_row(info.method, info.path, info.name, allowed)
    console.print(table)
