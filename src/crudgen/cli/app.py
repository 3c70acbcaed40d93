import typer

from crudgen.cli.routes import routes
from crudgen.cli.serve import serve

app = typer.Typer(
    name="crudgen",
    help="Serve and inspect generated REST resources.",
    no_args_is_help=True,
    context_settings={"help_option_names": ["-h", "--help"]},
)

app.command("serve")(serve)
app.command("routes")(routes)


def main() -> None:
    app()
