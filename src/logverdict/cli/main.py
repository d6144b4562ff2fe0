"""logverdict CLI entry point."""

from typing import Optional

import typer

from logverdict import __version__
from logverdict.cli.init_cmd import init
from logverdict.cli.show_cmd import show
from logverdict.cli.validate_cmd import validate
from logverdict.cli.verify_cmd import verify

app = typer.Typer(
    name="logverdict",
    help="Contract-driven verification of captured run logs",
    no_args_is_help=True,
)

# Register subcommands
app.command()(init)
app.command()(show)
app.command()(validate)
app.command()(verify)


def version_callback(value: bool) -> None:
    """Print version and exit."""
    if value:
        typer.echo(f"logverdict {__version__}")
        raise typer.Exit()


@app.callback()
def main(
    ctx: typer.Context,
    version: bool = typer.Option(
        False,
        "--version",
        "-v",
        help="Show version and exit.",
        callback=version_callback,
        is_eager=True,
    ),
    log_level: Optional[str] = typer.Option(
        None, "--log-level", help="Override log_level from logverdict.yaml."
    ),
) -> None:
    """Contract-driven verification of captured run logs."""
    ctx.obj = {"log_level": log_level}
