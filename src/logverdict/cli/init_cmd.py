"""logverdict init -- scaffold a project with config and example specs."""

from __future__ import annotations

from pathlib import Path

import typer

from logverdict.scaffold.init import ProjectExistsError, scaffold_project


def init(
    directory: str = typer.Argument(".", help="Directory to initialize"),
    force: bool = typer.Option(False, "--force", "-f", help="Overwrite existing files"),
) -> None:
    """Initialize a new logverdict project.

    Writes logverdict.yaml, specs/contract.md and specs/checklist.md.
    """
    target = Path(directory).resolve()

    try:
        scaffold_project(target, force=force)
    except ProjectExistsError as e:
        typer.echo(f"Error: {e}", err=True)
        typer.echo("Use --force to overwrite existing files.", err=True)
        raise typer.Exit(code=1)

    typer.echo("\nNext: capture a run into logs/last-run.log, then run 'logverdict verify'.")
