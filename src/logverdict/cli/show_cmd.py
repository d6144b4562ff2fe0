"""logverdict show -- display a stored JSON verification report.

Reads a report written by ``logverdict verify -o report.json`` and renders
it with the same headline and detail sections, optionally restricted to
failures.
"""

from __future__ import annotations

from pathlib import Path

import typer
from pydantic import ValidationError
from rich.console import Console

from logverdict.cli.output import render_details, render_headline
from logverdict.storage.report_writer import load_report


def show(
    report: str = typer.Argument(..., help="JSON report written by 'logverdict verify'"),
    failures_only: bool = typer.Option(False, "--failures", help="Show only failing blocks and tokens"),
) -> None:
    """Display a stored JSON verification report."""
    console = Console()
    path = Path(report)

    try:
        result = load_report(path)
    except FileNotFoundError:
        console.print(f"Report '{report}' not found.")
        raise typer.Exit(code=1)
    except ValidationError:
        console.print(f"[bold red]'{report}' is not a JSON verification report.[/bold red]")
        raise typer.Exit(code=1)

    render_headline(result, console)
    render_details(result, console, failures_only=failures_only)
