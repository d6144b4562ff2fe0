"""logverdict verify -- check a captured log against a spec and write a report.

Resolves the spec, log and report paths from arguments or
logverdict.yaml, runs the verification pipeline, renders the verdict and
exits with a status-specific code.
"""

from __future__ import annotations

from pathlib import Path
from typing import Optional

import typer
import yaml
from pydantic import ValidationError
from rich.console import Console

from logverdict.cli.logging_setup import configure_logging
from logverdict.cli.output import output_json, render_details, render_headline
from logverdict.evaluation.formatting import format_result
from logverdict.evaluation.verifier import verify_files
from logverdict.loader import SOURCE_REGISTRY
from logverdict.models.config import ProjectConfig, find_project_root, load_project_config
from logverdict.models.result import Status
from logverdict.storage.report_writer import write_report

console = Console(stderr=True)

# Exit code mapping: status -> exit code
EXIT_CODES: dict[Status, int] = {
    Status.PASS: 0,
    Status.FAIL: 1,
    Status.INCONCLUSIVE: 2,
}
USAGE_ERROR = 2


def load_config_or_exit() -> tuple[Path, ProjectConfig]:
    """Find and load logverdict.yaml, exiting with a usage error if invalid."""
    project_root = find_project_root()
    try:
        config = load_project_config(project_root)
    except (ValidationError, yaml.YAMLError) as exc:
        console.print(f"[bold red]Invalid logverdict.yaml:[/bold red] {exc}")
        raise typer.Exit(code=USAGE_ERROR)
    return project_root, config


def verify(
    ctx: typer.Context,
    spec: Optional[str] = typer.Argument(None, help="Spec document (default: from logverdict.yaml)"),
    log: Optional[str] = typer.Argument(None, help="Captured log (default: from logverdict.yaml)"),
    output: Optional[str] = typer.Option(None, "--output", "-o", help="Report path (.md or .json)"),
    dialect: Optional[str] = typer.Option(None, "--dialect", help="auto, contract or checklist"),
    fail_marker: Optional[str] = typer.Option(None, "--fail-marker", help="Literal that fails the run"),
    no_report: bool = typer.Option(False, "--no-report", help="Do not write the report file"),
    format_json: bool = typer.Option(False, "--json", help="Output pure JSON to stdout"),
    verbose: bool = typer.Option(False, "-V", "--verbose", help="Show details even on pass"),
    ci: bool = typer.Option(False, "--ci", help="Plain-text CI output"),
) -> None:
    """Verify a captured log against a spec document."""
    project_root, config = load_config_or_exit()
    configure_logging((ctx.obj or {}).get("log_level") or config.log_level)

    effective_dialect = dialect or config.dialect
    if effective_dialect != "auto" and effective_dialect not in SOURCE_REGISTRY:
        console.print(
            f"[bold red]Unknown dialect {effective_dialect!r}.[/bold red] "
            f"Use auto, {', '.join(sorted(SOURCE_REGISTRY))}."
        )
        raise typer.Exit(code=USAGE_ERROR)

    spec_path = Path(spec) if spec else config.resolve(project_root, config.spec_path)
    log_path = Path(log) if log else config.resolve(project_root, config.log_path)
    output_path = Path(output) if output else config.resolve(project_root, config.output_path)

    result = verify_files(
        spec_path,
        log_path,
        dialect=effective_dialect,
        checklist_header=config.checklist_header,
        fail_marker=fail_marker if fail_marker is not None else config.fail_marker,
    )

    if format_json:
        output_json(result)
    elif ci or config.ci_mode:
        typer.echo(format_result(result, verbose=verbose))
    else:
        render_headline(result, console)
        if result.status is not Status.PASS or verbose:
            render_details(result, console)

    if not no_report:
        if write_report(result, output_path):
            console.print(f"[dim]Report written -> {output_path}[/dim]")
        else:
            console.print(f"[yellow]Warning: could not write report to {output_path}[/yellow]")

    raise typer.Exit(code=EXIT_CODES[result.status])
