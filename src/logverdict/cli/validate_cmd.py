"""logverdict validate CLI command for spec document validation.

Parses spec documents without a log, reporting every diagnostic at once
with human or CI-friendly formatting.
"""

from __future__ import annotations

from pathlib import Path
from typing import Optional

import typer

from logverdict.cli.logging_setup import configure_logging
from logverdict.cli.verify_cmd import load_config_or_exit
from logverdict.loader import parse_spec
from logverdict.loader.errors import DiagnosticFormatter


def validate(
    ctx: typer.Context,
    specs: Optional[list[str]] = typer.Argument(
        None, help="Spec documents to validate (default: spec_path from logverdict.yaml)"
    ),
    dialect: Optional[str] = typer.Option(None, "--dialect", help="auto, contract or checklist"),
    ci: bool = typer.Option(False, "--ci", help="CI-friendly concise output"),
) -> None:
    """Validate spec documents.

    Exits with code 0 if every document parses cleanly into at least one
    rule, 1 otherwise.
    """
    project_root, config = load_config_or_exit()
    configure_logging((ctx.obj or {}).get("log_level") or config.log_level)
    formatter = DiagnosticFormatter(ci_mode=(ci or config.ci_mode) or None)

    files: list[Path] = []
    if specs:
        for s in specs:
            p = Path(s)
            if not p.exists():
                typer.echo(f"Error: File not found: {s}", err=True)
                raise typer.Exit(code=1)
            files.append(p)
    else:
        default = config.resolve(project_root, config.spec_path)
        if not default.exists():
            typer.echo(f"No spec files found. Specify files or create {config.spec_path}.")
            raise typer.Exit(code=1)
        files.append(default)

    total = len(files)
    valid_count = 0

    for filepath in files:
        try:
            source = filepath.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as exc:
            typer.echo(f"Error: Could not read {filepath}: {exc}", err=True)
            raise typer.Exit(code=1)

        try:
            doc = parse_spec(
                source,
                str(filepath),
                dialect=dialect or config.dialect,
                checklist_header=config.checklist_header,
            )
        except ValueError as exc:
            typer.echo(f"Error: {exc}", err=True)
            raise typer.Exit(code=2)

        if doc.diagnostics or doc.is_empty:
            typer.echo(formatter.format_all(doc.diagnostics, source, str(filepath)), err=not formatter.ci_mode)
        else:
            valid_count += 1
            formatter.print_success(str(filepath), doc.rule_count)

    typer.echo(f"\n{valid_count}/{total} specs valid")

    if valid_count < total:
        raise typer.Exit(code=1)
