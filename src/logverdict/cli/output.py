"""Rich terminal output layer for verification results.

Provides the headline verdict table, block and token detail sections,
and JSON output for VerificationResult display in terminal and CI.
"""

from __future__ import annotations

import sys
from typing import TYPE_CHECKING

from rich import box
from rich.console import Console
from rich.markup import escape
from rich.table import Table

if TYPE_CHECKING:
    from logverdict.models.result import BlockResult, VerificationResult


# Status styling map: status value -> (symbol, Rich markup style)
_STATUS_STYLES: dict[str, tuple[str, str]] = {
    "Pass": ("✓ PASS", "bold green"),
    "Fail": ("✗ FAIL", "bold red"),
    "Inconclusive": ("? INCONCLUSIVE", "bold yellow"),
}


def status_display(value: str) -> tuple[str, str]:
    """Return (symbol, style) for a status value."""
    return _STATUS_STYLES.get(value, ("✗ UNKNOWN", "bold red"))


def render_headline(result: VerificationResult, console: Console) -> None:
    """Render a compact key-value verdict table for the result."""
    table = Table(box=box.SIMPLE, show_header=False, padding=(0, 2))
    table.add_column("Key", style="bold")
    table.add_column("Value")

    symbol, style = status_display(result.status.value)
    table.add_row("Verdict", f"[{style}]{symbol}[/{style}]")
    table.add_row("Spec", f"{escape(result.spec_path)} ({result.dialect or 'n/a'})")
    table.add_row("Log", f"{escape(result.log_path)} ({result.log_line_count} lines)")

    passed = sum(1 for b in result.blocks if b.status.value == "Pass")
    table.add_row(
        "Blocks",
        f"{passed}/{len(result.blocks)} passed, {result.rule_count} rules",
    )

    if result.global_invariants is not None:
        inv_symbol, inv_style = status_display(result.global_invariants.status.value)
        table.add_row("Invariants", f"[{inv_style}]{inv_symbol}[/{inv_style}]")

    leaks = result.imbalanced_tokens
    if result.tokens:
        table.add_row("Tokens", f"{len(result.tokens)} tracked, {len(leaks)} imbalanced")

    if result.capture_id:
        table.add_row("Capture", escape(result.capture_id))

    if result.fail_marker is not None:
        table.add_row("Fail marker", f"line {result.fail_marker.line_number}")

    console.print()
    console.print(table)


def _render_block(block: BlockResult, console: Console, failures_only: bool) -> None:
    symbol, style = status_display(block.status.value)
    if failures_only and block.status.value != "Fail":
        return
    console.print(f"[{style}]{symbol}[/{style}] [bold]{escape(block.name)}[/bold]")
    for item in block.missing_hard:
        console.print(f"    [red]missing[/red] \\[hard] {escape(item.key)}: {escape(item.raw)}")
        if item.hint:
            console.print(f"      [dim]{escape(item.hint)}[/dim]")
    for item in block.missing_soft:
        console.print(f"    [yellow]missing[/yellow] \\[soft] {escape(item.key)}: {escape(item.raw)}")
    for violation in block.order_violations:
        console.print(f"    [red]{escape(violation)}[/red]")
    for rule in block.order_rules:
        if rule.outcome.value == "not_exercised":
            console.print(f"    [dim]order rule not exercised: {escape(rule.key)}[/dim]")


def render_details(
    result: VerificationResult,
    console: Console,
    *,
    failures_only: bool = False,
) -> None:
    """Render per-block findings, the token table and the diagnostics."""
    console.print()

    blocks = list(result.blocks)
    if result.global_invariants is not None:
        blocks.append(result.global_invariants)
    if blocks:
        console.print("[bold]Blocks[/bold]")
        for block in blocks:
            _render_block(block, console, failures_only)
        console.print()

    if result.tokens:
        table = Table(box=box.ROUNDED, title="Token Balance")
        table.add_column("Token")
        table.add_column("Acquire", justify="right")
        table.add_column("Release", justify="right")
        table.add_column("Balanced")
        for name, count in result.tokens.items():
            if failures_only and count.balanced:
                continue
            mark = "[green]yes[/green]" if count.balanced else "[bold red]no[/bold red]"
            table.add_row(escape(name), str(count.acquire), str(count.release), mark)
        console.print(table)
        console.print()

    if result.diagnostics:
        console.print("[bold]Diagnostics[/bold]")
        for i, diagnostic in enumerate(result.diagnostics, 1):
            console.print(f"  {i}. {escape(diagnostic)}")
        console.print()

    console.print(f"[dim]{escape(result.summary)}[/dim]")


def output_json(result: VerificationResult) -> None:
    """Write the result as pure JSON to stdout."""
    sys.stdout.write(result.model_dump_json(indent=2))
    sys.stdout.write("\n")
