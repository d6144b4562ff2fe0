"""Report rendering and persistence.

Renders a VerificationResult as a Markdown report (or JSON when the output
path ends in ``.json``) and writes it atomically: the full report is
built in memory, written to a temporary sibling file and renamed over the
target, so a partially written report is never observable.
"""

from __future__ import annotations

import contextlib
import logging
from pathlib import Path

from logverdict.models.result import BlockResult, Status, VerificationResult

logger = logging.getLogger(__name__)

REPORT_TITLE = "# Log Verification Report (Last Run)"


def _na(value: str | None) -> str:
    return value if value else "n/a"


def _block_details(block: BlockResult) -> list[str]:
    lines = [f"### {block.name} — **{block.status.value}**", ""]

    found = [e for e in block.evidence if e.found]
    if found:
        lines.append("**Evidence found:**")
        lines.extend(
            f"- [{e.category}] `{e.key}` at line {e.line_number}: `{e.snippet.strip()}`"
            for e in found
        )
        lines.append("")

    if block.missing_hard:
        lines.append("**Missing evidence (hard):**")
        for e in block.missing_hard:
            hint = f" — {e.hint}" if e.hint else ""
            lines.append(f"- `{e.key}`: `{e.raw}`{hint}")
        lines.append("")

    if block.missing_soft:
        lines.append("**Missing evidence (soft):**")
        lines.extend(f"- `{e.key}`: `{e.raw}`" for e in block.missing_soft)
        lines.append("")

    if block.order_rules:
        lines.append("**Order rules:**")
        for rule in block.order_rules:
            lines.append(
                f"- `{rule.key}`: {rule.outcome.value} "
                f"(before={rule.before_count}, after={rule.after_count})"
            )
            lines.extend(f"  - {v}" for v in rule.violations)
        lines.append("")

    if len(lines) == 2:
        lines.extend(["No rules declared.", ""])
    return lines


def render_markdown(result: VerificationResult, output_path: str = "") -> str:
    """Render the full Markdown report for *result*."""
    lines: list[str] = [
        REPORT_TITLE,
        "",
        f"- GeneratedAt: `{result.generated_at}`",
        f"- Status: **{result.status.value}**",
        f"- Dialect: `{_na(result.dialect)}`",
        f"- Log lines: {result.log_line_count}",
        f"- Rules: {result.rule_count}",
        f"- CaptureId: `{_na(result.capture_id)}`",
        f"- StartedUtc: `{_na(result.started_utc)}`",
        "",
        "## Inputs (paths)",
        "",
        f"- Spec: `{result.spec_path}`",
        f"- Log: `{result.log_path}`",
        f"- Output: `{output_path}`",
        "",
        "## Diagnostics",
        "",
    ]
    if result.diagnostics:
        lines.extend(f"- {d}" for d in result.diagnostics)
    else:
        lines.append("- None.")
    lines.append("")

    lines.extend([
        "## Block Results",
        "",
        "| Block | Result | Missing (Hard) | Missing (Soft) | Order Violations |",
        "|---|---:|---:|---:|---:|",
    ])
    for block in result.blocks:
        lines.append(
            f"| {block.name} | **{block.status.value}** | {len(block.missing_hard)} | "
            f"{len(block.missing_soft)} | {len(block.order_violations)} |"
        )
    lines.append("")

    invariants = result.global_invariants
    if invariants is not None:
        lines.extend([
            "## Global Invariants",
            "",
            "| Result | Missing (Hard) | Order Violations |",
            "|---:|---:|---:|",
            f"| **{invariants.status.value}** | {len(invariants.missing_hard)} | "
            f"{len(invariants.order_violations)} |",
            "",
        ])

    if result.status is Status.FAIL:
        lines.extend(_fail_reasons(result))

    lines.extend([
        "## Token Summary (Acquire/Release)",
        "",
        "| Token | Acquire | Release | Balanced |",
        "|---|---:|---:|:---:|",
    ])
    for name, count in result.tokens.items():
        mark = "yes" if count.balanced else "**no**"
        lines.append(f"| `{name}` | {count.acquire} | {count.release} | {mark} |")
    lines.append("")

    lines.extend(["## Details", ""])
    for block in result.blocks:
        lines.extend(_block_details(block))
    if invariants is not None:
        lines.extend(_block_details(invariants))

    lines.extend(["## Summary", "", result.summary, ""])
    return "\n".join(lines)


def _fail_reasons(result: VerificationResult) -> list[str]:
    lines = ["## Fail Reasons", ""]

    leaks = result.imbalanced_tokens
    if leaks:
        lines.append("### Token imbalance")
        lines.extend(
            f"- `{name}` (Acquire={c.acquire}, Release={c.release})" for name, c in leaks.items()
        )
        lines.append("")

    if result.fail_marker is not None:
        lines.append("### Fail marker")
        lines.append(f"- line {result.fail_marker.line_number}: `{result.fail_marker.text}`")
        lines.append("")

    invariants = result.global_invariants
    if invariants is not None and invariants.status is Status.FAIL:
        lines.append("### Global invariants")
        lines.append(
            f"- missingHard={len(invariants.missing_hard)}, "
            f"orderViolations={len(invariants.order_violations)}"
        )
        lines.append("")

    failing = [b for b in result.blocks if b.status is Status.FAIL]
    if failing:
        lines.append("### Block failures")
        lines.extend(
            f"- `{b.name}`: missingHard={len(b.missing_hard)}, "
            f"orderViolations={len(b.order_violations)}"
            for b in failing
        )
        lines.append("")
    return lines


def render_report(result: VerificationResult, output_path: Path) -> str:
    """Pick the report format from the output suffix."""
    if output_path.suffix.lower() == ".json":
        return result.model_dump_json(indent=2) + "\n"
    return render_markdown(result, str(output_path))


def write_report(result: VerificationResult, output_path: Path) -> bool:
    """Write the report atomically. Returns False on I/O failure.

    The already-computed *result* is never altered.
    """
    content = render_report(result, output_path)
    tmp_file = output_path.with_name(output_path.name + ".tmp")
    try:
        output_path.parent.mkdir(parents=True, exist_ok=True)
        tmp_file.write_text(content, encoding="utf-8")
        tmp_file.replace(output_path)
    except OSError as exc:
        logger.warning("Failed to write report %s: %s: %s", output_path, type(exc).__name__, exc)
        with contextlib.suppress(OSError):
            tmp_file.unlink(missing_ok=True)
        return False
    logger.info("Report written -> %s", output_path)
    return True


def load_report(path: Path) -> VerificationResult:
    """Load a JSON report written by write_report.

    Raises:
        FileNotFoundError: If the report does not exist.
        pydantic.ValidationError: If the file is not a valid report.
    """
    return VerificationResult.model_validate_json(path.read_text(encoding="utf-8"))
