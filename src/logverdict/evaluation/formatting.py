"""Plain-text result formatting with severity ordering.

Minimal on pass, detailed on fail, full detail on demand. Used for CI
output where Rich markup is unwanted.
"""

from __future__ import annotations

from logverdict.models.result import BlockResult, OrderOutcome, Status, VerificationResult


def _block_lines(block: BlockResult, verbose: bool) -> list[str]:
    lines = [f"  {block.status.value.upper():<5}  {block.name}"]

    for item in block.missing_hard:
        lines.append(f"             missing [hard] {item.key}: {item.raw}")
        if item.hint:
            lines.append(f"               {item.hint}")
    for item in block.missing_soft:
        lines.append(f"             missing [soft] {item.key}: {item.raw}")
    for violation in block.order_violations:
        lines.append(f"             {violation}")

    if verbose:
        for item in block.evidence:
            if item.found:
                lines.append(f"             found   line {item.line_number}: {item.key}")
        for rule in block.order_rules:
            if rule.outcome is not OrderOutcome.violated:
                lines.append(
                    f"             order   {rule.key}: {rule.outcome.value} "
                    f"(before={rule.before_count}, after={rule.after_count})"
                )
    return lines


def format_result(result: VerificationResult, verbose: bool = False) -> str:
    """Format a VerificationResult for terminal or CI output.

    On pass (not verbose): the summary line only.
    Otherwise: summary, failing blocks first, token imbalances and the
    full diagnostics list.
    """
    lines: list[str] = [result.summary]

    if result.status is Status.PASS and not verbose:
        return "\n".join(lines)

    lines.append("")

    blocks = list(result.blocks)
    invariants = result.global_invariants
    if invariants is not None and (invariants.evidence or invariants.order_rules):
        blocks.append(invariants)

    failing = [b for b in blocks if b.status is Status.FAIL]
    passing = [b for b in blocks if b.status is not Status.FAIL]
    for block in failing + (passing if verbose else []):
        lines.extend(_block_lines(block, verbose))

    leaks = result.imbalanced_tokens
    if leaks:
        lines.append("")
        lines.append("  Token imbalance:")
        for name, count in leaks.items():
            lines.append(f"    {name}  acquire={count.acquire} release={count.release}")

    if result.diagnostics:
        lines.append("")
        lines.append("  Diagnostics:")
        lines.extend(f"    - {d}" for d in result.diagnostics)

    return "\n".join(lines)
