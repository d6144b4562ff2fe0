"""Report aggregator -- combines evaluator outputs into one verdict.

Status precedence:
1. spec or log produced no usable rules/lines -> Inconclusive
2. any block Fail, global invariants Fail, token imbalance or fail
   marker -> Fail
3. otherwise -> Pass

Diagnostics are append-only and never short-circuit, so one run surfaces
the complete defect set.
"""

from __future__ import annotations

from datetime import datetime, timezone

from logverdict.evaluation.tokens import describe_imbalance, imbalanced
from logverdict.models.log import LogDocument
from logverdict.models.result import (
    BlockResult,
    EvidenceResult,
    FailMarkerHit,
    OrderOutcome,
    OrderRuleResult,
    Status,
    TokenCount,
    VerificationResult,
)
from logverdict.models.spec import SpecDocument


def build_block_result(
    name: str,
    evidence: list[EvidenceResult],
    order_rules: list[OrderRuleResult],
) -> BlockResult:
    """Block fails iff hard evidence is missing or an order rule is violated.

    Soft evidence never affects the status.
    """
    violations = [v for rule in order_rules for v in rule.violations]
    hard_missing = any(e.category == "hard" and not e.found for e in evidence)
    status = Status.FAIL if hard_missing or violations else Status.PASS
    return BlockResult(
        name=name,
        status=status,
        evidence=evidence,
        order_rules=order_rules,
        order_violations=violations,
    )


def _block_diagnostics(block: BlockResult) -> list[str]:
    diagnostics: list[str] = []
    for item in block.missing_hard:
        message = f"Missing hard evidence `{item.key}`: `{item.raw}` (block {block.name})."
        if item.hint:
            message += f" {item.hint}"
        diagnostics.append(message)
    for item in block.missing_soft:
        message = f"Missing soft evidence `{item.key}`: `{item.raw}` (block {block.name})."
        if item.hint:
            message += f" {item.hint}"
        diagnostics.append(message)
    diagnostics.extend(f"{v} (block {block.name})" for v in block.order_violations)
    for rule in block.order_rules:
        if rule.outcome is OrderOutcome.not_exercised:
            diagnostics.append(
                f"Order rule not exercised: {rule.key} (block {block.name}). "
                f"before=`{rule.before}`, after=`{rule.after}`"
            )
    return diagnostics


def build_summary(result: VerificationResult) -> str:
    blocks = result.blocks
    passed = sum(1 for b in blocks if b.status is Status.PASS)
    failed = sum(1 for b in blocks if b.status is Status.FAIL)
    return (
        f"Status={result.status.value} | Blocks={len(blocks)} | Pass={passed} | "
        f"Fail={failed} | LogLines={result.log_line_count} | "
        f"Tokens={len(result.tokens)} (imbalanced={len(result.imbalanced_tokens)})"
    )


def aggregate(
    spec: SpecDocument,
    log: LogDocument,
    blocks: list[BlockResult],
    global_invariants: BlockResult,
    tokens: dict[str, TokenCount],
    fail_marker: FailMarkerHit | None = None,
    generated_at: datetime | None = None,
) -> VerificationResult:
    """Combine all evaluator outputs into a VerificationResult."""
    diagnostics: list[str] = [str(d) for d in spec.diagnostics]
    diagnostics.extend(log.diagnostics)

    for block in blocks:
        diagnostics.extend(_block_diagnostics(block))
    diagnostics.extend(_block_diagnostics(global_invariants))

    leaks = imbalanced(tokens)
    diagnostics.extend(describe_imbalance(name, count) for name, count in leaks.items())

    if fail_marker is not None:
        diagnostics.append(
            f"Fail marker found at line {fail_marker.line_number}: {fail_marker.text}"
        )

    if spec.is_empty or not log.usable:
        status = Status.INCONCLUSIVE
    elif (
        any(b.status is Status.FAIL for b in blocks)
        or global_invariants.status is Status.FAIL
        or leaks
        or fail_marker is not None
    ):
        status = Status.FAIL
    else:
        status = Status.PASS

    stamp = generated_at or datetime.now(timezone.utc)
    result = VerificationResult(
        status=status,
        dialect=spec.dialect.value,
        spec_path=spec.source,
        log_path=log.source,
        generated_at=stamp.strftime("%Y-%m-%d %H:%M:%SZ"),
        started_utc=log.started_utc,
        capture_id=log.capture_id,
        log_line_count=log.line_count,
        rule_count=spec.rule_count,
        blocks=blocks,
        global_invariants=global_invariants,
        tokens=tokens,
        fail_marker=fail_marker,
        diagnostics=diagnostics,
    )
    result.summary = build_summary(result)
    return result
