"""Verification pipeline: parse spec, parse log, evaluate, aggregate.

Every invocation builds its own SpecDocument, LogDocument and results
from the two input documents; nothing is shared across calls.
"""

from __future__ import annotations

import logging
from pathlib import Path

from logverdict.evaluation.aggregation import aggregate, build_block_result
from logverdict.evaluation.evidence import describe_hint, evaluate_assertions
from logverdict.evaluation.normalizer import load_log
from logverdict.evaluation.order import validate_order_rules
from logverdict.evaluation.tokens import count_tokens
from logverdict.loader import load_spec
from logverdict.models.config import DEFAULT_CHECKLIST_HEADER
from logverdict.models.log import LogDocument, LogLine
from logverdict.models.result import BlockResult, FailMarkerHit, Status, VerificationResult
from logverdict.models.spec import Block, Dialect, SpecDocument

logger = logging.getLogger(__name__)


def find_fail_marker(lines: list[LogLine], marker: str | None) -> FailMarkerHit | None:
    """Return the first line containing *marker* literally, if any."""
    if not marker:
        return None
    for line in lines:
        if marker in line.text:
            return FailMarkerHit(line_number=line.number, text=line.original)
    return None


def evaluate_block(lines: list[LogLine], block: Block, with_hints: bool = False) -> BlockResult:
    """Run the evidence and order evaluators over one block."""
    evidence = evaluate_assertions(lines, block.hard + block.soft)
    if with_hints:
        for item in evidence:
            if not item.found:
                item.hint = describe_hint(lines, item.raw)
    order_rules = validate_order_rules(lines, block.order_rules)
    return build_block_result(block.name, evidence, order_rules)


def verify_documents(
    spec: SpecDocument,
    log: LogDocument,
    *,
    fail_marker: str | None = None,
) -> VerificationResult:
    """Verify an already-parsed log against an already-parsed spec."""
    with_hints = spec.dialect is Dialect.contract
    lines = log.lines

    if log.usable:
        blocks = [evaluate_block(lines, block, with_hints) for block in spec.blocks]
        global_result = evaluate_block(lines, spec.global_invariants, with_hints)
    else:
        # Nothing to match against; blocks are not evaluated.
        blocks = [BlockResult(name=b.name, status=Status.INCONCLUSIVE) for b in spec.blocks]
        global_result = BlockResult(name=spec.global_invariants.name, status=Status.INCONCLUSIVE)
    tokens = count_tokens(lines)
    marker_hit = find_fail_marker(lines, fail_marker)

    result = aggregate(spec, log, blocks, global_result, tokens, marker_hit)
    logger.info("Verification finished: %s", result.summary)
    return result


def verify_files(
    spec_path: Path,
    log_path: Path,
    *,
    dialect: str = "auto",
    checklist_header: str = DEFAULT_CHECKLIST_HEADER,
    fail_marker: str | None = None,
) -> VerificationResult:
    """Load both documents from disk and verify. Never raises for I/O problems."""
    spec = load_spec(spec_path, dialect=dialect, checklist_header=checklist_header)
    log = load_log(log_path)
    return verify_documents(spec, log, fail_marker=fail_marker)
