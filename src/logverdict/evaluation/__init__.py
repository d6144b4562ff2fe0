"""Evaluation package for log normalization, evidence, order and tokens.

Provides the normalizer, the three evaluators, the aggregator that turns
their outputs into one verdict, and the verification entry points.
"""

from __future__ import annotations

from logverdict.evaluation.aggregation import aggregate, build_block_result
from logverdict.evaluation.evidence import evaluate_assertion, extract_hint
from logverdict.evaluation.normalizer import load_log, normalize_lines, parse_log
from logverdict.evaluation.order import validate_order_rule
from logverdict.evaluation.tokens import count_tokens
from logverdict.evaluation.verifier import verify_documents, verify_files

__all__ = [
    "aggregate",
    "build_block_result",
    "count_tokens",
    "evaluate_assertion",
    "extract_hint",
    "load_log",
    "normalize_lines",
    "parse_log",
    "validate_order_rule",
    "verify_documents",
    "verify_files",
]
