"""Evidence evaluator -- first-match scan plus closest-line hints.

Evidence is existence only: the first normalized line matching an
assertion's matcher wins. Cardinality and recency are never considered.
"""

from __future__ import annotations

import re

from logverdict.models.log import LogLine
from logverdict.models.result import EvidenceResult
from logverdict.models.spec import Assertion

HINT_SEPARATORS = re.compile(r"[/: ]")
HINT_WORD = re.compile(r"[0-9A-Za-z_]+")
MIN_HINT_LENGTH = 3


def find_first_match(lines: list[LogLine], assertion: Assertion) -> LogLine | None:
    """Return the first line whose normalized text matches, or None."""
    for line in lines:
        if assertion.matcher.matches(line.text):
            return line
    return None


def evaluate_assertion(lines: list[LogLine], assertion: Assertion) -> EvidenceResult:
    """Scan *lines* for *assertion* and return an EvidenceResult."""
    match = find_first_match(lines, assertion)
    if match is None:
        return EvidenceResult(
            key=assertion.key,
            raw=assertion.raw,
            category=assertion.category.value,
            found=False,
        )
    return EvidenceResult(
        key=assertion.key,
        raw=assertion.raw,
        category=assertion.category.value,
        found=True,
        line_number=match.number,
        snippet=match.original,
    )


def evaluate_assertions(lines: list[LogLine], assertions: list[Assertion]) -> list[EvidenceResult]:
    return [evaluate_assertion(lines, a) for a in assertions]


def extract_hint(raw: str) -> str | None:
    """Pick the longest word of at least three characters before the first separator.

    Separators are ``/``, ``:`` and space. Returns None when no word
    qualifies.
    """
    head = HINT_SEPARATORS.split(raw, maxsplit=1)[0]
    words = [w for w in HINT_WORD.findall(head) if len(w) >= MIN_HINT_LENGTH]
    if not words:
        return None
    return max(words, key=len)


def find_hint_line(lines: list[LogLine], raw: str) -> LogLine | None:
    """Find the first line containing the hint word (case-insensitive)."""
    hint = extract_hint(raw)
    if hint is None:
        return None
    needle = hint.lower()
    for line in lines:
        if needle in line.text.lower():
            return line
    return None


def describe_hint(lines: list[LogLine], raw: str) -> str:
    """Low-confidence pointer text for a missing assertion."""
    line = find_hint_line(lines, raw)
    if line is None:
        return "No close match found."
    return f"Closest match: line {line.number}: {line.original}"
