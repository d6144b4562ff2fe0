"""Token balance checker -- Acquire/Release tallies per resource token.

The check is open-world: every token mentioned in the log is counted,
whether or not the spec names it.
"""

from __future__ import annotations

import re

from logverdict.models.log import LogLine
from logverdict.models.result import TokenCount

ACQUIRE_PATTERN = re.compile(r"Acquire\s+token=['\"]([^'\"]+)['\"]", re.IGNORECASE)
RELEASE_PATTERN = re.compile(r"Release\s+token=['\"]([^'\"]+)['\"]", re.IGNORECASE)


def count_tokens(lines: list[LogLine]) -> dict[str, TokenCount]:
    """Tally Acquire/Release mentions per token, sorted by token name."""
    counts: dict[str, TokenCount] = {}
    for line in lines:
        for match in ACQUIRE_PATTERN.finditer(line.text):
            counts.setdefault(match.group(1), TokenCount()).acquire += 1
        for match in RELEASE_PATTERN.finditer(line.text):
            counts.setdefault(match.group(1), TokenCount()).release += 1
    return dict(sorted(counts.items()))


def imbalanced(counts: dict[str, TokenCount]) -> dict[str, TokenCount]:
    return {name: c for name, c in counts.items() if not c.balanced}


def describe_imbalance(name: str, count: TokenCount) -> str:
    return (
        f"Token imbalance: `{name}` (Acquire={count.acquire}, Release={count.release})"
    )
