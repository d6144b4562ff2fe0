"""Rule model shared by every spec dialect.

A SpecDocument is the uniform shape both front-ends (contract and
checklist) parse into: an ordered list of blocks plus one block-shaped set
of global invariants. Compiled matchers are derived at parse time and are
never serialized.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum

from logverdict.patterns.compiler import Matcher

GLOBAL_INVARIANTS_NAME = "Global Invariants"


class Category(str, Enum):
    """Whether missing evidence fails the block or is only reported."""

    hard = "hard"
    soft = "soft"


class Dialect(str, Enum):
    """Supported spec document dialects."""

    contract = "contract"
    checklist = "checklist"


class DiagnosticKind(str, Enum):
    """Taxonomy of spec-level problems."""

    input_missing = "InputMissing"
    spec_malformed = "SpecMalformed"
    spec_empty = "SpecEmpty"


@dataclass
class SpecDiagnostic:
    """A problem found while loading or parsing a spec document.

    Attributes:
        message: Human-readable description.
        kind: Taxonomy bucket for the problem.
        line: 1-indexed source line, or None for document-level problems.
    """

    message: str
    kind: DiagnosticKind = DiagnosticKind.spec_malformed
    line: int | None = None

    def __str__(self) -> str:
        if self.line is None:
            return self.message
        return f"{self.message} (spec line {self.line})"


@dataclass
class Assertion:
    """A named pattern that must (hard) or should (soft) appear in the log."""

    key: str
    raw: str
    matcher: Matcher = field(repr=False, compare=False)
    category: Category = Category.hard
    line: int | None = None


@dataclass
class OrderRule:
    """Before/After pattern pair asserting temporal precedence."""

    key: str
    before_raw: str
    after_raw: str
    before: Matcher = field(repr=False, compare=False)
    after: Matcher = field(repr=False, compare=False)
    line: int | None = None


@dataclass
class Block:
    """A named group of assertions and order rules for one run phase."""

    name: str
    hard: list[Assertion] = field(default_factory=list)
    soft: list[Assertion] = field(default_factory=list)
    order_rules: list[OrderRule] = field(default_factory=list)

    @property
    def rule_count(self) -> int:
        return len(self.hard) + len(self.soft) + len(self.order_rules)

    def add(self, assertion: Assertion) -> None:
        if assertion.category is Category.hard:
            self.hard.append(assertion)
        else:
            self.soft.append(assertion)


@dataclass
class SpecDocument:
    """Parsed contract: blocks plus global invariants plus diagnostics."""

    dialect: Dialect
    source: str = "<string>"
    blocks: list[Block] = field(default_factory=list)
    global_invariants: Block = field(
        default_factory=lambda: Block(name=GLOBAL_INVARIANTS_NAME)
    )
    diagnostics: list[SpecDiagnostic] = field(default_factory=list)

    @property
    def rule_count(self) -> int:
        return sum(b.rule_count for b in self.blocks) + self.global_invariants.rule_count

    @property
    def is_empty(self) -> bool:
        return self.rule_count == 0
