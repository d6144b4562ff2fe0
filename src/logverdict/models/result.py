"""Result data models for verification runs.

These models encode the report contract: per-evidence matches,
per-order-rule outcomes, per-block verdicts, the token balance table and
the overall verdict with its diagnostics. They serialize to JSON and
round-trip losslessly.
"""

from __future__ import annotations

from enum import Enum

from pydantic import BaseModel, Field


class Status(str, Enum):
    """Verdict of a block or of a whole verification run."""

    PASS = "Pass"
    FAIL = "Fail"
    INCONCLUSIVE = "Inconclusive"


class OrderOutcome(str, Enum):
    """Outcome of a single order rule."""

    validated = "validated"
    violated = "violated"
    not_exercised = "not_exercised"


class EvidenceResult(BaseModel):
    """First-match result for one assertion."""

    key: str
    raw: str
    category: str = "hard"
    found: bool
    line_number: int = 0
    snippet: str = ""
    hint: str | None = None


class OrderRuleResult(BaseModel):
    """Outcome of one Before/After order rule."""

    key: str
    before: str
    after: str
    outcome: OrderOutcome
    before_count: int = 0
    after_count: int = 0
    violations: list[str] = Field(default_factory=list)

    @property
    def exercised(self) -> bool:
        return self.outcome is not OrderOutcome.not_exercised


class BlockResult(BaseModel):
    """Verdict for one block (or for the global invariants)."""

    name: str
    status: Status
    evidence: list[EvidenceResult] = Field(default_factory=list)
    order_rules: list[OrderRuleResult] = Field(default_factory=list)
    order_violations: list[str] = Field(default_factory=list)

    @property
    def missing_hard(self) -> list[EvidenceResult]:
        return [e for e in self.evidence if e.category == "hard" and not e.found]

    @property
    def missing_soft(self) -> list[EvidenceResult]:
        return [e for e in self.evidence if e.category == "soft" and not e.found]


class TokenCount(BaseModel):
    """Acquire/Release tally for one resource token."""

    acquire: int = 0
    release: int = 0

    @property
    def balanced(self) -> bool:
        return self.acquire == self.release


class FailMarkerHit(BaseModel):
    """First log line carrying the configured fail marker."""

    line_number: int
    text: str


class VerificationResult(BaseModel):
    """Complete result of verifying one log against one spec.

    Contains run metadata, per-block verdicts, the global invariant
    verdict, the token balance table and the append-only diagnostics.
    """

    status: Status
    summary: str = ""
    dialect: str | None = None
    spec_path: str = ""
    log_path: str = ""
    generated_at: str = ""
    started_utc: str | None = None
    capture_id: str | None = None
    log_line_count: int = 0
    rule_count: int = 0
    blocks: list[BlockResult] = Field(default_factory=list)
    global_invariants: BlockResult | None = None
    tokens: dict[str, TokenCount] = Field(default_factory=dict)
    fail_marker: FailMarkerHit | None = None
    diagnostics: list[str] = Field(default_factory=list)

    @property
    def imbalanced_tokens(self) -> dict[str, TokenCount]:
        return {name: c for name, c in self.tokens.items() if not c.balanced}
