"""logverdict data models - re-exports all public model classes."""

from logverdict.models.config import ProjectConfig
from logverdict.models.log import LogDocument, LogLine
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
from logverdict.models.spec import (
    Assertion,
    Block,
    Category,
    DiagnosticKind,
    Dialect,
    OrderRule,
    SpecDiagnostic,
    SpecDocument,
)

__all__ = [
    "Assertion",
    "Block",
    "BlockResult",
    "Category",
    "DiagnosticKind",
    "Dialect",
    "EvidenceResult",
    "FailMarkerHit",
    "LogDocument",
    "LogLine",
    "OrderOutcome",
    "OrderRule",
    "OrderRuleResult",
    "ProjectConfig",
    "SpecDiagnostic",
    "SpecDocument",
    "Status",
    "TokenCount",
    "VerificationResult",
]
