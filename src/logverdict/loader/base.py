"""Base class for spec front-ends and the helpers they share.

Each dialect is a SpecSource subclass that turns document text into a
SpecDocument. Sources never raise for data-shaped problems: a rule whose
pattern does not compile is dropped and recorded as a diagnostic.
"""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass
from enum import Enum

from logverdict.models.spec import (
    Assertion,
    Category,
    DiagnosticKind,
    Dialect,
    OrderRule,
    SpecDiagnostic,
    SpecDocument,
)
from logverdict.patterns.compiler import PatternError, compile_pattern

logger = logging.getLogger(__name__)


class Scope(str, Enum):
    """Where collected rules land."""

    NONE = "none"
    IN_BLOCK = "in_block"
    IN_GLOBAL_INVARIANTS = "in_global_invariants"


class Section(str, Enum):
    """Which collection inside the current scope receives bullets."""

    NONE = "none"
    HARD = "hard"
    SOFT = "soft"
    ORDER = "order"


@dataclass(frozen=True)
class ParserState:
    """Explicit (scope, section) state of a line-oriented spec parser."""

    scope: Scope = Scope.NONE
    section: Section = Section.NONE

    def with_section(self, section: Section) -> ParserState:
        return ParserState(self.scope, section)

    @property
    def collecting(self) -> bool:
        return self.scope is not Scope.NONE and self.section is not Section.NONE


class SpecSource(ABC):
    """Abstract front-end for one spec dialect."""

    dialect: Dialect

    @abstractmethod
    def parse(self, text: str, source: str = "<string>") -> SpecDocument:
        """Parse *text* into a SpecDocument. Never raises."""


def build_assertion(
    doc: SpecDocument,
    key: str,
    raw: str,
    category: Category,
    line: int | None,
) -> Assertion | None:
    """Compile an assertion, recording a diagnostic if compilation fails."""
    try:
        matcher = compile_pattern(raw)
    except PatternError as exc:
        record(doc, f"Invalid {category.value} evidence `{key}`: {exc.reason}", line)
        return None
    return Assertion(key=key, raw=raw, matcher=matcher, category=category, line=line)


def build_order_rule(
    doc: SpecDocument,
    key: str,
    before_raw: str,
    after_raw: str,
    line: int | None,
) -> OrderRule | None:
    """Compile an order rule, recording a diagnostic if either side fails."""
    try:
        before = compile_pattern(before_raw)
        after = compile_pattern(after_raw)
    except PatternError as exc:
        record(doc, f"Invalid order rule `{key}`: {exc.reason}", line)
        return None
    return OrderRule(
        key=key,
        before_raw=before_raw,
        after_raw=after_raw,
        before=before,
        after=after,
        line=line,
    )


def record(
    doc: SpecDocument,
    message: str,
    line: int | None = None,
    kind: DiagnosticKind = DiagnosticKind.spec_malformed,
) -> None:
    """Append a diagnostic to *doc* and log it."""
    diagnostic = SpecDiagnostic(message=message, kind=kind, line=line)
    doc.diagnostics.append(diagnostic)
    logger.info("%s: %s", doc.source, diagnostic)


def finalize(doc: SpecDocument) -> SpecDocument:
    """Apply the zero-blocks rule shared by all dialects.

    A document that yields no blocks is returned empty (global invariants
    discarded) with a document-level diagnostic, so callers treat it as
    Inconclusive.
    """
    if doc.blocks:
        return doc
    empty = SpecDocument(dialect=doc.dialect, source=doc.source)
    empty.diagnostics = list(doc.diagnostics)
    record(empty, "Spec loaded without block definitions.", kind=DiagnosticKind.spec_empty)
    return empty
