"""Spec loader -- dialect registry, detection, and file loading."""

from __future__ import annotations

import logging
from pathlib import Path

from logverdict.loader.base import SpecSource, record
from logverdict.loader.checklist import ChecklistSource
from logverdict.loader.contract import ContractSource
from logverdict.models.config import DEFAULT_CHECKLIST_HEADER
from logverdict.models.spec import DiagnosticKind, Dialect, SpecDocument

logger = logging.getLogger(__name__)

SOURCE_REGISTRY: dict[str, type[SpecSource]] = {
    Dialect.contract.value: ContractSource,
    Dialect.checklist.value: ChecklistSource,
}


def detect_dialect(text: str, checklist_header: str = DEFAULT_CHECKLIST_HEADER) -> Dialect:
    """Checklist when the literal evidence header is present, else contract."""
    if any(line.strip() == checklist_header for line in text.splitlines()):
        return Dialect.checklist
    return Dialect.contract


def get_source(
    dialect: str | Dialect,
    checklist_header: str = DEFAULT_CHECKLIST_HEADER,
) -> SpecSource:
    """Look up and instantiate the front-end for *dialect*.

    Raises:
        ValueError: If *dialect* is not in the registry.
    """
    name = dialect.value if isinstance(dialect, Dialect) else dialect
    cls = SOURCE_REGISTRY.get(name)
    if cls is None:
        available = sorted(SOURCE_REGISTRY.keys())
        raise ValueError(f"Unknown spec dialect {name!r}. Available dialects: {available}")
    if cls is ChecklistSource:
        return ChecklistSource(header=checklist_header)
    return cls()


def parse_spec(
    text: str,
    source: str = "<string>",
    dialect: str = "auto",
    checklist_header: str = DEFAULT_CHECKLIST_HEADER,
) -> SpecDocument:
    """Parse spec text with the requested (or detected) dialect."""
    if dialect == "auto":
        dialect = detect_dialect(text, checklist_header)
    return get_source(dialect, checklist_header).parse(text, source)


def load_spec(
    path: Path,
    dialect: str = "auto",
    checklist_header: str = DEFAULT_CHECKLIST_HEADER,
) -> SpecDocument:
    """Load and parse a spec file. Never raises for missing or unreadable files.

    A missing or unreadable file yields an empty SpecDocument carrying an
    InputMissing diagnostic.
    """
    fallback = Dialect.contract if dialect == "auto" else Dialect(dialect)
    try:
        text = path.read_text(encoding="utf-8")
    except FileNotFoundError:
        doc = SpecDocument(dialect=fallback, source=str(path))
        record(doc, f"Spec not found: {path}", kind=DiagnosticKind.input_missing)
        return doc
    except (OSError, UnicodeDecodeError) as exc:
        logger.warning("Could not read spec %s: %s", path, exc)
        doc = SpecDocument(dialect=fallback, source=str(path))
        record(
            doc,
            f"Spec read failed: {type(exc).__name__}: {exc}",
            kind=DiagnosticKind.input_missing,
        )
        return doc
    return parse_spec(text, str(path), dialect, checklist_header)


__all__ = [
    "ChecklistSource",
    "ContractSource",
    "SOURCE_REGISTRY",
    "SpecSource",
    "detect_dialect",
    "get_source",
    "load_spec",
    "parse_spec",
]
