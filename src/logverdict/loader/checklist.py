"""Checklist dialect front-end.

Only one literal section of the document is read::

    ## Evidências hard (log — strings exatas)
    - **Boot → Menu (startup)**
      - `MenuScene` loaded
      - `Acquire token='flow.scene_transition'`

Inside it, ``- **Name**`` starts a block and every single-backtick span
that follows adds one hard evidence item, until the next ``## `` header or
the end of the document. Evidence is raw text in the pattern dialect.
"""

from __future__ import annotations

import re

from logverdict.loader.base import SpecSource, build_assertion, finalize, record
from logverdict.models.config import DEFAULT_CHECKLIST_HEADER
from logverdict.models.spec import Block, Category, DiagnosticKind, Dialect, SpecDocument

BACKTICK_SPAN = re.compile(r"`([^`]*)`")


def _block_name(line: str) -> str | None:
    if line.startswith("- **") and line.endswith("**") and len(line) > 6:
        return line[4:-2].strip()
    return None


class ChecklistSource(SpecSource):
    """Parses the evidence section of a checklist document."""

    dialect = Dialect.checklist

    def __init__(self, header: str = DEFAULT_CHECKLIST_HEADER) -> None:
        self.header = header

    def parse(self, text: str, source: str = "<string>") -> SpecDocument:
        doc = SpecDocument(dialect=self.dialect, source=source)
        lines = text.splitlines()

        start = next(
            (i for i, line in enumerate(lines) if line.strip() == self.header),
            None,
        )
        if start is None:
            record(
                doc,
                f"Evidence section not found: {self.header!r}",
                kind=DiagnosticKind.spec_empty,
            )
            return finalize(doc)

        current: Block | None = None
        declared: list[Block] = []
        for number in range(start + 2, len(lines) + 1):
            raw_line = lines[number - 1].rstrip()
            line = raw_line.strip()
            if line.startswith("## "):
                break

            name = _block_name(raw_line)
            if name is not None:
                current = Block(name=name)
                declared.append(current)
                continue

            if current is None:
                continue

            for span in BACKTICK_SPAN.findall(line):
                raw = span.strip()
                if not raw:
                    continue
                assertion = build_assertion(doc, raw, raw, Category.hard, number)
                if assertion is not None:
                    current.add(assertion)

        for block in declared:
            if block.rule_count == 0:
                record(doc, f"Block '{block.name}' declares no evidence")
        doc.blocks = [b for b in declared if b.rule_count > 0]
        return finalize(doc)
