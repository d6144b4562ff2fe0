"""Contract dialect front-end.

Grammar (line oriented, surrounding whitespace ignored)::

    ## <Domain>                      starts a block (Hard collection active)
    ## <... Invariant ...>           switches to global invariants scope
    ### / #### <sub-header>          HARD / SOFT / Order|Ordem select the
                                     collection; anything else suppresses it
    - `key` :: `pattern`             evidence bullet
    - `key` :: `before` => `after`   order bullet (Order collection only)

Any other bullet inside a collected section is recorded as unrecognized.
Domains whose sections hold no rules are treated as prose and dropped.
"""

from __future__ import annotations

import re

from logverdict.loader.base import (
    ParserState,
    Scope,
    Section,
    SpecSource,
    build_assertion,
    build_order_rule,
    finalize,
    record,
)
from logverdict.models.spec import Block, Category, Dialect, SpecDocument

EVIDENCE_LINE = re.compile(r"^-\s+`([^`]+)`\s*::\s*`([^`]*)`\s*$")
ORDER_LINE = re.compile(r"^-\s+`([^`]+)`\s*::\s*`([^`]*)`\s*=>\s*`([^`]*)`\s*$")

_SECTION_KEYWORDS: list[tuple[str, Section]] = [
    ("HARD", Section.HARD),
    ("SOFT", Section.SOFT),
    ("ORDER", Section.ORDER),
    ("ORDEM", Section.ORDER),
]


def section_for_header(title: str) -> Section:
    """Map a sub-header title to the collection it selects."""
    upper = title.upper()
    for keyword, section in _SECTION_KEYWORDS:
        if keyword in upper:
            return section
    return Section.NONE


class ContractSource(SpecSource):
    """Parses ``## Domain`` contracts with HARD/SOFT/Order sub-sections."""

    dialect = Dialect.contract

    def parse(self, text: str, source: str = "<string>") -> SpecDocument:
        doc = SpecDocument(dialect=self.dialect, source=source)
        declared: list[Block] = []
        current: Block | None = None
        state = ParserState()

        for number, raw_line in enumerate(text.splitlines(), 1):
            line = raw_line.strip()
            if not line:
                continue

            if line.startswith("# "):
                current = None
                state = ParserState()
                continue

            if line.startswith("## "):
                name = line[3:].strip()
                if "invariant" in name.lower():
                    current = None
                    state = ParserState(Scope.IN_GLOBAL_INVARIANTS, Section.HARD)
                else:
                    current = Block(name=name)
                    declared.append(current)
                    state = ParserState(Scope.IN_BLOCK, Section.HARD)
                continue

            if line.startswith("###"):
                state = state.with_section(section_for_header(line.lstrip("#").strip()))
                continue

            if not line.startswith("-") or not state.collecting:
                continue

            target = current if state.scope is Scope.IN_BLOCK else doc.global_invariants
            if target is None:
                continue
            self._collect(doc, target, state.section, line, number)

        doc.blocks = [b for b in declared if b.rule_count > 0]
        return finalize(doc)

    def _collect(
        self,
        doc: SpecDocument,
        target: Block,
        section: Section,
        line: str,
        number: int,
    ) -> None:
        order_match = ORDER_LINE.match(line)
        evidence_match = EVIDENCE_LINE.match(line)

        if section is Section.ORDER:
            if order_match:
                key, before, after = order_match.groups()
                rule = build_order_rule(doc, key, before, after, number)
                if rule is not None:
                    target.order_rules.append(rule)
            elif evidence_match:
                record(
                    doc,
                    f"Order rule `{evidence_match.group(1)}` is missing its `=> after` pattern",
                    number,
                )
            else:
                record(doc, f"Unrecognized rule bullet: {line}", number)
            return

        if order_match:
            record(
                doc,
                f"Order rule `{order_match.group(1)}` declared outside an Order section",
                number,
            )
            return

        if evidence_match:
            key, pattern = evidence_match.groups()
            category = Category.hard if section is Section.HARD else Category.soft
            assertion = build_assertion(doc, key, pattern, category, number)
            if assertion is not None:
                target.add(assertion)
            return

        record(doc, f"Unrecognized rule bullet: {line}", number)
