"""Tests for the checklist dialect front-end."""

from __future__ import annotations

from logverdict.loader.checklist import ChecklistSource
from logverdict.models.config import DEFAULT_CHECKLIST_HEADER
from logverdict.models.spec import Category, DiagnosticKind, Dialect


CHECKLIST = f"""\
# Smoke Checklist

- **Not a block** `outside`

{DEFAULT_CHECKLIST_HEADER}

- **Boot → Menu (startup)**
  - `MenuScene` loaded
  - `SceneTransitionCompleted` and `Fade...done`
- **Menu → Gameplay**
  - `Acquire token='flow.scene_transition'`

## Notes
- **Late block**
  - `IgnoredEvidence`
"""


def _parse(text: str, header: str = DEFAULT_CHECKLIST_HEADER):
    return ChecklistSource(header=header).parse(text, "checklist.md")


class TestChecklistParse:
    """Reading blocks from the evidence section."""

    def test_blocks_in_order(self) -> None:
        doc = _parse(CHECKLIST)
        assert doc.dialect is Dialect.checklist
        assert [b.name for b in doc.blocks] == ["Boot → Menu (startup)", "Menu → Gameplay"]

    def test_each_backtick_span_is_hard_evidence(self) -> None:
        block = _parse(CHECKLIST).blocks[0]
        assert [a.raw for a in block.hard] == ["MenuScene", "SceneTransitionCompleted", "Fade...done"]
        assert all(a.category is Category.hard for a in block.hard)
        assert block.soft == []
        assert block.order_rules == []

    def test_key_is_the_raw_text(self) -> None:
        block = _parse(CHECKLIST).blocks[1]
        assert block.hard[0].key == "Acquire token='flow.scene_transition'"

    def test_evidence_uses_pattern_dialect(self) -> None:
        block = _parse(CHECKLIST).blocks[0]
        fade = block.hard[2]
        assert fade.matcher("Fade in done")

    def test_section_ends_at_next_top_level_header(self) -> None:
        doc = _parse(CHECKLIST)
        assert "Late block" not in [b.name for b in doc.blocks]
        assert doc.rule_count == 4

    def test_text_before_header_is_ignored(self) -> None:
        doc = _parse(CHECKLIST)
        assert all(a.raw != "outside" for b in doc.blocks for a in b.hard)

    def test_no_global_invariants(self) -> None:
        assert _parse(CHECKLIST).global_invariants.rule_count == 0

    def test_section_runs_to_end_of_document(self) -> None:
        text = f"{DEFAULT_CHECKLIST_HEADER}\n- **Only**\n  - `Alpha`\n"
        doc = _parse(text)
        assert [b.name for b in doc.blocks] == ["Only"]

    def test_custom_header(self) -> None:
        text = "## Hard evidence\n- **Boot**\n  - `BootDone`\n"
        doc = _parse(text, header="## Hard evidence")
        assert doc.blocks[0].hard[0].raw == "BootDone"

    def test_indented_bold_bullet_is_not_a_block(self) -> None:
        text = f"{DEFAULT_CHECKLIST_HEADER}\n- **Boot**\n  - **Required**\n  - `MenuScene`\n"
        doc = _parse(text)
        assert [(b.name, [a.raw for a in b.hard]) for b in doc.blocks] == [("Boot", ["MenuScene"])]
        assert doc.diagnostics == []


class TestChecklistDiagnostics:
    """Missing sections and empty blocks."""

    def test_missing_header_is_empty_document(self) -> None:
        doc = _parse("# Checklist\n- **Boot**\n  - `BootDone`\n")
        assert doc.is_empty
        kinds = [d.kind for d in doc.diagnostics]
        assert kinds == [DiagnosticKind.spec_empty, DiagnosticKind.spec_empty]
        assert doc.diagnostics[0].message.startswith("Evidence section not found")

    def test_header_must_match_exactly(self) -> None:
        doc = _parse("## Evidencias hard (log - strings exatas)\n- **B**\n  - `X1`\n")
        assert doc.is_empty

    def test_block_without_evidence_is_dropped_with_diagnostic(self) -> None:
        text = f"{DEFAULT_CHECKLIST_HEADER}\n- **Empty**\n- **Full**\n  - `Alpha`\n"
        doc = _parse(text)
        assert [b.name for b in doc.blocks] == ["Full"]
        assert doc.diagnostics[0].message == "Block 'Empty' declares no evidence"

    def test_uncompilable_span_is_dropped(self) -> None:
        text = f"{DEFAULT_CHECKLIST_HEADER}\n- **B**\n  - `...` then `Alpha`\n"
        doc = _parse(text)
        assert [a.raw for a in doc.blocks[0].hard] == ["Alpha"]
        assert doc.diagnostics[0].line == 3
