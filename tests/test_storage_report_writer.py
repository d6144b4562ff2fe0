"""Tests for report rendering and atomic persistence."""

from __future__ import annotations

import json
from datetime import datetime, timezone
from pathlib import Path

import pytest
from pydantic import ValidationError

from logverdict.evaluation.aggregation import aggregate
from logverdict.evaluation.normalizer import parse_log
from logverdict.evaluation.tokens import count_tokens
from logverdict.evaluation.verifier import evaluate_block
from logverdict.loader import parse_spec
from logverdict.models.result import FailMarkerHit, Status
from logverdict.storage.report_writer import (
    REPORT_TITLE,
    load_report,
    render_markdown,
    render_report,
    write_report,
)

SPEC = """\
## SceneFlow
- `ready` :: `ScenesReady`
- `done` :: `SceneTransitionCompleted`
### SOFT
- `fade` :: `FadeOut`
### Order
- `gate` :: `Acquire token='flow'` => `Release token='flow'`

## Global Invariants
- `boot` :: `Boot`
"""


def _make_result(log_text: str, fail_marker: FailMarkerHit | None = None):
    """Build a VerificationResult with a fixed timestamp."""
    spec = parse_spec(SPEC, "specs/contract.md")
    log = parse_log(log_text, "logs/run.log")
    blocks = [evaluate_block(log.lines, b, with_hints=True) for b in spec.blocks]
    invariants = evaluate_block(log.lines, spec.global_invariants, with_hints=True)
    return aggregate(
        spec,
        log,
        blocks,
        invariants,
        count_tokens(log.lines),
        fail_marker,
        generated_at=datetime(2026, 5, 2, 14, 30, 0, tzinfo=timezone.utc),
    )


PASS_LOG = (
    "CaptureId: cap-7\nBoot\nAcquire token='flow'\nScenesReady\n"
    "SceneTransitionCompleted\nFadeOut\nRelease token='flow'\n"
)
FAIL_LOG = "Boot\nAcquire token='flow'\nScenesReady\n"


class TestRenderMarkdown:
    """Markdown layout."""

    def test_header_and_metadata(self) -> None:
        md = render_markdown(_make_result(PASS_LOG), "reports/out.md")
        lines = md.splitlines()
        assert lines[0] == REPORT_TITLE
        assert "- GeneratedAt: `2026-05-02 14:30:00Z`" in lines
        assert "- Status: **Pass**" in lines
        assert "- CaptureId: `cap-7`" in lines
        assert "- StartedUtc: `n/a`" in lines
        assert "- Spec: `specs/contract.md`" in lines
        assert "- Output: `reports/out.md`" in lines

    def test_no_diagnostics(self) -> None:
        md = render_markdown(_make_result(PASS_LOG))
        assert "## Diagnostics\n\n- None.\n" in md

    def test_block_table_row(self) -> None:
        md = render_markdown(_make_result(FAIL_LOG))
        assert "| SceneFlow | **Fail** | 1 | 1 | 1 |" in md

    def test_fail_reasons_only_on_fail(self) -> None:
        assert "## Fail Reasons" not in render_markdown(_make_result(PASS_LOG))
        md = render_markdown(_make_result(FAIL_LOG))
        assert "## Fail Reasons" in md
        assert "- `SceneFlow`: missingHard=1, orderViolations=1" in md
        assert "- `flow` (Acquire=1, Release=0)" in md

    def test_fail_marker_reason(self) -> None:
        hit = FailMarkerHit(line_number=2, text="[Baseline][FAIL] boom")
        md = render_markdown(_make_result(PASS_LOG, hit))
        assert "### Fail marker" in md
        assert "- line 2: `[Baseline][FAIL] boom`" in md

    def test_token_table(self) -> None:
        md = render_markdown(_make_result(PASS_LOG))
        assert "| `flow` | 1 | 1 | yes |" in md

    def test_details_section(self) -> None:
        md = render_markdown(_make_result(FAIL_LOG))
        assert "### SceneFlow — **Fail**" in md
        assert "- [hard] `ready` at line 3: `ScenesReady`" in md
        assert "**Missing evidence (hard):**" in md
        assert "- `gate`: violated (before=1, after=0)" in md
        assert "### Global Invariants — **Pass**" in md

    def test_summary_at_end(self) -> None:
        result = _make_result(PASS_LOG)
        md = render_markdown(result)
        assert md.rstrip().endswith(result.summary)


class TestRenderReport:
    """Format is chosen by suffix."""

    def test_json_suffix(self) -> None:
        result = _make_result(PASS_LOG)
        content = render_report(result, Path("out.JSON"))
        assert json.loads(content)["status"] == "Pass"

    def test_markdown_otherwise(self) -> None:
        content = render_report(_make_result(PASS_LOG), Path("out.md"))
        assert content.startswith(REPORT_TITLE)


class TestWriteReport:
    """Atomic writes and I/O failures."""

    def test_writes_and_creates_parent(self, tmp_path: Path) -> None:
        target = tmp_path / "reports" / "last.md"
        assert write_report(_make_result(PASS_LOG), target) is True
        assert target.read_text(encoding="utf-8").startswith(REPORT_TITLE)
        assert not (tmp_path / "reports" / "last.md.tmp").exists()

    def test_overwrites_existing(self, tmp_path: Path) -> None:
        target = tmp_path / "last.md"
        target.write_text("stale", encoding="utf-8")
        write_report(_make_result(FAIL_LOG), target)
        assert "**Fail**" in target.read_text(encoding="utf-8")

    def test_unwritable_target_returns_false(self, tmp_path: Path) -> None:
        blocker = tmp_path / "blocker"
        blocker.write_text("file, not a directory", encoding="utf-8")
        result = _make_result(PASS_LOG)
        assert write_report(result, blocker / "out.md") is False
        assert result.status is Status.PASS

    def test_failed_rename_removes_temp_file(
        self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        def _refuse(self: Path, target: Path) -> Path:
            raise PermissionError("target is locked")

        monkeypatch.setattr(Path, "replace", _refuse)
        target = tmp_path / "last.md"
        assert write_report(_make_result(PASS_LOG), target) is False
        assert not target.exists()
        assert not (tmp_path / "last.md.tmp").exists()

    def test_json_round_trip(self, tmp_path: Path) -> None:
        result = _make_result(FAIL_LOG)
        target = tmp_path / "last.json"
        write_report(result, target)
        assert load_report(target) == result


class TestLoadReport:
    def test_missing(self, tmp_path: Path) -> None:
        with pytest.raises(FileNotFoundError):
            load_report(tmp_path / "absent.json")

    def test_not_a_report(self, tmp_path: Path) -> None:
        path = tmp_path / "other.json"
        path.write_text('{"hello": 1}', encoding="utf-8")
        with pytest.raises(ValidationError):
            load_report(path)
