"""Tests for the order validator."""

from __future__ import annotations

from logverdict.evaluation.normalizer import normalize_lines
from logverdict.evaluation.order import (
    AFTER_WITHOUT_BEFORE,
    BEFORE_WITHOUT_AFTER,
    validate_order_rule,
    validate_order_rules,
)
from logverdict.models.result import OrderOutcome
from logverdict.models.spec import OrderRule
from logverdict.patterns.compiler import compile_pattern

ACQUIRE = "Acquire token='flow.scene_transition'"
RELEASE = "Release token='flow.scene_transition'"


def _rule(before: str = ACQUIRE, after: str = RELEASE, key: str = "gate") -> OrderRule:
    return OrderRule(
        key=key,
        before_raw=before,
        after_raw=after,
        before=compile_pattern(before),
        after=compile_pattern(after),
    )


def _lines(*texts: str):
    return normalize_lines(["\n".join(texts)])


class TestValidateOrderRule:
    """Nested open/close counting."""

    def test_before_then_after_is_validated(self) -> None:
        result = validate_order_rule(_lines(ACQUIRE, RELEASE), _rule())
        assert result.outcome is OrderOutcome.validated
        assert result.exercised
        assert result.violations == []
        assert (result.before_count, result.after_count) == (1, 1)

    def test_distant_pair_is_validated(self) -> None:
        filler = [f"frame {i}" for i in range(6, 40)]
        lines = _lines(*(["boot"] * 4), ACQUIRE, *filler, RELEASE)
        assert lines[4].number == 5
        assert lines[-1].number == 40
        assert validate_order_rule(lines, _rule()).outcome is OrderOutcome.validated

    def test_repeated_cycles(self) -> None:
        lines = _lines(ACQUIRE, RELEASE, "x", ACQUIRE, RELEASE)
        result = validate_order_rule(lines, _rule())
        assert result.outcome is OrderOutcome.validated
        assert result.before_count == 2

    def test_nesting_is_tolerated(self) -> None:
        lines = _lines(ACQUIRE, ACQUIRE, RELEASE, RELEASE)
        assert validate_order_rule(lines, _rule()).outcome is OrderOutcome.validated

    def test_only_before(self) -> None:
        result = validate_order_rule(_lines(ACQUIRE), _rule())
        assert result.outcome is OrderOutcome.violated
        assert len(result.violations) == 1
        assert BEFORE_WITHOUT_AFTER in result.violations[0]
        assert "1 left open" in result.violations[0]

    def test_only_after(self) -> None:
        result = validate_order_rule(_lines("boot", RELEASE), _rule())
        assert result.outcome is OrderOutcome.violated
        assert result.violations == [
            f"Order violation: gate ({AFTER_WITHOUT_BEFORE}, line 2). "
            f"before=`{ACQUIRE}`, after=`{RELEASE}`"
        ]

    def test_after_before_before(self) -> None:
        result = validate_order_rule(_lines(RELEASE, ACQUIRE), _rule())
        assert len(result.violations) == 2
        assert AFTER_WITHOUT_BEFORE in result.violations[0]
        assert BEFORE_WITHOUT_AFTER in result.violations[1]

    def test_multiple_stray_afters_are_summarized(self) -> None:
        result = validate_order_rule(_lines(RELEASE, "x", RELEASE, RELEASE), _rule())
        assert len(result.violations) == 1
        assert "line 1, +2 more" in result.violations[0]

    def test_unbalanced_open_count(self) -> None:
        result = validate_order_rule(_lines(ACQUIRE, ACQUIRE, RELEASE), _rule())
        assert result.outcome is OrderOutcome.violated
        assert "1 left open" in result.violations[0]

    def test_neither_side_is_not_exercised(self) -> None:
        result = validate_order_rule(_lines("boot", "menu"), _rule())
        assert result.outcome is OrderOutcome.not_exercised
        assert not result.exercised
        assert result.violations == []

    def test_line_matching_both_sides_opens_then_closes(self) -> None:
        rule = _rule(before="Transition", after="Completed")
        result = validate_order_rule(_lines("TransitionCompleted"), rule)
        assert result.outcome is OrderOutcome.validated

    def test_violation_names_key_and_both_patterns(self) -> None:
        result = validate_order_rule(_lines(ACQUIRE), _rule(key="transition_gate"))
        message = result.violations[0]
        assert message.startswith("Order violation: transition_gate (")
        assert f"before=`{ACQUIRE}`" in message
        assert f"after=`{RELEASE}`" in message

    def test_validate_order_rules_keeps_order(self) -> None:
        rules = [_rule(key="a"), _rule(before="Boot", after="Menu", key="b")]
        results = validate_order_rules(_lines("Boot", "Menu"), rules)
        assert [(r.key, r.outcome) for r in results] == [
            ("a", OrderOutcome.not_exercised),
            ("b", OrderOutcome.validated),
        ]
