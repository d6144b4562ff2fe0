"""Order validator -- Before/After pairing via nested open/close counting.

Each rule is checked in one linear pass, like balanced parentheses: a
Before line opens, an After line closes. Repeated cycles are fine and
strict adjacency is not required. A line matching both sides opens and
then closes.
"""

from __future__ import annotations

from logverdict.models.log import LogLine
from logverdict.models.result import OrderOutcome, OrderRuleResult
from logverdict.models.spec import OrderRule

AFTER_WITHOUT_BEFORE = "After observed without a preceding unmatched Before"
BEFORE_WITHOUT_AFTER = "Before observed without a matching After"


def _violation(rule: OrderRule, reason: str) -> str:
    return (
        f"Order violation: {rule.key} ({reason}). "
        f"before=`{rule.before_raw}`, after=`{rule.after_raw}`"
    )


def validate_order_rule(lines: list[LogLine], rule: OrderRule) -> OrderRuleResult:
    """Validate one order rule against the normalized lines."""
    open_count = 0
    saw_before = False
    before_count = 0
    after_count = 0
    stray_after: list[int] = []

    for line in lines:
        if rule.before.matches(line.text):
            open_count += 1
            before_count += 1
            saw_before = True
        if rule.after.matches(line.text):
            after_count += 1
            if open_count == 0:
                stray_after.append(line.number)
            else:
                open_count -= 1

    violations: list[str] = []
    if stray_after:
        where = f"line {stray_after[0]}"
        if len(stray_after) > 1:
            where += f", +{len(stray_after) - 1} more"
        violations.append(_violation(rule, f"{AFTER_WITHOUT_BEFORE}, {where}"))
    if open_count > 0 or (saw_before and after_count == 0):
        violations.append(
            _violation(rule, f"{BEFORE_WITHOUT_AFTER}, {open_count} left open")
        )

    if violations:
        outcome = OrderOutcome.violated
    elif before_count == 0 and after_count == 0:
        outcome = OrderOutcome.not_exercised
    else:
        outcome = OrderOutcome.validated

    return OrderRuleResult(
        key=rule.key,
        before=rule.before_raw,
        after=rule.after_raw,
        outcome=outcome,
        before_count=before_count,
        after_count=after_count,
        violations=violations,
    )


def validate_order_rules(lines: list[LogLine], rules: list[OrderRule]) -> list[OrderRuleResult]:
    return [validate_order_rule(lines, rule) for rule in rules]
