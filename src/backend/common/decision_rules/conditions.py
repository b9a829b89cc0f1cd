from __future__ import annotations

import math
from typing import Any, Callable, Dict, List, Optional, Tuple

from .context import RuleContext, stringify
from .models import Condition, ConditionTrace, DecisionRule, DiagnosticKind, Logic, Operator

OperatorFn = Callable[[str, Any], bool]


def to_number(value: Any) -> Optional[float]:
    """Lenient numeric coercion; returns None instead of raising."""
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, (int, float)):
        number = float(value)
    else:
        text = str(value).strip()
        if not text:
            return None
        try:
            number = float(text)
        except ValueError:
            return None
    if not math.isfinite(number):
        return None
    return number


def split_list(value: Any) -> List[str]:
    if isinstance(value, (list, tuple)):
        items = [stringify(v) for v in value]
    else:
        items = stringify(value).split(",")
    return [item.strip().lower() for item in items if item.strip()]


def _equals(actual: str, expected: Any) -> bool:
    return actual.lower() == stringify(expected).lower()


def _not_equals(actual: str, expected: Any) -> bool:
    return not _equals(actual, expected)


def _contains(actual: str, expected: Any) -> bool:
    return stringify(expected).lower() in actual.lower()


def _greater_than(actual: str, expected: Any) -> bool:
    left, right = to_number(actual), to_number(expected)
    if left is None or right is None:
        return False
    return left > right


def _less_than(actual: str, expected: Any) -> bool:
    left, right = to_number(actual), to_number(expected)
    if left is None or right is None:
        return False
    return left < right


def _in(actual: str, expected: Any) -> bool:
    return actual.lower() in split_list(expected)


def _not_in(actual: str, expected: Any) -> bool:
    return not _in(actual, expected)


OPERATORS: Dict[str, OperatorFn] = {
    Operator.EQUALS.value: _equals,
    Operator.NOT_EQUALS.value: _not_equals,
    Operator.CONTAINS.value: _contains,
    Operator.GREATER_THAN.value: _greater_than,
    Operator.LESS_THAN.value: _less_than,
    Operator.IN.value: _in,
    Operator.NOT_IN.value: _not_in,
}

_NUMERIC_OPERATORS = {Operator.GREATER_THAN.value, Operator.LESS_THAN.value}


def check_condition(condition: Condition, ctx: RuleContext, *, rule: Optional[DecisionRule] = None) -> ConditionTrace:
    resolved = ctx.get_field_value(condition.field)
    op = OPERATORS.get(condition.operator)
    if op is None:
        outcome = False
        _report(
            ctx,
            rule,
            DiagnosticKind.UNKNOWN_OPERATOR,
            f"Unknown operator '{condition.operator}' on field '{condition.field}'; condition treated as false.",
            operator=condition.operator,
            field=condition.field,
        )
    else:
        outcome = op(resolved, condition.value)
        if (
            condition.operator in _NUMERIC_OPERATORS
            and (to_number(resolved) is None or to_number(condition.value) is None)
        ):
            _report(
                ctx,
                rule,
                DiagnosticKind.NON_NUMERIC_OPERAND,
                f"Non-numeric operand for '{condition.operator}' on field '{condition.field}'.",
                operator=condition.operator,
                field=condition.field,
                resolved=resolved,
                expected=condition.value,
            )
    return ConditionTrace(
        field=condition.field,
        operator=condition.operator,
        expected=condition.value,
        resolved=resolved,
        logic=condition.logic,
        outcome=outcome,
    )


def fold_conditions(rule: DecisionRule, ctx: RuleContext) -> Tuple[bool, List[ConditionTrace]]:
    """Left-to-right AND/OR fold; the first condition seeds and its `logic` is unused."""
    if not rule.conditions:
        return True, []

    traces: List[ConditionTrace] = []
    result = False
    for index, condition in enumerate(rule.conditions):
        trace = check_condition(condition, ctx, rule=rule)
        traces.append(trace)
        if index == 0:
            result = trace.outcome
        elif (condition.logic or Logic.AND.value).upper() == Logic.OR.value:
            result = result or trace.outcome
        else:
            result = result and trace.outcome
    return result, traces


def evaluate(rule: DecisionRule, ctx: RuleContext) -> bool:
    matched, _ = fold_conditions(rule, ctx)
    return matched


def _report(ctx: RuleContext, rule: Optional[DecisionRule], kind: DiagnosticKind, message: str, **values: Any) -> None:
    if ctx.diagnostics is None:
        return
    ctx.diagnostics.report(
        kind,
        rule_id=rule.id if rule else "",
        rule_name=rule.rule_name if rule else "",
        message=message,
        **values,
    )
