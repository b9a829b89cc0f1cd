from __future__ import annotations

import logging
from typing import Any, Dict, Iterable, List, Mapping, Optional

from pydantic import ValidationError

from .action import ActionHandler
from .conditions import fold_conditions
from .context import FieldResolver, RuleContext, default_resolver
from .diagnostics import DiagnosticsCollector
from .models import Action, DecisionRule, DiagnosticKind, EvaluationResult, RuleTrace
from .registry import registry

logger = logging.getLogger(__name__)


def order_rules(rules: Iterable[DecisionRule]) -> List[DecisionRule]:
    """Active rules only, lowest priority first; `sorted` is stable so ties keep input order."""
    return sorted((rule for rule in rules if rule.is_active), key=lambda rule: rule.priority or 0)


class DecisionEngine:
    """Folds matching rules into a fresh `EvaluationResult`.

    Holds no per-call state, so one instance can serve concurrent evaluations.
    Evaluation never raises on bad rule content: unknown operators fail closed,
    unknown action types and malformed payloads are skipped and, when a
    collector is supplied, reported as diagnostics.
    """

    def __init__(
        self,
        *,
        resolver: Optional[FieldResolver] = None,
        handlers: Optional[Dict[str, ActionHandler]] = None,
    ):
        self._resolver = resolver or default_resolver
        self._handlers = handlers if handlers is not None else registry.create_all()

    def context(self, facts: Mapping[str, Any], diagnostics: Optional[DiagnosticsCollector] = None) -> RuleContext:
        return RuleContext(facts=facts, resolver=self._resolver, diagnostics=diagnostics)

    def evaluate(self, rule: DecisionRule, facts: Mapping[str, Any]) -> bool:
        matched, _ = fold_conditions(rule, self.context(facts))
        return matched

    def apply(
        self,
        rules: Iterable[DecisionRule],
        facts: Mapping[str, Any],
        *,
        diagnostics: Optional[DiagnosticsCollector] = None,
    ) -> EvaluationResult:
        result, _ = self.run(rules, facts, diagnostics=diagnostics)
        return result

    def run(
        self,
        rules: Iterable[DecisionRule],
        facts: Mapping[str, Any],
        *,
        diagnostics: Optional[DiagnosticsCollector] = None,
        trace_inactive: bool = False,
    ) -> tuple[EvaluationResult, List[RuleTrace]]:
        """Shared loop for production evaluation and simulation."""
        rules = list(rules)
        ctx = self.context(facts, diagnostics)
        result = EvaluationResult()
        traces: List[RuleTrace] = []

        if trace_inactive:
            for rule in rules:
                if not rule.is_active:
                    traces.append(
                        RuleTrace(rule_id=rule.id, rule_name=rule.rule_name, priority=rule.priority or 0, active=False)
                    )

        for rule in order_rules(rules):
            matched, condition_traces = fold_conditions(rule, ctx)
            trace = RuleTrace(
                rule_id=rule.id,
                rule_name=rule.rule_name,
                priority=rule.priority or 0,
                active=True,
                matched=matched,
                conditions=condition_traces,
            )
            traces.append(trace)
            if not matched:
                continue

            result.applied_rule_names.append(rule.rule_name)
            for action in rule.actions:
                if self._apply_action(result, action, rule=rule, ctx=ctx):
                    trace.applied_actions.append(action.type)
                else:
                    trace.ignored_actions.append(action.type)

        logger.debug(
            "evaluated %d rules, applied %d: %s",
            len(rules),
            len(result.applied_rule_names),
            result.applied_rule_names,
        )
        return result, traces

    def _apply_action(self, result: EvaluationResult, action: Action, *, rule: DecisionRule, ctx: RuleContext) -> bool:
        handler = self._handlers.get(action.type)
        if handler is None:
            self._report(
                ctx,
                DiagnosticKind.UNKNOWN_ACTION,
                rule,
                f"Unknown action type '{action.type}'; ignored.",
                action_type=action.type,
            )
            return False

        try:
            payload = handler.payload_model.model_validate(action.payload())
        except ValidationError as exc:
            self._report(
                ctx,
                DiagnosticKind.INVALID_PAYLOAD,
                rule,
                f"Invalid payload for action '{action.type}'; ignored.",
                action_type=action.type,
                errors=[err["msg"] for err in exc.errors()],
            )
            return False

        handler.apply(result, payload, rule=rule, ctx=ctx)
        return True

    @staticmethod
    def _report(ctx: RuleContext, kind: DiagnosticKind, rule: DecisionRule, message: str, **values: Any) -> None:
        if ctx.diagnostics is None:
            logger.debug("rule %s: %s", rule.id, message)
            return
        ctx.diagnostics.report(kind, rule_id=rule.id, rule_name=rule.rule_name, message=message, **values)


_default_engine: Optional[DecisionEngine] = None


def get_engine() -> DecisionEngine:
    global _default_engine
    if _default_engine is None:
        _default_engine = DecisionEngine()
    return _default_engine


def apply_rules(
    rules: Iterable[DecisionRule],
    facts: Mapping[str, Any],
    *,
    resolver: Optional[FieldResolver] = None,
    diagnostics: Optional[DiagnosticsCollector] = None,
) -> EvaluationResult:
    engine = DecisionEngine(resolver=resolver) if resolver is not None else get_engine()
    return engine.apply(rules, facts, diagnostics=diagnostics)
