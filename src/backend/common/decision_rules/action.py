from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Type

from pydantic import BaseModel

from .context import RuleContext
from .models import ActionSignal, DecisionRule, EvaluationResult


class ActionHandler(ABC):
    action_type: str
    action_title: str
    payload_model: Type[BaseModel]

    def __init__(self):
        if not getattr(self, "action_type", None):
            raise ValueError("ActionHandler must define action_type")

    @abstractmethod
    def apply(
        self,
        result: EvaluationResult,
        payload: BaseModel,
        *,
        rule: DecisionRule,
        ctx: RuleContext,
    ) -> None:  # pragma: no cover
        raise NotImplementedError


def record_signal(result: EvaluationResult, rule: DecisionRule, action_type: str, **values) -> None:
    result.signals.append(
        ActionSignal(rule_id=rule.id, rule_name=rule.rule_name, action_type=action_type, **values)
    )
