from __future__ import annotations

from ..action import ActionHandler
from ..conditions import to_number
from ..context import RuleContext
from ..models import ActionType, DecisionRule, EvaluationResult
from ..payloads import RiskScorePayload
from ..registry import register_action


@register_action
class AddRiskScoreAction(ActionHandler):
    # Only accumulates; approval thresholds belong to the caller.
    action_type = ActionType.ADD_RISK_SCORE.value
    action_title = "Add risk score"
    payload_model = RiskScorePayload

    def apply(self, result: EvaluationResult, payload: RiskScorePayload, *, rule: DecisionRule, ctx: RuleContext) -> None:
        points = payload.risk_points if payload.risk_points is not None else to_number(payload.value)
        if points is None:
            return
        result.risk_score += points
