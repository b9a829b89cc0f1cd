from __future__ import annotations

from ..action import ActionHandler, record_signal
from ..context import RuleContext
from ..models import ActionType, DecisionRule, EvaluationResult
from ..payloads import MessagePayload, SignalPayload
from ..registry import register_action

DEFAULT_BLOCK_MESSAGE = "Blocked"


@register_action
class BlockAction(ActionHandler):
    # Does not short-circuit: later rules still evaluate and apply.
    action_type = ActionType.BLOCK.value
    action_title = "Block application"
    payload_model = MessagePayload

    def apply(self, result: EvaluationResult, payload: MessagePayload, *, rule: DecisionRule, ctx: RuleContext) -> None:
        result.blocked = True
        if not result.block_message:
            result.block_message = payload.message or DEFAULT_BLOCK_MESSAGE


@register_action
class ShowWarningAction(ActionHandler):
    action_type = ActionType.SHOW_WARNING.value
    action_title = "Show warning"
    payload_model = MessagePayload

    def apply(self, result: EvaluationResult, payload: MessagePayload, *, rule: DecisionRule, ctx: RuleContext) -> None:
        if payload.message:
            result.warnings.append(payload.message)


class _SignalAction(ActionHandler):
    payload_model = SignalPayload

    def apply(self, result: EvaluationResult, payload: SignalPayload, *, rule: DecisionRule, ctx: RuleContext) -> None:
        record_signal(
            result,
            rule,
            self.action_type,
            target=payload.target,
            value=payload.value,
            message=payload.message,
        )


@register_action
class AllowAction(_SignalAction):
    action_type = ActionType.ALLOW.value
    action_title = "Allow application"


@register_action
class AutoApproveAction(_SignalAction):
    action_type = ActionType.AUTO_APPROVE.value
    action_title = "Auto-approve"


@register_action
class RequireManualReviewAction(_SignalAction):
    action_type = ActionType.REQUIRE_MANUAL_REVIEW.value
    action_title = "Require manual review"
