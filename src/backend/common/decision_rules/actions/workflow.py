from __future__ import annotations

import math

from ..action import ActionHandler, record_signal
from ..conditions import to_number
from ..context import RuleContext
from ..models import ActionType, DecisionRule, EvaluationResult
from ..payloads import AgentPayload, BanksPayload, FieldPayload, FlagPayload, ProcessingTimePayload, StepPayload
from ..registry import register_action


@register_action
class SetProcessingTimeAction(ActionHandler):
    action_type = ActionType.SET_PROCESSING_TIME.value
    action_title = "Set processing time (longest wins)"
    payload_model = ProcessingTimePayload

    def apply(
        self, result: EvaluationResult, payload: ProcessingTimePayload, *, rule: DecisionRule, ctx: RuleContext
    ) -> None:
        days = payload.processing_days if payload.processing_days is not None else to_number(payload.value)
        if days is None:
            return
        days_int = math.ceil(days)
        if result.processing_time_days is None or days_int > result.processing_time_days:
            result.processing_time_days = days_int


@register_action
class RecommendBankAction(ActionHandler):
    action_type = ActionType.RECOMMEND_BANK.value
    action_title = "Recommend bank"
    payload_model = BanksPayload

    def apply(self, result: EvaluationResult, payload: BanksPayload, *, rule: DecisionRule, ctx: RuleContext) -> None:
        for bank in payload.banks:
            if bank not in result.recommended_banks:
                result.recommended_banks.append(bank)


@register_action
class AssignAgentAction(ActionHandler):
    action_type = ActionType.ASSIGN_AGENT.value
    action_title = "Assign agent"
    payload_model = AgentPayload

    def apply(self, result: EvaluationResult, payload: AgentPayload, *, rule: DecisionRule, ctx: RuleContext) -> None:
        record_signal(
            result,
            rule,
            self.action_type,
            target=payload.target,
            message=payload.message,
            agent_id=payload.agent_id,
            agent_name=payload.agent_name,
        )


class _StepAction(ActionHandler):
    payload_model = StepPayload

    def steps(self, result: EvaluationResult) -> list[str]:  # pragma: no cover
        raise NotImplementedError

    def apply(self, result: EvaluationResult, payload: StepPayload, *, rule: DecisionRule, ctx: RuleContext) -> None:
        step = payload.step_key or payload.target
        record_signal(result, rule, self.action_type, target=step, message=payload.message)
        if step:
            steps = self.steps(result)
            if step not in steps:
                steps.append(step)


@register_action
class SkipStepAction(_StepAction):
    action_type = ActionType.SKIP_STEP.value
    action_title = "Skip workflow step"

    def steps(self, result: EvaluationResult) -> list[str]:
        return result.skipped_steps


@register_action
class ShowStepAction(_StepAction):
    action_type = ActionType.SHOW_STEP.value
    action_title = "Show workflow step"

    def steps(self, result: EvaluationResult) -> list[str]:
        return result.visible_steps


@register_action
class SetFieldAction(ActionHandler):
    # Last write wins.
    action_type = ActionType.SET_FIELD.value
    action_title = "Set field value"
    payload_model = FieldPayload

    def apply(self, result: EvaluationResult, payload: FieldPayload, *, rule: DecisionRule, ctx: RuleContext) -> None:
        record_signal(result, rule, self.action_type, target=payload.target, value=payload.value)
        if payload.target:
            result.fields[payload.target] = payload.value


@register_action
class SetFlagAction(ActionHandler):
    """Writes `flags[message] = value`; a payload without a flag name is a no-op."""

    action_type = ActionType.SET_FLAG.value
    action_title = "Set flag"
    payload_model = FlagPayload

    def apply(self, result: EvaluationResult, payload: FlagPayload, *, rule: DecisionRule, ctx: RuleContext) -> None:
        if not payload.message:
            return
        result.flags[payload.message] = payload.value


@register_action
class SetNextStepAction(ActionHandler):
    # Last write wins.
    action_type = ActionType.SET_NEXT_STEP.value
    action_title = "Set next workflow step"
    payload_model = StepPayload

    def apply(self, result: EvaluationResult, payload: StepPayload, *, rule: DecisionRule, ctx: RuleContext) -> None:
        step = payload.step_key or payload.target
        if not step:
            return
        result.next_step = step
        record_signal(result, rule, self.action_type, target=step, message=payload.message)
