from __future__ import annotations

from ..action import ActionHandler
from ..context import RuleContext
from ..models import ActionType, DecisionRule, EvaluationResult
from ..payloads import DiscountPayload, NumericValuePayload
from ..registry import register_action


@register_action
class SetPriceAction(ActionHandler):
    """Magnitude decides the meaning: values above 1 are a flat fee, the rest a multiplier.

    Existing rule data relies on this convention, so a 150% multiplier cannot be
    expressed with `set_price`; use `multiply_price` for that.
    """

    action_type = ActionType.SET_PRICE.value
    action_title = "Set price (fee above 1, multiplier otherwise)"
    payload_model = NumericValuePayload

    def apply(self, result: EvaluationResult, payload: NumericValuePayload, *, rule: DecisionRule, ctx: RuleContext) -> None:
        if payload.value is None:
            return
        if payload.value > 1:
            result.additional_fees += payload.value
        else:
            result.price_multiplier *= payload.value


@register_action
class MultiplyPriceAction(ActionHandler):
    action_type = ActionType.MULTIPLY_PRICE.value
    action_title = "Multiply price"
    payload_model = NumericValuePayload

    def apply(self, result: EvaluationResult, payload: NumericValuePayload, *, rule: DecisionRule, ctx: RuleContext) -> None:
        if payload.value is None:
            return
        result.price_multiplier *= payload.value


@register_action
class AddFeeAction(ActionHandler):
    action_type = ActionType.ADD_FEE.value
    action_title = "Add fee"
    payload_model = NumericValuePayload

    def apply(self, result: EvaluationResult, payload: NumericValuePayload, *, rule: DecisionRule, ctx: RuleContext) -> None:
        if payload.value is None:
            return
        result.additional_fees += payload.value


@register_action
class ApplyDiscountAction(ActionHandler):
    action_type = ActionType.APPLY_DISCOUNT.value
    action_title = "Apply percentage discount"
    payload_model = DiscountPayload

    def apply(self, result: EvaluationResult, payload: DiscountPayload, *, rule: DecisionRule, ctx: RuleContext) -> None:
        if payload.value is not None:
            result.price_multiplier *= 1 - payload.value / 100
            return
        if payload.discount_value is None or payload.discount_type is None:
            return
        if payload.discount_type == "percentage":
            result.price_multiplier *= 1 - payload.discount_value / 100
        else:
            result.additional_fees -= payload.discount_value
