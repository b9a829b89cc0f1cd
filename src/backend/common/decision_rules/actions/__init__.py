from .documents import RequireDocumentAction
from .eligibility import (
    AllowAction,
    AutoApproveAction,
    BlockAction,
    RequireManualReviewAction,
    ShowWarningAction,
)
from .pricing import AddFeeAction, ApplyDiscountAction, MultiplyPriceAction, SetPriceAction
from .risk import AddRiskScoreAction
from .workflow import (
    AssignAgentAction,
    RecommendBankAction,
    SetFieldAction,
    SetFlagAction,
    SetNextStepAction,
    SetProcessingTimeAction,
    ShowStepAction,
    SkipStepAction,
)

__all__ = [
    "BlockAction",
    "AllowAction",
    "RequireDocumentAction",
    "SetPriceAction",
    "MultiplyPriceAction",
    "AddFeeAction",
    "ShowWarningAction",
    "SetFieldAction",
    "SetProcessingTimeAction",
    "RecommendBankAction",
    "AssignAgentAction",
    "AddRiskScoreAction",
    "AutoApproveAction",
    "RequireManualReviewAction",
    "SkipStepAction",
    "ShowStepAction",
    "ApplyDiscountAction",
    "SetFlagAction",
    "SetNextStepAction",
]
