from __future__ import annotations

from datetime import datetime
from enum import Enum
from typing import Any, Dict, List, Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class Operator(str, Enum):
    EQUALS = "equals"
    NOT_EQUALS = "not_equals"
    CONTAINS = "contains"
    GREATER_THAN = "greater_than"
    LESS_THAN = "less_than"
    IN = "in"
    NOT_IN = "not_in"


class Logic(str, Enum):
    AND = "AND"
    OR = "OR"


class ActionType(str, Enum):
    BLOCK = "block"
    ALLOW = "allow"
    REQUIRE_DOCUMENT = "require_document"
    SET_PRICE = "set_price"
    MULTIPLY_PRICE = "multiply_price"
    ADD_FEE = "add_fee"
    SHOW_WARNING = "show_warning"
    SET_FIELD = "set_field"
    SET_PROCESSING_TIME = "set_processing_time"
    RECOMMEND_BANK = "recommend_bank"
    ASSIGN_AGENT = "assign_agent"
    ADD_RISK_SCORE = "add_risk_score"
    AUTO_APPROVE = "auto_approve"
    REQUIRE_MANUAL_REVIEW = "require_manual_review"
    SKIP_STEP = "skip_step"
    SHOW_STEP = "show_step"
    APPLY_DISCOUNT = "apply_discount"
    SET_FLAG = "set_flag"
    SET_NEXT_STEP = "set_next_step"


class RuleType(str, Enum):
    # Descriptive only; the engine never branches on it.
    ELIGIBILITY = "eligibility"
    PRICING = "pricing"
    DOCUMENT = "document"
    WORKFLOW = "workflow"


class DocumentCategory(str, Enum):
    MANDATORY = "mandatory"
    EDD = "edd"
    OPTIONAL = "optional"


# Ordered so that smart-mode union validation keeps the exact JSON type.
ConditionValue = Union[bool, int, float, str, List[Any], None]
Number = Union[int, float]


class _WireModel(BaseModel):
    """Base for rule-set documents.

    Unknown keys are kept and serialization skips unset fields, so an
    imported document re-exports unchanged.
    """

    model_config = ConfigDict(extra="allow", populate_by_name=True)

    def to_wire(self) -> Dict[str, Any]:
        return self.model_dump(mode="json", by_alias=True, exclude_unset=True)


class Condition(_WireModel):
    id: Optional[str] = None
    field: str = ""
    # Plain string: unknown operators must still parse and then fail closed.
    operator: str = Operator.EQUALS.value
    value: ConditionValue = None
    logic: Optional[str] = None


class DocumentRequirement(_WireModel):
    name: str
    category: DocumentCategory = DocumentCategory.MANDATORY
    description: Optional[str] = None


class Action(_WireModel):
    id: Optional[str] = None
    type: str
    target: Optional[str] = None
    value: Any = None
    message: Optional[str] = None
    documents: Optional[List[DocumentRequirement]] = None
    processing_days: Optional[Number] = Field(default=None, alias="processingDays")
    banks: Optional[List[str]] = None
    agent_id: Optional[str] = Field(default=None, alias="agentId")
    agent_name: Optional[str] = Field(default=None, alias="agentName")
    risk_points: Optional[Number] = Field(default=None, alias="riskPoints")
    step_key: Optional[str] = Field(default=None, alias="stepKey")
    discount_type: Optional[Literal["percentage", "fixed"]] = Field(default=None, alias="discountType")
    discount_value: Optional[Number] = Field(default=None, alias="discountValue")

    def payload(self) -> Dict[str, Any]:
        """Fields the author actually set, keyed by python name."""
        return self.model_dump(exclude_unset=True)


class DecisionRule(_WireModel):
    id: str
    rule_name: str = ""
    rule_type: str = RuleType.ELIGIBILITY.value
    conditions: List[Condition] = Field(default_factory=list)
    actions: List[Action] = Field(default_factory=list)
    # `null` is accepted and sorts as 0; the wire value is kept for export.
    priority: Optional[int] = 0
    is_active: bool = True
    description: Optional[str] = None


class RequiredDocument(BaseModel):
    name: str
    category: DocumentCategory = DocumentCategory.MANDATORY


class ActionSignal(BaseModel):
    """Routing/metadata record for actions that do not touch the accumulators."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    rule_id: str
    rule_name: str
    action_type: str
    target: Optional[str] = None
    value: Any = None
    message: Optional[str] = None
    agent_id: Optional[str] = None
    agent_name: Optional[str] = None


class EvaluationResult(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    applied_rule_names: List[str] = Field(default_factory=list)
    price_multiplier: float = 1.0
    additional_fees: float = 0.0
    warnings: List[str] = Field(default_factory=list)
    blocked: bool = False
    block_message: str = ""
    required_documents: List[RequiredDocument] = Field(default_factory=list)
    processing_time_days: Optional[int] = None
    recommended_banks: List[str] = Field(default_factory=list)
    risk_score: float = 0.0

    skipped_steps: List[str] = Field(default_factory=list)
    visible_steps: List[str] = Field(default_factory=list)
    next_step: Optional[str] = None
    fields: Dict[str, Any] = Field(default_factory=dict)
    flags: Dict[str, Any] = Field(default_factory=dict)
    signals: List[ActionSignal] = Field(default_factory=list)

    def to_json_dict(self) -> Dict[str, Any]:
        return self.model_dump(mode="json", by_alias=True)


class DiagnosticKind(str, Enum):
    UNKNOWN_OPERATOR = "UNKNOWN_OPERATOR"
    UNKNOWN_ACTION = "UNKNOWN_ACTION"
    INVALID_PAYLOAD = "INVALID_PAYLOAD"
    NON_NUMERIC_OPERAND = "NON_NUMERIC_OPERAND"


class Diagnostic(BaseModel):
    kind: DiagnosticKind
    rule_id: str
    rule_name: str = ""
    message: str
    values: Dict[str, Any] = Field(default_factory=dict)


class ConditionTrace(BaseModel):
    field: str
    operator: str
    expected: Any = None
    resolved: str = ""
    logic: Optional[str] = None
    outcome: bool


class RuleTrace(BaseModel):
    rule_id: str
    rule_name: str
    priority: int
    active: bool
    matched: bool = False
    conditions: List[ConditionTrace] = Field(default_factory=list)
    applied_actions: List[str] = Field(default_factory=list)
    ignored_actions: List[str] = Field(default_factory=list)


class SimulationReport(BaseModel):
    run_id: str
    generated_at: datetime
    context: Dict[str, Any] = Field(default_factory=dict)
    result: EvaluationResult
    traces: List[RuleTrace] = Field(default_factory=list)
    diagnostics: List[Diagnostic] = Field(default_factory=list)
