"""Typed payload variants, one per action kind.

The wire `Action` carries every optional field; each handler validates only the
fields its kind reads. A payload that fails validation makes the action a no-op.
"""

from __future__ import annotations

from typing import Any, List, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field

from .models import DocumentRequirement


class _Payload(BaseModel):
    # Infinite or NaN numbers (e.g. JSON 1e400) are invalid payloads, not values.
    model_config = ConfigDict(allow_inf_nan=False)


class NumericValuePayload(_Payload):
    value: Optional[float] = None


class MessagePayload(_Payload):
    message: Optional[str] = None


class SignalPayload(_Payload):
    target: Optional[str] = None
    value: Any = None
    message: Optional[str] = None


class DocumentsPayload(_Payload):
    documents: List[DocumentRequirement] = Field(default_factory=list)
    # Legacy single-document form.
    target: Optional[str] = None


class ProcessingTimePayload(_Payload):
    processing_days: Optional[float] = None
    value: Any = None


class BanksPayload(_Payload):
    banks: List[str] = Field(default_factory=list)


class AgentPayload(_Payload):
    agent_id: Optional[str] = None
    agent_name: Optional[str] = None
    target: Optional[str] = None
    message: Optional[str] = None


class RiskScorePayload(_Payload):
    risk_points: Optional[float] = None
    value: Any = None


class StepPayload(_Payload):
    step_key: Optional[str] = None
    target: Optional[str] = None
    message: Optional[str] = None


class FieldPayload(_Payload):
    target: Optional[str] = None
    value: Any = None


class DiscountPayload(_Payload):
    value: Optional[float] = None
    # Legacy promo-code payload.
    discount_type: Optional[Literal["percentage", "fixed"]] = None
    discount_value: Optional[float] = None


class FlagPayload(_Payload):
    # `message` names the flag.
    message: Optional[str] = None
    value: Any = None
