from __future__ import annotations

from typing import Any, Dict, List, Optional

from fastapi import APIRouter, HTTPException
from pydantic import BaseModel, Field

from common.decision_rules import DecisionRule, DiagnosticsCollector, RuleSetError, load_rules, parse_rules
from common.decision_rules.catalog import build_catalog
from common.decision_rules.config import get_engine_config
from common.decision_rules.engine import get_engine
from common.decision_rules.tester import RuleTester


router = APIRouter(prefix="/rules", tags=["rules"])


class EvaluateRequest(BaseModel):
    # When omitted, the rule set at DECISION_RULES_PATH is used.
    rules: Optional[List[Dict[str, Any]]] = None
    context: Dict[str, Any] = Field(default_factory=dict)


class ValidateRequest(BaseModel):
    rules: Any = None


def _resolve_rules(raw: Optional[List[Dict[str, Any]]]) -> List[DecisionRule]:
    try:
        if raw is not None:
            return parse_rules(raw)
        cfg = get_engine_config()
        if cfg.rules_path is None:
            raise HTTPException(status_code=400, detail="No rules supplied and DECISION_RULES_PATH is not set.")
        if not cfg.rules_path.exists():
            raise HTTPException(status_code=500, detail=f"Rule set file not found: {cfg.rules_path}")
        return load_rules(cfg.rules_path)
    except RuleSetError as exc:
        raise HTTPException(status_code=422, detail={"message": str(exc), "errors": exc.errors})


@router.post("/evaluate")
def evaluate_rules(request: EvaluateRequest):
    rules = _resolve_rules(request.rules)
    cfg = get_engine_config()
    collector = DiagnosticsCollector() if cfg.collect_diagnostics else None
    result = get_engine().apply(rules, request.context, diagnostics=collector)
    payload: Dict[str, Any] = {"result": result.to_json_dict()}
    if collector is not None:
        payload["diagnostics"] = [d.model_dump(mode="json") for d in collector.items]
    return payload


@router.post("/simulate")
def simulate_rules(request: EvaluateRequest):
    rules = _resolve_rules(request.rules)
    report = RuleTester().simulate(rules, request.context)
    return report.model_dump(mode="json", by_alias=True)


@router.post("/validate")
def validate_rules(request: ValidateRequest):
    try:
        rules = parse_rules(request.rules)
    except RuleSetError as exc:
        raise HTTPException(status_code=422, detail={"message": str(exc), "errors": exc.errors})
    return {
        "status": "ok",
        "rule_count": len(rules),
        "active_rule_count": sum(1 for rule in rules if rule.is_active),
    }


@router.get("/catalog")
def rules_catalog():
    return build_catalog().model_dump(mode="json")
