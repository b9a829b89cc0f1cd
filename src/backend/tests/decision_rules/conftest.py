import os
import sys


# Ensure `src/backend` is on sys.path so imports like `import common...` work.
BACKEND_DIR = os.path.abspath(os.path.join(os.path.dirname(__file__), "../.."))
if BACKEND_DIR not in sys.path:
    sys.path.insert(0, BACKEND_DIR)

from pathlib import Path

import pytest

from common.decision_rules.context import RuleContext
from common.decision_rules.diagnostics import DiagnosticsCollector
from common.decision_rules.engine import DecisionEngine
from common.decision_rules.models import Action, Condition, DecisionRule


FIXTURES = Path(__file__).parent / "fixtures"


@pytest.fixture
def sample_rules_path() -> Path:
    return FIXTURES / "sample_rules.json"


@pytest.fixture
def engine() -> DecisionEngine:
    return DecisionEngine()


@pytest.fixture
def collector() -> DiagnosticsCollector:
    return DiagnosticsCollector()


@pytest.fixture
def cond():
    def _make(field: str, operator: str, value=None, logic=None) -> Condition:
        data = {"field": field, "operator": operator, "value": value}
        if logic is not None:
            data["logic"] = logic
        return Condition.model_validate(data)

    return _make


@pytest.fixture
def action():
    def _make(action_type: str, **payload) -> Action:
        return Action.model_validate({"type": action_type, **payload})

    return _make


@pytest.fixture
def make_rule():
    counter = {"n": 0}

    def _make(
        name: str,
        *,
        conditions=(),
        actions=(),
        priority: int = 0,
        is_active: bool = True,
        rule_id: str | None = None,
    ) -> DecisionRule:
        counter["n"] += 1
        return DecisionRule(
            id=rule_id or f"rule-{counter['n']}",
            rule_name=name,
            rule_type="eligibility",
            conditions=list(conditions),
            actions=list(actions),
            priority=priority,
            is_active=is_active,
        )

    return _make


@pytest.fixture
def make_ctx():
    def _make(facts=None, *, diagnostics: DiagnosticsCollector | None = None) -> RuleContext:
        return RuleContext(facts=facts or {}, diagnostics=diagnostics)

    return _make
