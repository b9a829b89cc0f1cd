"""Decision rules engine for application pricing, eligibility and routing.

This package contains only domain logic:
- Inputs are a rule set (plain records) and a context of business facts.
- No database, storage or network calls live here; callers supply and persist rules.
"""

from .conditions import evaluate
from .context import DefaultFieldResolver, FieldResolver, RuleContext
from .diagnostics import DiagnosticsCollector
from .engine import DecisionEngine, apply_rules
from .errors import RuleSetError
from .models import (
    Action,
    Condition,
    DecisionRule,
    Diagnostic,
    DocumentRequirement,
    EvaluationResult,
    RequiredDocument,
    SimulationReport,
)
from .ruleset import dumps_rules, load_rules, loads_rules, parse_rules
from .tester import RuleTester, simulate

# Import built-in action handlers so they self-register with the global registry.
from . import actions as _builtin_actions  # noqa: F401
