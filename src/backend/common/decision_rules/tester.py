"""Simulation ("tester") mode.

Runs the same loop as `DecisionEngine.apply` and additionally returns the
per-rule trace and any diagnostics, so a rule author can see why a rule did
or did not fire without the outcome drifting from production.
"""

from __future__ import annotations

import uuid
from datetime import datetime, timezone
from typing import Any, Iterable, Mapping, Optional

from .diagnostics import DiagnosticsCollector
from .engine import DecisionEngine, get_engine
from .models import DecisionRule, SimulationReport


class RuleTester:
    def __init__(self, engine: Optional[DecisionEngine] = None):
        self._engine = engine or get_engine()

    def simulate(self, rules: Iterable[DecisionRule], facts: Mapping[str, Any]) -> SimulationReport:
        collector = DiagnosticsCollector()
        result, traces = self._engine.run(rules, facts, diagnostics=collector, trace_inactive=True)
        return SimulationReport(
            run_id=str(uuid.uuid4()),
            generated_at=datetime.now(timezone.utc),
            context=dict(facts),
            result=result,
            traces=traces,
            diagnostics=collector.items,
        )


def simulate(rules: Iterable[DecisionRule], facts: Mapping[str, Any]) -> SimulationReport:
    return RuleTester().simulate(rules, facts)
