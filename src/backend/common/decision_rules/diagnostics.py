from __future__ import annotations

import logging
from typing import Any, Callable, List, Optional

from .models import Diagnostic, DiagnosticKind

logger = logging.getLogger(__name__)


class DiagnosticsCollector:
    """Collects evaluation diagnostics without changing outcomes.

    An optional `sink` callback receives every diagnostic as it is reported,
    for editor/tester tooling that wants to stream them.
    """

    def __init__(self, sink: Optional[Callable[[Diagnostic], None]] = None):
        self._items: List[Diagnostic] = []
        self._sink = sink

    def report(
        self,
        kind: DiagnosticKind,
        *,
        rule_id: str,
        rule_name: str = "",
        message: str,
        **values: Any,
    ) -> Diagnostic:
        diagnostic = Diagnostic(kind=kind, rule_id=rule_id, rule_name=rule_name, message=message, values=values)
        logger.debug("rule %s (%s): %s %s", rule_id, rule_name, kind.value, message)
        self._items.append(diagnostic)
        if self._sink is not None:
            try:
                self._sink(diagnostic)
            except Exception:
                logger.exception("diagnostics sink failed for rule %s", rule_id)
        return diagnostic

    @property
    def items(self) -> List[Diagnostic]:
        return list(self._items)

    def of_kind(self, kind: DiagnosticKind) -> List[Diagnostic]:
        return [d for d in self._items if d.kind == kind]

    def __len__(self) -> int:
        return len(self._items)
