from __future__ import annotations

from typing import Any, Dict, List


class RuleSetError(ValueError):
    """Raised when a rule-set document is structurally invalid at import time."""

    def __init__(self, message: str, errors: List[Dict[str, Any]] | None = None):
        super().__init__(message)
        self.errors = errors or []
