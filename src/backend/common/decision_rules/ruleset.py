from __future__ import annotations

import json
from pathlib import Path
from typing import Any, List, Sequence, Union

from pydantic import TypeAdapter, ValidationError

from .errors import RuleSetError
from .models import DecisionRule

_RULES_ADAPTER = TypeAdapter(List[DecisionRule])


def parse_rules(data: Any) -> List[DecisionRule]:
    """Validate a decoded rule-set document (a JSON array of rules).

    A `{"rules": [...]}` wrapper, as stored in saved configurations, is accepted too.
    """
    if isinstance(data, dict) and "rules" in data:
        data = data["rules"]
    if not isinstance(data, list):
        raise RuleSetError("Rule set must be a JSON array of rules.")
    try:
        return _RULES_ADAPTER.validate_python(data)
    except ValidationError as exc:
        raise RuleSetError(
            f"Invalid rule set: {exc.error_count()} validation error(s).",
            errors=[
                {"loc": list(err["loc"]), "msg": err["msg"], "type": err["type"]}
                for err in exc.errors()
            ],
        ) from exc


def loads_rules(text: Union[str, bytes]) -> List[DecisionRule]:
    try:
        data = json.loads(text)
    except json.JSONDecodeError as exc:
        raise RuleSetError(f"Invalid JSON: {exc.msg} (line {exc.lineno}, column {exc.colno}).") from exc
    return parse_rules(data)


def load_rules(path: Path) -> List[DecisionRule]:
    with path.open() as handle:
        return loads_rules(handle.read())


def rules_to_wire(rules: Sequence[DecisionRule]) -> List[dict]:
    return [rule.to_wire() for rule in rules]


def dumps_rules(rules: Sequence[DecisionRule], *, indent: int = 2) -> str:
    return json.dumps(rules_to_wire(rules), indent=indent)


def dump_rules(rules: Sequence[DecisionRule], path: Path) -> None:
    path.write_text(dumps_rules(rules))
