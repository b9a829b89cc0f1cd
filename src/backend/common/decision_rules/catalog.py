from __future__ import annotations

import argparse
import json
from typing import Any, Dict, List

from pydantic import BaseModel, Field

from .conditions import OPERATORS
from .registry import registry

# Ensure built-in action handlers are imported/registered when generating a catalog.
from . import actions as _builtin_actions  # noqa: F401


class ActionCatalogEntry(BaseModel):
    action_type: str
    action_title: str

    module: str
    class_name: str

    payload_model: str
    payload_schema: Dict[str, Any]


class RulesCatalog(BaseModel):
    operators: List[str] = Field(default_factory=list)
    logic: List[str] = Field(default_factory=lambda: ["AND", "OR"])
    actions: List[ActionCatalogEntry] = Field(default_factory=list)


def build_catalog() -> RulesCatalog:
    entries: List[ActionCatalogEntry] = []
    for action_type in registry.ids():
        handler_cls = registry.get(action_type)
        payload_model = handler_cls.payload_model
        entries.append(
            ActionCatalogEntry(
                action_type=action_type,
                action_title=getattr(handler_cls, "action_title", ""),
                module=getattr(handler_cls, "__module__", ""),
                class_name=getattr(handler_cls, "__name__", ""),
                payload_model=payload_model.__name__,
                payload_schema=payload_model.model_json_schema(),
            )
        )

    entries.sort(key=lambda e: e.action_type)
    return RulesCatalog(operators=sorted(OPERATORS), actions=entries)


def _dump_json(catalog: dict[str, Any]) -> str:
    return json.dumps(catalog, indent=2, sort_keys=True)


def _dump_yaml(catalog: dict[str, Any]) -> str:
    import yaml

    return yaml.safe_dump(catalog, sort_keys=True)


def main(argv: list[str] | None = None) -> None:
    parser = argparse.ArgumentParser(description="Print the operator/action catalog for rule editors.")
    parser.add_argument(
        "--format",
        choices=("yaml", "json"),
        default="yaml",
        help="Output format (default: yaml).",
    )
    args = parser.parse_args(argv)

    catalog = build_catalog().model_dump()
    if args.format == "json":
        print(_dump_json(catalog))
    else:
        print(_dump_yaml(catalog))


if __name__ == "__main__":
    main()
