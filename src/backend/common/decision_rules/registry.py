from __future__ import annotations

from typing import Dict, Iterable, Type

from .action import ActionHandler


class ActionRegistry:
    def __init__(self):
        self._handlers: Dict[str, Type[ActionHandler]] = {}

    def register(self, handler_cls: Type[ActionHandler]) -> None:
        action_type = getattr(handler_cls, "action_type", None)
        if not action_type:
            raise ValueError("Action handler class missing action_type")
        if action_type in self._handlers:
            raise ValueError(f"Duplicate action_type registered: {action_type}")
        self._handlers[action_type] = handler_cls

    def create_all(self) -> Dict[str, ActionHandler]:
        return {action_type: cls() for action_type, cls in self._handlers.items()}

    def get(self, action_type: str) -> Type[ActionHandler]:
        return self._handlers[action_type]

    def ids(self) -> Iterable[str]:
        return self._handlers.keys()


registry = ActionRegistry()


def register_action(handler_cls: Type[ActionHandler]) -> Type[ActionHandler]:
    registry.register(handler_cls)
    return handler_cls
