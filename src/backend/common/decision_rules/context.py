from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, Mapping, Optional, Protocol, Tuple

from .diagnostics import DiagnosticsCollector


class FieldResolver(Protocol):
    def resolve(self, facts: Mapping[str, Any], field_name: str) -> str:
        """Return the string value of `field_name`, or "" when it cannot be resolved."""
        ...


# Condition field -> context keys tried in order. Case-sensitive.
DEFAULT_FIELD_MAP: Dict[str, Tuple[str, ...]] = {
    # Country / nationality
    "country": ("nationality", "country"),
    "nationality": ("nationality",),
    "country.code": ("countryCode", "country_code", "nationality"),
    "country.risk_level": ("countryRiskLevel", "country_risk_level"),
    "country.is_blocked": ("countryBlocked", "country_is_blocked"),
    # Emirate
    "emirate": ("emirate",),
    "jurisdiction.emirate": ("emirate",),
    # Jurisdiction / location type
    "jurisdiction.type": ("locationType", "jurisdiction_type", "jurisdictionType"),
    "jurisdiction_type": ("locationType", "jurisdiction_type", "jurisdictionType"),
    "location_type": ("locationType", "location_type"),
    "locationType": ("locationType",),
    "license_type": ("locationType", "license_type"),
    # Activity
    "activity.code": ("activityCode", "activity_code"),
    "activity_code": ("activityCode", "activity_code"),
    "activity.risk_level": ("activityRiskLevel", "risk_level"),
    "activityRiskLevel": ("activityRiskLevel",),
    "risk_level": ("activityRiskLevel", "risk_level"),
    "activity.is_restricted": ("activityRestricted", "activity_is_restricted"),
    # Plan
    "plan": ("planCode", "plan_code"),
    "plan.code": ("planCode", "plan_code"),
    "plan_code": ("planCode", "plan_code"),
    "plan.base_price": ("planBasePrice", "plan_base_price"),
    # Promo code
    "promo_code": ("promoCode", "promo_code"),
    "promoCode": ("promoCode",),
}


def stringify(value: Any) -> str:
    if value is None:
        return ""
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    if isinstance(value, (list, tuple)):
        return ",".join(stringify(v) for v in value)
    return str(value)


class DefaultFieldResolver:
    """Reference field map, then a dotted walk into nested mappings, then a direct key."""

    def __init__(self, field_map: Optional[Mapping[str, Tuple[str, ...]]] = None):
        self._field_map = dict(DEFAULT_FIELD_MAP if field_map is None else field_map)

    def resolve(self, facts: Mapping[str, Any], field_name: str) -> str:
        for key in self._field_map.get(field_name, ()):
            value = facts.get(key)
            if value is not None and value != "":
                return stringify(value)

        value = _walk_dotted(facts, field_name)
        if value is not None:
            return stringify(value)
        return stringify(facts.get(field_name))


def _walk_dotted(facts: Mapping[str, Any], path: str) -> Any:
    if "." not in path:
        return None
    node: Any = facts
    for part in path.split("."):
        if not isinstance(node, Mapping) or part not in node:
            return None
        node = node[part]
    return node


default_resolver = DefaultFieldResolver()


@dataclass(frozen=True)
class RuleContext:
    facts: Mapping[str, Any] = field(default_factory=dict)
    resolver: FieldResolver = field(default=default_resolver)
    diagnostics: Optional[DiagnosticsCollector] = None

    def get_field_value(self, field_name: str) -> str:
        return self.resolver.resolve(self.facts, field_name)
