import json

import pytest

from common.decision_rules.errors import RuleSetError
from common.decision_rules.ruleset import dump_rules, dumps_rules, load_rules, loads_rules, parse_rules


def test_round_trip_is_lossless(sample_rules_path):
    original = json.loads(sample_rules_path.read_text())
    rules = load_rules(sample_rules_path)
    assert json.loads(dumps_rules(rules)) == original


def test_round_trip_does_not_fill_defaults():
    doc = [{"id": "r1", "rule_name": "Minimal", "conditions": [{"field": "emirate", "operator": "equals", "value": "Dubai"}]}]
    exported = json.loads(dumps_rules(loads_rules(json.dumps(doc))))
    assert exported == doc


def test_round_trip_keeps_unknown_keys_and_value_types():
    doc = [
        {
            "id": "r1",
            "rule_name": "Types",
            "rule_type": "cascade",
            "priority": 2,
            "is_active": True,
            "conditions": [
                {"id": "c1", "field": "plan.base_price", "operator": "greater_than", "value": 1.5},
                {"id": "c2", "field": "country.is_blocked", "operator": "equals", "value": True, "logic": "OR"},
                {"id": "c3", "field": "plan.base_price", "operator": "less_than", "value": 100},
            ],
            "actions": [
                {"id": "a1", "type": "set_flag", "value": False, "message": "vip", "ui": {"color": "red"}},
                {"id": "a2", "type": "set_processing_time", "processingDays": 5},
            ],
            "created_at": "2024-01-01T00:00:00Z",
        }
    ]
    exported = json.loads(dumps_rules(parse_rules(doc)))
    assert exported == doc
    assert isinstance(exported[0]["conditions"][2]["value"], int)
    assert isinstance(exported[0]["actions"][1]["processingDays"], int)


def test_wrapped_config_document_is_accepted(sample_rules_path):
    doc = {"rules": json.loads(sample_rules_path.read_text())}
    assert len(parse_rules(doc)) == 6


def test_invalid_json_raises_rule_set_error():
    with pytest.raises(RuleSetError, match="Invalid JSON"):
        loads_rules("[{not json")


def test_non_array_document_is_rejected():
    with pytest.raises(RuleSetError, match="JSON array"):
        parse_rules({"id": "r1"})


def test_structural_errors_are_collected():
    doc = [
        {"rule_name": "missing id"},
        {"id": "r2", "actions": [{"value": 3}]},
        {"id": "r3", "actions": [{"type": "require_document", "documents": [{"name": "X", "category": "secret"}]}]},
    ]
    with pytest.raises(RuleSetError) as info:
        parse_rules(doc)
    locs = [tuple(err["loc"]) for err in info.value.errors]
    assert (0, "id") in locs
    assert (1, "actions", 0, "type") in locs
    assert any(loc[:2] == (2, "actions") and loc[-1] == "category" for loc in locs)


def test_dump_rules_writes_file(tmp_path, sample_rules_path):
    rules = load_rules(sample_rules_path)
    out = tmp_path / "export.json"
    dump_rules(rules, out)
    assert json.loads(out.read_text()) == json.loads(sample_rules_path.read_text())


def test_null_priority_is_accepted_and_exported_as_null():
    doc = [{"id": "r1", "rule_name": "No priority", "priority": None}]
    rules = loads_rules(json.dumps(doc))
    assert rules[0].priority is None
    assert json.loads(dumps_rules(rules)) == doc
