import json

import pytest

from common.decision_rules.catalog import build_catalog, main
from common.decision_rules.models import ActionType, Operator
from common.decision_rules.registry import ActionRegistry, registry


def test_every_action_type_has_a_handler():
    assert set(registry.ids()) == {t.value for t in ActionType}


def test_catalog_lists_operators_and_payload_schemas():
    catalog = build_catalog()
    assert catalog.operators == sorted(op.value for op in Operator)
    by_type = {entry.action_type: entry for entry in catalog.actions}
    assert by_type["require_document"].payload_model == "DocumentsPayload"
    assert "documents" in by_type["require_document"].payload_schema["properties"]
    assert [e.action_type for e in catalog.actions] == sorted(by_type)


def test_catalog_cli_json(capsys):
    main(["--format", "json"])
    out = json.loads(capsys.readouterr().out)
    assert "set_price" in {entry["action_type"] for entry in out["actions"]}


def test_catalog_cli_yaml(capsys):
    yaml = pytest.importorskip("yaml")
    main([])
    out = yaml.safe_load(capsys.readouterr().out)
    assert out["logic"] == ["AND", "OR"]


def test_registry_rejects_duplicates_and_missing_type():
    from common.decision_rules.actions import AddFeeAction

    local = ActionRegistry()
    local.register(AddFeeAction)
    with pytest.raises(ValueError, match="Duplicate"):
        local.register(AddFeeAction)

    class Nameless:
        pass

    with pytest.raises(ValueError, match="missing action_type"):
        local.register(Nameless)
