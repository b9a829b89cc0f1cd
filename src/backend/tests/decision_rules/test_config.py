from pathlib import Path

import pytest

from common.decision_rules.config import get_engine_config


def test_defaults(monkeypatch):
    for name in ("DECISION_RULES_PATH", "DECISION_RULES_LOG_LEVEL", "DECISION_RULES_COLLECT_DIAGNOSTICS"):
        monkeypatch.delenv(name, raising=False)
    cfg = get_engine_config()
    assert cfg.rules_path is None
    assert cfg.log_level == "WARNING"
    assert cfg.collect_diagnostics is True


def test_env_overrides(monkeypatch):
    monkeypatch.setenv("DECISION_RULES_PATH", "/tmp/rules.json")
    monkeypatch.setenv("DECISION_RULES_LOG_LEVEL", "debug")
    monkeypatch.setenv("DECISION_RULES_COLLECT_DIAGNOSTICS", "no")
    cfg = get_engine_config()
    assert cfg.rules_path == Path("/tmp/rules.json")
    assert cfg.log_level == "DEBUG"
    assert cfg.collect_diagnostics is False


def test_invalid_log_level(monkeypatch):
    monkeypatch.setenv("DECISION_RULES_LOG_LEVEL", "chatty")
    with pytest.raises(ValueError, match="DECISION_RULES_LOG_LEVEL"):
        get_engine_config()
