from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv


load_dotenv()

_TRUTHY = {"1", "true", "yes", "on"}


@dataclass(frozen=True)
class EngineConfig:
    rules_path: Optional[Path]
    log_level: str
    collect_diagnostics: bool


def get_engine_config() -> EngineConfig:
    """
    Load decision rules settings from environment variables:
      DECISION_RULES_PATH, DECISION_RULES_LOG_LEVEL, DECISION_RULES_COLLECT_DIAGNOSTICS
    """
    raw_path = os.getenv("DECISION_RULES_PATH", "").strip()
    log_level = os.getenv("DECISION_RULES_LOG_LEVEL", "WARNING").strip().upper() or "WARNING"
    if logging.getLevelName(log_level) == f"Level {log_level}":
        raise ValueError(f"DECISION_RULES_LOG_LEVEL is not a valid logging level: {log_level}")
    collect = os.getenv("DECISION_RULES_COLLECT_DIAGNOSTICS", "true").strip().lower() in _TRUTHY

    return EngineConfig(
        rules_path=Path(raw_path) if raw_path else None,
        log_level=log_level,
        collect_diagnostics=collect,
    )


def configure_logging(config: EngineConfig) -> None:
    logging.getLogger("common.decision_rules").setLevel(config.log_level)
