from __future__ import annotations

import json
import os
from collections.abc import Mapping
from pathlib import Path

from locator_healing.config.schema import HealingSettings, TestSuiteConfig

_TRUE_VALUES = {"1", "true", "yes", "on"}
_FALSE_VALUES = {"0", "false", "no", "off"}

ENV_OVERRIDES = {
    "SELF_HEALING_ENABLED": "healing_enabled",
    "SELF_HEALING_LEARNING_ENABLED": "learning_enabled",
    "SELF_HEALING_CAPTURE_ARTIFACTS": "capture_artifacts",
    "SELF_HEALING_ARTIFACTS_ROOT": "artifacts_root",
}


class ConfigLoader:
    """Loads and validates the JSON suite configuration and healing flags."""

    @staticmethod
    def load(path: str | Path, environ: Mapping[str, str] | None = None) -> TestSuiteConfig:
        config_path = Path(path)
        with config_path.open("r", encoding="utf-8") as handle:
            payload = json.load(handle)
        config = TestSuiteConfig.model_validate(payload)
        config.healing = ConfigLoader.apply_env(config.healing, environ)
        return config

    @staticmethod
    def from_env(environ: Mapping[str, str] | None = None) -> HealingSettings:
        return ConfigLoader.apply_env(HealingSettings(), environ)

    @staticmethod
    def apply_env(settings: HealingSettings, environ: Mapping[str, str] | None = None) -> HealingSettings:
        source = os.environ if environ is None else environ
        updates: dict[str, object] = {}
        for variable, field_name in ENV_OVERRIDES.items():
            raw = source.get(variable)
            if raw is None:
                continue
            if field_name == "artifacts_root":
                updates[field_name] = raw
            else:
                updates[field_name] = _parse_bool(variable, raw)
        if not updates:
            return settings
        return settings.model_copy(update=updates)


def _parse_bool(variable: str, raw: str) -> bool:
    normalized = raw.strip().lower()
    if normalized in _TRUE_VALUES:
        return True
    if normalized in _FALSE_VALUES:
        return False
    raise ValueError(f"{variable} must be a boolean flag, got {raw!r}")
