from __future__ import annotations

from pathlib import Path

import yaml
from pydantic import ValidationError

from scratch_run.usecases.config_models import AppConfig

_SUPPORTED_VERSIONS = {1}


# ConfigError is raised for invalid configuration (fail fast).
class ConfigError(ValueError):
    pass


def load_config(path: Path | None) -> AppConfig:
    # No path means built-in defaults: eager delivery, turbo mode, warnings to stderr.
    if path is None:
        return AppConfig()
    try:
        text = path.read_text(encoding="utf-8")
    except OSError as exc:
        raise ConfigError(f"Cannot read config {path}: {exc}") from exc
    try:
        raw = yaml.safe_load(text)
    except yaml.YAMLError as exc:
        raise ConfigError(f"Config {path} is not valid YAML: {exc}") from exc
    if raw is None:
        raw = {}
    if not isinstance(raw, dict):
        raise ConfigError("Config root must be a mapping")
    return parse_config(raw)


def parse_config(raw: dict[str, object]) -> AppConfig:
    version = raw.get("version", 1)
    if version not in _SUPPORTED_VERSIONS:
        raise ConfigError(f"Unsupported config version: {version!r}")
    try:
        return AppConfig.model_validate(raw)
    except ValidationError as exc:
        raise ConfigError(str(exc)) from exc
