from __future__ import annotations

import codecs
from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field, model_validator

# Config models map YAML sections to typed structures; unknown keys fail fast.


class InputConfig(BaseModel):
    # Input delivery selects how stdin reaches pending asks.
    model_config = ConfigDict(extra="forbid")
    delivery: Literal["eager", "incremental"] = "eager"
    encoding: str = "utf-8"

    @model_validator(mode="after")
    def _check_encoding(self) -> InputConfig:
        try:
            codecs.lookup(self.encoding)
        except LookupError as exc:
            raise ValueError(f"input.encoding is not a known codec: {self.encoding!r}") from exc
        return self


class EngineConfig(BaseModel):
    # Engine factory is a "package.module:callable" reference taking the settings mapping.
    model_config = ConfigDict(extra="forbid")
    factory: str | None = None
    turbo_mode: bool = True
    settings: dict[str, Any] = Field(default_factory=dict)

    @model_validator(mode="after")
    def _check_factory_ref(self) -> EngineConfig:
        if self.factory is not None:
            module, sep, attr = self.factory.partition(":")
            if not module or not sep or not attr:
                raise ValueError("engine.factory must look like 'package.module:callable'")
        return self


class LoggingConfig(BaseModel):
    # Logging never targets stdout; it belongs to the running program.
    model_config = ConfigDict(extra="forbid")
    sink: Literal["stderr", "jsonl", "none"] = "stderr"
    level: Literal["debug", "info", "warning", "error"] = "warning"
    path: str | None = None

    @model_validator(mode="after")
    def _require_path(self) -> LoggingConfig:
        # For jsonl sink, a path is required to avoid silent defaults.
        if self.sink == "jsonl" and not self.path:
            raise ValueError("logging.path is required when sink is 'jsonl'")
        return self


class AppConfig(BaseModel):
    # AppConfig is the top-level typed view of configuration.
    model_config = ConfigDict(extra="forbid")
    version: int = 1
    input: InputConfig = Field(default_factory=InputConfig)
    engine: EngineConfig = Field(default_factory=EngineConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)
