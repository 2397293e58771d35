from __future__ import annotations

import importlib
from collections.abc import Callable
from pathlib import Path
from typing import Any

from scratch_run.adapters.log_sinks import JsonlLogSink, NullLogSink, StderrLogSink
from scratch_run.config.loader import ConfigError
from scratch_run.observability.logging import Logger
from scratch_run.ports.engine import ExecutionEngine
from scratch_run.ports.log_sink import LogSink
from scratch_run.usecases.config_models import EngineConfig, LoggingConfig

EngineFactory = Callable[[dict[str, Any]], ExecutionEngine]


def resolve_engine_factory(ref: str) -> EngineFactory:
    # ref is "package.module:callable"; the callable receives engine.settings.
    module_name, _, attr = ref.partition(":")
    try:
        module = importlib.import_module(module_name)
    except ImportError as exc:
        raise ConfigError(f"engine.factory module cannot be imported: {module_name}") from exc
    factory = getattr(module, attr, None)
    if factory is None or not callable(factory):
        raise ConfigError(f"engine.factory {ref!r} is not a callable")
    return factory


def build_engine(config: EngineConfig) -> ExecutionEngine:
    if config.factory is None:
        raise ConfigError("engine.factory is required to run a project")
    engine = resolve_engine_factory(config.factory)(dict(config.settings))
    if not isinstance(engine, ExecutionEngine):
        raise ConfigError(f"engine.factory {config.factory!r} did not return an ExecutionEngine")
    return engine


def build_log_sink(config: LoggingConfig) -> LogSink:
    if config.sink == "jsonl":
        assert config.path is not None
        return JsonlLogSink(Path(config.path))
    if config.sink == "none":
        return NullLogSink()
    return StderrLogSink()


def build_logger(config: LoggingConfig) -> Logger:
    return Logger(build_log_sink(config), level=config.level)
