from __future__ import annotations

from dataclasses import dataclass, field
from datetime import UTC, datetime

from scratch_run.ports.log_sink import LogSink

LEVELS = {"debug": 10, "info": 20, "warning": 30, "error": 40}


@dataclass(frozen=True, slots=True)
class LogMessage:
    # Structured log payload; sinks decide how it is rendered.
    level: str
    message: str
    timestamp: datetime = field(default_factory=lambda: datetime.now(tz=UTC))
    fields: dict[str, object] = field(default_factory=dict)

    def __post_init__(self) -> None:
        if not self.level or not self.message:
            raise ValueError("LogMessage requires non-empty level/message")
        if self.level not in LEVELS:
            raise ValueError(f"Unknown log level: {self.level}")


class Logger:
    # Level-filtering front for a LogSink. Stdout belongs to the program, so sinks never use it.
    def __init__(self, sink: LogSink, *, level: str = "warning") -> None:
        if level not in LEVELS:
            raise ValueError(f"Unknown log level: {level}")
        self._sink = sink
        self._threshold = LEVELS[level]

    def enabled_for(self, level: str) -> bool:
        return LEVELS[level] >= self._threshold

    def log(self, level: str, message: str, **fields: object) -> None:
        if not self.enabled_for(level):
            return
        self._sink.emit(LogMessage(level=level, message=message, fields=dict(fields)))

    def debug(self, message: str, **fields: object) -> None:
        self.log("debug", message, **fields)

    def info(self, message: str, **fields: object) -> None:
        self.log("info", message, **fields)

    def warning(self, message: str, **fields: object) -> None:
        self.log("warning", message, **fields)

    def error(self, message: str, **fields: object) -> None:
        self.log("error", message, **fields)

    def close(self) -> None:
        self._sink.close()
