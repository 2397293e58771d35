from __future__ import annotations

from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from scratch_run.observability.logging import LogMessage


# LogSink port receives structured log records; rendering is adapter-specific.
@runtime_checkable
class LogSink(Protocol):
    def emit(self, message: LogMessage) -> None:
        """Consume one LogMessage."""
        raise NotImplementedError("LogSink is a port; use a concrete adapter.")

    def close(self) -> None:
        """Release resources held by the sink."""
        raise NotImplementedError("LogSink is a port; use a concrete adapter.")
