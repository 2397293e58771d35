from __future__ import annotations

from typing import Protocol, runtime_checkable


# OutputSink port defines how say/think text leaves the system.
@runtime_checkable
class OutputSink(Protocol):
    def say(self, text: str) -> None:
        """Write text followed by a newline."""
        # Port contract has no implementation; calling it directly is a wiring error.
        raise NotImplementedError("OutputSink is a port; use a concrete adapter.")

    def think(self, text: str) -> None:
        """Write text with no trailing newline."""
        raise NotImplementedError("OutputSink is a port; use a concrete adapter.")

    def close(self) -> None:
        """Flush and release resources held by the sink."""
        raise NotImplementedError("OutputSink is a port; use a concrete adapter.")
