from __future__ import annotations

from collections.abc import Awaitable, Callable
from typing import Any, Protocol, runtime_checkable

# Primitive signature used by block overrides: (args, util) -> value or awaitable.
Primitive = Callable[[dict[str, Any], Any], Any]
SayHandler = Callable[[object, str, object], None]


# ExecutionEngine port: the block runtime is an external collaborator.
# Only the surface the runner needs is declared here.
@runtime_checkable
class ExecutionEngine(Protocol):
    def load_project(self, data: bytes) -> Awaitable[None]:
        """Decode and install a project; raise when the content is rejected."""
        raise NotImplementedError("ExecutionEngine is a port; use a concrete adapter.")

    def start(self) -> None:
        """Start the engine's step loop on the running event loop."""
        raise NotImplementedError("ExecutionEngine is a port; use a concrete adapter.")

    def set_turbo_mode(self, enabled: bool) -> None:
        raise NotImplementedError("ExecutionEngine is a port; use a concrete adapter.")

    def green_flag(self) -> None:
        """Begin running the loaded program."""
        raise NotImplementedError("ExecutionEngine is a port; use a concrete adapter.")

    def hide_targets(self) -> None:
        """Mark every target invisible; nothing is rendered headless."""
        raise NotImplementedError("ExecutionEngine is a port; use a concrete adapter.")

    def override_primitive(self, opcode: str, fn: Primitive) -> None:
        raise NotImplementedError("ExecutionEngine is a port; use a concrete adapter.")

    def on_say(self, handler: SayHandler) -> None:
        """Register a hook called with (target, kind, text) per say/think event."""
        raise NotImplementedError("ExecutionEngine is a port; use a concrete adapter.")

    def on_run_stop(self, handler: Callable[[], None]) -> None:
        """Register a hook fired exactly once when program execution stops."""
        raise NotImplementedError("ExecutionEngine is a port; use a concrete adapter.")

    def set_extension_loader(self, loader: Callable[[str], None]) -> None:
        """Replace the loader invoked with an extension id when a project needs one."""
        raise NotImplementedError("ExecutionEngine is a port; use a concrete adapter.")
