"""Run and check drivers.

Both drivers only raise; mapping failures to exit codes is the CLI's job.
"""

from __future__ import annotations

import asyncio
from collections.abc import Callable
from pathlib import Path
from typing import Any

from scratch_run.adapters.output_sink import StreamOutputSink
from scratch_run.adapters.project_archive import decode_project, read_project_bytes, reject_extensions
from scratch_run.domain.errors import BlockedExtension, InvalidProject, ScratchRunError
from scratch_run.domain.messages import SayEvent, SayKind
from scratch_run.observability.logging import Logger
from scratch_run.ports.engine import ExecutionEngine
from scratch_run.ports.input_source import InputSource
from scratch_run.services.input_reader import InputReader
from scratch_run.usecases.config_models import AppConfig
from scratch_run.usecases.delivery import build_delivery
from scratch_run.usecases.request_bridge import RequestBridge


class RunOutcome:
    # Single-shot completion of a run: stopped cleanly, or failed with the first fatal error.
    def __init__(self) -> None:
        self._future: asyncio.Future[None] = asyncio.get_running_loop().create_future()

    def stop(self) -> None:
        if not self._future.done():
            self._future.set_result(None)

    def fail(self, exc: BaseException) -> None:
        if not self._future.done():
            self._future.set_exception(exc)

    def guard(self, fn: Callable[..., Any]) -> Callable[..., Any]:
        # Engines may swallow exceptions raised inside primitives; record fatal ones first.
        def _guarded(*args: Any) -> Any:
            try:
                return fn(*args)
            except ScratchRunError as exc:
                self.fail(exc)
                raise

        return _guarded

    async def wait(self) -> None:
        await self._future

    def settle(self) -> None:
        # Mark a failure as retrieved when the run already ended through another error.
        if self._future.done() and not self._future.cancelled():
            self._future.exception()


def block_extension(extension_id: str) -> None:
    raise BlockedExtension(extension_id)


async def load_into_engine(engine: ExecutionEngine, data: bytes) -> None:
    try:
        await engine.load_project(data)
    except ScratchRunError:
        raise
    except Exception as exc:
        raise InvalidProject(str(exc)) from exc


def wire_output(engine: ExecutionEngine, sink: StreamOutputSink) -> None:
    # Both the say event and the looks primitives are routed, whichever the engine uses.
    def _on_say(target: object, kind: str, text: object) -> None:
        sink.handle_say(SayEvent(target=target, kind=SayKind(kind), text=text))

    def _say(args: dict[str, Any], util: Any) -> None:
        sink.say(str(args.get("MESSAGE")))

    def _think(args: dict[str, Any], util: Any) -> None:
        sink.think(str(args.get("MESSAGE")))

    engine.on_say(_on_say)
    engine.override_primitive("looks_say", _say)
    engine.override_primitive("looks_think", _think)


async def run_project(
    path: Path,
    *,
    config: AppConfig,
    engine: ExecutionEngine,
    input_source: InputSource,
    output_sink: StreamOutputSink,
    logger: Logger,
) -> None:
    """Run a project to completion with stdin/stdout bridged to ask/say.

    Input preparation and project loading run concurrently; the green flag
    is only raised once both are done, so eager asks always see all input.
    Returns when the engine reports that execution stopped.
    """
    data = read_project_bytes(path)
    outcome = RunOutcome()
    reader = InputReader()
    delivery = build_delivery(config.input.delivery, input_source, logger)
    bridge = RequestBridge(reader, eager=delivery.eager, logger=logger)

    engine.set_extension_loader(outcome.guard(block_extension))
    wire_output(engine, output_sink)
    bridge.install(engine, wrap=outcome.guard)
    engine.on_run_stop(outcome.stop)
    engine.start()
    engine.set_turbo_mode(config.engine.turbo_mode)

    try:
        await asyncio.gather(
            delivery.prepare(reader, on_failure=outcome.fail),
            load_into_engine(engine, data),
        )
        engine.hide_targets()
        logger.info("project loaded", path=str(path), delivery=config.input.delivery)
        engine.green_flag()
        await outcome.wait()
    finally:
        outcome.settle()
        await delivery.close()
        output_sink.close()
    if reader.has_pending():
        logger.warning("run stopped with unanswered asks", pending=reader.pending_count)


async def check_project(path: Path, *, engine: ExecutionEngine | None = None) -> None:
    # Structure check only: decode, refuse extensions, and let the engine load it when one is configured.
    data = read_project_bytes(path)
    document = decode_project(data)
    reject_extensions(document)
    if engine is None:
        return
    engine.set_extension_loader(block_extension)
    engine.start()
    engine.set_turbo_mode(True)
    await load_into_engine(engine, data)
