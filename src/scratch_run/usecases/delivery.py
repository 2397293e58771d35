"""Input delivery strategies.

Eager delivery buffers the whole stream before the program starts, so every
ask resolves at issue time. Incremental delivery feeds lines as they arrive
and retries the oldest pending ask after each one.
"""

from __future__ import annotations

import asyncio
from collections.abc import Callable
from typing import Literal, Protocol

from scratch_run.domain.errors import UnreadableFile
from scratch_run.observability.logging import Logger
from scratch_run.ports.input_source import InputSource
from scratch_run.services.input_reader import InputReader

DeliveryMode = Literal["eager", "incremental"]
FailureHandler = Callable[[BaseException], None]


class DeliveryStrategy(Protocol):
    # eager tells the request bridge whether asks must resolve synchronously.
    eager: bool

    async def prepare(self, reader: InputReader, *, on_failure: FailureHandler | None = None) -> None:
        raise NotImplementedError("DeliveryStrategy.prepare must be implemented")

    async def close(self) -> None:
        raise NotImplementedError("DeliveryStrategy.close must be implemented")


def split_lines(text: str) -> list[str]:
    # Text streams already translate "\r\n" to "\n"; a trailing terminator leaves a final empty line.
    return text.split("\n")


class EagerDelivery:
    eager = True

    def __init__(self, source: InputSource, logger: Logger) -> None:
        self._source = source
        self._logger = logger

    async def prepare(self, reader: InputReader, *, on_failure: FailureHandler | None = None) -> None:
        # Read errors surface from this await, so on_failure is not needed here.
        try:
            text = await self._source.read_all()
        except (OSError, ValueError) as exc:
            raise UnreadableFile(f"Error while reading input: {exc}") from exc
        lines = split_lines(text)
        reader.add_lines(lines)
        self._logger.info("input buffered", delivery="eager", lines=len(lines))

    async def close(self) -> None:
        return None


class IncrementalDelivery:
    eager = False

    def __init__(self, source: InputSource, logger: Logger) -> None:
        self._source = source
        self._logger = logger
        self._task: asyncio.Task[None] | None = None

    async def prepare(self, reader: InputReader, *, on_failure: FailureHandler | None = None) -> None:
        # Returns at once; lines keep flowing in on the background task.
        # A read error ends the task; on_failure receives it as UnreadableFile.
        if self._task is not None:
            raise RuntimeError("IncrementalDelivery.prepare called twice")
        self._task = asyncio.create_task(self._feed(reader), name="incremental-delivery")
        if on_failure is not None:
            self._task.add_done_callback(lambda task: _report_failure(task, on_failure))
        self._logger.info("input streaming", delivery="incremental")

    async def _feed(self, reader: InputReader) -> None:
        count = 0
        try:
            async for line in self._source.iter_lines():
                count += 1
                self.deliver(reader, line)
        except (OSError, ValueError) as exc:
            self._logger.error("input read failed", lines=count, pending=reader.pending_count)
            raise UnreadableFile(f"Error while reading input: {exc}") from exc
        self._logger.debug("input closed", lines=count, pending=reader.pending_count)

    def deliver(self, reader: InputReader, line: str) -> None:
        reader.add_line(line)
        if reader.has_pending():
            reader.try_to_answer()

    async def close(self) -> None:
        if self._task is None:
            return
        if self._task.done():
            if not self._task.cancelled():
                # Retrieve the result so a failure already reported is not logged again.
                self._task.exception()
            return
        self._task.cancel()
        try:
            await self._task
        except asyncio.CancelledError:
            pass


def _report_failure(task: asyncio.Task[None], on_failure: FailureHandler) -> None:
    if task.cancelled():
        return
    exc = task.exception()
    if exc is not None:
        on_failure(exc)


def build_delivery(mode: DeliveryMode, source: InputSource, logger: Logger) -> DeliveryStrategy:
    if mode == "incremental":
        return IncrementalDelivery(source, logger)
    return EagerDelivery(source, logger)
