from __future__ import annotations

import asyncio
import io
import sys
import threading
from collections.abc import AsyncIterator, Callable
from dataclasses import dataclass, field
from typing import Any, TextIO

from scratch_run.ports.input_source import InputSource

# Blocking reads run on daemon threads that hand results back to the loop.
# A daemon thread never holds up interpreter exit while stdin stays open,
# which the default executor would do.


def strip_terminator(raw: str) -> str:
    # Accept both "\n" and "\r\n" so piped Windows text still yields clean lines.
    if raw.endswith("\n"):
        raw = raw[:-1]
    if raw.endswith("\r"):
        raw = raw[:-1]
    return raw


def _post(loop: asyncio.AbstractEventLoop, fn: Callable[..., Any], *args: Any) -> bool:
    try:
        loop.call_soon_threadsafe(fn, *args)
    except RuntimeError:
        # Loop already closed: the run is over and nobody waits for input anymore.
        return False
    return True


@dataclass
class StreamInputSource(InputSource):
    # Text-stream InputSource adapter; defaults to the process stdin.
    # encoding re-decodes a byte-backed stream; it must be applied before the first read.
    stream: TextIO = field(default_factory=lambda: sys.stdin)
    encoding: str | None = None

    def __post_init__(self) -> None:
        if self.encoding is not None and isinstance(self.stream, io.TextIOWrapper):
            self.stream.reconfigure(encoding=self.encoding)

    async def read_all(self) -> str:
        loop = asyncio.get_running_loop()
        future: asyncio.Future[str] = loop.create_future()

        def _resolve(text: str) -> None:
            if not future.done():
                future.set_result(text)

        def _reject(exc: BaseException) -> None:
            if not future.done():
                future.set_exception(exc)

        def _read() -> None:
            try:
                text = self.stream.read()
            except (OSError, ValueError) as exc:
                _post(loop, _reject, exc)
                return
            _post(loop, _resolve, text)

        threading.Thread(target=_read, name="input-all", daemon=True).start()
        return await future

    async def iter_lines(self) -> AsyncIterator[str]:
        loop = asyncio.get_running_loop()
        queue: asyncio.Queue[str | BaseException | None] = asyncio.Queue()

        def _pump() -> None:
            try:
                for raw in iter(self.stream.readline, ""):
                    if not _post(loop, queue.put_nowait, strip_terminator(raw)):
                        return
            except (OSError, ValueError) as exc:
                # Undecodable bytes land here too; the loop side re-raises.
                _post(loop, queue.put_nowait, exc)
                return
            _post(loop, queue.put_nowait, None)

        threading.Thread(target=_pump, name="input-lines", daemon=True).start()
        while True:
            line = await queue.get()
            if line is None:
                return
            if isinstance(line, BaseException):
                raise line
            yield line
