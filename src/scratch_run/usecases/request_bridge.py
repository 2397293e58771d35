from __future__ import annotations

import asyncio
from collections.abc import Callable
from typing import Any

from scratch_run.domain.errors import InputUnderflow, InvalidQuestion
from scratch_run.domain.messages import AskMode
from scratch_run.observability.logging import Logger
from scratch_run.ports.engine import ExecutionEngine, Primitive
from scratch_run.services.input_reader import InputReader

# Programs ask this exact question to read one whitespace-separated token.
READ_TOKEN_QUESTION = "read_token"

ANSWER_OPCODE = "sensing_answer"
ASK_OPCODE = "sensing_askandwait"


def classify_question(question: str) -> AskMode:
    # The question text doubles as the mode flag; keep the sentinel confined here.
    return AskMode.TOKEN if question == READ_TOKEN_QUESTION else AskMode.LINE


class RequestBridge:
    """Engine-facing side of ask/answer.

    Under eager delivery every ask resolves before ``ask_and_wait`` returns.
    Under incremental delivery the caller gets a future that resolves once
    the input reader has paired the ask with input.
    """

    def __init__(self, reader: InputReader, *, eager: bool, logger: Logger) -> None:
        self._reader = reader
        self._eager = eager
        self._logger = logger

    def answer(self) -> str:
        return self._reader.current_answer

    def ask_and_wait(self, question: object) -> asyncio.Future[None] | None:
        if question is None:
            raise InvalidQuestion("Question for ask and wait should not be None")
        mode = classify_question(str(question))
        if self._eager:
            return self._ask_eager(mode)
        return self._ask_incremental(mode)

    def install(
        self,
        engine: ExecutionEngine,
        *,
        wrap: Callable[[Primitive], Primitive] | None = None,
    ) -> None:
        # wrap lets the driver observe fatal errors before the engine sees them.
        wrap = wrap or (lambda fn: fn)
        engine.override_primitive(ANSWER_OPCODE, wrap(self._answer_primitive))
        engine.override_primitive(ASK_OPCODE, wrap(self._ask_primitive))

    def _ask_eager(self, mode: AskMode) -> None:
        resolved = False

        def _complete() -> None:
            nonlocal resolved
            resolved = True

        self._reader.enqueue_ask(mode, _complete)
        self._reader.try_to_answer()
        if not resolved:
            # All input is already buffered, so waiting would hang forever.
            self._logger.error("input underflow", mode=mode.value, pending=self._reader.pending_count)
            raise InputUnderflow(f"Program asked for a {mode.value} but the input is exhausted")
        self._logger.debug("ask answered", mode=mode.value)
        return None

    def _ask_incremental(self, mode: AskMode) -> asyncio.Future[None]:
        future: asyncio.Future[None] = asyncio.get_running_loop().create_future()

        def _complete() -> None:
            self._logger.debug("ask answered", mode=mode.value)
            future.set_result(None)

        self._reader.enqueue_ask(mode, _complete)
        self._logger.debug("ask pending", mode=mode.value, pending=self._reader.pending_count)
        self._reader.try_to_answer()
        return future

    def _answer_primitive(self, args: dict[str, Any], util: Any) -> str:
        return self.answer()

    def _ask_primitive(self, args: dict[str, Any], util: Any) -> asyncio.Future[None] | None:
        return self.ask_and_wait(args.get("QUESTION"))
