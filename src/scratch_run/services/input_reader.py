"""Buffered answer source for ask-and-wait requests.

Lines and pending asks arrive on independent timelines. ``try_to_answer`` is
the single place where they meet: it pairs the oldest pending ask with the
next token or line, in strict FIFO order, at most one ask per call.
"""

from __future__ import annotations

from collections.abc import Callable, Iterable

from scratch_run.domain.messages import AskMode, PendingRequest
from scratch_run.services.ordered_queue import OrderedQueue

# Same set as the \s class minus "\n" and "\r", which never survive line splitting.
_SPACES = frozenset(" \t\v\f")


def is_space(char: str) -> bool:
    return char in _SPACES


class InputReader:
    def __init__(self, lines: Iterable[str] = ()) -> None:
        self.lines: OrderedQueue[str] = OrderedQueue(lines)
        self.cursor = 0
        self.pending: OrderedQueue[PendingRequest] = OrderedQueue()
        self.current_answer = ""

    @property
    def pending_count(self) -> int:
        return len(self.pending)

    def has_pending(self) -> bool:
        return len(self.pending) > 0

    def add_line(self, line: str) -> None:
        self.lines.push(line)

    def add_lines(self, lines: Iterable[str]) -> None:
        self.lines.push_all(lines)

    def enqueue_ask(self, mode: AskMode, completion: Callable[[], None]) -> None:
        # Enqueue only; the caller decides when to attempt satisfaction.
        self.pending.push(PendingRequest(mode=mode, completion=completion))

    def try_to_answer(self) -> bool:
        """Answer the oldest pending ask if buffered input allows it.

        Returns True when one request was satisfied. With no pending
        requests this is a no-op and leaves lines and cursor untouched.
        """
        request = self.pending.front()
        if request is None:
            return False
        answer = self._read_token() if request.mode is AskMode.TOKEN else self._read_line()
        if answer is None:
            # Not enough input yet; the request stays at the front.
            return False
        self._emit_answer(answer)
        return True

    def _emit_answer(self, answer: str) -> None:
        self.current_answer = answer
        request = self.pending.shift()
        assert request is not None
        request.completion()

    def _read_token(self) -> str | None:
        while len(self.lines) > 0:
            line = self.lines.front()
            assert line is not None
            pos = self.cursor
            while pos < len(line) and is_space(line[pos]):
                pos += 1
            if pos == len(line):
                self._retire_line()
                continue
            end = pos + 1
            while end < len(line) and not is_space(line[end]):
                end += 1
            token = line[pos:end]
            if end == len(line):
                self._retire_line()
            else:
                self.cursor = end
            return token
        return None

    def _read_line(self) -> str | None:
        line = self.lines.shift()
        if line is None:
            return None
        answer = line[self.cursor :]
        self.cursor = 0
        return answer

    def _retire_line(self) -> None:
        self.lines.shift()
        self.cursor = 0
