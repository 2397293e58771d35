from __future__ import annotations

import pytest

from scratch_run.observability.logging import LogMessage, Logger


class _ListSink:
    def __init__(self) -> None:
        self.messages: list[LogMessage] = []
        self.closed = False

    def emit(self, message: LogMessage) -> None:
        self.messages.append(message)

    def close(self) -> None:
        self.closed = True


def test_log_message_requires_level_and_message() -> None:
    with pytest.raises(ValueError):
        LogMessage(level="", message="x")
    with pytest.raises(ValueError):
        LogMessage(level="info", message="")
    with pytest.raises(ValueError):
        LogMessage(level="verbose", message="x")


def test_logger_filters_below_threshold() -> None:
    sink = _ListSink()
    logger = Logger(sink, level="info")
    logger.debug("hidden")
    logger.info("shown", lines=2)
    logger.error("also shown")
    assert [m.message for m in sink.messages] == ["shown", "also shown"]
    assert sink.messages[0].fields == {"lines": 2}


def test_logger_rejects_unknown_level() -> None:
    with pytest.raises(ValueError):
        Logger(_ListSink(), level="loud")


def test_logger_close_closes_sink() -> None:
    sink = _ListSink()
    Logger(sink).close()
    assert sink.closed
