from __future__ import annotations

import json
import sys
from pathlib import Path
from typing import TextIO

from scratch_run.observability.logging import LogMessage


class StderrLogSink:
    # Compact JSON lines on stderr; stdout carries program output only.
    def __init__(self, stream: TextIO | None = None) -> None:
        self._stream = stream

    def emit(self, message: LogMessage) -> None:
        stream = self._stream if self._stream is not None else sys.stderr
        stream.write(_render(message) + "\n")
        stream.flush()

    def close(self) -> None:
        return None


class JsonlLogSink:
    # File-backed structured log sink; the file is appended to, never truncated.
    def __init__(self, path: Path) -> None:
        self._path = path
        self._path.parent.mkdir(parents=True, exist_ok=True)
        self._file: TextIO | None = self._path.open("a", encoding="utf-8")

    def emit(self, message: LogMessage) -> None:
        if self._file is None:
            raise ValueError(f"JsonlLogSink for {self._path} is closed")
        self._file.write(_render(message) + "\n")
        self._file.flush()

    def close(self) -> None:
        # Close is idempotent.
        if self._file is None:
            return
        self._file.close()
        self._file = None


class NullLogSink:
    def emit(self, message: LogMessage) -> None:
        _ = message

    def close(self) -> None:
        return None


def _render(message: LogMessage) -> str:
    payload = {
        "level": message.level,
        "message": message.message,
        "timestamp": message.timestamp.isoformat().replace("+00:00", "Z"),
        "fields": message.fields,
    }
    return json.dumps(payload, separators=(",", ":"), ensure_ascii=False, default=str)
