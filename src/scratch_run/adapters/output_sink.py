from __future__ import annotations

import sys
from dataclasses import dataclass, field
from typing import TextIO

from scratch_run.domain.messages import SayEvent, SayKind
from scratch_run.ports.output_sink import OutputSink


@dataclass
class StreamOutputSink(OutputSink):
    # Text-stream OutputSink adapter; defaults to the process stdout.
    stream: TextIO = field(default_factory=lambda: sys.stdout)

    def say(self, text: str) -> None:
        self.stream.write(text + "\n")
        self.stream.flush()

    def think(self, text: str) -> None:
        # Unterminated on purpose: programs use think to print without a newline.
        self.stream.write(text)
        self.stream.flush()

    def handle_say(self, event: SayEvent) -> None:
        text = str(event.text)
        if event.kind is SayKind.SAY:
            self.say(text)
        else:
            self.think(text)

    def close(self) -> None:
        # Never close the stream itself; stdout outlives the run.
        self.stream.flush()
