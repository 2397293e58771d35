from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from enum import Enum


class AskMode(str, Enum):
    # TOKEN answers with the next whitespace-separated word, LINE with the rest of the line.
    TOKEN = "token"
    LINE = "line"


class SayKind(str, Enum):
    SAY = "say"
    THINK = "think"


@dataclass(frozen=True, slots=True)
class PendingRequest:
    # Owned by InputReader from enqueue until satisfied; completion runs at most once.
    mode: AskMode
    completion: Callable[[], None]


@dataclass(frozen=True, slots=True)
class SayEvent:
    # Payload of the engine's say hook: (target, kind, text).
    target: object
    kind: SayKind
    text: object
