from .errors import (
    BlockedExtension,
    InputUnderflow,
    InvalidProject,
    InvalidQuestion,
    MissingArgument,
    ScratchRunError,
    UnreadableFile,
)
from .messages import AskMode, PendingRequest, SayEvent, SayKind

# Public domain exports keep imports explicit across layers.
__all__ = [
    "AskMode",
    "BlockedExtension",
    "InputUnderflow",
    "InvalidProject",
    "InvalidQuestion",
    "MissingArgument",
    "PendingRequest",
    "SayEvent",
    "SayKind",
    "ScratchRunError",
    "UnreadableFile",
]
