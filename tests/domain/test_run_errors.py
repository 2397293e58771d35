from __future__ import annotations

import dataclasses

import pytest

from scratch_run.domain import (
    AskMode,
    BlockedExtension,
    InputUnderflow,
    InvalidProject,
    InvalidQuestion,
    MissingArgument,
    PendingRequest,
    SayKind,
    ScratchRunError,
    UnreadableFile,
)


@pytest.mark.parametrize(
    "error_type",
    [MissingArgument, UnreadableFile, InvalidProject, InvalidQuestion, InputUnderflow],
)
def test_error_kinds_share_base(error_type: type[ScratchRunError]) -> None:
    assert issubclass(error_type, ScratchRunError)


def test_blocked_extension_carries_identifier() -> None:
    exc = BlockedExtension("text2speech")
    assert isinstance(exc, ScratchRunError)
    assert exc.extension_id == "text2speech"
    assert "text2speech" in str(exc)


def test_pending_request_is_immutable() -> None:
    request = PendingRequest(mode=AskMode.LINE, completion=lambda: None)
    with pytest.raises(dataclasses.FrozenInstanceError):
        request.mode = AskMode.TOKEN  # type: ignore[misc]


def test_say_kind_values_match_engine_event_kinds() -> None:
    assert SayKind("say") is SayKind.SAY
    assert SayKind("think") is SayKind.THINK
