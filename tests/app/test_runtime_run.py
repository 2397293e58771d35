from __future__ import annotations

import asyncio
import io
import json
from pathlib import Path

import pytest

from scratch_run.adapters.input_source import StreamInputSource
from scratch_run.adapters.log_sinks import NullLogSink
from scratch_run.adapters.output_sink import StreamOutputSink
from scratch_run.app.runtime import check_project, run_project
from scratch_run.domain.errors import BlockedExtension, InputUnderflow, InvalidProject, UnreadableFile
from scratch_run.observability.logging import Logger
from scratch_run.ports.input_source import InputSource
from scratch_run.usecases.config_models import AppConfig, InputConfig
from fakes import FakeEngine, FedInputSource


def _project_file(tmp_path: Path, extensions: list[str] | None = None) -> Path:
    path = tmp_path / "project.json"
    path.write_text(
        json.dumps(
            {
                "targets": [{"name": "Stage", "isStage": True}],
                "extensions": extensions or [],
            }
        ),
        encoding="utf-8",
    )
    return path


def _run(
    path: Path,
    engine: FakeEngine,
    source: InputSource,
    *,
    delivery: str = "eager",
) -> str:
    stdout = io.StringIO()
    config = AppConfig(input=InputConfig(delivery=delivery))

    async def scenario() -> None:
        await asyncio.wait_for(
            run_project(
                path,
                config=config,
                engine=engine,
                input_source=source,
                output_sink=StreamOutputSink(stdout),
                logger=Logger(NullLogSink()),
            ),
            timeout=2,
        )

    asyncio.run(scenario())
    return stdout.getvalue()


async def _sum_two_tokens(engine: FakeEngine) -> None:
    a = await engine.ask("read_token")
    b = await engine.ask("read_token")
    engine.say(int(a) + int(b))


def test_eager_run_reads_tokens_and_says_result(tmp_path: Path) -> None:
    engine = FakeEngine(_sum_two_tokens)
    out = _run(_project_file(tmp_path), engine, FedInputSource("5\n3\n"))
    assert out == "8\n"
    assert engine.started and engine.hidden and engine.flag_raised
    assert engine.turbo is True
    assert engine.loaded is not None


def test_run_routes_say_events_and_think(tmp_path: Path) -> None:
    async def program(engine: FakeEngine) -> None:
        engine.think("Name: ")
        name = await engine.ask("What is your name?")
        engine.emit("say", f"Hello, {name}")
        engine.emit("think", "...")

    out = _run(_project_file(tmp_path), FakeEngine(program), FedInputSource("Grace Hopper\n"))
    assert out == "Name: Hello, Grace Hopper\n..."


def test_eager_underflow_fails_the_run(tmp_path: Path) -> None:
    engine = FakeEngine(_sum_two_tokens)
    with pytest.raises(InputUnderflow):
        _run(_project_file(tmp_path), engine, FedInputSource("5"))
    # The engine saw the error too, but the driver recorded it first.
    assert any(isinstance(exc, InputUnderflow) for exc in engine.errors)


def test_incremental_run_answers_as_lines_arrive(tmp_path: Path) -> None:
    source = FedInputSource()

    async def program(engine: FakeEngine) -> None:
        first = await engine.ask("line?")
        engine.say(first.upper())
        second = await engine.ask("read_token")
        engine.say(second)

    async def feeder() -> None:
        await asyncio.sleep(0.01)
        source.feed("hello there")
        await asyncio.sleep(0.01)
        source.feed("  42 43")

    stdout = io.StringIO()

    async def scenario() -> None:
        feed_task = asyncio.create_task(feeder())
        await asyncio.wait_for(
            run_project(
                _project_file(tmp_path),
                config=AppConfig(input=InputConfig(delivery="incremental")),
                engine=FakeEngine(program),
                input_source=source,
                output_sink=StreamOutputSink(stdout),
                logger=Logger(NullLogSink()),
            ),
            timeout=2,
        )
        await feed_task

    asyncio.run(scenario())
    assert stdout.getvalue() == "HELLO THERE\n42\n"


def test_incremental_run_fails_on_undecodable_stdin(tmp_path: Path) -> None:
    async def program(engine: FakeEngine) -> None:
        await engine.ask("line?")
        engine.say("unreachable")

    stream = io.TextIOWrapper(io.BytesIO(b"\xff\xfe bad\nok\n"), encoding="utf-8")
    with pytest.raises(UnreadableFile, match="Error while reading input"):
        _run(_project_file(tmp_path), FakeEngine(program), StreamInputSource(stream), delivery="incremental")


def test_eager_run_over_crlf_stdin(tmp_path: Path) -> None:
    stream = io.TextIOWrapper(io.BytesIO(b"5\r\n3\r\n"), encoding="utf-8")
    out = _run(_project_file(tmp_path), FakeEngine(_sum_two_tokens), StreamInputSource(stream))
    assert out == "8\n"


def test_blocked_extension_during_load(tmp_path: Path) -> None:
    engine = FakeEngine(extensions=["music"])
    with pytest.raises(BlockedExtension) as info:
        _run(_project_file(tmp_path), engine, FedInputSource())
    assert info.value.extension_id == "music"
    assert not engine.flag_raised


def test_engine_load_failure_becomes_invalid_project(tmp_path: Path) -> None:
    engine = FakeEngine(load_error=RuntimeError("Unexpected token"))
    with pytest.raises(InvalidProject, match="Unexpected token"):
        _run(_project_file(tmp_path), engine, FedInputSource())


def test_unreadable_project_file(tmp_path: Path) -> None:
    engine = FakeEngine()
    with pytest.raises(UnreadableFile):
        _run(tmp_path / "missing.sb3", engine, FedInputSource())
    assert not engine.started


def test_check_project_accepts_valid_file(tmp_path: Path) -> None:
    asyncio.run(check_project(_project_file(tmp_path)))


def test_check_project_loads_into_engine_when_given(tmp_path: Path) -> None:
    engine = FakeEngine()
    asyncio.run(check_project(_project_file(tmp_path), engine=engine))
    assert engine.loaded is not None
    assert not engine.flag_raised


def test_check_project_rejects_extensions(tmp_path: Path) -> None:
    with pytest.raises(BlockedExtension):
        asyncio.run(check_project(_project_file(tmp_path, extensions=["videoSensing"])))
