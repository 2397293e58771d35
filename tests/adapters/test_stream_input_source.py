from __future__ import annotations

import asyncio
import io

import pytest

from scratch_run.adapters.input_source import StreamInputSource, strip_terminator


def test_strip_terminator_handles_lf_and_crlf() -> None:
    assert strip_terminator("abc\n") == "abc"
    assert strip_terminator("abc\r\n") == "abc"
    assert strip_terminator("abc") == "abc"
    assert strip_terminator("\n") == ""


def test_read_all_returns_whole_stream() -> None:
    source = StreamInputSource(io.StringIO("5\n3\n"))
    assert asyncio.run(source.read_all()) == "5\n3\n"


def test_iter_lines_yields_lines_in_order_until_eof() -> None:
    async def collect() -> list[str]:
        source = StreamInputSource(io.StringIO("a b\n\nlast"))
        return [line async for line in source.iter_lines()]

    assert asyncio.run(collect()) == ["a b", "", "last"]


def test_iter_lines_over_byte_stream_drops_crlf_terminators() -> None:
    async def collect() -> list[str]:
        stream = io.TextIOWrapper(io.BytesIO(b"a b\r\n\r\nlast"), encoding="utf-8")
        return [line async for line in StreamInputSource(stream).iter_lines()]

    assert asyncio.run(collect()) == ["a b", "", "last"]


def test_read_all_over_byte_stream_translates_crlf() -> None:
    stream = io.TextIOWrapper(io.BytesIO(b"5\r\n3\r\n"), encoding="utf-8")
    assert asyncio.run(StreamInputSource(stream).read_all()) == "5\n3\n"


def test_iter_lines_raises_on_undecodable_bytes() -> None:
    async def collect() -> list[str]:
        stream = io.TextIOWrapper(io.BytesIO(b"\xff\xfe bad\nok\n"), encoding="utf-8")
        seen: list[str] = []
        async for line in StreamInputSource(stream).iter_lines():
            seen.append(line)
        return seen

    with pytest.raises(UnicodeDecodeError):
        asyncio.run(asyncio.wait_for(collect(), timeout=5))


def test_read_all_raises_on_undecodable_bytes() -> None:
    stream = io.TextIOWrapper(io.BytesIO(b"\xff\xfe bad\n"), encoding="utf-8")
    with pytest.raises(UnicodeDecodeError):
        asyncio.run(StreamInputSource(stream).read_all())


def test_encoding_reconfigures_byte_stream_before_reading() -> None:
    stream = io.TextIOWrapper(io.BytesIO("café\n".encode("latin-1")), encoding="utf-8")
    source = StreamInputSource(stream, encoding="latin-1")
    assert asyncio.run(source.read_all()) == "café\n"


def test_encoding_is_ignored_for_plain_text_streams() -> None:
    source = StreamInputSource(io.StringIO("x\n"), encoding="latin-1")
    assert asyncio.run(source.read_all()) == "x\n"
