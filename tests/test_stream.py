"""Tests for collect_stream: ordering, decoding and error propagation."""

import asyncio
import sys
from pathlib import Path

import pytest

# Allow importing ses_transport when running from project root
sys.path.insert(0, str(Path(__file__).resolve().parent.parent))

from ses_transport.transport.stream import collect_stream


async def _agen(chunks, error=None):
    for chunk in chunks:
        await asyncio.sleep(0)
        yield chunk
    if error is not None:
        raise error


def test_concatenates_in_emission_order():
    chunks = [b"From: a@example.com\r\n", b"To: b@example.com\r\n", b"\r\n", b"body"]
    out = asyncio.run(collect_stream(_agen(chunks)))
    assert out == "From: a@example.com\r\nTo: b@example.com\r\n\r\nbody"


def test_empty_stream():
    assert asyncio.run(collect_stream(_agen([]))) == ""


def test_multibyte_character_split_across_chunks():
    encoded = "Grüße ☃".encode("utf-8")
    # split inside the three-byte snowman and inside the two-byte ü
    chunks = [encoded[:3], encoded[3:9], encoded[9:]]
    assert asyncio.run(collect_stream(_agen(chunks))) == "Grüße ☃"


def test_str_and_none_chunks():
    out = asyncio.run(collect_stream(_agen(["Subject: hi\r\n", None, b"\r\n", "text"])))
    assert out == "Subject: hi\r\n\r\ntext"


def test_invalid_utf8_is_replaced():
    out = asyncio.run(collect_stream(_agen([b"ok \xff end"])))
    assert out == "ok \ufffd end"


def test_sync_iterable():
    assert asyncio.run(collect_stream(iter([b"a", b"b", b"c"]))) == "abc"


def test_bytearray_and_memoryview_chunks():
    out = asyncio.run(collect_stream(_agen([bytearray(b"ab"), memoryview(b"cd")])))
    assert out == "abcd"


def test_upstream_error_propagates_unchanged():
    boom = RuntimeError("stream broke")
    with pytest.raises(RuntimeError) as exc_info:
        asyncio.run(collect_stream(_agen([b"partial"], error=boom)))
    assert exc_info.value is boom
