"""Materialize a composed message's chunk stream into a single string."""

import codecs
from typing import Any, AsyncIterable, Iterable, Union

ChunkStream = Union[AsyncIterable[Any], Iterable[Any]]


async def collect_stream(stream: ChunkStream) -> str:
    """Concatenate every chunk of ``stream`` as UTF-8 text, in emission order.

    Chunks may be bytes-like, str or None (empty); anything else goes through
    str(). Bytes are decoded incrementally, so a multi-byte character split
    across two chunks is reassembled; invalid sequences are replaced rather
    than raising. Errors raised by the stream itself propagate unchanged.
    """
    decoder = codecs.getincrementaldecoder("utf-8")(errors="replace")
    parts: list[str] = []

    def _feed(chunk: Any) -> None:
        if chunk is None:
            return
        if isinstance(chunk, (bytes, bytearray, memoryview)):
            parts.append(decoder.decode(bytes(chunk)))
            return
        parts.append(decoder.decode(b"", final=True))
        parts.append(chunk if isinstance(chunk, str) else str(chunk))

    if hasattr(stream, "__aiter__"):
        async for chunk in stream:
            _feed(chunk)
    else:
        for chunk in stream:
            _feed(chunk)

    parts.append(decoder.decode(b"", final=True))
    return "".join(parts)
