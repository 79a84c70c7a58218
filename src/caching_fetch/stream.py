from __future__ import annotations

import codecs
from typing import AsyncIterable

from .errors import TransportError


async def decode_full(
    byte_stream: AsyncIterable[bytes] | None, encoding: str = "utf-8"
) -> str:
    """Drain an async byte source and return the complete decoded text.

    A JSON document may arrive split over several chunks, possibly in the
    middle of a multi-byte character, so nothing is parsed until the source
    is exhausted.
    """
    if byte_stream is None:
        raise TransportError("Response carried no body to read")

    decoder = codecs.getincrementaldecoder(encoding)()
    fragments: list[str] = []
    try:
        async for chunk in byte_stream:
            fragments.append(decoder.decode(chunk))
        fragments.append(decoder.decode(b"", final=True))
    except UnicodeDecodeError as exc:
        raise TransportError(f"Response body is not valid {encoding}: {exc}") from exc
    return "".join(fragments)
