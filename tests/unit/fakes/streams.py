from __future__ import annotations

import asyncio
from typing import AsyncIterator


async def chunks_of(data: bytes, size: int = 4) -> AsyncIterator[bytes]:
    for start in range(0, len(data), size):
        yield data[start:start + size]


async def broken_stream(data: bytes, error: BaseException) -> AsyncIterator[bytes]:
    """Yields `data` then fails, like a client dropping mid-upload."""
    yield data
    raise error


async def stalled_stream(data: bytes, started: asyncio.Event) -> AsyncIterator[bytes]:
    """Yields `data`, signals `started` once it has been consumed, then never finishes."""
    yield data
    started.set()
    await asyncio.Event().wait()
