"""Bounded single-producer/single-consumer channel for stream records."""

import asyncio
from collections.abc import AsyncIterator
from typing import cast

from core.log import get_logger
from core.models.api.streaming import StreamRecord

logger = get_logger(__name__)

_CLOSED = object()


class ChannelClosedError(RuntimeError):
    """Raised when sending on a closed channel."""

    pass


class RecordChannel:
    """Channel the pipeline writes records into and the transport drains.

    ``send`` waits while the channel is full. ``close`` never waits: a
    receiver drains everything sent before the close and then stops.
    """

    def __init__(self, maxsize: int = 64) -> None:
        self._queue: asyncio.Queue[object] = asyncio.Queue(maxsize=maxsize)
        self._closed = False

    @property
    def closed(self) -> bool:
        return self._closed

    async def send(self, record: StreamRecord) -> None:
        if self._closed:
            raise ChannelClosedError("Cannot send on a closed record channel")
        await self._queue.put(record)

    def close(self) -> None:
        if self._closed:
            return
        self._closed = True
        try:
            self._queue.put_nowait(_CLOSED)
        except asyncio.QueueFull:
            # The receiver sees the closed flag once it drains the queue
            pass

    async def __aiter__(self) -> AsyncIterator[StreamRecord]:
        while not (self._closed and self._queue.empty()):
            item = await self._queue.get()
            if item is _CLOSED:
                return
            yield cast(StreamRecord, item)
