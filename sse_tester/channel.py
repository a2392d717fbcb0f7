"""Ordered asynchronous channel between a test run and its observer."""

import asyncio
from collections import deque
from typing import Protocol, Self


class ChannelClosedError(Exception):
    """Raised when sending to a closed channel or receiving from a drained one."""


class Sink[T](Protocol):
    """Destination a test run reports its status messages to."""

    async def send(self, item: T) -> None:
        """Deliver an item, suspending while the sink is full.

        Raises:
            ChannelClosedError: If the observer is gone

        """
        ...


class MessageChannel[T]:
    """Bounded FIFO channel that either side can close.

    Items are delivered in the order they were sent. Once closed, senders
    fail immediately (including senders suspended on a full buffer) while
    receivers still drain whatever was buffered before the close.
    """

    def __init__(self, capacity: int = 16) -> None:
        if capacity < 1:
            raise ValueError("Channel capacity must be at least 1")
        self._capacity = capacity
        self._items: deque[T] = deque()
        self._closed = False
        self._changed = asyncio.Condition()

    @property
    def closed(self) -> bool:
        """Whether the channel has been closed."""
        return self._closed

    async def send(self, item: T) -> None:
        """Append an item, waiting for buffer space."""
        async with self._changed:
            await self._changed.wait_for(
                lambda: self._closed or len(self._items) < self._capacity
            )
            if self._closed:
                raise ChannelClosedError("Channel is closed")
            self._items.append(item)
            self._changed.notify_all()

    async def receive(self) -> T:
        """Pop the oldest item, waiting until one is available."""
        async with self._changed:
            await self._changed.wait_for(lambda: self._closed or bool(self._items))
            if not self._items:
                raise ChannelClosedError("Channel is closed")
            item = self._items.popleft()
            self._changed.notify_all()
            return item

    async def close(self) -> None:
        """Close the channel and wake every waiting sender and receiver."""
        async with self._changed:
            self._closed = True
            self._changed.notify_all()

    def __aiter__(self) -> Self:
        return self

    async def __anext__(self) -> T:
        try:
            return await self.receive()
        except ChannelClosedError:
            raise StopAsyncIteration from None
