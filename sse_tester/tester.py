"""Connection test harness for streaming sources."""

import asyncio
import logging
from collections.abc import AsyncIterator, Callable
from dataclasses import dataclass, field
from typing import Any

from sse_tester.channel import ChannelClosedError, Sink
from sse_tester.clients.base import (
    InvalidHeaderError,
    InvalidURLError,
    StreamClientBuilder,
    StreamError,
)
from sse_tester.clients.sse import SSEClientBuilder
from sse_tester.errors import (
    ConnectionTestError,
    ConnectionTimeoutError,
    InvalidEndpointError,
    InvalidHeaderPairError,
    InvalidHeadersError,
    ServerClosedError,
    ServerError,
)
from sse_tester.headers import HeaderParseError, parse_headers
from sse_tester.models.status import TestStatusMessage
from sse_tester.models.target import TesterConfig, TestTarget

log = logging.getLogger(__name__)

type ClientBuilderFactory = Callable[[str], StreamClientBuilder[Any]]


async def _next_or_none[E](events: AsyncIterator[E]) -> E | None:
    return await anext(events, None)


@dataclass(frozen=True, kw_only=True)
class ConnectionTester:
    """Validates that a stream endpoint delivers events.

    Each call to start runs one test in its own task. Progress and the final
    outcome are reported only through the sink given to start.
    """

    __test__ = False

    config: TesterConfig = field(default_factory=TesterConfig)
    client_builder: ClientBuilderFactory = SSEClientBuilder.for_url
    _tasks: set[asyncio.Task[None]] = field(
        default_factory=set, init=False, repr=False
    )

    def start(self, target: TestTarget, sink: Sink[TestStatusMessage]) -> None:
        """Start a test run in the background and return immediately."""
        task = asyncio.create_task(
            self._run(target, sink), name=f"connection-test:{target.endpoint}"
        )
        self._tasks.add(task)
        task.add_done_callback(self._tasks.discard)

    async def wait_closed(self) -> None:
        """Wait until every started run has finished."""
        while self._tasks:
            await asyncio.wait(set(self._tasks))

    async def _run(self, target: TestTarget, sink: Sink[TestStatusMessage]) -> None:
        """Run one test and send its terminal message."""
        log.info("Starting connection test for %s", target.endpoint)
        try:
            try:
                protocol = await self.test_connection(target, sink)
            except ConnectionTestError as e:
                log.info("Connection test for %s failed: %s", target.endpoint, e)
                result = TestStatusMessage.failure(str(e))
            except ChannelClosedError:
                raise
            except Exception as e:
                log.error(
                    "Connection test for %s crashed: %s",
                    target.endpoint,
                    e,
                    exc_info=e,
                )
                result = TestStatusMessage.failure(str(e) or type(e).__name__)
            else:
                log.info("Connection test for %s succeeded", target.endpoint)
                result = TestStatusMessage.success(
                    f"Successfully validated {protocol} connection"
                )

            await sink.send(result)
        except ChannelClosedError:
            log.warning(
                "Status sink closed, abandoning connection test for %s",
                target.endpoint,
            )

    async def test_connection(
        self, target: TestTarget, sink: Sink[TestStatusMessage]
    ) -> str:
        """Connect to the target and wait for its first event.

        Sends progress messages to the sink but not the terminal message.

        Args:
            target: Endpoint and optional header string to test
            sink: Destination for progress messages

        Returns:
            Protocol label of the validated client

        Raises:
            ConnectionTestError: Classified reason the test failed
            ChannelClosedError: If the sink is closed

        """
        try:
            builder = self.client_builder(target.endpoint)
        except InvalidURLError as e:
            raise InvalidEndpointError() from e

        try:
            headers = parse_headers(target.headers or "")
        except HeaderParseError as e:
            raise InvalidHeadersError() from e

        for key, value in headers.items():
            try:
                builder = builder.header(key, value)
            except InvalidHeaderError as e:
                raise InvalidHeaderPairError(key, value) from e

        client = builder.build()
        await sink.send(
            TestStatusMessage.progress(f"Constructed {client.protocol} client")
        )

        async with client.connect() as events:
            event = await self._first_event(events)
            log.debug("First event from %s: %r", target.endpoint, event)
            await sink.send(
                TestStatusMessage.progress(
                    f"Received message from {client.protocol} server"
                )
            )

        return client.protocol

    async def _first_event[E](self, events: AsyncIterator[E]) -> E:
        """Race the first event against the configured timeout.

        An event that is ready when the timer expires still counts.
        """
        first = asyncio.create_task(_next_or_none(events))
        try:
            await asyncio.wait({first}, timeout=self.config.timeout)
        finally:
            if not first.done():
                first.cancel()
                await asyncio.wait({first})

        if first.cancelled():
            raise ConnectionTimeoutError(self.config.timeout)

        try:
            event = first.result()
        except StreamError as e:
            raise ServerError(str(e) or type(e).__name__) from e

        if event is None:
            raise ServerClosedError()

        return event
