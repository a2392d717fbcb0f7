"""Server-Sent Events client built on aiohttp."""

import logging
from collections.abc import AsyncGenerator, AsyncIterator, Mapping
from contextlib import asynccontextmanager
from dataclasses import dataclass, field
from typing import ClassVar, Self

import aiohttp
from yarl import URL

from sse_tester.clients.base import (
    InvalidURLError,
    StreamClient,
    StreamClientBuilder,
    StreamError,
    validate_header,
)
from sse_tester.clients.sse.models import SSEEvent
from sse_tester.clients.sse.parser import EventParser, LineDecoder

log = logging.getLogger(__name__)

SUPPORTED_SCHEMES = frozenset({"http", "https"})

DEFAULT_HEADERS: Mapping[str, str] = {
    "Accept": "text/event-stream",
    "Cache-Control": "no-cache",
}


class ServerResponseError(StreamError):
    """Raised when the server answers the stream request with an error status."""

    def __init__(self, status: int, body: str) -> None:
        message = f"Unexpected status {status}"
        super().__init__(f"{message}: {body}" if body else message)
        self.status = status
        self.body = body


@dataclass(frozen=True, kw_only=True)
class SSEClient(StreamClient[SSEEvent]):
    """Client for a single Server-Sent Events endpoint."""

    protocol: ClassVar[str] = "SSE"

    url: URL
    headers: Mapping[str, str] = field(default_factory=dict)

    @asynccontextmanager
    async def connect(self) -> AsyncGenerator[AsyncIterator[SSEEvent], None]:
        """Open a session and yield the event iterator.

        The request is sent on the first iteration step. The session, and
        the response if one is open, are closed when the context exits.
        """
        # Streams are unbounded in duration.
        timeout = aiohttp.ClientTimeout(total=None)
        async with aiohttp.ClientSession(
            headers=DEFAULT_HEADERS, timeout=timeout
        ) as session:
            events = self._events(session)
            try:
                yield events
            finally:
                await events.aclose()

    async def _events(
        self, session: aiohttp.ClientSession
    ) -> AsyncGenerator[SSEEvent, None]:
        log.info("Connecting to SSE endpoint %s", self.url)
        try:
            async with session.get(self.url, headers=dict(self.headers)) as response:
                if not 200 <= response.status < 300:
                    text = await response.text(errors="replace")
                    raise ServerResponseError(response.status, text.strip())

                log.info(
                    "Connected to %s (status=%s, content_type=%s)",
                    self.url,
                    response.status,
                    response.content_type,
                )

                parser = EventParser()
                lines = LineDecoder()
                async for chunk in response.content.iter_any():
                    for line in lines.decode(chunk):
                        if (event := parser.feed(line)) is not None:
                            yield event

                log.info("SSE endpoint %s closed the stream", self.url)
        except aiohttp.ClientError as e:
            raise StreamError(f"{type(e).__name__}: {e}") from e


@dataclass(kw_only=True)
class SSEClientBuilder(StreamClientBuilder[SSEEvent]):
    """Builder for SSEClient."""

    url: URL
    headers: dict[str, str] = field(default_factory=dict)

    @classmethod
    def for_url(cls, url: str) -> Self:
        """Start building a client for an absolute http(s) URL."""
        try:
            parsed = URL(url)
        except (TypeError, ValueError) as e:
            raise InvalidURLError(f"Invalid URL: {url!r}") from e

        if parsed.scheme not in SUPPORTED_SCHEMES or not parsed.host:
            raise InvalidURLError(f"Invalid URL: {url!r}")

        return cls(url=parsed)

    def header(self, key: str, value: str) -> Self:
        """Add a header, rejecting names and values unfit for HTTP."""
        validate_header(key, value)
        self.headers[key] = value
        return self

    def build(self) -> SSEClient:
        """Create the client."""
        return SSEClient(url=self.url, headers=dict(self.headers))
