"""Abstract base classes for streaming clients."""

import re
from abc import ABC, abstractmethod
from collections.abc import AsyncIterator
from contextlib import AbstractAsyncContextManager
from typing import ClassVar, Self

# RFC 7230 token characters
HEADER_NAME_PATTERN = re.compile(r"^[!#$%&'*+\-.^_`|~0-9A-Za-z]+$")
# C0 controls other than horizontal tab, plus DEL
HEADER_VALUE_FORBIDDEN = re.compile(r"[\x00-\x08\x0a-\x1f\x7f]")


class InvalidURLError(ValueError):
    """Raised when a client cannot be built for a URL."""


class InvalidHeaderError(ValueError):
    """Raised when a header pair cannot be sent by the transport."""


class StreamError(Exception):
    """Raised by a stream when the server or transport fails mid-stream."""


def validate_header(key: str, value: str) -> None:
    """Check that a header pair is acceptable on the wire.

    Raises:
        InvalidHeaderError: If the name is not a token or the value holds
            control characters

    """
    if not HEADER_NAME_PATTERN.match(key):
        raise InvalidHeaderError(f"Invalid header name: {key!r}")
    if HEADER_VALUE_FORBIDDEN.search(value):
        raise InvalidHeaderError(f"Invalid value for header {key!r}")


class StreamClient[E](ABC):
    """Client able to open a stream of events of type E.

    The protocol label names the client in status messages (e.g. "SSE").
    """

    protocol: ClassVar[str]

    @abstractmethod
    def connect(self) -> AbstractAsyncContextManager[AsyncIterator[E]]:
        """Open the stream.

        The context manager owns the connection and releases it on exit. The
        iterator yields events as they arrive, raises StreamError when the
        server or transport fails and stops when the server closes the stream.
        """


class StreamClientBuilder[E](ABC):
    """Builder validating client settings before any connection is made."""

    @classmethod
    @abstractmethod
    def for_url(cls, url: str) -> Self:
        """Start building a client for a URL.

        Raises:
            InvalidURLError: If the URL is malformed or unsupported

        """

    @abstractmethod
    def header(self, key: str, value: str) -> Self:
        """Add a header sent when connecting.

        Raises:
            InvalidHeaderError: If the transport rejects the pair

        """

    @abstractmethod
    def build(self) -> StreamClient[E]:
        """Create the configured client."""
