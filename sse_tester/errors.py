"""Failure classifications of a connection test run.

Each exception renders, via str(), the message reported to the caller.
"""


class ConnectionTestError(Exception):
    """Base class for classified connection test failures."""


class InvalidEndpointError(ConnectionTestError):
    """Raised when the endpoint is not a usable URL."""

    def __init__(self) -> None:
        super().__init__("Endpoint URL is invalid")


class InvalidHeadersError(ConnectionTestError):
    """Raised when the header string does not parse."""

    def __init__(self) -> None:
        super().__init__("Headers are invalid; should be comma-separated pairs")


class InvalidHeaderPairError(ConnectionTestError):
    """Raised when the transport rejects a single header pair."""

    def __init__(self, key: str, value: str) -> None:
        super().__init__(f"Invalid header '{key}: {value}'")
        self.key = key
        self.value = value


class ServerError(ConnectionTestError):
    """Raised when the stream yields an error instead of an event."""

    def __init__(self, details: str) -> None:
        super().__init__(f"Received error from server: {details}")
        self.details = details


class ServerClosedError(ConnectionTestError):
    """Raised when the server ends the stream before sending an event."""

    def __init__(self) -> None:
        super().__init__("Server closed connection")


class ConnectionTimeoutError(ConnectionTestError):
    """Raised when no event arrives within the configured timeout."""

    def __init__(self, duration: float) -> None:
        super().__init__(f"Did not receive any messages after {duration:g} seconds")
        self.duration = duration
