"""Server-Sent Events client."""

from sse_tester.clients.sse.client import (
    SSEClient,
    SSEClientBuilder,
    ServerResponseError,
)
from sse_tester.clients.sse.models import SSEEvent

__all__ = ["SSEClient", "SSEClientBuilder", "SSEEvent", "ServerResponseError"]
