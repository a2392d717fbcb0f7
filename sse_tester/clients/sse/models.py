"""Models for Server-Sent Events."""

from dataclasses import dataclass


@dataclass(frozen=True, kw_only=True)
class SSEEvent:
    """A dispatched Server-Sent Event."""

    event: str = "message"
    data: str
    id: str | None = None
    retry: int | None = None
