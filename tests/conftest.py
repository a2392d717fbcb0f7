"""Shared fixtures for sse_tester tests."""

from collections.abc import Generator, Sequence
from typing import Protocol

import pytest
from aioresponses import aioresponses as aioresponses_cls

from sse_tester.channel import MessageChannel
from sse_tester.models.status import TestStatusMessage
from sse_tester.models.target import TestTarget
from sse_tester.tester import ConnectionTester


class RunTestFn(Protocol):
    """Protocol for the run-to-completion helper."""

    async def __call__(
        self, tester: ConnectionTester, target: TestTarget
    ) -> Sequence[TestStatusMessage]:
        """Run a connection test and return every message it sent."""
        ...


@pytest.fixture
def aioresponses() -> Generator[aioresponses_cls, None, None]:
    """Intercept aiohttp requests."""
    with aioresponses_cls() as mock:
        yield mock


@pytest.fixture
def run_test() -> RunTestFn:
    """Return a function running a test and collecting its messages."""

    async def _run(
        tester: ConnectionTester, target: TestTarget
    ) -> Sequence[TestStatusMessage]:
        channel: MessageChannel[TestStatusMessage] = MessageChannel()
        tester.start(target, channel)
        await tester.wait_closed()
        await channel.close()
        return [message async for message in channel]

    return _run


def assert_single_terminal(messages: Sequence[TestStatusMessage]) -> None:
    """Assert progress messages are followed by exactly one terminal message."""
    assert messages, "run sent no messages"
    assert all(not message.done for message in messages[:-1])
    assert messages[-1].done
