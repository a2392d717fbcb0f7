"""CLI entry point for validating a streaming endpoint."""

import argparse
import asyncio
import json
import logging
import sys
from collections.abc import Sequence
from dataclasses import asdict
from typing import Any

from pydantic import ValidationError

from sse_tester.channel import MessageChannel
from sse_tester.models.status import TestStatusMessage
from sse_tester.models.target import TesterConfig, TestTarget
from sse_tester.tester import ConnectionTester

STATUS_SYMBOLS = {
    "progress": "…",
    "success": "✅",
    "failure": "❌",
}


def message_status(message: TestStatusMessage) -> str:
    """Classify a status message for display."""
    if message.error:
        return "failure"
    return "success" if message.done else "progress"


def log_message(log: logging.Logger, message: TestStatusMessage) -> None:
    """Log a status message with its symbol."""
    status = message_status(message)
    symbol = STATUS_SYMBOLS[status]
    if status == "failure":
        log.error("%s %s", symbol, message.message)
    else:
        log.info("%s %s", symbol, message.message)


async def collect_messages(
    log: logging.Logger, channel: MessageChannel[TestStatusMessage]
) -> Sequence[TestStatusMessage]:
    """Receive status messages until the terminal one arrives."""
    messages: list[TestStatusMessage] = []
    async for message in channel:
        log_message(log, message)
        messages.append(message)
        if message.done:
            break
    return messages


def is_success(messages: Sequence[TestStatusMessage]) -> bool:
    """Check whether a run ended with a successful terminal message."""
    return bool(messages) and messages[-1].done and not messages[-1].error


def format_output(messages: Sequence[TestStatusMessage]) -> dict[str, Any]:
    """Format a run's messages for JSON output."""
    return {
        "success": is_success(messages),
        "messages": [asdict(message) for message in messages],
    }


async def run(
    endpoint: str,
    headers: str | None = None,
    config: TesterConfig | None = None,
) -> int:
    """Test one endpoint and return exit code."""
    log = logging.getLogger("sse_tester")
    config = config or TesterConfig()

    target = TestTarget(endpoint=endpoint, headers=headers)
    channel: MessageChannel[TestStatusMessage] = MessageChannel(
        config.channel_capacity
    )
    tester = ConnectionTester(config=config)

    log.info("Testing connection to %s (timeout=%ss)", endpoint, config.timeout)
    tester.start(target, channel)

    try:
        messages = await collect_messages(log, channel)
    finally:
        await channel.close()
        await tester.wait_closed()

    print(json.dumps(format_output(messages), indent=2))

    return 0 if is_success(messages) else 1


def main() -> None:
    """CLI entry point."""
    parser = argparse.ArgumentParser(
        description="Check that a Server-Sent Events endpoint delivers messages"
    )
    parser.add_argument(
        "--endpoint",
        required=True,
        help="URL of the event stream",
    )
    parser.add_argument(
        "--headers",
        default=None,
        help="Comma-separated 'key: value' pairs to send with the request",
    )
    parser.add_argument(
        "--timeout",
        type=float,
        default=30.0,
        help="Seconds to wait for the first message (default: 30)",
    )

    args = parser.parse_args()

    try:
        config = TesterConfig(timeout=args.timeout)
    except ValidationError as e:
        parser.error(f"invalid --timeout: {e.errors()[0]['msg']}")

    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        stream=sys.stderr,
    )

    exit_code = asyncio.run(
        run(endpoint=args.endpoint, headers=args.headers, config=config)
    )
    sys.exit(exit_code)


if __name__ == "__main__":  # pragma: no cover
    main()
