"""Tests for TestStatusMessage."""

from sse_tester.models.status import TestStatusMessage


def test_progress_message() -> None:
    """Creates a non-terminal, non-error message."""
    assert TestStatusMessage.progress("working") == TestStatusMessage(
        error=False, done=False, message="working"
    )


def test_success_message() -> None:
    """Creates a terminal, non-error message."""
    assert TestStatusMessage.success("ok") == TestStatusMessage(
        error=False, done=True, message="ok"
    )


def test_failure_message() -> None:
    """Creates a terminal error message."""
    assert TestStatusMessage.failure("bad") == TestStatusMessage(
        error=True, done=True, message="bad"
    )
