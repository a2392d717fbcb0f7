"""Models for status messages reported by a connection test run."""

from dataclasses import dataclass


@dataclass(frozen=True, kw_only=True)
class TestStatusMessage:
    """Progress or outcome of a connection test run.

    A run emits zero or more messages with done=False followed by exactly one
    message with done=True.
    """

    __test__ = False

    error: bool
    done: bool
    message: str

    @classmethod
    def progress(cls, message: str) -> "TestStatusMessage":
        """Create a non-terminal progress message."""
        return cls(error=False, done=False, message=message)

    @classmethod
    def success(cls, message: str) -> "TestStatusMessage":
        """Create the terminal message of a successful run."""
        return cls(error=False, done=True, message=message)

    @classmethod
    def failure(cls, message: str) -> "TestStatusMessage":
        """Create the terminal message of a failed run."""
        return cls(error=True, done=True, message=message)
