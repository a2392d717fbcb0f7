"""Models describing what a connection test run targets."""

from pydantic import Field, PositiveFloat, PositiveInt

from sse_tester.models.base import Model


class TestTarget(Model):
    """Stream endpoint to validate, as extracted from connector options."""

    __test__ = False

    endpoint: str = Field(..., description="URL of the event stream")
    headers: str | None = Field(
        default=None,
        description="Comma-separated 'key: value' pairs sent with the request",
    )


class TesterConfig(Model):
    """Settings shared by every run of a connection tester."""

    timeout: PositiveFloat = Field(
        default=30.0, description="Seconds to wait for the first event"
    )
    channel_capacity: PositiveInt = Field(
        default=16, description="Buffered status messages before a send suspends"
    )
