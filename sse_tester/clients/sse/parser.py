"""Line-oriented parser for the text/event-stream format."""

import codecs
import re
from dataclasses import dataclass, field

from sse_tester.clients.sse.models import SSEEvent

LINE_BREAK = re.compile(r"\r\n|\r|\n")


@dataclass(kw_only=True)
class EventParser:
    """Accumulates fields line by line and dispatches on blank lines.

    The last event ID persists across events, as EventSource does.
    """

    last_event_id: str | None = None
    _event_type: str = field(default="", repr=False)
    _data: list[str] = field(default_factory=list, repr=False)
    _retry: int | None = field(default=None, repr=False)

    def feed(self, line: str) -> SSEEvent | None:
        """Process one line (without its terminator).

        Returns:
            The dispatched event when the line is blank and data was
            collected, None otherwise

        """
        if not line:
            return self._dispatch()

        if line.startswith(":"):
            return None

        name, _, value = line.partition(":")
        if value.startswith(" "):
            value = value[1:]

        match name:
            case "event":
                self._event_type = value
            case "data":
                self._data.append(value)
            case "id":
                if "\x00" not in value:
                    self.last_event_id = value
            case "retry":
                if value.isascii() and value.isdigit():
                    self._retry = int(value)
            case _:
                pass

        return None

    def _dispatch(self) -> SSEEvent | None:
        data, event_type, retry = self._data, self._event_type, self._retry
        self._data, self._event_type, self._retry = [], "", None

        if not data:
            return None

        return SSEEvent(
            event=event_type or "message",
            data="\n".join(data),
            id=self.last_event_id,
            retry=retry,
        )


class LineDecoder:
    """Splits a chunked byte stream into lines on CR, LF or CRLF.

    Chunks may end anywhere, including inside a UTF-8 sequence or between
    the CR and LF of a pair. A line is returned as soon as its terminator
    arrives, and a UTF-8 byte order mark at the start of the stream is
    dropped. Lines have no length limit.
    """

    def __init__(self) -> None:
        self._decoder = codecs.getincrementaldecoder("utf-8")(errors="replace")
        self._buffer = ""
        self._started = False
        self._after_cr = False

    def decode(self, chunk: bytes) -> list[str]:
        """Return the lines completed by this chunk, without terminators."""
        text = self._decoder.decode(chunk)
        if not text:
            return []

        if not self._started:
            self._started = True
            text = text.removeprefix("\ufeff")
        if self._after_cr:
            # LF completing a CRLF split across chunks
            self._after_cr = False
            text = text.removeprefix("\n")
        if not text:
            return []

        *lines, self._buffer = LINE_BREAK.split(self._buffer + text)
        self._after_cr = text.endswith("\r")
        return lines
