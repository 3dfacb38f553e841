"""Sink adapters receiving emitted EMF lines."""

import json
import sys
from typing import Any, TextIO


class StreamSink:
    """Sink writing to a text stream and flushing after every line.

    Useful when stdout is block-buffered (e.g. redirected to a pipe) and
    lines must reach the log agent promptly.
    """

    def __init__(self, stream: TextIO | None = None) -> None:
        """Initialize the sink.

        Args:
            stream: Target text stream. Defaults to sys.stdout at write time.
        """
        self._stream = stream

    def write(self, data: str, /) -> int:
        """Write text to the stream and flush it."""
        stream = sys.stdout if self._stream is None else self._stream
        written = stream.write(data)
        stream.flush()
        return written


class InMemorySink:
    """In-memory implementation of SinkPort.

    Keeps everything written in a buffer. Suitable for testing and for
    inspecting documents before shipping them elsewhere.
    """

    def __init__(self) -> None:
        self._chunks: list[str] = []

    def write(self, data: str, /) -> int:
        """Append text to the buffer."""
        self._chunks.append(data)
        return len(data)

    def getvalue(self) -> str:
        """Everything written so far."""
        return "".join(self._chunks)

    def lines(self) -> list[str]:
        """Emitted lines without their trailing newlines."""
        return self.getvalue().splitlines()

    def documents(self) -> list[dict[str, Any]]:
        """Emitted lines parsed as JSON objects."""
        return [json.loads(line) for line in self.lines()]

    def clear(self) -> None:
        """Discard everything written so far."""
        self._chunks.clear()
