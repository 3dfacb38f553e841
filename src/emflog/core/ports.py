"""Port interface for log line sinks.

The logger depends only on this protocol, so any text stream (``sys.stdout``,
``io.StringIO``, an open file) or a custom adapter can receive output.
"""

from typing import Protocol, runtime_checkable


@runtime_checkable
class SinkPort(Protocol):
    """Port for writing emitted log lines.

    Adapters implementing this protocol receive each emitted document as a
    single newline-terminated string.
    Examples: sys.stdout, io.StringIO, StreamSink, InMemorySink.
    """

    def write(self, data: str, /) -> object:
        """Write text to the sink."""
        ...
