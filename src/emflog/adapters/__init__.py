"""Concrete adapters for emflog ports."""

from emflog.adapters.sinks import InMemorySink, StreamSink

__all__ = ["InMemorySink", "StreamSink"]
