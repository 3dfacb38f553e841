"""emflog - build CloudWatch Embedded Metric Format log lines."""

from emflog.adapters.sinks import InMemorySink, StreamSink
from emflog.core.context import DEFAULT_NAMESPACE, Context
from emflog.core.environment import AmbientEnvironment
from emflog.core.logger import Logger, new, new_without_default_dimensions
from emflog.core.models import (
    Dimension,
    DimensionSet,
    Metadata,
    MetricDefinition,
    MetricDirective,
    new_dimension,
)
from emflog.core.ports import SinkPort
from emflog.core.units import MetricUnit

__all__ = [
    "DEFAULT_NAMESPACE",
    "AmbientEnvironment",
    "Context",
    "Dimension",
    "DimensionSet",
    "InMemorySink",
    "Logger",
    "Metadata",
    "MetricDefinition",
    "MetricDirective",
    "MetricUnit",
    "SinkPort",
    "StreamSink",
    "new",
    "new_dimension",
    "new_without_default_dimensions",
]
