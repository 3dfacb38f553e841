"""Logger: accumulates contexts and values and emits them as one EMF line."""

import logging
import sys
import time
from collections.abc import Mapping
from datetime import datetime, timedelta, timezone
from typing import Self

from emflog.core.context import Context
from emflog.core.encoding.emf import encode_document
from emflog.core.environment import AmbientEnvironment
from emflog.core.models import METADATA_KEY, Dimension, Metadata, ValueBag
from emflog.core.ports import SinkPort
from emflog.core.units import MetricUnit

logger = logging.getLogger(__name__)

_EPOCH = datetime(1970, 1, 1, tzinfo=timezone.utc)
_MICROSECOND = timedelta(microseconds=1)


def to_millis(ts: datetime) -> int:
    """Convert a datetime to whole milliseconds since the Unix epoch.

    Sub-millisecond precision is truncated toward zero, also before 1970.
    Naive datetimes are treated as local time.
    """
    micros = (ts.astimezone(timezone.utc) - _EPOCH) // _MICROSECOND
    millis = abs(micros) // 1000
    return millis if micros >= 0 else -millis


class Logger:
    """Builder for one Embedded Metric Format document.

    The logger owns a default context, any number of extra contexts created
    through ``new_context()`` and a flat value bag shared by all of them.
    ``log()`` writes every context that has at least one metric as a single
    JSON line.

    Not safe for concurrent use; keep one logger per invocation or guard it
    externally.

    Example:
        ```python
        logger = Logger()
        logger.namespace("shop").dimension("Region", "eu-west-1")
        logger.metric_as("OrdersPlaced", 3, MetricUnit.COUNT).log()
        ```
    """

    def __init__(
        self,
        out: SinkPort | None = None,
        timestamp: datetime | None = None,
        without_dimensions: bool = False,
        environment: AmbientEnvironment | None = None,
    ) -> None:
        """Configure the logger and capture ambient defaults.

        Args:
            out: Sink receiving emitted lines. Defaults to sys.stdout.
            timestamp: Fixed document timestamp. Defaults to now.
            without_dimensions: Skip Lambda properties and service dimensions.
                The sampled trace id is captured regardless.
            environment: Ambient snapshot. Defaults to one read from
                os.environ.
        """
        self._out: SinkPort = sys.stdout if out is None else out
        if timestamp is None:
            self._timestamp = time.time_ns() // 1_000_000
        else:
            self._timestamp = to_millis(timestamp)
        self._without_dimensions = without_dimensions
        self._environment = (
            AmbientEnvironment.from_environ() if environment is None else environment
        )
        self._values: ValueBag = {}
        self._contexts: list[Context] = []

        if not without_dimensions and self._environment.in_lambda:
            self._values.update(self._environment.function_properties())
            logger.debug(
                "Captured Lambda defaults for function %s",
                self._environment.function_name,
            )

        # Only sampled traces are collected.
        trace_id = self._environment.sampled_trace_id
        if trace_id is not None:
            self._values["traceId"] = trace_id
            logger.debug("Captured sampled trace id %s", trace_id)

        self._default_context = self._create_context()

    @property
    def timestamp(self) -> int:
        """Document timestamp in milliseconds since the Unix epoch."""
        return self._timestamp

    def _create_context(self) -> Context:
        return Context(self._values, self._environment, self._without_dimensions)

    def namespace(self, namespace: str) -> Self:
        """Set the namespace of the default context."""
        self._default_context.namespace(namespace)
        return self

    def property(self, key: str, value: str) -> Self:
        """Store a property that is not tied to any context."""
        self._values[key] = value
        return self

    def dimension(self, key: str, value: str) -> Self:
        """Add a single dimension to the default context."""
        self._default_context.dimension(key, value)
        return self

    def dimension_set(self, *dimensions: Dimension) -> Self:
        """Add a dimension set to the default context."""
        self._default_context.dimension_set(*dimensions)
        return self

    def metric(self, name: str, value: int) -> Self:
        """Put an int metric on the default context."""
        self._default_context.metric(name, value)
        return self

    def metrics(self, metrics: Mapping[str, int]) -> Self:
        """Put all int metrics on the default context, in mapping order."""
        return self.metrics_as(metrics, MetricUnit.NONE)

    def metric_float(self, name: str, value: float) -> Self:
        """Put a float metric on the default context."""
        self._default_context.metric_float(name, value)
        return self

    def metrics_float(self, metrics: Mapping[str, float]) -> Self:
        """Put all float metrics on the default context, in mapping order."""
        return self.metrics_float_as(metrics, MetricUnit.NONE)

    def metric_as(self, name: str, value: int, unit: MetricUnit | str) -> Self:
        """Put an int metric with a unit on the default context."""
        self._default_context.metric_as(name, value, unit)
        return self

    def metrics_as(self, metrics: Mapping[str, int], unit: MetricUnit | str) -> Self:
        """Put all int metrics with one unit on the default context."""
        for name, value in metrics.items():
            self._default_context.metric_as(name, value, unit)
        return self

    def metric_float_as(self, name: str, value: float, unit: MetricUnit | str) -> Self:
        """Put a float metric with a unit on the default context."""
        self._default_context.metric_float_as(name, value, unit)
        return self

    def metrics_float_as(
        self, metrics: Mapping[str, float], unit: MetricUnit | str
    ) -> Self:
        """Put all float metrics with one unit on the default context."""
        for name, value in metrics.items():
            self._default_context.metric_float_as(name, value, unit)
        return self

    def new_context(self) -> Context:
        """Create a context sharing this logger's values and emission.

        The new context starts with the default namespace and, in Lambda,
        the service dimension set.
        """
        context = self._create_context()
        self._contexts.append(context)
        return context

    def log(self) -> None:
        """Write all contexts with metrics to the sink as one JSON line.

        Nothing is written when no context has metrics. Encoding failures are
        logged and the line is dropped; they never reach the caller.
        """
        directives = tuple(
            context.to_directive()
            for context in (self._default_context, *self._contexts)
            if context.has_metrics()
        )
        if not directives:
            logger.debug("No metrics recorded, skipping emission")
            return

        self._values[METADATA_KEY] = Metadata(
            timestamp=self._timestamp,
            metrics=directives,
        )
        try:
            line = encode_document(self._values)
        except (TypeError, ValueError):
            logger.warning("Failed to encode EMF document, dropping it", exc_info=True)
            return
        self._out.write(line)


def new(
    out: SinkPort | None = None,
    timestamp: datetime | None = None,
    without_dimensions: bool = False,
    environment: AmbientEnvironment | None = None,
) -> Logger:
    """Create a logger with defaults suited to Lambda functions.

    Prints to sys.stdout, adds Lambda properties and service dimensions when
    running in Lambda and stamps documents with the construction time.
    """
    return Logger(
        out=out,
        timestamp=timestamp,
        without_dimensions=without_dimensions,
        environment=environment,
    )


def new_without_default_dimensions(
    out: SinkPort | None = None,
    timestamp: datetime | None = None,
    environment: AmbientEnvironment | None = None,
) -> Logger:
    """Create a logger that ignores Lambda properties and dimensions."""
    return Logger(
        out=out,
        timestamp=timestamp,
        without_dimensions=True,
        environment=environment,
    )
