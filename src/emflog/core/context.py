"""Context: one metric directive writing into a shared value bag."""

from typing import Self

from emflog.core.environment import AmbientEnvironment
from emflog.core.models import (
    Dimension,
    DimensionSet,
    MetricDefinition,
    MetricDirective,
    Value,
    ValueBag,
)
from emflog.core.units import MetricUnit

DEFAULT_NAMESPACE = "aws-embedded-metrics"

# Dimension set added to every context when running in Lambda.
SERVICE_DIMENSION_SET: DimensionSet = ("ServiceName", "ServiceType")


class Context:
    """A namespace, its dimension sets and its metric definitions.

    Values are not kept here: every write goes to the value bag shared with
    the owning Logger and its other contexts, so the last write to a key
    wins. Contexts are created by ``Logger.new_context()`` and cannot emit
    on their own.
    """

    def __init__(
        self,
        values: ValueBag,
        environment: AmbientEnvironment,
        without_dimensions: bool = False,
    ) -> None:
        """Initialize the context and apply the Lambda service dimensions.

        Args:
            values: Value bag owned by the Logger.
            environment: Ambient snapshot captured by the Logger.
            without_dimensions: Skip the Lambda service dimensions.
        """
        self._values = values
        self._namespace = DEFAULT_NAMESPACE
        self._dimensions: list[DimensionSet] = []
        self._metrics: list[MetricDefinition] = []

        if not without_dimensions and environment.in_lambda:
            self._dimensions.append(SERVICE_DIMENSION_SET)
            self._values.update(environment.service_properties())

    def namespace(self, namespace: str) -> Self:
        """Set the namespace, replacing the previous one."""
        self._namespace = namespace
        return self

    def dimension(self, key: str, value: str) -> Self:
        """Add a single-key dimension set and store its value."""
        self._dimensions.append((key,))
        self._values[key] = value
        return self

    def dimension_set(self, *dimensions: Dimension) -> Self:
        """Add one dimension set made of all given dimensions, in order.

        Calling it without arguments adds an empty dimension set.
        """
        keys: list[str] = []
        for dim in dimensions:
            keys.append(dim.key)
            self._values[dim.key] = dim.value
        self._dimensions.append(tuple(keys))
        return self

    def metric(self, name: str, value: int) -> Self:
        """Put an int metric without a unit."""
        return self._put(name, value, MetricUnit.NONE)

    def metric_float(self, name: str, value: float) -> Self:
        """Put a float metric without a unit."""
        return self._put(name, value, MetricUnit.NONE)

    def metric_as(self, name: str, value: int, unit: MetricUnit | str) -> Self:
        """Put an int metric with a unit."""
        return self._put(name, value, unit)

    def metric_float_as(self, name: str, value: float, unit: MetricUnit | str) -> Self:
        """Put a float metric with a unit."""
        return self._put(name, value, unit)

    def _put(self, name: str, value: Value, unit: MetricUnit | str) -> Self:
        """Declare a metric and store its value in one step."""
        self._metrics.append(MetricDefinition(name=name, unit=unit))
        self._values[name] = value
        return self

    def has_metrics(self) -> bool:
        return bool(self._metrics)

    def to_directive(self) -> MetricDirective:
        """Snapshot the current state as an immutable MetricDirective."""
        return MetricDirective(
            namespace=self._namespace,
            dimensions=tuple(self._dimensions),
            metrics=tuple(self._metrics),
        )
