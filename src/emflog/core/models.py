"""Core domain models for Embedded Metric Format documents."""

from dataclasses import dataclass, field
from typing import Any

from emflog.core.units import MetricUnit

# Scalar kinds accepted as metric, dimension and property values.
Value = str | int | float

# Ordered dimension keys; the values live in the logger's value bag.
DimensionSet = tuple[str, ...]

# Reserved top-level key holding the Metadata object.
METADATA_KEY = "_aws"


def _unit_is_set(unit: MetricUnit | str | None) -> bool:
    return unit not in (None, "", MetricUnit.NONE)


@dataclass(frozen=True)
class Dimension:
    """A single dimension key/value pair.

    Attributes:
        key: Dimension name, also used as the value bag key.
        value: Dimension value.
    """

    key: str
    value: str


def new_dimension(key: str, value: str) -> Dimension:
    """Create a Dimension from a key/value pair."""
    return Dimension(key=key, value=value)


@dataclass(frozen=True)
class MetricDefinition:
    """Declares a metric whose value is stored under ``name``.

    Attributes:
        name: Metric name, also used as the value bag key.
        unit: Unit label. MetricUnit.NONE (or an empty string) means unset.
    """

    name: str
    unit: MetricUnit | str = MetricUnit.NONE

    def to_dict(self) -> dict[str, Any]:
        """Return the wire form, omitting Unit when it is unset."""
        obj: dict[str, Any] = {"Name": self.name}
        if _unit_is_set(self.unit):
            obj["Unit"] = str(self.unit)
        return obj


@dataclass(frozen=True)
class MetricDirective:
    """One entry of the CloudWatchMetrics array.

    Attributes:
        namespace: CloudWatch namespace for the metrics.
        dimensions: Dimension sets, each an ordered tuple of keys.
        metrics: Metric definitions in declaration order.
    """

    namespace: str
    dimensions: tuple[DimensionSet, ...] = ()
    metrics: tuple[MetricDefinition, ...] = ()

    def to_dict(self) -> dict[str, Any]:
        return {
            "Namespace": self.namespace,
            "Dimensions": [list(dimension_set) for dimension_set in self.dimensions],
            "Metrics": [definition.to_dict() for definition in self.metrics],
        }


@dataclass(frozen=True)
class Metadata:
    """The ``_aws`` object of an emitted document.

    Attributes:
        timestamp: Milliseconds since the Unix epoch.
        metrics: Metric directives, one per non-empty context.
    """

    timestamp: int
    metrics: tuple[MetricDirective, ...] = field(default_factory=tuple)

    def to_dict(self) -> dict[str, Any]:
        return {
            "Timestamp": self.timestamp,
            "CloudWatchMetrics": [directive.to_dict() for directive in self.metrics],
        }


# The flat mapping shared by a Logger and its contexts. Metadata only ever
# appears under METADATA_KEY.
ValueBag = dict[str, Value | Metadata]
