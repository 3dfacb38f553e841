"""Step definitions for emit.feature."""

import json
from dataclasses import dataclass, field
from typing import Any

import pytest
from pytest_bdd import given, parsers, then, when

from emflog.adapters.sinks import InMemorySink
from emflog.core.environment import AmbientEnvironment
from emflog.core.logger import Logger
from tests.helpers import FIXED_TIMESTAMP, directives, single_document


@dataclass
class EmitScenarioContext:
    """Shared state between steps in an emission scenario."""

    environ: dict[str, str] = field(default_factory=dict)
    sink: InMemorySink = field(default_factory=InMemorySink)
    logger: Logger | None = None

    def require_logger(self) -> Logger:
        assert self.logger is not None, "scenario must create a logger first"
        return self.logger

    def document(self) -> dict[str, Any]:
        return single_document(self.sink)


@pytest.fixture
def ctx() -> EmitScenarioContext:
    """Fresh scenario context for each test."""
    return EmitScenarioContext()


def _create_logger(ctx: EmitScenarioContext, without_dimensions: bool) -> None:
    ctx.logger = Logger(
        out=ctx.sink,
        timestamp=FIXED_TIMESTAMP,
        without_dimensions=without_dimensions,
        environment=AmbientEnvironment.from_environ(ctx.environ),
    )


# === Given ===


@given(parsers.parse('the environment variable "{name}" is "{value}"'))
def given_environment_variable(ctx: EmitScenarioContext, name: str, value: str) -> None:
    """Record an ambient signal for the logger about to be created."""
    ctx.environ[name] = value


@given("a logger")
def given_logger(ctx: EmitScenarioContext) -> None:
    """Create a logger with ambient defaults enabled."""
    _create_logger(ctx, without_dimensions=False)


@given("a logger without default dimensions")
def given_logger_without_dimensions(ctx: EmitScenarioContext) -> None:
    """Create a logger with ambient defaults suppressed."""
    _create_logger(ctx, without_dimensions=True)


# === When ===


@when(parsers.parse('the default context uses namespace "{namespace}"'))
def when_default_namespace(ctx: EmitScenarioContext, namespace: str) -> None:
    ctx.require_logger().namespace(namespace)


@when(parsers.parse('the default context adds dimension "{key}" with value "{value}"'))
def when_default_dimension(ctx: EmitScenarioContext, key: str, value: str) -> None:
    ctx.require_logger().dimension(key, value)


@when(parsers.parse('the default context records metric "{name}" with value {value:d}'))
def when_default_metric(ctx: EmitScenarioContext, name: str, value: int) -> None:
    ctx.require_logger().metric(name, value)


@when(parsers.parse('a new context with namespace "{namespace}" is created'))
def when_new_empty_context(ctx: EmitScenarioContext, namespace: str) -> None:
    ctx.require_logger().new_context().namespace(namespace)


@when(
    parsers.parse(
        'a new context with namespace "{namespace}" records metric "{name}" '
        'with value {value:d} as "{unit}"'
    )
)
def when_new_context_metric(
    ctx: EmitScenarioContext, namespace: str, name: str, value: int, unit: str
) -> None:
    ctx.require_logger().new_context().namespace(namespace).metric_as(name, value, unit)


@when("the logger emits")
def when_logger_emits(ctx: EmitScenarioContext) -> None:
    ctx.require_logger().log()


# === Then ===


@then("nothing is written")
def then_nothing_written(ctx: EmitScenarioContext) -> None:
    assert ctx.sink.getvalue() == ""


@then("exactly one line is written")
def then_one_line(ctx: EmitScenarioContext) -> None:
    assert ctx.sink.getvalue().endswith("\n")
    assert len(ctx.sink.lines()) == 1


@then(parsers.parse("exactly {count:d} lines are written"))
def then_n_lines(ctx: EmitScenarioContext, count: int) -> None:
    assert len(ctx.sink.lines()) == count


@then("all written lines are identical")
def then_lines_identical(ctx: EmitScenarioContext) -> None:
    assert len(set(ctx.sink.lines())) == 1


@then(parsers.parse("the document timestamp is {timestamp:d}"))
def then_timestamp(ctx: EmitScenarioContext, timestamp: int) -> None:
    assert ctx.document()["_aws"]["Timestamp"] == timestamp


@then(parsers.parse('the document field "{key}" is {value}'))
def then_field(ctx: EmitScenarioContext, key: str, value: str) -> None:
    """Compare a top-level field with a JSON literal."""
    assert ctx.document()[key] == json.loads(value)


@then(parsers.parse('the document has no field "{key}"'))
def then_no_field(ctx: EmitScenarioContext, key: str) -> None:
    assert key not in ctx.document()


@then(parsers.parse("the document has {count:d} directives"))
def then_directive_count(ctx: EmitScenarioContext, count: int) -> None:
    assert len(directives(ctx.document())) == count


@then(parsers.parse('directive {index:d} has namespace "{namespace}"'))
def then_directive_namespace(
    ctx: EmitScenarioContext, index: int, namespace: str
) -> None:
    assert directives(ctx.document())[index]["Namespace"] == namespace


@then(parsers.parse("directive {index:d} has dimensions {dimensions}"))
def then_directive_dimensions(
    ctx: EmitScenarioContext, index: int, dimensions: str
) -> None:
    assert directives(ctx.document())[index]["Dimensions"] == json.loads(dimensions)


@then(parsers.parse("directive {index:d} has metrics {metrics}"))
def then_directive_metrics(ctx: EmitScenarioContext, index: int, metrics: str) -> None:
    assert directives(ctx.document())[index]["Metrics"] == json.loads(metrics)
