"""Constants and helpers shared across test modules."""

from datetime import datetime, timezone
from typing import Any

from emflog.adapters.sinks import InMemorySink

FIXED_TIMESTAMP = datetime(2023, 11, 14, 22, 13, 20, tzinfo=timezone.utc)
FIXED_MILLIS = 1_700_000_000_000

LAMBDA_ENVIRON = {
    "AWS_LAMBDA_FUNCTION_NAME": "some-func-name",
    "AWS_EXECUTION_ENV": "python",
    "AWS_LAMBDA_FUNCTION_MEMORY_SIZE": "128",
    "AWS_LAMBDA_FUNCTION_VERSION": "1",
    "AWS_LAMBDA_LOG_STREAM_NAME": "log/stream",
}


def single_document(sink: InMemorySink) -> dict[str, Any]:
    """Return the only document written to the sink."""
    documents = sink.documents()
    assert len(documents) == 1, f"expected one line, got {len(documents)}"
    return documents[0]


def directives(document: dict[str, Any]) -> list[dict[str, Any]]:
    """Return the CloudWatchMetrics array of a document."""
    return document["_aws"]["CloudWatchMetrics"]
