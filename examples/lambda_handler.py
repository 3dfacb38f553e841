"""Example AWS Lambda handler emitting Embedded Metric Format lines.

Deploy as a Lambda function with handler:
    examples.lambda_handler.handler

Output:
    One JSON line per invocation on stdout. CloudWatch Logs extracts the
    metrics into the "orders" namespace, dimensioned by ServiceName/ServiceType
    (added automatically in Lambda) and by PaymentMethod.

Run locally:
    python -m examples.lambda_handler
"""

import time
from typing import Any

import emflog
from emflog import MetricUnit, StreamSink, new_dimension


def handler(event: dict[str, Any], context: object = None) -> dict[str, Any]:
    """Process an order event and record metrics about it."""
    start = time.perf_counter()
    logger = emflog.new(out=StreamSink())

    items = event.get("items", [])
    logger.namespace("orders").property("orderId", str(event.get("orderId", "")))
    logger.dimension_set(
        new_dimension("PaymentMethod", event.get("paymentMethod", "unknown"))
    )
    logger.metrics_as({"ItemsOrdered": len(items), "OrdersPlaced": 1}, MetricUnit.COUNT)

    # Payment metrics go to their own namespace.
    logger.new_context().namespace("payments").metric_float_as(
        "OrderTotal", sum(item.get("price", 0.0) for item in items), MetricUnit.NONE
    )

    elapsed_ms = (time.perf_counter() - start) * 1000
    logger.metric_float_as("HandlerLatency", elapsed_ms, MetricUnit.MILLISECONDS)
    logger.log()

    return {"statusCode": 200}


if __name__ == "__main__":
    handler(
        {
            "orderId": 42,
            "paymentMethod": "card",
            "items": [{"price": 9.99}, {"price": 20.0}],
        }
    )
