"""JSON line encoder for Embedded Metric Format documents."""

import json
from collections.abc import Mapping

from emflog.core.models import Metadata, Value


def encode_document(values: Mapping[str, Value | Metadata]) -> str:
    """Encode a value bag as one newline-terminated JSON object.

    Keys keep the mapping's insertion order. A Metadata value is rendered
    through its wire form.

    Args:
        values: Flat mapping of property, dimension and metric values,
            normally including the Metadata under ``_aws``.

    Returns:
        Compact JSON text followed by a single newline.

    Raises:
        TypeError: If a value is not JSON serializable.
        ValueError: If a float value is NaN or infinite.
    """
    obj = {
        key: value.to_dict() if isinstance(value, Metadata) else value
        for key, value in values.items()
    }
    return json.dumps(obj, allow_nan=False, separators=(",", ":")) + "\n"
