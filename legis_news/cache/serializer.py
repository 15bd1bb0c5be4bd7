"""Serialization utilities for Redis caching.

Cached values are stored as compact JSON text. Special types are converted
on the way in; on the way out callers get plain JSON types back and rebuild
their models from them.

Special Type Handling:
    - datetime/date/time: Converted to ISO format strings
    - Decimal: Converted to float
    - UUID: Converted to string
    - set: Converted to list
    - pydantic models: Dumped in JSON mode

Usage:
    from legis_news.cache.serializer import serialize_json, deserialize_json

    text = serialize_json({"published_date": datetime(2024, 3, 1)})
    data = deserialize_json(text)
"""

import json
import logging
from datetime import datetime, date, time
from decimal import Decimal
from uuid import UUID
from typing import Any, Union

from pydantic import BaseModel

logger = logging.getLogger(__name__)


def _json_default(obj: Any) -> Any:
    """
    Custom JSON encoder for special types.

    Raises:
        TypeError: If object type is not supported
    """
    if isinstance(obj, BaseModel):
        return obj.model_dump(mode="json")

    if isinstance(obj, (datetime, date, time)):
        return obj.isoformat()

    if isinstance(obj, Decimal):
        return float(obj)

    if isinstance(obj, UUID):
        return str(obj)

    if isinstance(obj, set):
        return sorted(obj)

    raise TypeError(f"Object of type {type(obj).__name__} is not JSON serializable")


def serialize_json(data: Any, sort_keys: bool = False) -> str:
    """
    Serialize data to a compact JSON string.

    Args:
        data: Python object to serialize
        sort_keys: Emit object keys in sorted order (stable output)

    Returns:
        JSON string

    Raises:
        ValueError: If serialization fails

    Example:
        >>> serialize_json({"b": 1, "a": None}, sort_keys=True)
        '{"a":null,"b":1}'
    """
    try:
        return json.dumps(data, default=_json_default, separators=(",", ":"), sort_keys=sort_keys)
    except (TypeError, ValueError) as e:
        logger.error(f"JSON serialization failed: {e}", exc_info=True)
        raise ValueError(f"Failed to serialize to JSON: {e}")


def deserialize_json(data: Union[str, bytes]) -> Any:
    """
    Deserialize data from a JSON string.

    Raises:
        ValueError: If deserialization fails
    """
    try:
        if isinstance(data, bytes):
            data = data.decode("utf-8")
        return json.loads(data)
    except (UnicodeDecodeError, json.JSONDecodeError) as e:
        logger.error(f"JSON deserialization failed: {e}")
        raise ValueError(f"Failed to deserialize from JSON: {e}")
