"""Shared utilities for the Cosmos DB MCP tools.

This module provides common functionality used across the tool classes:
- Error handling decorator producing ``Failed to <verb>`` results
- Long string truncation for item previews
- JSON type tags and field schemas for sampled items
- Result serialization for the text content of tool responses
"""

import json
import logging
from collections.abc import Callable
from functools import wraps
from typing import Any

from ..exceptions import convert_to_store_exception
from .models import OperationResult, SchemaField

logger = logging.getLogger(__name__)

# Strings longer than this are shortened in sample_item previews
TRUNCATE_THRESHOLD = 100
TRUNCATE_WORDS = 10
ELLIPSIS = "..."


def handle_store_errors(verb: str) -> Callable:
    """Decorator turning any exception raised by a tool into a failed result.

    Args:
        verb: Action used in the message, e.g. ``"get item"`` gives
            ``"Failed to get item: <error>"``

    Example:
        @handle_store_errors("get item")
        async def get_item(self, request):
            ...
    """

    def decorator(func: Callable) -> Callable:
        @wraps(func)
        async def wrapper(*args, **kwargs):
            try:
                return await func(*args, **kwargs)
            except Exception as e:
                error = convert_to_store_exception(e, context={"operation": func.__name__})
                logger.error(f"Error in {func.__name__}: {error}")
                return OperationResult.failure(verb, error)

        return wrapper

    return decorator


def truncate_long_value(value: Any) -> Any:
    """Shorten long strings to their first ten space-separated words.

    Only strings longer than TRUNCATE_THRESHOLD characters are changed; every
    other value is returned unchanged.

    Example:
        >>> truncate_long_value("word " * 30)
        'word word word word word word word word word word...'
    """
    if isinstance(value, str) and len(value) > TRUNCATE_THRESHOLD:
        return " ".join(value.split(" ")[:TRUNCATE_WORDS]) + ELLIPSIS
    return value


def truncate_item(item: dict[str, Any]) -> dict[str, Any]:
    """Apply truncate_long_value to every top-level field of an item."""
    return {key: truncate_long_value(value) for key, value in item.items()}


def json_type_name(value: Any) -> str:
    """Return the JSON type of a decoded value.

    One of ``string``, ``number``, ``boolean``, ``object``, ``array`` or
    ``null``; anything else reports its Python type name.
    """
    if value is None:
        return "null"
    # bool before int: bool is a subclass of int
    if isinstance(value, bool):
        return "boolean"
    if isinstance(value, (int, float)):
        return "number"
    if isinstance(value, str):
        return "string"
    if isinstance(value, dict):
        return "object"
    if isinstance(value, (list, tuple)):
        return "array"
    return type(value).__name__


def build_field_schema(item: dict[str, Any]) -> list[SchemaField]:
    """Describe each field of an item using its raw (untruncated) value."""
    return [
        SchemaField(field=key, type=json_type_name(value), sample=truncate_long_value(value))
        for key, value in item.items()
    ]


def serialize_result(data: Any) -> str:
    """Serialize a result payload to pretty-printed JSON.

    Values JSON cannot represent (datetimes, decimals) fall back to ``str``.

    Raises:
        TypeError: If data contains values str() cannot handle either
    """
    try:
        return json.dumps(data, indent=2, ensure_ascii=False, default=str)

    except TypeError as e:
        logger.error(f"Failed to serialize result: {e}")
        raise
