# sql_data_api/core/coercion.py
"""
Conversion of in-memory values into transport-safe primitives.

Every value that crosses the wire (filter parameters, saved rows, update
properties, delete criteria, execute parameters) goes through
``to_primitive``. Dates become strings, ``Decimal`` and numpy scalars become
their Python equivalents and NaN becomes ``None``; all other scalars pass
through as-is. ``to_json`` is the one encoder used for request bodies.
"""
from __future__ import annotations

import json
import math
from datetime import date, datetime
from decimal import Decimal
from typing import Any, Mapping

import numpy as np

from sql_data_api.core.errors import InvalidArgument


def date_to_string(value: date) -> str:
    """
    Canonical string form of a date or datetime.

    - date: ``YYYY-MM-DD``
    - datetime: ISO 8601 to the second, or to the millisecond when
      sub-second precision is present; the UTC offset is kept for aware values
    """
    if isinstance(value, datetime):
        timespec = "milliseconds" if value.microsecond else "seconds"
        return value.isoformat(timespec=timespec)
    return value.isoformat()


def scalar_to_primitive(value: Any) -> Any:
    if isinstance(value, (list, tuple)):
        return [scalar_to_primitive(v) for v in value]
    if isinstance(value, np.generic):
        value = value.item()
    if isinstance(value, date):
        return date_to_string(value)
    if isinstance(value, Decimal):
        value = float(value)
    if isinstance(value, float) and math.isnan(value):
        return None
    return value


def to_primitive(record: Mapping[str, Any]) -> dict[str, Any]:
    return {k: scalar_to_primitive(v) for k, v in record.items()}


def row_to_primitive(row: list[Any]) -> list[Any]:
    """Positional variant of ``to_primitive`` used for columnar rows."""
    return [scalar_to_primitive(v) for v in row]


def to_json(value: Any) -> str:
    """
    Compact JSON text of a request body.

    Raises:
        InvalidArgument: If the body holds a value JSON cannot represent
            (an unsupported type, infinity)
    """
    try:
        return json.dumps(value, separators=(",", ":"), ensure_ascii=False, allow_nan=False)
    except (TypeError, ValueError) as exc:
        raise InvalidArgument(f"Value cannot be sent as JSON: {exc}") from exc
