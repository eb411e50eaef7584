"""
Bindable value kinds and blank detection.

``SqlValue`` is the closed set of scalar kinds handed to the execution layer.
Anything else must be converted by a field adapter before it reaches a statement.
"""

from __future__ import annotations

from datetime import date, datetime, time, timedelta
from decimal import Decimal
from enum import Enum
from typing import Any, Union
from uuid import UUID

from sqlbulk.errors import RecordTypeError

SqlValue = Union[None, bool, int, float, Decimal, str, bytes, date, datetime, time, timedelta, UUID]

_SCALAR_TYPES = (bool, int, float, Decimal, str, bytes, date, datetime, time, timedelta, UUID)


def is_blank(value: Any) -> bool:
    """
    Return True when a value counts as unset.

    None, False, numeric zero, and empty strings/bytes/collections are blank.
    Temporal values and UUIDs are never blank unless None.
    """
    if value is None:
        return True
    if isinstance(value, bool):
        return value is False
    if isinstance(value, (int, float, Decimal)):
        return value == 0
    if isinstance(value, (str, bytes, bytearray, list, tuple, dict, set, frozenset)):
        return len(value) == 0
    return False


def to_sql_value(value: Any, field_name: str = "?") -> SqlValue:
    """Normalize a field value to a bindable scalar, rejecting unsupported kinds."""
    if value is None:
        return None
    if isinstance(value, Enum):
        return to_sql_value(value.value, field_name)
    if isinstance(value, bytearray):
        return bytes(value)
    if isinstance(value, _SCALAR_TYPES):
        return value
    raise RecordTypeError(
        f"field '{field_name}' holds unsupported value of type {type(value).__name__}; "
        "declare an adapter for it"
    )


__all__ = ["SqlValue", "is_blank", "to_sql_value"]
