"""
Record extraction and column schema resolution.

``extract_row`` turns one record into an ordered ``{column: value}`` mapping by
walking its field table and applying the skip and default-value policies.
``resolve_columns`` fixes the canonical (sorted) column order for a chunk and
``validate_row`` checks later rows against it.
"""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Any, Collection, Dict, List, Mapping, Optional, Sequence

from sqlbulk.domain.fields import FieldDescriptor, describe_fields
from sqlbulk.domain.values import SqlValue, is_blank, to_sql_value
from sqlbulk.errors import InconsistentSchemaError, RecordTypeError


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


def _is_skipped(descriptor: FieldDescriptor, value: Any, exclude_columns: Collection[str]) -> bool:
    if descriptor.name in exclude_columns or descriptor.column in exclude_columns:
        return True
    if descriptor.is_relationship or descriptor.is_ignored or descriptor.is_auto_increment:
        return True
    return descriptor.is_primary_key and is_blank(value)


def extract_row(
    record: Any,
    exclude_columns: Collection[str] = (),
    *,
    now: Optional[datetime] = None,
) -> Dict[str, SqlValue]:
    """
    Extract the insertable columns of ``record`` in field declaration order.

    Parameters
    ----------
    record : Any
        Instance of a record type with a field table (see ``mapping_for``).
    exclude_columns : collection of str
        Attribute or column names to leave out of the INSERT.
    now : datetime, optional
        Value assigned to blank timestamp fields. Read from the clock when omitted.

    Returns
    -------
    dict
        Column name to bindable value.

    Raises
    ------
    RecordTypeError
        If the record has no field table or one of its values cannot be
        adapted and bound.
    """
    row: Dict[str, SqlValue] = {}
    for descriptor in describe_fields(record):
        value = getattr(record, descriptor.name, None)
        if _is_skipped(descriptor, value, exclude_columns):
            continue

        if descriptor.auto_timestamp and is_blank(value):
            row[descriptor.column] = now if now is not None else utcnow()
        elif descriptor.has_default and is_blank(value) and descriptor.has_default_literal:
            row[descriptor.column] = to_sql_value(descriptor.default, descriptor.name)
        else:
            row[descriptor.column] = to_sql_value(_adapt(descriptor, value), descriptor.name)
    return row


def _adapt(descriptor: FieldDescriptor, value: Any) -> Any:
    if descriptor.adapter is None:
        return value
    try:
        return descriptor.adapter(value)
    except Exception as exc:  # noqa: BLE001 - adapter errors surface as record errors
        raise RecordTypeError(f"field '{descriptor.name}': adapter failed: {exc}") from exc


def resolve_columns(row: Mapping[str, Any]) -> List[str]:
    """Canonical column order for a chunk: the first row's columns, sorted."""
    return sorted(row)


def validate_row(row: Mapping[str, Any], columns: Sequence[str], index: int) -> None:
    """
    Ensure ``row`` extracted to exactly the canonical column set.

    Raises
    ------
    InconsistentSchemaError
        If the column count differs, or the counts match but the names do not.
    """
    if len(row) != len(columns):
        raise InconsistentSchemaError(
            f"attribute sizes are inconsistent: record {index} has {len(row)} columns, "
            f"expected {len(columns)}",
            index=index,
            expected=columns,
            actual=sorted(row),
        )
    missing = [column for column in columns if column not in row]
    if missing:
        raise InconsistentSchemaError(
            f"record {index} is missing columns {missing}",
            index=index,
            expected=columns,
            actual=sorted(row),
        )


__all__ = ["extract_row", "resolve_columns", "utcnow", "validate_row"]
