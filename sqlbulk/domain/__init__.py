"""
Domain package for sqlbulk.

Exports record field tables, bindable value helpers and the sample event model.
Keep this package focused on data definitions and validation concerns.
"""

from sqlbulk.domain.fields import (
    NO_DEFAULT,
    FieldDescriptor,
    RecordMapping,
    describe_fields,
    mapping_for,
    register_mapping,
    unregister_mapping,
)
from sqlbulk.domain.models import EventRecord, generate_records
from sqlbulk.domain.values import SqlValue, is_blank, to_sql_value

__all__ = [
    "NO_DEFAULT",
    "EventRecord",
    "FieldDescriptor",
    "RecordMapping",
    "SqlValue",
    "describe_fields",
    "generate_records",
    "is_blank",
    "mapping_for",
    "register_mapping",
    "to_sql_value",
    "unregister_mapping",
]
