"""
Field tables describing how record types map onto database columns.

Each record type is described once by a ``RecordMapping``: the target table plus
an ordered tuple of ``FieldDescriptor`` entries. Mappings are either registered
explicitly with ``register_mapping`` or derived (and cached) from a pydantic
model or dataclass declaration the first time ``mapping_for`` sees the type.

Per-field metadata is read from ``Field(json_schema_extra={...})`` on pydantic
models and from ``field(metadata={...})`` on dataclasses. Recognized keys:

    column          database column name (defaults to the attribute name)
    primary_key     primary key; skipped while blank
    auto_increment  generated by the database; always skipped
    relationship    reference to another record; always skipped
    ignore          not persisted
    default         database default literal used when the value is blank
    has_default     column has a database default but no literal is declared
    auto_timestamp  filled with the current time when blank
    adapter         callable converting the attribute value to a bindable one
"""

from __future__ import annotations

import dataclasses
import re
import typing
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, Iterable, Mapping, Optional, Tuple

from pydantic import BaseModel

from sqlbulk.errors import RecordTypeError


class _NoDefault:
    def __repr__(self) -> str:
        return "NO_DEFAULT"


NO_DEFAULT: Any = _NoDefault()

_TIMESTAMP_FIELDS = frozenset({"created_at", "updated_at"})


@dataclass(frozen=True)
class FieldDescriptor:
    """Static description of one persisted attribute of a record type."""

    name: str
    column: str = ""
    is_relationship: bool = False
    is_ignored: bool = False
    is_auto_increment: bool = False
    is_primary_key: bool = False
    has_default: bool = False
    default: Any = NO_DEFAULT
    auto_timestamp: bool = False
    adapter: Optional[Callable[[Any], Any]] = None

    def __post_init__(self) -> None:
        if not self.column:
            object.__setattr__(self, "column", self.name)
        if self.default is not NO_DEFAULT and not self.has_default:
            object.__setattr__(self, "has_default", True)

    @property
    def has_default_literal(self) -> bool:
        return self.default is not NO_DEFAULT


@dataclass(frozen=True)
class RecordMapping:
    """Target table and ordered field table for one record type."""

    record_type: type
    table: str
    fields: Tuple[FieldDescriptor, ...] = field(default_factory=tuple)

    def __post_init__(self) -> None:
        object.__setattr__(self, "fields", tuple(self.fields))
        seen: Dict[str, str] = {}
        for descriptor in self.fields:
            if descriptor.column in seen:
                raise RecordTypeError(
                    f"{self.record_type.__name__}: fields '{seen[descriptor.column]}' and "
                    f"'{descriptor.name}' both map to column '{descriptor.column}'"
                )
            seen[descriptor.column] = descriptor.name


_REGISTRY: Dict[type, RecordMapping] = {}


def default_table_name(record_type: type) -> str:
    """``__tablename__`` when declared, else the snake_case class name plus 's'."""
    declared = getattr(record_type, "__tablename__", None)
    if isinstance(declared, str) and declared:
        return declared
    snake = re.sub(r"(?<!^)(?=[A-Z])", "_", record_type.__name__).lower()
    return f"{snake}s"


def register_mapping(
    record_type: type,
    fields: Iterable[FieldDescriptor],
    table: Optional[str] = None,
) -> RecordMapping:
    """Register an explicit field table for ``record_type``, replacing any cached one."""
    mapping = RecordMapping(
        record_type=record_type,
        table=table or default_table_name(record_type),
        fields=tuple(fields),
    )
    _REGISTRY[record_type] = mapping
    return mapping


def unregister_mapping(record_type: type) -> None:
    _REGISTRY.pop(record_type, None)


def mapping_for(record_type: type) -> RecordMapping:
    """
    Return the field table for a record type.

    Raises
    ------
    RecordTypeError
        If the type is neither registered nor a pydantic model / dataclass.
    """
    mapping = _REGISTRY.get(record_type)
    if mapping is not None:
        return mapping

    if isinstance(record_type, type) and issubclass(record_type, BaseModel):
        descriptors = _describe_pydantic(record_type)
    elif isinstance(record_type, type) and dataclasses.is_dataclass(record_type):
        descriptors = _describe_dataclass(record_type)
    else:
        raise RecordTypeError(
            f"value of type {getattr(record_type, '__name__', record_type)!r} is not a "
            "structured record; register a field table for it"
        )

    mapping = RecordMapping(
        record_type=record_type,
        table=default_table_name(record_type),
        fields=descriptors,
    )
    _REGISTRY[record_type] = mapping
    return mapping


def describe_fields(record: Any) -> Tuple[FieldDescriptor, ...]:
    """Ordered field descriptors for a record instance."""
    if record is None:
        raise RecordTypeError("record must not be None")
    return mapping_for(type(record)).fields


def _descriptor_from_options(name: str, annotation: Any, options: Mapping[str, Any]) -> FieldDescriptor:
    return FieldDescriptor(
        name=name,
        column=options.get("column") or name,
        is_relationship=bool(options.get("relationship", _is_relationship(annotation))),
        is_ignored=bool(options.get("ignore", False)),
        is_auto_increment=_flag(options.get("auto_increment", False)),
        is_primary_key=bool(options.get("primary_key", name == "id")),
        has_default=bool(options.get("has_default", "default" in options)),
        default=options.get("default", NO_DEFAULT),
        auto_timestamp=bool(options.get("auto_timestamp", name in _TIMESTAMP_FIELDS)),
        adapter=options.get("adapter"),
    )


def _flag(value: Any) -> bool:
    # string flags follow tag semantics: anything but "false" enables them
    if isinstance(value, str):
        return value.strip().lower() != "false"
    return bool(value)


def _describe_pydantic(model: type[BaseModel]) -> Tuple[FieldDescriptor, ...]:
    descriptors = []
    for name, info in model.model_fields.items():
        extra = info.json_schema_extra if isinstance(info.json_schema_extra, dict) else {}
        options = dict(extra)
        if info.exclude is True:
            options.setdefault("ignore", True)
        descriptors.append(_descriptor_from_options(name, info.annotation, options))
    return tuple(descriptors)


def _describe_dataclass(cls: type) -> Tuple[FieldDescriptor, ...]:
    try:
        hints = typing.get_type_hints(cls)
    except (NameError, TypeError):
        hints = {}
    return tuple(
        _descriptor_from_options(f.name, hints.get(f.name), f.metadata)
        for f in dataclasses.fields(cls)
    )


def _is_relationship(annotation: Any) -> bool:
    """True when the annotation refers to another record (directly or in a container)."""
    if annotation is None:
        return False
    if isinstance(annotation, type):
        return issubclass(annotation, BaseModel) or dataclasses.is_dataclass(annotation)
    return any(_is_relationship(arg) for arg in typing.get_args(annotation))


__all__ = [
    "NO_DEFAULT",
    "FieldDescriptor",
    "RecordMapping",
    "default_table_name",
    "describe_fields",
    "mapping_for",
    "register_mapping",
    "unregister_mapping",
]
