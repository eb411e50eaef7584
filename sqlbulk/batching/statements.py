"""
Multi-row INSERT statement assembly.

``build_statement`` turns one chunk of records into a single parameterized
statement:

    INSERT [IGNORE] INTO <table> (<columns>) VALUES (...), (...)[ <option>]

Parameters are flattened row by row, each row in canonical column order, so
parameter ``i * c + j`` is column ``j`` of record ``i``.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Any, Callable, Collection, List, Optional, Sequence, Tuple

from sqlbulk.batching.dialects import Dialect
from sqlbulk.batching.extraction import extract_row, resolve_columns, utcnow, validate_row
from sqlbulk.config import Settings, get_settings
from sqlbulk.domain.fields import mapping_for
from sqlbulk.domain.values import SqlValue
from sqlbulk.errors import ConfigError
from sqlbulk.utils.logging import get_logger

log = get_logger(__name__)


class InsertMode(str, Enum):
    STRICT = "strict"
    IGNORE_DUPLICATES = "ignore_duplicates"


@dataclass(frozen=True)
class StatementOptions:
    """
    Explicit statement configuration.

    Attributes
    ----------
    dialect : Dialect
        Selects placeholder token, quoting and duplicate-handling syntax.
    insert_option : Any
        Optional trailing SQL fragment; must be a string when set.
    identifier_quoter : callable, optional
        Overrides the dialect's identifier quoting.
    """

    dialect: Dialect = Dialect.GENERIC
    insert_option: Any = None
    identifier_quoter: Optional[Callable[[str], str]] = None

    @classmethod
    def from_settings(cls, settings: Optional[Settings] = None) -> "StatementOptions":
        settings = settings or get_settings()
        return cls(
            dialect=Dialect.from_name(settings.bulk_dialect),
            insert_option=settings.bulk_insert_option,
        )

    def quote(self, name: str) -> str:
        if self.identifier_quoter is not None:
            return self.identifier_quoter(name)
        return self.dialect.quote_identifier(name)


@dataclass(frozen=True)
class Statement:
    sql: str
    params: Tuple[SqlValue, ...] = field(default_factory=tuple)
    columns: Tuple[str, ...] = field(default_factory=tuple)
    row_count: int = 0


def _trailing_option(options: StatementOptions) -> str:
    if options.insert_option is None:
        return ""
    if not isinstance(options.insert_option, str):
        raise ConfigError(
            f"insert option should be a string, got {type(options.insert_option).__name__}"
        )
    return options.insert_option.strip()


def build_statement(
    chunk: Sequence[Any],
    mode: InsertMode = InsertMode.STRICT,
    exclude_columns: Collection[str] = (),
    options: Optional[StatementOptions] = None,
    *,
    now: Optional[datetime] = None,
) -> Optional[Statement]:
    """
    Build one multi-row INSERT for ``chunk``.

    Returns None for an empty chunk. Extraction and validation errors abort the
    build; no partial statement is returned.
    """
    if len(chunk) == 0:
        return None

    options = options or StatementOptions()
    dialect = options.dialect
    now = now or utcnow()

    first_row = extract_row(chunk[0], exclude_columns, now=now)
    columns = resolve_columns(first_row)
    column_count = len(columns)

    params: List[SqlValue] = []
    placeholders: List[str] = []
    group = "(" + ", ".join([dialect.placeholder] * column_count) + ")"

    for index, record in enumerate(chunk):
        row = first_row if index == 0 else extract_row(record, exclude_columns, now=now)
        validate_row(row, columns, index)
        params.extend(row[column] for column in columns)
        placeholders.append(group)

    option = _trailing_option(options)
    keyword = ""
    if mode is InsertMode.IGNORE_DUPLICATES:
        keyword = dialect.ignore_keyword
        if dialect.ignore_suffix:
            option = f"{option} {dialect.ignore_suffix}".strip()
        if not keyword and not dialect.ignore_suffix:
            log.debug(
                "Dialect has no duplicate-ignore syntax; statement built as plain INSERT",
                extra={"dialect": dialect.value},
            )

    table = mapping_for(type(chunk[0])).table
    parts = ["INSERT"]
    if keyword:
        parts.append(keyword)
    parts.append(f"INTO {options.quote(table)}")
    parts.append("(" + ", ".join(options.quote(column) for column in columns) + ")")
    parts.append("VALUES " + ", ".join(placeholders))
    if option:
        parts.append(option)

    return Statement(
        sql=" ".join(parts),
        params=tuple(params),
        columns=tuple(columns),
        row_count=len(chunk),
    )


__all__ = ["InsertMode", "Statement", "StatementOptions", "build_statement"]
