"""
Batching package for sqlbulk.

Pure statement-building logic: record extraction, column resolution, chunking
and multi-row INSERT assembly. Nothing here touches a database connection.
"""

from sqlbulk.batching.chunking import chunk_records, effective_chunk_size, rows_per_chunk
from sqlbulk.batching.dialects import Dialect
from sqlbulk.batching.extraction import extract_row, resolve_columns, validate_row
from sqlbulk.batching.statements import (
    InsertMode,
    Statement,
    StatementOptions,
    build_statement,
)

__all__ = [
    "Dialect",
    "InsertMode",
    "Statement",
    "StatementOptions",
    "build_statement",
    "chunk_records",
    "effective_chunk_size",
    "extract_row",
    "resolve_columns",
    "rows_per_chunk",
    "validate_row",
]
