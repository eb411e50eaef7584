"""
sqlbulk - chunked multi-row INSERT statements for collections of records.

This package turns many in-memory records of one type into a small number of
parameterized multi-row INSERT statements, keeping each statement under a
bound-parameter budget:

- Field tables describing how record attributes map onto columns
- Extraction with primary key, auto-increment, default and timestamp policies
- Deterministic (sorted) column order and per-chunk schema validation
- Dialect-aware duplicate handling (MySQL IGNORE, PostgreSQL ON CONFLICT)
- Strict and ignore-duplicates strategies over a pluggable execution layer
"""

from __future__ import annotations

__version__ = "0.1.0"
__license__ = "MIT"

# Public API exports
from sqlbulk.batching import (
    Dialect,
    InsertMode,
    Statement,
    StatementOptions,
    build_statement,
    chunk_records,
    extract_row,
)
from sqlbulk.bulk import bulk_insert, bulk_insert_ignore_duplicates
from sqlbulk.config import Settings, get_settings
from sqlbulk.domain import FieldDescriptor, RecordMapping, mapping_for, register_mapping
from sqlbulk.errors import (
    BulkInsertError,
    ConfigError,
    ExecutionError,
    InconsistentSchemaError,
    RecordTypeError,
)
from sqlbulk.infrastructure.executors import (
    ConnectionExecutor,
    RecordingExecutor,
    StatementExecutor,
)
from sqlbulk.strategies import (
    BulkInsertReport,
    ChunkFailure,
    IgnoreDuplicatesStrategy,
    StrictInsertStrategy,
)
from sqlbulk.utils.logging import configure_logging, get_logger

__all__ = [
    # Version info
    "__version__",
    "__license__",
    # Entry points
    "bulk_insert",
    "bulk_insert_ignore_duplicates",
    # Configuration
    "Settings",
    "get_settings",
    # Statement building
    "Dialect",
    "InsertMode",
    "Statement",
    "StatementOptions",
    "build_statement",
    "chunk_records",
    "extract_row",
    # Field tables
    "FieldDescriptor",
    "RecordMapping",
    "mapping_for",
    "register_mapping",
    # Execution
    "ConnectionExecutor",
    "RecordingExecutor",
    "StatementExecutor",
    # Strategies
    "BulkInsertReport",
    "ChunkFailure",
    "IgnoreDuplicatesStrategy",
    "StrictInsertStrategy",
    # Errors
    "BulkInsertError",
    "ConfigError",
    "ExecutionError",
    "InconsistentSchemaError",
    "RecordTypeError",
    # Logging
    "configure_logging",
    "get_logger",
]
