"""
Infrastructure package for sqlbulk.

Centralizes database connectivity and statement execution adapters. Keep this
layer focused on I/O, decoupled from extraction and statement-building logic.
"""

from sqlbulk.infrastructure.db_factory import build_dsn, get_sync_connection
from sqlbulk.infrastructure.executors import (
    ConnectionExecutor,
    RecordingExecutor,
    StatementExecutor,
)

__all__ = [
    "ConnectionExecutor",
    "RecordingExecutor",
    "StatementExecutor",
    "build_dsn",
    "get_sync_connection",
]
