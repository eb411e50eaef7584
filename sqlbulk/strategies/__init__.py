"""
Strategies package for sqlbulk.

This module re-exports the abstract interfaces and the concrete insert strategies
so downstream code can import from `sqlbulk.strategies` directly.
"""

from sqlbulk.strategies.abstract import (
    AbstractInsertStrategy,
    BulkInsertReport,
    ChunkFailure,
    InsertResult,
    InsertStrategy,
)
from sqlbulk.strategies.ignore_duplicates import IgnoreDuplicatesStrategy
from sqlbulk.strategies.strict import StrictInsertStrategy

__all__ = [
    # Abstracts
    "AbstractInsertStrategy",
    "BulkInsertReport",
    "ChunkFailure",
    "InsertResult",
    "InsertStrategy",
    # Concrete strategies
    "IgnoreDuplicatesStrategy",
    "StrictInsertStrategy",
]
