"""
Exception hierarchy for sqlbulk.

Every failure raised while extracting, validating, building or executing a bulk
insert derives from ``BulkInsertError`` so callers (and the ignore-duplicates
strategy) can catch the whole family in one place.
"""

from __future__ import annotations

from typing import Optional, Sequence


class BulkInsertError(Exception):
    """Base class for all bulk insert failures."""


class RecordTypeError(BulkInsertError, TypeError):
    """A record, or one of its field values, is not of a supported type."""


class InconsistentSchemaError(BulkInsertError, ValueError):
    """A record extracted to a different column set than the first record of its chunk."""

    def __init__(
        self,
        message: str,
        index: Optional[int] = None,
        expected: Sequence[str] = (),
        actual: Sequence[str] = (),
    ) -> None:
        super().__init__(message)
        self.index = index
        self.expected = tuple(expected)
        self.actual = tuple(actual)


class ConfigError(BulkInsertError, ValueError):
    """Statement options are malformed (e.g. a non-string insert option)."""


class ExecutionError(BulkInsertError):
    """The execution layer failed to run a chunk's statement."""

    def __init__(self, message: str, chunk_index: Optional[int] = None) -> None:
        super().__init__(message)
        self.chunk_index = chunk_index


__all__ = [
    "BulkInsertError",
    "ConfigError",
    "ExecutionError",
    "InconsistentSchemaError",
    "RecordTypeError",
]
