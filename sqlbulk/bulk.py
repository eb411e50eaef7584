"""
Public bulk insert entry points.

    from sqlbulk import ConnectionExecutor, bulk_insert

    with get_sync_connection() as conn:
        inserted = bulk_insert(ConnectionExecutor(conn), records, chunk_size=1000)
"""

from __future__ import annotations

from typing import Any, Collection, Iterable, Optional

from sqlbulk.batching.statements import StatementOptions
from sqlbulk.infrastructure.executors import StatementExecutor
from sqlbulk.strategies.abstract import BulkInsertReport
from sqlbulk.strategies.ignore_duplicates import IgnoreDuplicatesStrategy
from sqlbulk.strategies.strict import StrictInsertStrategy


def bulk_insert(
    executor: StatementExecutor,
    records: Iterable[Any],
    chunk_size: int,
    exclude_columns: Collection[str] = (),
    *,
    options: Optional[StatementOptions] = None,
    max_parameters: Optional[int] = None,
) -> int:
    """
    Insert ``records`` with one multi-row INSERT per chunk.

    Parameters
    ----------
    executor : StatementExecutor
        Runs each statement (e.g. ``ConnectionExecutor(conn)``).
    records : iterable
        Records of a single type with a field table.
    chunk_size : int
        Records per statement; ``<= 0`` puts everything in one statement.
    exclude_columns : collection of str
        Attribute or column names left out of the INSERT.
    options : StatementOptions, optional
        Dialect and trailing SQL option; defaults to a generic dialect.
    max_parameters : int, optional
        Bound-parameter budget per statement; shrinks chunks to fit.

    Returns
    -------
    int
        Total rows affected.

    Raises
    ------
    BulkInsertError
        The first extraction, validation, configuration or execution failure.
        Chunks executed before the failure stay applied.
    """
    strategy = StrictInsertStrategy(executor, options=options, max_parameters=max_parameters)
    return strategy.execute(records, chunk_size, exclude_columns).rows_affected


def bulk_insert_ignore_duplicates(
    executor: StatementExecutor,
    records: Iterable[Any],
    chunk_size: int,
    exclude_columns: Collection[str] = (),
    *,
    options: Optional[StatementOptions] = None,
    max_parameters: Optional[int] = None,
) -> BulkInsertReport:
    """
    Insert ``records`` with duplicate-ignoring syntax, skipping failed chunks.

    Returns a ``BulkInsertReport``: ``rows_affected`` sums the successful chunks,
    ``error`` is the most recent failure and ``errors`` lists all of them.
    """
    strategy = IgnoreDuplicatesStrategy(executor, options=options, max_parameters=max_parameters)
    return strategy.execute(records, chunk_size, exclude_columns)


__all__ = ["bulk_insert", "bulk_insert_ignore_duplicates"]
