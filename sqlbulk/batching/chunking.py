"""
Chunking helpers: split a record collection into contiguous, order-preserving
slices that keep every statement under the bound-parameter budget.
"""

from __future__ import annotations

from typing import Iterator, Sequence, TypeVar

T = TypeVar("T")


def chunk_records(records: Sequence[T], chunk_size: int) -> Iterator[Sequence[T]]:
    """
    Yield contiguous slices of ``records`` holding at most ``chunk_size`` items.

    A non-positive ``chunk_size``, or one at least as large as the input, yields
    the whole input as a single chunk. Empty input yields nothing.
    """
    total = len(records)
    if total == 0:
        return
    if chunk_size <= 0 or chunk_size >= total:
        yield records
        return
    for start in range(0, total, chunk_size):
        yield records[start : start + chunk_size]


def rows_per_chunk(max_parameters: int, column_count: int) -> int:
    """
    Largest number of rows whose placeholders fit in ``max_parameters``.

    Always at least 1 so a single wide record still produces a statement.
    """
    if max_parameters <= 0 or column_count <= 0:
        return 0
    return max(1, max_parameters // column_count)


def effective_chunk_size(chunk_size: int, max_parameters: int | None, column_count: int) -> int:
    """Combine a caller chunk size with a parameter budget; 0 means unbounded."""
    if not max_parameters:
        return chunk_size
    budget_rows = rows_per_chunk(max_parameters, column_count)
    if budget_rows <= 0:
        return chunk_size
    if chunk_size <= 0:
        return budget_rows
    return min(chunk_size, budget_rows)


__all__ = ["chunk_records", "effective_chunk_size", "rows_per_chunk"]
