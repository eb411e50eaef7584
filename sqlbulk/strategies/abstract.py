"""
Insert strategy interfaces and result contracts for sqlbulk.

Concrete strategies (strict, ignore-duplicates) share the chunk planning and
per-chunk execution implemented by ``AbstractInsertStrategy`` and differ only in
how a failing chunk affects the rest of the run. Both return a
``BulkInsertReport``.
"""

from __future__ import annotations

import abc
from dataclasses import dataclass
from datetime import datetime
from typing import (
    Any,
    Callable,
    Collection,
    Iterable,
    Iterator,
    List,
    Optional,
    Protocol,
    Sequence,
    Tuple,
    TypedDict,
    runtime_checkable,
)

from sqlbulk.batching.chunking import chunk_records, effective_chunk_size
from sqlbulk.batching.extraction import extract_row, utcnow
from sqlbulk.batching.statements import InsertMode, StatementOptions, build_statement
from sqlbulk.config import get_settings
from sqlbulk.errors import BulkInsertError, ExecutionError
from sqlbulk.infrastructure.executors import StatementExecutor
from sqlbulk.utils.logging import get_logger

log = get_logger(__name__)


class InsertResult(TypedDict, total=False):
    """
    Flat, JSON-friendly summary of a run consumed by the orchestrator/reporter.
    """

    mode: str
    records: int
    rows_affected: int
    chunks: int
    failed_chunks: int
    duration_seconds: float
    throughput_rows_per_sec: float
    peak_rss_bytes: Optional[int]
    cpu_percent: Optional[float]
    error: Optional[str]
    errors: List[str]


@dataclass(frozen=True)
class ChunkFailure:
    index: int
    error: BulkInsertError


@dataclass(frozen=True)
class BulkInsertReport:
    """
    Outcome of a bulk insert.

    ``errors`` lists every failed chunk in order; ``error`` is the most recent
    failure (or None), for callers that only look at one.
    """

    rows_affected: int = 0
    chunks: int = 0
    errors: Tuple[ChunkFailure, ...] = ()

    @property
    def error(self) -> Optional[BulkInsertError]:
        return self.errors[-1].error if self.errors else None

    @property
    def failed_chunks(self) -> int:
        return len(self.errors)

    def as_result(self, mode: str, records: int) -> InsertResult:
        return InsertResult(
            mode=mode,
            records=records,
            rows_affected=self.rows_affected,
            chunks=self.chunks,
            failed_chunks=self.failed_chunks,
            error=str(self.error) if self.error is not None else None,
            errors=[f"chunk {failure.index}: {failure.error}" for failure in self.errors],
        )


@runtime_checkable
class InsertStrategy(Protocol):
    """
    Common interface all insert strategies implement.

    Attributes
    ----------
    name : str
        A short machine-friendly identifier.
    description : str
        A human-friendly summary of the failure policy.
    mode : InsertMode
        Statement mode passed to the builder.
    """

    name: str
    description: str
    mode: InsertMode

    def execute(
        self,
        records: Iterable[Any],
        chunk_size: Optional[int] = None,
        exclude_columns: Collection[str] = (),
    ) -> BulkInsertReport:
        ...


class AbstractInsertStrategy(abc.ABC):
    """
    Shared chunk planning and execution for class-based strategies.

    Subclasses set ``name``, ``description`` and ``mode`` and implement ``execute``.
    """

    name: str
    description: str
    mode: InsertMode

    def __init__(
        self,
        executor: StatementExecutor,
        options: Optional[StatementOptions] = None,
        max_parameters: Optional[int] = None,
        clock: Callable[[], datetime] = utcnow,
    ) -> None:
        self.executor = executor
        self.options = options or StatementOptions()
        self.max_parameters = max_parameters
        self._clock = clock

    @abc.abstractmethod
    def execute(
        self,
        records: Iterable[Any],
        chunk_size: Optional[int] = None,
        exclude_columns: Collection[str] = (),
    ) -> BulkInsertReport:  # pragma: no cover - interface only
        """Insert all records and return the aggregated report."""
        raise NotImplementedError

    def _plan(
        self,
        records: Sequence[Any],
        chunk_size: Optional[int],
        exclude_columns: Collection[str],
    ) -> Iterator[Tuple[int, Sequence[Any]]]:
        """Yield ``(index, chunk)`` pairs sized by chunk size and parameter budget."""
        size = get_settings().bulk_chunk_size if chunk_size is None else chunk_size
        if self.max_parameters and len(records) > 0:
            try:
                column_count = len(extract_row(records[0], exclude_columns))
            except BulkInsertError:
                # the same error is raised again when the first chunk is built
                column_count = 0
            size = effective_chunk_size(size, self.max_parameters, column_count)
        return enumerate(chunk_records(records, size))

    def _run_chunk(
        self, index: int, chunk: Sequence[Any], exclude_columns: Collection[str]
    ) -> int:
        """Build and execute one chunk's statement; returns affected rows."""
        statement = build_statement(
            chunk, self.mode, exclude_columns, self.options, now=self._clock()
        )
        if statement is None:
            return 0

        log.debug(
            f"[CHUNK START] {self.name} #{index}",
            extra={
                "mode": self.mode.value,
                "chunk": index,
                "rows": statement.row_count,
                "columns": len(statement.columns),
                "parameters": len(statement.params),
            },
        )
        try:
            return self.executor.execute(statement.sql, statement.params)
        except BulkInsertError:
            raise
        except Exception as exc:  # noqa: BLE001 - driver errors are wrapped, not handled
            raise ExecutionError(f"chunk {index} failed to execute: {exc}", chunk_index=index) from exc

    @staticmethod
    def _as_sequence(records: Iterable[Any]) -> Sequence[Any]:
        return records if isinstance(records, Sequence) else list(records)


__all__ = [
    "AbstractInsertStrategy",
    "BulkInsertReport",
    "ChunkFailure",
    "InsertResult",
    "InsertStrategy",
]
