"""
Ignore-duplicates strategy: duplicate-tolerant INSERT syntax, and failing chunks
are skipped instead of aborting the run.
"""

from __future__ import annotations

from typing import Any, Collection, Iterable, List, Optional

from sqlbulk.batching.statements import InsertMode
from sqlbulk.errors import BulkInsertError
from sqlbulk.strategies.abstract import AbstractInsertStrategy, BulkInsertReport, ChunkFailure
from sqlbulk.utils.logging import get_logger

log = get_logger(__name__)


class IgnoreDuplicatesStrategy(AbstractInsertStrategy):
    """
    INSERT IGNORE / ON CONFLICT per chunk; failures are collected, not raised.

    Only successful chunks contribute to ``rows_affected``. Every failure is kept
    in the report, in chunk order.
    """

    name: str = "ignore_duplicates"
    description: str = "Duplicate-ignoring INSERT per chunk; skip failed chunks."
    mode: InsertMode = InsertMode.IGNORE_DUPLICATES

    def execute(
        self,
        records: Iterable[Any],
        chunk_size: Optional[int] = None,
        exclude_columns: Collection[str] = (),
    ) -> BulkInsertReport:
        records = self._as_sequence(records)
        rows_affected = 0
        chunks = 0
        failures: List[ChunkFailure] = []

        for index, chunk in self._plan(records, chunk_size, exclude_columns):
            chunks += 1
            try:
                rows_affected += self._run_chunk(index, chunk, exclude_columns)
            except BulkInsertError as exc:
                log.warning(
                    f"[CHUNK SKIPPED] {self.name} #{index}",
                    extra={"chunk": index, "records": len(chunk), "error": str(exc)},
                )
                failures.append(ChunkFailure(index=index, error=exc))

        log.info(
            f"[INSERT COMPLETE] {self.name}",
            extra={
                "records": len(records),
                "rows": rows_affected,
                "chunks": chunks,
                "failed_chunks": len(failures),
            },
        )
        return BulkInsertReport(rows_affected=rows_affected, chunks=chunks, errors=tuple(failures))


__all__ = ["IgnoreDuplicatesStrategy"]
