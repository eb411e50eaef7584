"""
Strict strategy: the first failing chunk aborts the whole run.

Chunks already executed are not rolled back here; wrap the call in a transaction
when all-or-nothing behavior is required.
"""

from __future__ import annotations

from typing import Any, Collection, Iterable, Optional

from sqlbulk.batching.statements import InsertMode
from sqlbulk.errors import BulkInsertError
from sqlbulk.strategies.abstract import AbstractInsertStrategy, BulkInsertReport
from sqlbulk.utils.logging import get_logger

log = get_logger(__name__)


class StrictInsertStrategy(AbstractInsertStrategy):
    """
    Plain multi-row INSERT per chunk; raises on the first error of any kind.
    """

    name: str = "strict"
    description: str = "Multi-row INSERT per chunk; abort on first failure."
    mode: InsertMode = InsertMode.STRICT

    def execute(
        self,
        records: Iterable[Any],
        chunk_size: Optional[int] = None,
        exclude_columns: Collection[str] = (),
    ) -> BulkInsertReport:
        records = self._as_sequence(records)
        rows_affected = 0
        chunks = 0

        for index, chunk in self._plan(records, chunk_size, exclude_columns):
            try:
                rows_affected += self._run_chunk(index, chunk, exclude_columns)
            except BulkInsertError as exc:
                log.error(
                    f"[CHUNK FAILED] {self.name} #{index}; aborting",
                    extra={"chunk": index, "rows_so_far": rows_affected, "error": str(exc)},
                )
                raise
            chunks += 1

        log.info(
            f"[INSERT COMPLETE] {self.name}",
            extra={"records": len(records), "rows": rows_affected, "chunks": chunks},
        )
        return BulkInsertReport(rows_affected=rows_affected, chunks=chunks)


__all__ = ["StrictInsertStrategy"]
