"""
Execution layer adapters.

Strategies only need ``execute(sql, params) -> rows affected``. ``ConnectionExecutor``
provides that over any DB-API connection (psycopg, sqlite3, ...), and
``RecordingExecutor`` captures statements without a database for dry runs.
"""

from __future__ import annotations

import re
from typing import Any, List, Protocol, Sequence, Tuple, runtime_checkable

from sqlbulk.domain.values import SqlValue
from sqlbulk.utils.logging import get_logger

log = get_logger(__name__)

# one "(?, ?)" or "(%s, %s)" group per row in a multi-row VALUES list
_VALUES_GROUP = re.compile(r"\((?:\?|%s)")


@runtime_checkable
class StatementExecutor(Protocol):
    """Runs one SQL statement with bound parameters and reports affected rows."""

    def execute(self, sql: str, params: Sequence[SqlValue]) -> int:
        ...


class ConnectionExecutor:
    """
    DB-API adapter: opens a cursor per statement and returns ``cursor.rowcount``.

    Transactions are left to the caller; this class never commits or rolls back.
    """

    def __init__(self, connection: Any) -> None:
        self._connection = connection

    def execute(self, sql: str, params: Sequence[SqlValue]) -> int:
        cur = self._connection.cursor()
        try:
            cur.execute(sql, tuple(params))
            rowcount = cur.rowcount
        finally:
            cur.close()
        if rowcount is None or rowcount < 0:
            log.debug("Driver reported unknown rowcount", extra={"rowcount": rowcount})
            return 0
        return rowcount


class RecordingExecutor:
    """Collects statements instead of running them; reports every row as inserted."""

    def __init__(self) -> None:
        self.statements: List[Tuple[str, Tuple[SqlValue, ...]]] = []

    def execute(self, sql: str, params: Sequence[SqlValue]) -> int:
        self.statements.append((sql, tuple(params)))
        if not params:
            return 0
        return len(_VALUES_GROUP.findall(sql))


__all__ = ["ConnectionExecutor", "RecordingExecutor", "StatementExecutor"]
