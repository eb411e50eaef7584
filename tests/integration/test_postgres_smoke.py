"""
Integration tests against a real PostgreSQL instance.

Verifies that generated event statements are accepted by Postgres, that the
parameter budget keeps chunks under the bind limit, and that timestamps and
database defaults are filled in.

Run with: RUN_INTEGRATION_TESTS=1 pytest tests/integration/
"""

from __future__ import annotations

import os

import psycopg
import pytest

from sqlbulk.batching.dialects import Dialect
from sqlbulk.batching.statements import StatementOptions
from sqlbulk.bulk import bulk_insert
from sqlbulk.domain.fields import mapping_for, register_mapping
from sqlbulk.domain.models import EVENTS_DDL, EventRecord, generate_records
from sqlbulk.infrastructure.executors import ConnectionExecutor
from sqlbulk.orchestrator import run_insert

TEST_TABLE = "sqlbulk_smoke_events"
DEFAULT_ROWS = 250
DEFAULT_CHUNK_SIZE = 100
POSTGRES = StatementOptions(dialect=Dialect.POSTGRES)

pytestmark = pytest.mark.skipif(
    os.getenv("RUN_INTEGRATION_TESTS", "0") != "1",
    reason="Integration tests require RUN_INTEGRATION_TESTS=1 and reachable Postgres",
)


@pytest.fixture
def events_table(db_connection: psycopg.Connection) -> str:
    """
    Create a scratch events table inside the test transaction.
    """
    db_connection.execute(f"DROP TABLE IF EXISTS {TEST_TABLE}")
    db_connection.execute(EVENTS_DDL.format(table=TEST_TABLE))
    register_mapping(EventRecord, mapping_for(EventRecord).fields, table=TEST_TABLE)
    return TEST_TABLE


def _count(conn: psycopg.Connection, table: str) -> int:
    with conn.cursor() as cur:
        cur.execute(f"SELECT COUNT(*) FROM {table}")
        return cur.fetchone()[0]


class TestPostgresBulkInsert:
    """Strict inserts of generated events."""

    def test_inserts_all_events(self, db_connection: psycopg.Connection, events_table: str):
        executor = ConnectionExecutor(db_connection)
        records = list(generate_records(DEFAULT_ROWS, seed=7))

        rows = bulk_insert(executor, records, DEFAULT_CHUNK_SIZE, options=POSTGRES)

        assert rows == DEFAULT_ROWS
        assert _count(db_connection, events_table) == DEFAULT_ROWS

    def test_fills_timestamps_and_defaults(self, db_connection: psycopg.Connection, events_table: str):
        executor = ConnectionExecutor(db_connection)

        bulk_insert(executor, list(generate_records(3)), 0, options=POSTGRES)

        with db_connection.cursor() as cur:
            cur.execute(f"SELECT created_at, updated_at, source FROM {events_table}")
            rows = cur.fetchall()
        assert len(rows) == 3
        assert all(created is not None and created == updated for created, updated, _ in rows)
        assert {source for _, _, source in rows} == {"generator"}

    def test_parameter_budget_with_orchestrator(
        self, db_connection: psycopg.Connection, events_table: str
    ):
        executor = ConnectionExecutor(db_connection)

        result = run_insert(
            generate_records(DEFAULT_ROWS),
            "strict",
            executor,
            chunk_size=0,
            options=POSTGRES,
            max_parameters=700,
        )

        # seven columns per event -> 100 events per statement
        assert result["chunks"] == 3
        assert result["rows_affected"] == DEFAULT_ROWS
        assert result["error"] is None
