"""
Pytest configuration for sqlbulk.

Provides fixtures for:
- Field table registry isolation between tests
- A fixed clock for timestamp assertions
- In-memory SQLite connections for local round trips
- PostgreSQL connection management for gated integration tests
"""

from __future__ import annotations

import os
import sqlite3
from datetime import datetime, timezone
from typing import Generator

import psycopg
import pytest

from sqlbulk.config import Settings
from sqlbulk.domain import fields

READINGS_SQLITE_DDL = """
CREATE TABLE readings (
    id INTEGER PRIMARY KEY,
    sensor TEXT NOT NULL,
    value REAL NOT NULL,
    unit TEXT NOT NULL
);
"""


@pytest.fixture(autouse=True)
def isolated_registry() -> Generator[None, None, None]:
    """
    Restore the field table registry after each test so registrations don't leak.
    """
    snapshot = dict(fields._REGISTRY)
    yield
    fields._REGISTRY.clear()
    fields._REGISTRY.update(snapshot)


@pytest.fixture
def fixed_now() -> datetime:
    return datetime(2024, 5, 17, 12, 30, tzinfo=timezone.utc)


@pytest.fixture
def sqlite_connection() -> Generator[sqlite3.Connection, None, None]:
    """
    In-memory SQLite database with a ``readings`` table.
    """
    conn = sqlite3.connect(":memory:")
    conn.executescript(READINGS_SQLITE_DDL)
    try:
        yield conn
    finally:
        conn.close()


@pytest.fixture(scope="session")
def test_settings() -> Settings:
    """
    Settings fixture with test-specific overrides.

    Can be overridden via environment variables in CI or local testing.
    """
    return Settings(
        db_host=os.getenv("DB_HOST", "localhost"),
        db_port=int(os.getenv("DB_PORT", "5432")),
        db_user=os.getenv("DB_USER", "postgres"),
        db_password=os.getenv("DB_PASSWORD", "postgres"),
        db_name=os.getenv("DB_NAME", "sqlbulk"),
        log_level="DEBUG",
    )


@pytest.fixture(scope="session")
def test_dsn(test_settings: Settings) -> str:
    """
    Database connection string for tests.
    """
    return (
        f"postgresql://{test_settings.db_user}:{test_settings.db_password}"
        f"@{test_settings.db_host}:{test_settings.db_port}/{test_settings.db_name}"
    )


@pytest.fixture(scope="session")
def db_connection_available(test_dsn: str) -> bool:
    """
    Check if database is reachable.

    Used to conditionally skip integration tests when DB is not available.
    """
    try:
        with psycopg.connect(test_dsn, connect_timeout=5) as conn:
            with conn.cursor() as cur:
                cur.execute("SELECT 1;")
                cur.fetchone()
        return True
    except psycopg.Error:
        return False


@pytest.fixture
def db_connection(
    test_dsn: str, db_connection_available: bool
) -> Generator[psycopg.Connection, None, None]:
    """
    Provide a database connection for integration tests, rolled back afterwards.

    Skips tests if database is not available.
    """
    if not db_connection_available:
        pytest.skip("Database not available for integration tests")

    conn = psycopg.connect(test_dsn)
    try:
        yield conn
    finally:
        conn.rollback()
        conn.close()
