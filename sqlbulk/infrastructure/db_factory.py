"""
Database connection factory for sqlbulk.

Builds the PostgreSQL DSN from settings and opens psycopg connections with retry
logic for transient connection failures using tenacity. Only connection
establishment is retried; statements are never re-executed.
"""

from __future__ import annotations

from typing import Optional

import psycopg
from psycopg import Connection
from tenacity import retry, retry_if_exception_type, stop_after_attempt, wait_exponential

from sqlbulk.config import Settings, get_settings


def build_dsn(settings: Optional[Settings] = None) -> str:
    """Compose a DSN string from settings."""
    settings = settings or get_settings()
    return (
        f"postgresql://{settings.db_user}:{settings.db_password}"
        f"@{settings.db_host}:{settings.db_port}/{settings.db_name}"
    )


@retry(
    stop=stop_after_attempt(3),
    wait=wait_exponential(multiplier=1, min=1, max=10),
    retry=retry_if_exception_type((psycopg.OperationalError, psycopg.InterfaceError)),
    reraise=True,
)
def get_sync_connection(dsn: Optional[str] = None) -> Connection:
    """
    Acquire a dedicated synchronous connection with automatic retry.

    Retries up to 3 times with exponential backoff for transient connection errors.

    Parameters
    ----------
    dsn : str, optional
        Connection string override. Defaults to the DSN built from settings.

    Returns
    -------
    Connection
        A new psycopg connection instance (autocommit off).

    Raises
    ------
    psycopg.OperationalError
        If connection fails after all retry attempts.
    """
    settings = get_settings()
    return psycopg.connect(dsn or build_dsn(settings), connect_timeout=settings.db_connect_timeout)


__all__ = ["build_dsn", "get_sync_connection"]
