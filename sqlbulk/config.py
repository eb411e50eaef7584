"""
Configuration settings for sqlbulk.

Uses Pydantic Settings to load environment variables for database connections,
logging, and bulk insert defaults (chunk size, parameter budget, dialect and an
optional trailing SQL fragment appended to every INSERT).
"""
from __future__ import annotations

from functools import lru_cache
from typing import Optional

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    # Database
    db_host: str = Field("localhost", alias="DB_HOST")
    db_port: int = Field(5432, alias="DB_PORT")
    db_user: str = Field("postgres", alias="DB_USER")
    db_password: str = Field("postgres", alias="DB_PASSWORD")
    db_name: str = Field("sqlbulk", alias="DB_NAME")
    db_connect_timeout: int = Field(10, alias="DB_CONNECT_TIMEOUT")

    # Application
    app_env: str = Field("development", alias="APP_ENV")
    log_level: str = Field("INFO", alias="LOG_LEVEL")
    log_json: bool = Field(False, alias="LOG_JSON")

    # Bulk insert defaults
    bulk_chunk_size: int = Field(1_000, alias="BULK_CHUNK_SIZE")
    bulk_max_parameters: int = Field(65_535, alias="BULK_MAX_PARAMETERS")
    bulk_dialect: str = Field("postgres", alias="BULK_DIALECT")
    bulk_insert_option: Optional[str] = Field(None, alias="BULK_INSERT_OPTION")
    bulk_table: str = Field("events", alias="BULK_TABLE")

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        populate_by_name=True,
    )


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """
    Retrieve a cached instance of Settings to avoid repeated env parsing.
    """
    return Settings()


__all__ = ["Settings", "get_settings"]
