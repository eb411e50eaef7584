"""
SQL dialect rules used when assembling INSERT statements.

Only the differences that matter to bulk inserts live here: identifier quoting,
the driver placeholder token, and duplicate-row handling syntax.
"""

from __future__ import annotations

from enum import Enum


class Dialect(str, Enum):
    GENERIC = "generic"
    MYSQL = "mysql"
    POSTGRES = "postgres"
    SQLITE = "sqlite"

    @classmethod
    def from_name(cls, name: str | None) -> "Dialect":
        """Map a driver or product name to a dialect; unknown names are generic."""
        if not name:
            return cls.GENERIC
        return _ALIASES.get(name.strip().lower(), cls.GENERIC)

    @property
    def placeholder(self) -> str:
        # psycopg and MySQL drivers use the "format" paramstyle
        if self in (Dialect.POSTGRES, Dialect.MYSQL):
            return "%s"
        return "?"

    @property
    def quote_char(self) -> str:
        return "`" if self is Dialect.MYSQL else '"'

    def quote_identifier(self, name: str) -> str:
        """Quote each dotted part of ``name``, doubling embedded quote characters."""
        q = self.quote_char
        return ".".join(f"{q}{part.replace(q, q * 2)}{q}" for part in name.split("."))

    @property
    def ignore_keyword(self) -> str:
        """Keyword injected after INSERT in ignore-duplicates mode."""
        return "IGNORE" if self is Dialect.MYSQL else ""

    @property
    def ignore_suffix(self) -> str:
        """Clause appended after the insert option in ignore-duplicates mode."""
        return "ON CONFLICT IGNORE" if self is Dialect.POSTGRES else ""


_ALIASES = {
    "mysql": Dialect.MYSQL,
    "mariadb": Dialect.MYSQL,
    "postgres": Dialect.POSTGRES,
    "postgresql": Dialect.POSTGRES,
    "psycopg": Dialect.POSTGRES,
    "sqlite": Dialect.SQLITE,
    "sqlite3": Dialect.SQLITE,
    "generic": Dialect.GENERIC,
}


__all__ = ["Dialect"]
