# api/infrastructure/duckdb_connection.py
from __future__ import annotations

from pathlib import Path

import duckdb

from .config import get_settings

SCHEMA_PATH = Path(__file__).parent / "schema.sql"

_connection: duckdb.DuckDBPyConnection | None = None


def get_connection() -> duckdb.DuckDBPyConnection:
    global _connection  # noqa: PLW0603
    if _connection is None:
        _connection = duckdb.connect(get_settings().duckdb_path)
    return _connection


def set_connection(conn: duckdb.DuckDBPyConnection) -> None:
    """Used by tests to inject an in-memory DuckDB."""
    global _connection  # noqa: PLW0603
    _connection = conn


def get_cursor() -> duckdb.DuckDBPyConnection:
    """Per-request cursor. A DuckDB connection object must not be shared across threads."""
    return get_connection().cursor()


def ensure_schema(conn: duckdb.DuckDBPyConnection) -> None:
    """Idempotent: every statement in schema.sql is CREATE ... IF NOT EXISTS."""
    conn.execute(SCHEMA_PATH.read_text(encoding="utf-8"))
