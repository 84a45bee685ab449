from __future__ import annotations

import os
from collections.abc import Iterator, Sequence
from contextlib import contextmanager
from typing import Any, Protocol

import psycopg2
import psycopg2.extras

from ..models.config_models import DatabaseConfig
from ..models.context import FarmingRecord

"""Farming record store.

Records are owned by the record CRUD layer; this module only reads them,
newest first. The connection is an explicit handle opened by the caller
(open_connection) and injected into PostgresRecordStore, so nothing here
keeps module-level connection state.

Table layout read by PostgresRecordStore:
    farming_records(crop_name, planting_date, expected_harvest, notes,
                    soil_type, created_at)
"""

__all__ = [
    "RECENT_RECORDS_LIMIT",
    "SOIL_TYPE_DEFAULT",
    "RecordStoreError",
    "RecordStore",
    "InMemoryRecordStore",
    "PostgresRecordStore",
    "resolve_dsn",
    "open_connection",
]

RECENT_RECORDS_LIMIT = 10
SOIL_TYPE_DEFAULT = "Not specified"

_RECENT_SQL = (
    "SELECT crop_name, planting_date, expected_harvest, notes, soil_type "
    "FROM farming_records ORDER BY created_at DESC LIMIT %s"
)


class RecordStoreError(Exception):
    pass


class RecordStore(Protocol):
    def recent(self, limit: int = RECENT_RECORDS_LIMIT) -> list[FarmingRecord]:
        """Most recent records, newest first, at most `limit`."""
        ...


class InMemoryRecordStore:
    """Record store over a list already sorted newest first."""

    def __init__(self, records: Sequence[FarmingRecord] | None = None) -> None:
        self._records = list(records or [])

    def recent(self, limit: int = RECENT_RECORDS_LIMIT) -> list[FarmingRecord]:
        return list(self._records[:limit])


class PostgresRecordStore:
    """Record store reading the farming_records table through a psycopg2 connection."""

    def __init__(self, connection: Any) -> None:
        self.connection = connection

    def recent(self, limit: int = RECENT_RECORDS_LIMIT) -> list[FarmingRecord]:
        try:
            with self.connection.cursor(cursor_factory=psycopg2.extras.DictCursor) as cur:
                cur.execute(_RECENT_SQL, (limit,))
                rows = cur.fetchall()
        except psycopg2.Error as e:
            raise RecordStoreError(f"failed fetching farming records: {e}") from e
        return [
            FarmingRecord(
                crop_name=row["crop_name"],
                planting_date=row["planting_date"],
                expected_harvest=row["expected_harvest"],
                notes=row["notes"],
                soil_type=row["soil_type"] or SOIL_TYPE_DEFAULT,
            )
            for row in rows
        ]


def resolve_dsn(db_cfg: DatabaseConfig) -> str:
    """Build the connection DSN.

    Resolution order:
        1. DATABASE_URL / PGDSN environment variables, then config dsn
        2. individual PGHOST / PGPORT / PGUSER / PGPASSWORD / PGDATABASE
           with the config database section as fallback
    """
    dsn = os.getenv("DATABASE_URL") or os.getenv("PGDSN") or db_cfg.dsn
    if dsn:
        return dsn
    host = os.getenv("PGHOST", db_cfg.host or "localhost")
    port = os.getenv("PGPORT", str(db_cfg.port) if db_cfg.port else "5432")
    user = os.getenv("PGUSER", db_cfg.user or "postgres")
    password = os.getenv("PGPASSWORD", db_cfg.password or "")
    database = os.getenv("PGDATABASE", db_cfg.database or "postgres")
    dsn = f"host={host} port={port} user={user} dbname={database}"
    if password:
        dsn += f" password={password}"
    return dsn


@contextmanager
def open_connection(db_cfg: DatabaseConfig) -> Iterator[Any]:  # pragma: no cover (thin wrapper)
    """Open a read-only psycopg2 connection for the lifetime of the block."""
    try:
        conn = psycopg2.connect(resolve_dsn(db_cfg))
    except psycopg2.Error as e:
        raise RecordStoreError(f"database connection failed: {e}") from e
    try:
        conn.set_session(readonly=True, autocommit=True)
        yield conn
    finally:
        conn.close()
