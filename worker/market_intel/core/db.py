"""Database helpers for the snapshot store."""

import logging
from contextlib import contextmanager
from datetime import datetime
from typing import Any, List, Optional

import psycopg2
from psycopg2 import extras, pool

from market_intel.core.config import get_settings
from market_intel.core.models import Snapshot, VenueRecord

logger = logging.getLogger(__name__)

_connection_pool: Optional[pool.SimpleConnectionPool] = None


def init_pool(minconn: int = 1, maxconn: int = 5) -> pool.SimpleConnectionPool:
    """Initialise and return the shared connection pool."""
    global _connection_pool
    if _connection_pool is None:
        settings = get_settings()
        if not settings.database_url:
            raise RuntimeError("DATABASE_URL is required for database connections")
        _connection_pool = pool.SimpleConnectionPool(
            minconn,
            maxconn,
            dsn=settings.database_url,
            connect_timeout=10,
        )
        logger.info("Database connection pool initialised")
    return _connection_pool


@contextmanager
def get_connection():
    """Context manager yielding a pooled connection."""
    pg_pool = init_pool()
    conn = pg_pool.getconn()
    try:
        yield conn
    finally:
        pg_pool.putconn(conn)


_CREATE_TABLE = """
CREATE TABLE IF NOT EXISTS market_snapshots (
    id SERIAL PRIMARY KEY,
    timestamp TIMESTAMPTZ DEFAULT NOW(),
    casinos JSONB NOT NULL
);
"""

_INSERT_SNAPSHOT = """
INSERT INTO market_snapshots (
    timestamp,
    casinos
) VALUES (
    %(timestamp)s,
    %(casinos)s
);
"""

_SELECT_RECENT = """
SELECT timestamp, casinos
FROM market_snapshots
ORDER BY timestamp DESC
LIMIT %(limit)s;
"""


def ensure_schema() -> None:
    with get_connection() as conn:
        with conn.cursor() as cur:
            cur.execute(_CREATE_TABLE)
        conn.commit()
        logger.info("market_snapshots table is ready")


def _prepare_params(snapshot: Snapshot) -> dict:
    return {
        "timestamp": snapshot.timestamp,
        "casinos": extras.Json([venue.to_dict() for venue in snapshot.venues]),
    }


def append_snapshot(snapshot: Snapshot) -> None:
    """Append one snapshot; the history table is never updated in place."""
    if not snapshot.venues:
        raise ValueError("refusing to store a snapshot without venues")

    params = _prepare_params(snapshot)
    with get_connection() as conn:
        try:
            with conn.cursor() as cur:
                cur.execute(_INSERT_SNAPSHOT, params)
            conn.commit()
        except psycopg2.Error:
            conn.rollback()
            raise
        logger.info("Stored snapshot %s with %d venues", snapshot.timestamp.isoformat(), len(snapshot.venues))


def _row_to_snapshot(timestamp: Any, casinos: Any) -> Snapshot:
    if isinstance(timestamp, str):
        timestamp = datetime.fromisoformat(timestamp)
    venues = tuple(VenueRecord.from_dict(item) for item in casinos or [])
    return Snapshot(timestamp=timestamp, venues=venues)


def fetch_snapshots(limit: int = 1000) -> List[Snapshot]:
    """Return up to ``limit`` snapshots, newest first."""
    with get_connection() as conn:
        with conn.cursor() as cur:
            cur.execute(_SELECT_RECENT, {"limit": limit})
            rows = cur.fetchall()
    return [_row_to_snapshot(timestamp, casinos) for timestamp, casinos in rows]
