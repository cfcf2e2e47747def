from __future__ import annotations

from contextlib import contextmanager
from datetime import time, timedelta
from typing import Any, Dict, List, Optional, Sequence

import mysql.connector
from mysql.connector import errorcode

from ..core.exceptions import ConflictError, StoreError
from .connection import DatabaseConnection


@contextmanager
def db_cursor(conn_factory: DatabaseConnection, *, dictionary: bool = True):
    """Yield ``(conn, cursor)`` on a fresh connection; commit on success.

    Connector errors leave as domain errors: a duplicate key becomes
    ``ConflictError``, anything else ``StoreError``.
    """

    try:
        conn = conn_factory.connect()
    except mysql.connector.Error as e:
        raise StoreError(f"Database unavailable: {e}") from e

    try:
        cur = conn.cursor(dictionary=dictionary, buffered=True)
        try:
            yield conn, cur
            conn.commit()
        finally:
            cur.close()
    except mysql.connector.IntegrityError as e:
        conn.rollback()
        if e.errno == errorcode.ER_DUP_ENTRY:
            raise ConflictError("Duplicate record") from e
        raise StoreError(str(e)) from e
    except mysql.connector.Error as e:
        conn.rollback()
        raise StoreError(str(e)) from e
    except Exception:
        conn.rollback()
        raise
    finally:
        conn.close()


def fetchone(cur) -> Optional[Dict[str, Any]]:
    row = cur.fetchone()
    return row if row else None


def fetchall(cur) -> List[Dict[str, Any]]:
    rows = cur.fetchall()
    return list(rows or [])


def in_clause(values: Sequence[Any]) -> str:
    """Placeholder list for ``IN (...)``; callers must pass a non-empty sequence."""

    return ", ".join(["%s"] * len(values))


def normalize_mysql_time(value: Any) -> Optional[time]:
    """Normalize MySQL TIME values across connector implementations.

    mysql-connector can return TIME as:
    - datetime.time
    - datetime.timedelta
    - string (e.g. '08:30:00')
    """

    if value is None:
        return None

    if isinstance(value, time):
        return value

    if isinstance(value, timedelta):
        total_seconds = int(value.total_seconds()) % 86400
        hours = total_seconds // 3600
        minutes = (total_seconds % 3600) // 60
        seconds = total_seconds % 60
        return time(hour=hours, minute=minutes, second=seconds)

    if isinstance(value, str):
        parts = value.strip().split(":")
        if len(parts) < 2:
            raise ValueError(f"Invalid time string: {value!r}")
        hours = int(parts[0])
        minutes = int(parts[1])
        seconds = int(parts[2]) if len(parts) >= 3 and parts[2] else 0
        return time(hour=hours, minute=minutes, second=seconds)

    raise TypeError(f"Unsupported MySQL TIME value type: {type(value)!r}")
