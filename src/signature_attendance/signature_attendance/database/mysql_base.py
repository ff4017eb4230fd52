from __future__ import annotations

import logging
from contextlib import contextmanager
from typing import Any, Dict, List, Optional

import mysql.connector

from ..core.exceptions import StoreError

logger = logging.getLogger(__name__)


def _acquire(conn_factory):
    try:
        return conn_factory.connect()
    except mysql.connector.Error as exc:
        logger.error("Could not acquire a database connection: %s", exc)
        raise StoreError("Database unavailable") from exc


def _rollback_quietly(conn) -> None:
    try:
        conn.rollback()
    except mysql.connector.Error:
        logger.exception("Rollback failed")


@contextmanager
def db_cursor(conn_factory, *, dictionary: bool = True):
    """Borrow a pooled connection for a short unit of work.

    Commits when the block exits cleanly, rolls back otherwise, and always
    hands the connection back to the pool.
    """
    conn = _acquire(conn_factory)
    try:
        cur = conn.cursor(dictionary=dictionary, buffered=True)
        try:
            yield conn, cur
            conn.commit()
        finally:
            cur.close()
    except mysql.connector.Error as exc:
        _rollback_quietly(conn)
        raise StoreError("Database operation failed") from exc
    except Exception:
        _rollback_quietly(conn)
        raise
    finally:
        conn.close()


@contextmanager
def db_transaction(conn_factory, *, dictionary: bool = True):
    """Like ``db_cursor`` but opens an explicit transaction first.

    Used for multi-statement mutations that must become visible together or
    not at all. Domain errors raised inside the block roll back and propagate
    unchanged; driver errors roll back and surface as ``StoreError``.
    """
    conn = _acquire(conn_factory)
    try:
        conn.start_transaction()
        cur = conn.cursor(dictionary=dictionary, buffered=True)
        try:
            yield conn, cur
            conn.commit()
        finally:
            cur.close()
    except mysql.connector.Error as exc:
        _rollback_quietly(conn)
        raise StoreError("Database transaction failed") from exc
    except BaseException:
        _rollback_quietly(conn)
        raise
    finally:
        conn.close()


def fetchone(cur) -> Optional[Dict[str, Any]]:
    row = cur.fetchone()
    return row if row else None


def fetchall(cur) -> List[Dict[str, Any]]:
    rows = cur.fetchall()
    return list(rows or [])


def escape_like(value: str) -> str:
    """Escape LIKE wildcards so user input matches literally."""
    return value.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")
