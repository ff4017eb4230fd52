from __future__ import annotations

import threading
from unittest.mock import MagicMock

import pytest
from mysql.connector import errors

from src.signature_attendance.signature_attendance.database.connection import DatabaseConnection, DBConfig


def _handle(pool_size=1, acquire_timeout=None):
    config = DBConfig(
        host="localhost",
        port=3306,
        user="root",
        password="",
        database="attendance_test",
        pool_size=pool_size,
        acquire_timeout=acquire_timeout,
    )
    pool = MagicMock(name="pool")
    pool.get_connection.side_effect = lambda: MagicMock(name="pooled_connection")
    return DatabaseConnection(config, pool=pool), pool


def test_request_beyond_pool_size_waits_for_a_release():
    conn_handle, pool = _handle(pool_size=1)
    first = conn_handle.connect()
    threading.Timer(0.05, first.close).start()

    second = conn_handle.connect()

    assert pool.get_connection.call_count == 2
    second.close()


def test_wait_gives_up_after_acquire_timeout():
    conn_handle, pool = _handle(pool_size=1, acquire_timeout=0.01)
    conn_handle.connect()

    with pytest.raises(errors.PoolError):
        conn_handle.connect()

    assert pool.get_connection.call_count == 1


def test_double_close_frees_only_one_slot():
    conn_handle, _ = _handle(pool_size=1, acquire_timeout=0.01)
    first = conn_handle.connect()

    first.close()
    first.close()

    second = conn_handle.connect()
    with pytest.raises(errors.PoolError):
        conn_handle.connect()
    second.close()


def test_failed_checkout_returns_the_slot():
    conn_handle, pool = _handle(pool_size=1, acquire_timeout=0.01)
    pool.get_connection.side_effect = errors.InterfaceError("server gone")

    with pytest.raises(errors.InterfaceError):
        conn_handle.connect()

    pool.get_connection.side_effect = lambda: MagicMock(name="pooled_connection")
    conn_handle.connect().close()


def test_borrowed_connection_delegates_to_the_driver():
    conn_handle, _ = _handle()

    conn = conn_handle.connect()
    conn.cursor(dictionary=True, buffered=True)

    conn._conn.cursor.assert_called_once_with(dictionary=True, buffered=True)
    conn.close()
    conn._conn.close.assert_called_once()
