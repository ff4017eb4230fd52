from __future__ import annotations

import threading
from dataclasses import dataclass
from typing import Optional

from mysql.connector import errors, pooling

from ..core.constants import DEFAULT_POOL_NAME, DEFAULT_POOL_SIZE


@dataclass
class DBConfig:
    host: str
    port: int
    user: str
    password: str
    database: str
    pool_size: int = DEFAULT_POOL_SIZE
    pool_name: str = DEFAULT_POOL_NAME
    # None waits for a free connection as long as it takes.
    acquire_timeout: Optional[float] = None


class _BorrowedConnection:
    """Pooled connection that frees its pool slot on the first ``close()``."""

    def __init__(self, conn, slots: threading.BoundedSemaphore):
        self._conn = conn
        self._slots = slots
        self._released = False

    def close(self) -> None:
        if self._released:
            return
        self._released = True
        try:
            self._conn.close()
        finally:
            self._slots.release()

    def __getattr__(self, name):
        return getattr(self._conn, name)


class DatabaseConnection:
    """Process-wide handle on a bounded MySQL connection pool.

    The pool itself is created on first use so importing/building the app does
    not require a reachable database. ``connect()`` hands out a pooled
    connection, queueing while all of them are borrowed; calling ``close()``
    on it returns it to the pool.
    """

    _instance: Optional["DatabaseConnection"] = None

    def __init__(self, config: DBConfig, *, pool=None):
        self._config = config
        self._pool = pool
        self._lock = threading.Lock()
        # mysql-connector raises PoolError on exhaustion instead of waiting.
        self._slots = threading.BoundedSemaphore(int(config.pool_size))

    @classmethod
    def get_instance(cls, config: DBConfig) -> "DatabaseConnection":
        if cls._instance is None:
            cls._instance = DatabaseConnection(config)
        return cls._instance

    @property
    def config(self) -> DBConfig:
        return self._config

    def _get_pool(self) -> pooling.MySQLConnectionPool:
        with self._lock:
            if self._pool is None:
                self._pool = pooling.MySQLConnectionPool(
                    pool_name=self._config.pool_name,
                    pool_size=int(self._config.pool_size),
                    pool_reset_session=True,
                    host=self._config.host,
                    port=int(self._config.port),
                    user=self._config.user,
                    password=self._config.password,
                    database=self._config.database,
                    autocommit=False,
                )
            return self._pool

    def connect(self):
        if not self._slots.acquire(timeout=self._config.acquire_timeout):
            raise errors.PoolError("Timed out waiting for a free database connection")
        try:
            conn = self._get_pool().get_connection()
        except BaseException:
            self._slots.release()
            raise
        return _BorrowedConnection(conn, self._slots)
