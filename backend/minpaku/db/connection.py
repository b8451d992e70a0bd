from __future__ import annotations

import logging
import time

try:
    import pyodbc
except ImportError:
    pyodbc = None

from minpaku.config import settings
from minpaku.errors import StorageError

logger = logging.getLogger(__name__)


class DatabasePool:
    """Opens pyodbc connections to the PostgreSQL simulations store.

    No connections are pooled: each gateway call gets a fresh one and closes
    it. An unconfigured store raises StorageError at once; an unreachable one
    raises after DB_CONNECT_ATTEMPTS tries (one by default).
    """

    def __init__(self):
        self._conn_string: str = ""
        self._initialized: bool = False

    @property
    def is_configured(self) -> bool:
        return self._initialized and bool(self._conn_string)

    def initialize(self):
        self._conn_string = settings.DATABASE_CONN_STRING
        if self._conn_string:
            logger.info("Database pool initialized with connection string")
            self._initialized = True
        else:
            logger.warning("No DATABASE_CONN_STRING configured; simulations cannot be stored")

    def get_connection(self, attempts: int | None = None, delay: float = 1.0):
        """Open a new connection. Raises StorageError if the store is unreachable."""
        if pyodbc is None:
            raise StorageError("pyodbc is not installed (missing ODBC driver)")
        if not self.is_configured:
            raise StorageError("Database pool not initialized or connection string missing")

        attempts = attempts or settings.DB_CONNECT_ATTEMPTS
        last_error = None
        for attempt in range(1, attempts + 1):
            try:
                return pyodbc.connect(self._conn_string, timeout=settings.DB_CONNECT_TIMEOUT)
            except pyodbc.Error as e:
                last_error = e
                logger.warning("DB connection attempt %d/%d failed: %s", attempt, attempts, e)
                if attempt < attempts:
                    time.sleep(delay)

        raise StorageError(f"Failed to connect after {attempts} attempt(s)") from last_error

    def test_connection(self) -> dict:
        """Test DB connectivity and return status info."""
        if pyodbc is None:
            return {"status": "unavailable", "message": "pyodbc not installed"}
        if not self.is_configured:
            return {"status": "not_configured", "message": "No connection string set"}
        try:
            conn = self.get_connection(attempts=1)
            try:
                cursor = conn.cursor()
                cursor.execute("SELECT 1")
                cursor.fetchone()
            finally:
                conn.close()
            return {"status": "connected"}
        except Exception as e:
            return {"status": "error", "message": str(e)}

    def close(self):
        logger.info("Database pool closed")
        self._initialized = False


db_pool = DatabasePool()
