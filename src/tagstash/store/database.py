"""SQLite database connection manager for tagstash."""

import sqlite3
import threading
from contextlib import contextmanager
from pathlib import Path
from typing import Iterator

from ..core.config import MEMORY_DB_PATH
from ..core.exceptions import DatabaseError
from .schema import get_schema


class Database:
    """SQLite database connection manager.

    The connection is shared between threads; statements and transactions
    are serialized by an internal lock.
    """

    def __init__(self, path: Path | str):
        """Initialize database with path.

        Args:
            path: Path to the SQLite database file, or ":memory:".
        """
        self.path = path if str(path) == MEMORY_DB_PATH else Path(path)
        self._connection: sqlite3.Connection | None = None
        self._lock = threading.RLock()

    @property
    def connected(self) -> bool:
        return self._connection is not None

    def connect(self) -> None:
        """Open the connection and create the schema."""
        with self._lock:
            if self._connection is None:
                self._open()

    def _open(self) -> None:
        try:
            if isinstance(self.path, Path):
                self.path.parent.mkdir(parents=True, exist_ok=True)
            self._connection = sqlite3.connect(str(self.path), check_same_thread=False)
            self._connection.row_factory = sqlite3.Row
            self._init_schema()
        except Exception as e:
            if self._connection is not None:
                self._connection.close()
                self._connection = None
            raise DatabaseError(f"Failed to connect to database: {e}") from e

    def close(self) -> None:
        """Close database connection."""
        with self._lock:
            if self._connection is None:
                return

            try:
                self._connection.close()
            except Exception as e:
                raise DatabaseError(f"Failed to close database: {e}") from e
            finally:
                self._connection = None

    @contextmanager
    def transaction(self) -> Iterator[sqlite3.Cursor]:
        """Context manager for database transactions.

        Yields:
            A cursor for executing SQL statements.

        Raises:
            DatabaseError: If connection is not available or transaction fails.
        """
        with self._lock:
            if self._connection is None:
                raise DatabaseError("Database not connected")

            cursor = self._connection.cursor()
            try:
                yield cursor
                self._connection.commit()
            except Exception as e:
                self._connection.rollback()
                raise DatabaseError(f"Transaction failed: {e}") from e
            finally:
                cursor.close()

    def execute(self, sql: str, params: tuple = ()) -> list[sqlite3.Row]:
        """Execute a SQL query and fetch its rows.

        Rows are fetched while the lock is held, so the result is safe to
        use from any thread.

        Args:
            sql: SQL statement to execute.
            params: Parameters for the SQL statement.

        Returns:
            All result rows.

        Raises:
            DatabaseError: If connection is not available or query fails.
        """
        with self._lock:
            if self._connection is None:
                raise DatabaseError("Database not connected")

            try:
                return self._connection.execute(sql, params).fetchall()
            except Exception as e:
                raise DatabaseError(f"Query execution failed: {e}") from e

    def executescript(self, sql: str) -> None:
        """Execute multiple SQL statements.

        Raises:
            DatabaseError: If connection is not available or script fails.
        """
        with self._lock:
            if self._connection is None:
                raise DatabaseError("Database not connected")

            try:
                self._connection.executescript(sql)
            except Exception as e:
                raise DatabaseError(f"Script execution failed: {e}") from e

    def _init_schema(self) -> None:
        """Initialize database schema."""
        self.executescript(get_schema())
