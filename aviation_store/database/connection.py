"""
Connection management for aviation record store files.

Each store file is reached through a ``StoreHandle`` that owns a single
SQLAlchemy engine. SQLite stores use a ``StaticPool`` so every repository
built on the handle shares the same underlying connection, whether the
store lives in a file or in memory.
"""

import logging
from contextlib import contextmanager
from pathlib import Path
from typing import Any, Dict, Iterator, List, Optional

from sqlalchemy import create_engine, event, inspect, text
from sqlalchemy.engine import Connection, Engine
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.pool import StaticPool

from ..exceptions import StorageUnavailable

logger = logging.getLogger(__name__)

# Name used to request a transient, process-lifetime store
MEMORY = ":memory:"


class StoreHandle:
    """
    Owner of the engine behind one store file.

    A handle hands out connections for single statements and explicit
    transaction scopes. While a transaction scope is open, every statement
    issued through the handle joins it.
    """

    def __init__(self, name: str, echo: bool = False):
        """
        Initialize a handle without connecting.

        Args:
            name: Database file path, or ``:memory:`` for a transient store
            echo: Enable SQL statement logging for debugging
        """
        self.name = name
        self.is_memory = name == MEMORY
        self.database_url = self._build_database_url(name)
        self.echo = echo
        self.engine: Optional[Engine] = None
        self._active: Optional[Connection] = None
        self._is_initialized = False

    @staticmethod
    def _build_database_url(name: str) -> str:
        if name == MEMORY:
            return "sqlite://"
        return f"sqlite:///{Path(name)}"

    def _get_engine_kwargs(self) -> Dict[str, Any]:
        """
        Get SQLite engine configuration.

        Returns:
            Dictionary of engine configuration parameters
        """
        return {
            'echo': self.echo,
            'poolclass': StaticPool,
            'connect_args': {
                'check_same_thread': False,
                'timeout': 30,
            },
        }

    def initialize(self) -> None:
        """
        Create the engine and verify the store can be opened.

        Raises:
            StorageUnavailable: If the database file cannot be opened
        """
        if self._is_initialized:
            return

        try:
            self.engine = create_engine(self.database_url, **self._get_engine_kwargs())
            self._setup_event_listeners()

            # Test connection
            with self.engine.connect() as conn:
                conn.execute(text("SELECT 1"))

            self._is_initialized = True
            logger.info(f"Store opened: {self.name}")

        except SQLAlchemyError as e:
            logger.error(f"Failed to open store {self.name}: {e}")
            if self.engine is not None:
                self.engine.dispose()
            raise StorageUnavailable(f"Cannot open store {self.name}: {e}") from e

    def _setup_event_listeners(self) -> None:
        """Set up SQLAlchemy event listeners for connection management."""

        @event.listens_for(self.engine, "connect")
        def set_sqlite_pragma(dbapi_connection, connection_record):
            """Configure file-backed SQLite connections."""
            if not self.is_memory:
                cursor = dbapi_connection.cursor()
                cursor.execute("PRAGMA journal_mode=WAL")
                cursor.close()

        @event.listens_for(self.engine, "engine_connect")
        def receive_engine_connect(conn):
            logger.debug(f"Connection checked out for {self.name}")

    @contextmanager
    def connection(self) -> Iterator[Connection]:
        """
        Get a connection for a single statement.

        The statement commits on exit, or joins the open transaction scope
        if there is one.

        Yields:
            SQLAlchemy connection
        """
        if self._active is not None:
            yield self._active
            return
        with self.engine.begin() as conn:
            yield conn

    @contextmanager
    def transaction(self) -> Iterator[Connection]:
        """
        Open an explicit transaction scope.

        Usage:
            with handle.transaction():
                repository.insert(first)
                repository.insert(second)

        Commits when the block exits normally and rolls back on any
        exception. Nested scopes join the outermost one.

        Yields:
            SQLAlchemy connection bound to the transaction
        """
        if self._active is not None:
            yield self._active
            return
        with self.engine.begin() as conn:
            self._active = conn
            try:
                yield conn
            finally:
                self._active = None

    def schema_version(self) -> int:
        """Read the schema version stamped in the store file."""
        with self.connection() as conn:
            return conn.exec_driver_sql("PRAGMA user_version").scalar() or 0

    def table_names(self) -> List[str]:
        """List the tables present in the store file."""
        with self.connection() as conn:
            return inspect(conn).get_table_names()

    def test_connection(self) -> bool:
        """
        Test store connectivity.

        Returns:
            True if connection successful, False otherwise
        """
        try:
            with self.connection() as conn:
                conn.execute(text("SELECT 1"))
            return True
        except SQLAlchemyError as e:
            logger.error(f"Store connection test failed for {self.name}: {e}")
            return False

    def get_connection_info(self) -> Dict[str, Any]:
        """
        Get store connection information for monitoring.

        Returns:
            Dictionary with connection details
        """
        return {
            'name': self.name,
            'database_url': self.database_url,
            'is_memory': self.is_memory,
            'is_initialized': self._is_initialized,
            'echo_enabled': self.echo,
            'in_transaction': self._active is not None,
        }

    def close(self) -> None:
        """Release the underlying connection."""
        if self.engine:
            self.engine.dispose()
            logger.info(f"Store closed: {self.name}")


__all__ = [
    'MEMORY',
    'StoreHandle',
]
