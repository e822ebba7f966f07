"""
Schema management for aviation record store files.

A ``SchemaManager`` knows the tables of one store family and the schema
version they are at. Opening a store creates missing tables and stamps the
version on first use; later opens find the tables in place and skip
creation. The version lives in SQLite's ``user_version`` header field.
"""

import logging
from typing import Callable, Dict, Iterable, Optional

from sqlalchemy import Table, inspect
from sqlalchemy.engine import Connection
from sqlalchemy.exc import SQLAlchemyError

from ..exceptions import StorageUnavailable, StoreError
from .connection import StoreHandle
from .models import create_all_tables

logger = logging.getLogger(__name__)

SCHEMA_VERSION = 1

# Upgrade steps keyed by the version they upgrade to.
MigrationStep = Callable[[Connection], None]
MIGRATIONS: Dict[int, MigrationStep] = {}


class SchemaManager:
    """
    Table creation and version tracking for one store family.

    Args:
        tables: Tables the family owns
        version: Schema version the tables are at
        migrations: Upgrade steps keyed by target version
        on_create: Called as ``on_create(handle, version)`` after a fresh
            store has been created
        on_open: Called as ``on_open(handle)`` after every successful open
        echo: Enable SQL statement logging
    """

    def __init__(
        self,
        tables: Iterable[Table],
        version: int = SCHEMA_VERSION,
        migrations: Optional[Dict[int, MigrationStep]] = None,
        on_create: Optional[Callable[[StoreHandle, int], None]] = None,
        on_open: Optional[Callable[[StoreHandle], None]] = None,
        echo: bool = False,
    ):
        self.tables = list(tables)
        self.version = version
        self.migrations = MIGRATIONS if migrations is None else migrations
        self.on_create = on_create
        self.on_open = on_open
        self.echo = echo

    def open(self, name: str) -> StoreHandle:
        """
        Open a store file, creating it and its tables if absent.

        Args:
            name: Database file path, or ``:memory:`` for a transient store

        Returns:
            Initialized StoreHandle

        Raises:
            StorageUnavailable: If the store cannot be opened, created or
                written, or was written by a newer schema version
        """
        handle = StoreHandle(name, echo=self.echo)
        handle.initialize()

        try:
            created = self._ensure_schema(handle)
        except StoreError:
            handle.close()
            raise
        except SQLAlchemyError as e:
            handle.close()
            logger.error(f"Failed to prepare schema for {name}: {e}")
            raise StorageUnavailable(f"Cannot prepare schema for {name}: {e}") from e

        if created and self.on_create is not None:
            self.on_create(handle, self.version)
        if self.on_open is not None:
            self.on_open(handle)
        return handle

    def _ensure_schema(self, handle: StoreHandle) -> bool:
        """
        Create missing tables and bring the version stamp up to date.

        Returns:
            True if the store was created by this call
        """
        with handle.transaction() as conn:
            current = conn.exec_driver_sql("PRAGMA user_version").scalar() or 0
            if current > self.version:
                raise StorageUnavailable(
                    f"Store {handle.name} is at schema version {current}, "
                    f"newer than supported version {self.version}"
                )

            existing = set(inspect(conn).get_table_names())
            missing = [table for table in self.tables if table.name not in existing]
            if missing:
                create_all_tables(conn, missing)
                logger.info(
                    f"Created tables {[table.name for table in missing]} in {handle.name}"
                )

            if current == self.version:
                return False

            if current > 0:
                self._migrate(conn, current)
            conn.exec_driver_sql(f"PRAGMA user_version = {int(self.version)}")
            if current == 0:
                logger.info(f"Store {handle.name} created at schema version {self.version}")
            return current == 0

    def _migrate(self, conn: Connection, current: int) -> None:
        for target in range(current + 1, self.version + 1):
            step = self.migrations.get(target)
            if step is None:
                logger.debug(f"No migration step for version {target}")
                continue
            logger.info(f"Migrating schema to version {target}")
            step(conn)


__all__ = [
    'SCHEMA_VERSION',
    'MIGRATIONS',
    'SchemaManager',
]
