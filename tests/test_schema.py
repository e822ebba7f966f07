"""
Test suite for store opening and schema management.

Tests table creation, idempotent reopening, version tracking, lifecycle
callbacks and the failure modes of opening a store file.
"""

import os
import stat

import pytest
from sqlalchemy import inspect

from aviation_store.database import (
    AIRPLANE_TABLES,
    CUSTOMER_TABLES,
    FLIGHT_TABLES,
    MEMORY,
    SALES_TABLES,
    SCHEMA_VERSION,
    SchemaManager,
    StoreHandle,
)
from aviation_store.exceptions import StorageUnavailable
from aviation_store.models import AirplaneModel
from aviation_store.repositories import AirplaneRepository


@pytest.fixture
def airplane_file(tmp_path):
    """Path of a not yet created airplane store file."""
    return str(tmp_path / "airplanes.db")


class TestSchemaCreation:
    """Tables and columns created on first open."""

    def test_memory_store_has_family_tables_only(self):
        handle = SchemaManager(SALES_TABLES).open(MEMORY)
        try:
            assert sorted(handle.table_names()) == ["Reservation", "SaleRecord"]
        finally:
            handle.close()

    @pytest.mark.parametrize("tables,table_name,columns", [
        (AIRPLANE_TABLES, "airplanes", ["id", "type", "passengerCapacity", "maxSpeed", "range"]),
        (CUSTOMER_TABLES, "Customer", ["id", "firstName", "lastName", "address", "dateOfBirth"]),
        (FLIGHT_TABLES, "flights", ["id", "departure", "destination", "departureTime", "arrivalTime"]),
        (SALES_TABLES, "Reservation", ["id", "customerId", "flightId", "flightDate", "reservationName"]),
        (SALES_TABLES, "SaleRecord", ["id", "customerId", "carId", "dealershipId", "purchaseDate"]),
    ])
    def test_table_columns(self, tables, table_name, columns):
        """Every table has the documented columns, all NOT NULL besides the key."""
        handle = SchemaManager(tables).open(MEMORY)
        try:
            with handle.connection() as conn:
                found = inspect(conn).get_columns(table_name)
                ddl = conn.exec_driver_sql(
                    "SELECT sql FROM sqlite_master WHERE name = ?", (table_name,)
                ).scalar()

            assert [column["name"] for column in found] == columns
            assert all(not column["nullable"] for column in found if column["name"] != "id")
            assert "AUTOINCREMENT" in ddl.upper()
        finally:
            handle.close()

    def test_no_foreign_keys_declared_or_enforced(self):
        handle = SchemaManager(SALES_TABLES).open(MEMORY)
        try:
            with handle.connection() as conn:
                assert inspect(conn).get_foreign_keys("Reservation") == []
                assert conn.exec_driver_sql("PRAGMA foreign_keys").scalar() == 0
        finally:
            handle.close()

    def test_new_store_is_stamped_with_schema_version(self):
        handle = SchemaManager(AIRPLANE_TABLES).open(MEMORY)
        try:
            assert handle.schema_version() == SCHEMA_VERSION == 1
        finally:
            handle.close()


class TestReopening:
    """Opening an existing store file."""

    def test_reopen_keeps_data(self, airplane_file):
        manager = SchemaManager(AIRPLANE_TABLES)
        handle = manager.open(airplane_file)
        AirplaneRepository(handle).insert(
            AirplaneModel(type="Boeing 737", passenger_capacity=180, max_speed=876, range=5765)
        )
        handle.close()

        handle = manager.open(airplane_file)
        try:
            assert AirplaneRepository(handle).count() == 1
        finally:
            handle.close()

    def test_callbacks(self, airplane_file):
        """on_create runs once per file, on_open on every open."""
        events = []
        manager = SchemaManager(
            AIRPLANE_TABLES,
            on_create=lambda handle, version: events.append(("create", version)),
            on_open=lambda handle: events.append(("open", handle.name)),
        )

        manager.open(airplane_file).close()
        manager.open(airplane_file).close()

        assert events == [
            ("create", 1),
            ("open", airplane_file),
            ("open", airplane_file),
        ]

    def test_older_version_runs_migrations(self, airplane_file):
        SchemaManager(AIRPLANE_TABLES).open(airplane_file).close()
        applied = []

        def add_registration(conn):
            applied.append(2)
            conn.exec_driver_sql('ALTER TABLE "airplanes" ADD COLUMN registration TEXT')

        handle = SchemaManager(AIRPLANE_TABLES, version=2, migrations={2: add_registration}).open(airplane_file)
        try:
            assert applied == [2]
            assert handle.schema_version() == 2
            with handle.connection() as conn:
                names = [column["name"] for column in inspect(conn).get_columns("airplanes")]
            assert "registration" in names
        finally:
            handle.close()

    def test_version_without_migration_step_passes_through(self, airplane_file):
        SchemaManager(AIRPLANE_TABLES).open(airplane_file).close()

        handle = SchemaManager(AIRPLANE_TABLES, version=2, migrations={}).open(airplane_file)
        try:
            assert handle.schema_version() == 2
        finally:
            handle.close()

    def test_newer_version_is_rejected(self, airplane_file):
        handle = SchemaManager(AIRPLANE_TABLES).open(airplane_file)
        with handle.connection() as conn:
            conn.exec_driver_sql("PRAGMA user_version = 5")
        handle.close()

        with pytest.raises(StorageUnavailable, match="newer"):
            SchemaManager(AIRPLANE_TABLES).open(airplane_file)

    def test_second_family_in_same_file_gets_its_tables(self, tmp_path):
        path = str(tmp_path / "shared.db")
        SchemaManager(AIRPLANE_TABLES).open(path).close()

        handle = SchemaManager(FLIGHT_TABLES).open(path)
        try:
            assert sorted(handle.table_names()) == ["airplanes", "flights"]
        finally:
            handle.close()


class TestStorageFailures:
    """Store files that cannot be opened."""

    def test_missing_directory(self, tmp_path):
        with pytest.raises(StorageUnavailable):
            SchemaManager(AIRPLANE_TABLES).open(str(tmp_path / "missing" / "airplanes.db"))

    def test_directory_instead_of_file(self, tmp_path):
        with pytest.raises(StorageUnavailable):
            SchemaManager(AIRPLANE_TABLES).open(str(tmp_path))

    @pytest.mark.skipif(
        hasattr(os, "geteuid") and os.geteuid() == 0, reason="root can write read-only files"
    )
    def test_read_only_file(self, airplane_file):
        SchemaManager(AIRPLANE_TABLES).open(airplane_file).close()
        os.chmod(airplane_file, stat.S_IRUSR | stat.S_IRGRP | stat.S_IROTH)

        with pytest.raises(StorageUnavailable):
            SchemaManager(CUSTOMER_TABLES).open(airplane_file)


class TestStoreHandle:
    """Connection handle behaviour."""

    def test_memory_url(self):
        handle = StoreHandle(MEMORY)

        assert handle.is_memory
        assert handle.database_url == "sqlite://"
        assert not handle._is_initialized

    def test_file_url(self, airplane_file):
        handle = StoreHandle(airplane_file)

        assert not handle.is_memory
        assert handle.database_url == f"sqlite:///{airplane_file}"

    def test_connection_info_and_test_connection(self):
        handle = SchemaManager(AIRPLANE_TABLES).open(MEMORY)
        try:
            info = handle.get_connection_info()
            assert info["is_memory"] is True
            assert info["is_initialized"] is True
            assert info["in_transaction"] is False
            assert handle.test_connection() is True
        finally:
            handle.close()

    def test_transaction_commits_and_rolls_back(self):
        handle = SchemaManager(AIRPLANE_TABLES).open(MEMORY)
        repository = AirplaneRepository(handle)
        airplane = AirplaneModel(type="A", passenger_capacity=1, max_speed=1, range=1)
        try:
            with handle.transaction():
                repository.insert(airplane)
                repository.insert(airplane)
            assert repository.count() == 2

            with pytest.raises(RuntimeError):
                with handle.transaction():
                    repository.insert(airplane)
                    assert handle.get_connection_info()["in_transaction"] is True
                    raise RuntimeError("abort batch")
            assert repository.count() == 2
            assert handle.get_connection_info()["in_transaction"] is False
        finally:
            handle.close()
