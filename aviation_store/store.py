"""
Store facades for the aviation record store.

A store owns one database file and the repositories over its tables:

- ``CustomerStore``: customers
- ``SalesStore``: reservations and sale records
- ``AirplaneStore``: airplanes
- ``FlightStore``: flights

Repositories raise on failure. The convenience methods on each store wrap
a repository call and return a ``StoreResult`` instead, so a caller can
tell an empty answer from a failed one. Stores opened with ``strict=True``
re-raise from the convenience methods as well.
"""

import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Callable, Generic, List, Optional, TypeVar

from sqlalchemy import Table

from .database import (
    AIRPLANE_TABLES,
    CUSTOMER_TABLES,
    FLIGHT_TABLES,
    MEMORY,
    SALES_TABLES,
    SchemaManager,
    StoreHandle,
    create_all_tables,
    drop_all_tables,
)
from .exceptions import StorageUnavailable, StoreError
from .models import AirplaneModel, CustomerModel, FlightModel, ReservationModel, SaleRecordModel
from .repositories import (
    AirplaneRepository,
    BaseRepository,
    CustomerRepository,
    FlightRepository,
    ReservationRepository,
    SaleRecordRepository,
)
from .utils.config import StoreConfig, get_config

logger = logging.getLogger(__name__)

T = TypeVar("T")


@dataclass(frozen=True)
class StoreResult(Generic[T]):
    """
    Outcome of a store convenience call.

    On failure ``value`` holds the empty fallback (``[]``, ``0``, ``None``
    or ``False``) and ``error`` the exception that caused it.
    """

    value: Optional[T] = None
    error: Optional[Exception] = None

    @property
    def ok(self) -> bool:
        return self.error is None

    def unwrap(self) -> T:
        """Return the value, raising the stored error on failure."""
        if self.error is not None:
            raise self.error
        return self.value

    def value_or(self, default: T) -> T:
        return self.value if self.error is None else default

    @classmethod
    def success(cls, value: T) -> "StoreResult[T]":
        return cls(value=value)

    @classmethod
    def failure(cls, error: Exception, fallback: Optional[T] = None) -> "StoreResult[T]":
        return cls(value=fallback, error=error)


class RecordStore(ABC):
    """
    Base store facade owning one database file.

    Subclasses name their tables and the configuration field holding their
    default file name, and expose one repository per table.
    """

    tables: List[Table] = []
    default_name_field: str = ""
    label: str = "store"

    def __init__(self, handle: StoreHandle, strict: bool = False):
        self.handle = handle
        self.strict = strict

    @classmethod
    def _schema_manager(
        cls,
        config: StoreConfig,
        on_create: Optional[Callable[[StoreHandle, int], None]] = None,
        on_open: Optional[Callable[[StoreHandle], None]] = None,
    ) -> SchemaManager:
        return SchemaManager(cls.tables, on_create=on_create, on_open=on_open, echo=config.echo_sql)

    @classmethod
    def create(
        cls,
        name: Optional[str] = None,
        config: Optional[StoreConfig] = None,
        strict: Optional[bool] = None,
        on_create: Optional[Callable[[StoreHandle, int], None]] = None,
        on_open: Optional[Callable[[StoreHandle], None]] = None,
    ):
        """
        Open persistent storage.

        Relative names resolve under the configured database directory,
        which is created if missing. Absolute names must point into an
        existing directory.

        Args:
            name: Store file name; the family default when omitted
            config: Store configuration; the global one when omitted
            strict: Re-raise from convenience methods; config default when omitted
            on_create: Callback run once when the file is first created
            on_open: Callback run on every open

        Raises:
            StorageUnavailable: If the file cannot be opened or created
        """
        config = config or get_config()
        name = name or getattr(config, cls.default_name_field)
        path = config.resolve_path(name)
        if not Path(name).is_absolute():
            try:
                path.parent.mkdir(parents=True, exist_ok=True)
            except OSError as e:
                raise StorageUnavailable(f"Cannot create directory {path.parent}: {e}") from e

        handle = cls._schema_manager(config, on_create, on_open).open(str(path))
        return cls(handle, strict=config.strict if strict is None else strict)

    @classmethod
    def create_in_memory(
        cls,
        config: Optional[StoreConfig] = None,
        strict: Optional[bool] = None,
        on_create: Optional[Callable[[StoreHandle, int], None]] = None,
        on_open: Optional[Callable[[StoreHandle], None]] = None,
    ):
        """Open a transient store that lives until it is closed."""
        config = config or get_config()
        handle = cls._schema_manager(config, on_create, on_open).open(MEMORY)
        return cls(handle, strict=config.strict if strict is None else strict)

    def close(self) -> None:
        """Release the underlying connection. Repositories must not be used afterwards."""
        self.handle.close()

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.close()

    def transaction(self):
        """Open an explicit transaction scope spanning several repository calls."""
        return self.handle.transaction()

    def reset(self) -> None:
        """Drop and recreate this store's tables, discarding every record."""
        logger.warning(f"Dropping all {self.label} tables in {self.handle.name}")
        with self.handle.transaction() as conn:
            drop_all_tables(conn, self.tables)
            create_all_tables(conn, self.tables)
        logger.info(f"{self.label.capitalize()} store reset completed")

    @abstractmethod
    def repositories(self) -> List[BaseRepository]:
        """Return the repositories over this store's tables."""

    def _guard(self, action: str, operation: Callable[[], T], fallback: Any = None) -> StoreResult[T]:
        """Run a repository call, turning store errors into a failed result."""
        try:
            value = operation()
        except StoreError as e:
            logger.error(f"Error {action}: {e}")
            if self.strict:
                raise
            return StoreResult.failure(e, fallback)
        logger.debug(f"Done {action}")
        return StoreResult.success(value)

    def health_check(self) -> StoreResult[int]:
        """
        Check that every table of the store can be read.

        Returns:
            Result holding the total number of rows across the store's tables
        """
        result = self._guard(
            f"checking {self.label} store health",
            lambda: sum(repository.count() for repository in self.repositories()),
            fallback=0,
        )
        if result.ok:
            logger.info(f"{self.label.capitalize()} store health check passed. Current records: {result.value}")
        return result

    def is_healthy(self) -> bool:
        return self.health_check().ok

    # Shared wrapper bodies

    def _load_all(self, repository: BaseRepository, noun: str) -> StoreResult[list]:
        return self._guard(f"loading {noun}", repository.find_all, fallback=[])

    def _save(self, repository: BaseRepository, record, noun: str) -> StoreResult[int]:
        result = self._guard(f"saving {noun}", lambda: repository.insert(record))
        if result.ok:
            logger.info(f"{noun.capitalize()} saved successfully (id={result.value})")
        return result

    def _update(self, repository: BaseRepository, record, noun: str) -> StoreResult[int]:
        result = self._guard(f"updating {noun}", lambda: repository.update(record), fallback=0)
        if result.ok:
            logger.info(f"{noun.capitalize()} update affected {result.value} row(s)")
        return result

    def _remove(self, repository: BaseRepository, record, noun: str) -> StoreResult[int]:
        result = self._guard(f"deleting {noun}", lambda: repository.delete(record), fallback=0)
        if result.ok:
            logger.info(f"{noun.capitalize()} delete removed {result.value} row(s)")
        return result

    def _remove_by_id(self, repository: BaseRepository, record_id: int, noun: str) -> StoreResult[int]:
        result = self._guard(
            f"deleting {noun} by ID", lambda: repository.delete_by_id(record_id), fallback=0
        )
        if result.ok:
            logger.info(f"{noun.capitalize()} with ID {record_id}: removed {result.value} row(s)")
        return result

    def _count(self, repository: BaseRepository, noun: str) -> StoreResult[int]:
        return self._guard(f"counting {noun}", repository.count, fallback=0)


class CustomerStore(RecordStore):
    """Customer store, ``customers_database.db`` by default."""

    tables = CUSTOMER_TABLES
    default_name_field = "customers_db"
    label = "customer"

    def __init__(self, handle: StoreHandle, strict: bool = False):
        super().__init__(handle, strict)
        self.customers = CustomerRepository(handle)

    def repositories(self) -> List[BaseRepository]:
        return [self.customers]

    def load_all_customers(self) -> StoreResult[List[CustomerModel]]:
        return self._load_all(self.customers, "customers")

    def save_customer(self, customer: CustomerModel) -> StoreResult[int]:
        return self._save(self.customers, customer, f"customer {customer.full_name}")

    def update_customer(self, customer: CustomerModel) -> StoreResult[int]:
        return self._update(self.customers, customer, f"customer {customer.full_name}")

    def remove_customer(self, customer: CustomerModel) -> StoreResult[int]:
        return self._remove(self.customers, customer, f"customer {customer.full_name}")

    def remove_customer_by_id(self, customer_id: int) -> StoreResult[int]:
        return self._remove_by_id(self.customers, customer_id, "customer")

    def count_customers(self) -> StoreResult[int]:
        return self._count(self.customers, "customers")

    def get_latest_customer(self) -> StoreResult[Optional[CustomerModel]]:
        return self._guard("getting latest customer", self.customers.get_latest)

    def is_duplicate_customer(self, first_name: str, last_name: str, address: str) -> StoreResult[bool]:
        """Check whether a customer with this name and address is already stored."""
        return self._guard(
            "checking for duplicate customer",
            lambda: self.customers.count_duplicates(first_name, last_name, address) > 0,
            fallback=False,
        )


class SalesStore(RecordStore):
    """Reservation and sale record store, ``sales_database.db`` by default."""

    tables = SALES_TABLES
    default_name_field = "sales_db"
    label = "sales"

    def __init__(self, handle: StoreHandle, strict: bool = False):
        super().__init__(handle, strict)
        self.reservations = ReservationRepository(handle)
        self.sale_records = SaleRecordRepository(handle)

    def repositories(self) -> List[BaseRepository]:
        return [self.reservations, self.sale_records]

    def load_all_sale_records(self) -> StoreResult[List[SaleRecordModel]]:
        return self._load_all(self.sale_records, "sale records")

    def save_sale_record(self, sale_record: SaleRecordModel) -> StoreResult[int]:
        return self._save(self.sale_records, sale_record, "sale record")

    def update_sale_record(self, sale_record: SaleRecordModel) -> StoreResult[int]:
        return self._update(self.sale_records, sale_record, "sale record")

    def remove_sale_record(self, sale_record: SaleRecordModel) -> StoreResult[int]:
        return self._remove(self.sale_records, sale_record, "sale record")

    def remove_sale_record_by_id(self, sale_record_id: int) -> StoreResult[int]:
        return self._remove_by_id(self.sale_records, sale_record_id, "sale record")

    def count_sale_records(self) -> StoreResult[int]:
        return self._count(self.sale_records, "sale records")

    def load_all_reservations(self) -> StoreResult[List[ReservationModel]]:
        return self._load_all(self.reservations, "reservations")

    def save_reservation(self, reservation: ReservationModel) -> StoreResult[int]:
        return self._save(self.reservations, reservation, "reservation")

    def update_reservation(self, reservation: ReservationModel) -> StoreResult[int]:
        return self._update(self.reservations, reservation, "reservation")

    def remove_reservation(self, reservation: ReservationModel) -> StoreResult[int]:
        return self._remove(self.reservations, reservation, "reservation")

    def remove_reservation_by_id(self, reservation_id: int) -> StoreResult[int]:
        return self._remove_by_id(self.reservations, reservation_id, "reservation")

    def count_reservations(self) -> StoreResult[int]:
        return self._count(self.reservations, "reservations")


class AirplaneStore(RecordStore):
    """Airplane store, ``airplanes.db`` by default."""

    tables = AIRPLANE_TABLES
    default_name_field = "airplanes_db"
    label = "airplane"

    def __init__(self, handle: StoreHandle, strict: bool = False):
        super().__init__(handle, strict)
        self.airplanes = AirplaneRepository(handle)

    def repositories(self) -> List[BaseRepository]:
        return [self.airplanes]

    def load_all_airplanes(self) -> StoreResult[List[AirplaneModel]]:
        return self._load_all(self.airplanes, "airplanes")

    def save_airplane(self, airplane: AirplaneModel) -> StoreResult[int]:
        return self._save(self.airplanes, airplane, f"airplane {airplane.type}")

    def update_airplane(self, airplane: AirplaneModel) -> StoreResult[int]:
        return self._update(self.airplanes, airplane, f"airplane {airplane.type}")

    def remove_airplane(self, airplane: AirplaneModel) -> StoreResult[int]:
        return self._remove(self.airplanes, airplane, f"airplane {airplane.type}")

    def remove_airplane_by_id(self, airplane_id: int) -> StoreResult[int]:
        return self._remove_by_id(self.airplanes, airplane_id, "airplane")

    def count_airplanes(self) -> StoreResult[int]:
        return self._count(self.airplanes, "airplanes")


class FlightStore(RecordStore):
    """Flight store, ``flights.db`` by default."""

    tables = FLIGHT_TABLES
    default_name_field = "flights_db"
    label = "flight"

    def __init__(self, handle: StoreHandle, strict: bool = False):
        super().__init__(handle, strict)
        self.flights = FlightRepository(handle)

    def repositories(self) -> List[BaseRepository]:
        return [self.flights]

    def load_all_flights(self) -> StoreResult[List[FlightModel]]:
        return self._load_all(self.flights, "flights")

    def save_flight(self, flight: FlightModel) -> StoreResult[int]:
        return self._save(self.flights, flight, "flight")

    def update_flight(self, flight: FlightModel) -> StoreResult[int]:
        return self._update(self.flights, flight, "flight")

    def remove_flight(self, flight: FlightModel) -> StoreResult[int]:
        return self._remove(self.flights, flight, "flight")

    def remove_flight_by_id(self, flight_id: int) -> StoreResult[int]:
        return self._remove_by_id(self.flights, flight_id, "flight")

    def count_flights(self) -> StoreResult[int]:
        return self._count(self.flights, "flights")


STORE_FAMILIES = {
    "customers": CustomerStore,
    "sales": SalesStore,
    "airplanes": AirplaneStore,
    "flights": FlightStore,
}


__all__ = [
    "StoreResult",
    "RecordStore",
    "CustomerStore",
    "SalesStore",
    "AirplaneStore",
    "FlightStore",
    "STORE_FAMILIES",
]
