"""
Aviation record store.

A local record store for customers, airplanes, flights, reservations and
car sale records. Each entity family lives in its own SQLite file behind a
store facade exposing typed repositories:

    from aviation_store import AirplaneStore, AirplaneModel

    with AirplaneStore.create_in_memory() as store:
        airplane_id = store.airplanes.insert(
            AirplaneModel(type="Boeing 737", passenger_capacity=180, max_speed=876, range=5765)
        )
"""

from .exceptions import ConstraintViolation, MalformedInput, NotFound, StorageUnavailable, StoreError
from .models import AirplaneModel, CustomerModel, FlightModel, ReservationModel, SaleRecordModel
from .repositories import ConflictPolicy
from .store import (
    AirplaneStore,
    CustomerStore,
    FlightStore,
    RecordStore,
    SalesStore,
    StoreResult,
)

__version__ = "0.1.0"

__all__ = [
    "StoreError",
    "StorageUnavailable",
    "ConstraintViolation",
    "NotFound",
    "MalformedInput",
    "CustomerModel",
    "AirplaneModel",
    "FlightModel",
    "ReservationModel",
    "SaleRecordModel",
    "ConflictPolicy",
    "StoreResult",
    "RecordStore",
    "CustomerStore",
    "SalesStore",
    "AirplaneStore",
    "FlightStore",
]
