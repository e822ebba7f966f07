"""
Aviation store record models.

This package contains the Pydantic v2 models exchanged with callers of the
store: one model per persisted entity.
"""

from .customer import CustomerModel
from .airplane import AirplaneModel
from .flight import FlightModel
from .reservation import ReservationModel
from .sale_record import SaleRecordModel

__all__ = [
    "CustomerModel",
    "AirplaneModel",
    "FlightModel",
    "ReservationModel",
    "SaleRecordModel",
]
