"""
Repositories for the aviation record store.

One repository per entity, each translating typed operations into
parameterized SQL against a store handle.
"""

from .base import BaseRepository, ConflictPolicy
from .customer import CustomerRepository
from .airplane import AirplaneRepository
from .flight import FlightRepository
from .reservation import ReservationRepository
from .sale_record import SaleRecordRepository

__all__ = [
    "BaseRepository",
    "ConflictPolicy",
    "CustomerRepository",
    "AirplaneRepository",
    "FlightRepository",
    "ReservationRepository",
    "SaleRecordRepository",
]
