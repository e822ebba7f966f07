"""
Database package for the aviation record store.

This package provides the SQLAlchemy table models, per-file connection
handles and the schema manager that creates and versions store files.
"""

from .models import (
    Base,
    Customer,
    Airplane,
    Flight,
    Reservation,
    SaleRecord,
    CUSTOMER_TABLES,
    SALES_TABLES,
    AIRPLANE_TABLES,
    FLIGHT_TABLES,
    create_all_tables,
    drop_all_tables,
)

from .connection import MEMORY, StoreHandle
from .schema import SCHEMA_VERSION, MIGRATIONS, SchemaManager

__all__ = [
    # Models
    'Base',
    'Customer',
    'Airplane',
    'Flight',
    'Reservation',
    'SaleRecord',
    'CUSTOMER_TABLES',
    'SALES_TABLES',
    'AIRPLANE_TABLES',
    'FLIGHT_TABLES',
    'create_all_tables',
    'drop_all_tables',

    # Connection and schema
    'MEMORY',
    'StoreHandle',
    'SCHEMA_VERSION',
    'MIGRATIONS',
    'SchemaManager',
]
