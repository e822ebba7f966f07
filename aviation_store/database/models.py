"""
SQLAlchemy table models for the aviation record store.

This module declares the tables owned by the store, one per entity:
- Customer: customers with name, address and date of birth
- Airplane: aircraft with capacity, speed and range figures
- Flight: flight schedule entries with free-form times
- Reservation: customer reservations on flights
- SaleRecord: car sales linking customer, car and dealership

Column names are camelCase to keep existing database files readable.
No foreign keys are declared; reservations and sale records carry plain
integer references.
"""

from sqlalchemy import Column, Integer, Text
from sqlalchemy.orm import declarative_base

# Create the declarative base for all tables
Base = declarative_base()


class Customer(Base):
    """Customer table. Duplicate names and addresses are allowed."""
    __tablename__ = 'Customer'
    __table_args__ = {'sqlite_autoincrement': True}

    id = Column(Integer, primary_key=True, autoincrement=True)
    first_name = Column('firstName', Text, nullable=False)
    last_name = Column('lastName', Text, nullable=False)
    address = Column('address', Text, nullable=False)
    date_of_birth = Column('dateOfBirth', Text, nullable=False)  # YYYY-MM-DD

    def __repr__(self):
        return f"<Customer(id={self.id}, name='{self.first_name} {self.last_name}')>"


class Airplane(Base):
    """Airplane table."""
    __tablename__ = 'airplanes'
    __table_args__ = {'sqlite_autoincrement': True}

    id = Column(Integer, primary_key=True, autoincrement=True)
    type = Column('type', Text, nullable=False)
    passenger_capacity = Column('passengerCapacity', Integer, nullable=False)
    max_speed = Column('maxSpeed', Integer, nullable=False)  # km/h
    range = Column('range', Integer, nullable=False, quote=True)  # km

    def __repr__(self):
        return f"<Airplane(id={self.id}, type='{self.type}')>"


class Flight(Base):
    """Flight table. Times are stored as entered."""
    __tablename__ = 'flights'
    __table_args__ = {'sqlite_autoincrement': True}

    id = Column(Integer, primary_key=True, autoincrement=True)
    departure = Column('departure', Text, nullable=False)
    destination = Column('destination', Text, nullable=False)
    departure_time = Column('departureTime', Text, nullable=False)
    arrival_time = Column('arrivalTime', Text, nullable=False)

    def __repr__(self):
        return f"<Flight(id={self.id}, from='{self.departure}', to='{self.destination}')>"


class Reservation(Base):
    """Reservation table. Several reservations may share a customer and flight."""
    __tablename__ = 'Reservation'
    __table_args__ = {'sqlite_autoincrement': True}

    id = Column(Integer, primary_key=True, autoincrement=True)
    customer_id = Column('customerId', Integer, nullable=False)
    flight_id = Column('flightId', Integer, nullable=False)
    flight_date = Column('flightDate', Text, nullable=False)  # YYYY-MM-DD
    reservation_name = Column('reservationName', Text, nullable=False)

    def __repr__(self):
        return f"<Reservation(id={self.id}, customer={self.customer_id}, flight={self.flight_id})>"


class SaleRecord(Base):
    """Sale record table."""
    __tablename__ = 'SaleRecord'
    __table_args__ = {'sqlite_autoincrement': True}

    id = Column(Integer, primary_key=True, autoincrement=True)
    customer_id = Column('customerId', Integer, nullable=False)
    car_id = Column('carId', Integer, nullable=False)
    dealership_id = Column('dealershipId', Integer, nullable=False)
    purchase_date = Column('purchaseDate', Text, nullable=False)

    def __repr__(self):
        return f"<SaleRecord(id={self.id}, customer={self.customer_id}, car={self.car_id})>"


# Tables grouped by the store file that owns them
CUSTOMER_TABLES = [Customer.__table__]
SALES_TABLES = [Reservation.__table__, SaleRecord.__table__]
AIRPLANE_TABLES = [Airplane.__table__]
FLIGHT_TABLES = [Flight.__table__]


def create_all_tables(engine, tables=None):
    """
    Create store tables that do not exist yet.

    Args:
        engine: SQLAlchemy engine or connection
        tables: Optional subset of tables; all tables when omitted
    """
    Base.metadata.create_all(bind=engine, tables=tables, checkfirst=True)


def drop_all_tables(engine, tables=None):
    """
    Drop store tables.

    Args:
        engine: SQLAlchemy engine or connection
        tables: Optional subset of tables; all tables when omitted
    """
    Base.metadata.drop_all(bind=engine, tables=tables, checkfirst=True)


__all__ = [
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
]
