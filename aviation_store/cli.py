"""
Administration commands for aviation record store files.

Usage:
    aviation-store init
    aviation-store stats --database-dir ./database
    aviation-store health
    aviation-store seed
    aviation-store reset --yes
"""

from typing import Optional

import typer
from rich import box
from rich.console import Console
from rich.table import Table

from .exceptions import StorageUnavailable
from .models import AirplaneModel, CustomerModel, FlightModel, ReservationModel, SaleRecordModel
from .store import STORE_FAMILIES, AirplaneStore, CustomerStore, FlightStore, SalesStore
from .utils.config import StoreConfig, configure_logging, get_config

app = typer.Typer(help="Aviation record store administration")
console = Console()

DEMO_CUSTOMERS = [
    CustomerModel(first_name="Ada", last_name="Lovelace", address="12 St James's Square", date_of_birth="1815-12-10"),
    CustomerModel(first_name="Amelia", last_name="Earhart", address="223 N Terrace St", date_of_birth="1897-07-24"),
]
DEMO_AIRPLANES = [
    AirplaneModel(type="Boeing 737", passenger_capacity=180, max_speed=876, range=5765),
    AirplaneModel(type="Airbus A320", passenger_capacity=150, max_speed=871, range=6150),
    AirplaneModel(type="Airbus A380", passenger_capacity=555, max_speed=945, range=15200),
]
DEMO_FLIGHTS = [
    FlightModel(departure="Ottawa", destination="Toronto", departure_time="08:00", arrival_time="09:05"),
    FlightModel(departure="Toronto", destination="Vancouver", departure_time="12:30", arrival_time="14:55"),
]
DEMO_RESERVATIONS = [
    ReservationModel(customer_id=1, flight_id=1, flight_date="2024-03-01", reservation_name="Spring trip"),
]
DEMO_SALES = [
    SaleRecordModel(customer_id=1, car_id=7, dealership_id=2, purchase_date="2024-01-15"),
]


def _load_config(database_dir: Optional[str]) -> StoreConfig:
    config = get_config()
    if database_dir:
        config = config.model_copy(update={"database_dir": database_dir})
    return config


def _open(store_cls, config: StoreConfig):
    try:
        return store_cls.create(config=config)
    except StorageUnavailable as e:
        console.print(f"[red]✗ {e}[/red]")
        raise typer.Exit(code=1)


@app.command()
def init(
    database_dir: Optional[str] = typer.Option(
        None, "--database-dir", "-d", help="Directory holding the store files"
    ),
):
    """Create every store file and its tables."""
    config = _load_config(database_dir)
    table = Table(title="Initialized stores", box=box.ROUNDED)
    table.add_column("Family", style="cyan")
    table.add_column("File")
    table.add_column("Tables")
    table.add_column("Schema", justify="right")

    for family, store_cls in STORE_FAMILIES.items():
        with _open(store_cls, config) as store:
            table.add_row(
                family,
                store.handle.name,
                ", ".join(sorted(store.handle.table_names())),
                str(store.handle.schema_version()),
            )

    console.print(table)


@app.command()
def stats(
    database_dir: Optional[str] = typer.Option(
        None, "--database-dir", "-d", help="Directory holding the store files"
    ),
):
    """Show row counts for every table."""
    config = _load_config(database_dir)
    table = Table(title="Store statistics", box=box.ROUNDED)
    table.add_column("Family", style="cyan")
    table.add_column("Table")
    table.add_column("Rows", justify="right")

    for family, store_cls in STORE_FAMILIES.items():
        with _open(store_cls, config) as store:
            for repository in store.repositories():
                table.add_row(family, repository.table, f"{repository.count():,}")

    console.print(table)


@app.command()
def health(
    database_dir: Optional[str] = typer.Option(
        None, "--database-dir", "-d", help="Directory holding the store files"
    ),
):
    """Check that every store can be read."""
    config = _load_config(database_dir)
    failures = 0

    for family, store_cls in STORE_FAMILIES.items():
        with _open(store_cls, config) as store:
            result = store.health_check()
        if result.ok:
            console.print(f"[green]✓ {family}[/green] ({result.value} records)")
        else:
            failures += 1
            console.print(f"[red]✗ {family}[/red] {result.error}")

    if failures:
        raise typer.Exit(code=1)


@app.command()
def seed(
    database_dir: Optional[str] = typer.Option(
        None, "--database-dir", "-d", help="Directory holding the store files"
    ),
):
    """Insert a small demonstration data set."""
    config = _load_config(database_dir)

    with _open(CustomerStore, config) as store:
        new_customers = [
            customer for customer in DEMO_CUSTOMERS
            if not store.is_duplicate_customer(
                customer.first_name, customer.last_name, customer.address
            ).value
        ]
        store.customers.insert_many(new_customers)
        console.print(f"Customers added: {len(new_customers)}")

    with _open(AirplaneStore, config) as store:
        store.airplanes.insert_many(DEMO_AIRPLANES)
        console.print(f"Airplanes added: {len(DEMO_AIRPLANES)}")

    with _open(FlightStore, config) as store:
        store.flights.insert_many(DEMO_FLIGHTS)
        console.print(f"Flights added: {len(DEMO_FLIGHTS)}")

    with _open(SalesStore, config) as store:
        with store.transaction():
            store.reservations.insert_many(DEMO_RESERVATIONS)
            store.sale_records.insert_many(DEMO_SALES)
        console.print(f"Reservations added: {len(DEMO_RESERVATIONS)}")
        console.print(f"Sale records added: {len(DEMO_SALES)}")


@app.command()
def reset(
    database_dir: Optional[str] = typer.Option(
        None, "--database-dir", "-d", help="Directory holding the store files"
    ),
    family: Optional[str] = typer.Option(
        None, "--family", "-f", help="Reset only this store family"
    ),
    yes: bool = typer.Option(False, "--yes", "-y", help="Skip the confirmation prompt"),
):
    """Drop and recreate store tables, deleting every record."""
    if family is not None and family not in STORE_FAMILIES:
        console.print(f"[red]✗ Unknown store family: {family}[/red]")
        raise typer.Exit(code=1)
    families = [family] if family else list(STORE_FAMILIES)

    if not yes:
        console.print(f"[yellow]⚠️  This will delete every record in: {', '.join(families)}[/yellow]")
        typer.confirm("Reset stores?", abort=True)

    config = _load_config(database_dir)
    for name in families:
        with _open(STORE_FAMILIES[name], config) as store:
            store.reset()
        console.print(f"[green]✓ {name}[/green] reset")


def main():
    configure_logging()
    app()


if __name__ == "__main__":
    main()
