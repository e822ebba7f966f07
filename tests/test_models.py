"""
Test suite for the record models.

Tests column aliases, derived display properties and copy semantics.
"""

import pytest
from pydantic import ValidationError

from aviation_store.models import (
    AirplaneModel,
    CustomerModel,
    FlightModel,
    ReservationModel,
    SaleRecordModel,
)


class TestAliases:
    """Models accept attribute names and column names alike."""

    def test_airplane_from_row_mapping(self):
        row = {"id": 3, "type": "Boeing 737", "passengerCapacity": 180, "maxSpeed": 876, "range": 5765}

        airplane = AirplaneModel.model_validate(row)

        assert airplane == AirplaneModel(
            id=3, type="Boeing 737", passenger_capacity=180, max_speed=876, range=5765
        )

    def test_dump_by_alias_gives_column_names(self):
        reservation = ReservationModel(
            customer_id=1, flight_id=2, flight_date="2024-03-01", reservation_name="Trip"
        )

        assert reservation.model_dump(by_alias=True) == {
            "id": None,
            "customerId": 1,
            "flightId": 2,
            "flightDate": "2024-03-01",
            "reservationName": "Trip",
        }

    def test_flight_aliases(self):
        flight = FlightModel.model_validate({
            "departure": "Ottawa", "destination": "Toronto",
            "departureTime": "8am", "arrivalTime": "whenever",
        })

        assert flight.id is None
        assert flight.departure_time == "8am"
        assert flight.arrival_time == "whenever"

    def test_missing_field_rejected(self):
        with pytest.raises(ValidationError):
            CustomerModel(first_name="Ada", last_name="Lovelace", address="x")


class TestDerivedValues:
    """Display helpers."""

    def test_customer_full_name(self):
        customer = CustomerModel(
            first_name="Ada", last_name="Lovelace", address="x", date_of_birth="1815-12-10"
        )

        assert customer.full_name == "Ada Lovelace"

    def test_airplane_str(self):
        airplane = AirplaneModel(type="Boeing 737", passenger_capacity=180, max_speed=876, range=5765)

        assert str(airplane) == "Boeing 737, capacity: 180, speed: 876 km/h, range: 5765 km"

    def test_sale_record_display(self):
        sale = SaleRecordModel(id=4, customer_id=1, car_id=7, dealership_id=2, purchase_date="2024-01-15")

        assert sale.display_title == "Sale Record #4"
        assert sale.display_subtitle == "Customer: 1 | Car: 7 | Date: 2024-01-15"
        assert sale.detail_info.splitlines() == [
            "Sale ID: 4",
            "Customer ID: 1",
            "Car ID: 7",
            "Dealership ID: 2",
            "Purchase Date: 2024-01-15",
        ]

    @pytest.mark.parametrize("changes,valid", [
        ({}, True),
        ({"customer_id": 0}, False),
        ({"car_id": -1}, False),
        ({"dealership_id": 0}, False),
        ({"purchase_date": "  "}, False),
    ])
    def test_sale_record_is_valid(self, changes, valid):
        sale = SaleRecordModel(customer_id=1, car_id=7, dealership_id=2, purchase_date="2024-01-15")

        assert sale.model_copy(update=changes).is_valid() is valid


class TestEquality:
    """Records compare by every field."""

    def test_copy_with_change_is_not_equal(self):
        sale = SaleRecordModel(id=1, customer_id=1, car_id=7, dealership_id=2, purchase_date="2024-01-15")

        assert sale.model_copy() == sale
        assert sale.model_copy(update={"car_id": 8}) != sale
