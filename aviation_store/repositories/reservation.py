"""Reservation repository."""

from typing import List, Optional

from ..models import ReservationModel
from .base import BaseRepository


class ReservationRepository(BaseRepository[ReservationModel]):
    """
    Reservation table operations.

    There is no seat or capacity limit, and the same customer may hold
    several reservations on one flight. Dates compare as ``YYYY-MM-DD``
    strings.
    """

    table = "Reservation"
    model = ReservationModel
    columns = ("customerId", "flightId", "flightDate", "reservationName")

    def find_by_customer(self, customer_id: int) -> List[ReservationModel]:
        return self._fetch_all(self._select("customerId = :customerId"), {"customerId": customer_id})

    def find_by_flight(self, flight_id: int) -> List[ReservationModel]:
        return self._fetch_all(self._select("flightId = :flightId"), {"flightId": flight_id})

    def find_by_date(self, flight_date: str) -> List[ReservationModel]:
        return self._fetch_all(self._select("flightDate = :flightDate"), {"flightDate": flight_date})

    def find_by_date_range(self, start_date: str, end_date: str) -> List[ReservationModel]:
        """Find reservations within the inclusive date range, latest date first."""
        return self._fetch_all(
            self._select("flightDate >= :startDate AND flightDate <= :endDate", order="flightDate DESC"),
            {"startDate": start_date, "endDate": end_date},
        )

    def search_by_name(self, term: str) -> List[ReservationModel]:
        """Find reservations whose name contains ``term``."""
        return self._fetch_all(
            self._select(self._like("reservationName")), {"term": self._contains(term)}
        )

    def find_by_customer_and_flight(self, customer_id: int, flight_id: int) -> List[ReservationModel]:
        return self._fetch_all(
            self._select("customerId = :customerId AND flightId = :flightId"),
            {"customerId": customer_id, "flightId": flight_id},
        )

    def get_latest_for_customer(self, customer_id: int) -> Optional[ReservationModel]:
        return self._fetch_one(
            self._select("customerId = :customerId", limit=1), {"customerId": customer_id}
        )

    def count_for_flight(self, flight_id: int) -> int:
        return self._scalar_int(
            'SELECT COUNT(*) FROM "Reservation" WHERE flightId = :flightId', {"flightId": flight_id}
        )

    def find_upcoming(self, today: str) -> List[ReservationModel]:
        """Reservations on or after ``today``, soonest first."""
        return self._fetch_all(
            self._select("flightDate >= :today", order="flightDate ASC"), {"today": today}
        )

    def find_past(self, today: str) -> List[ReservationModel]:
        """Reservations before ``today``, most recent first."""
        return self._fetch_all(
            self._select("flightDate < :today", order="flightDate DESC"), {"today": today}
        )
