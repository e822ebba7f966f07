"""Sale record repository."""

from typing import List

from ..models import SaleRecordModel
from .base import BaseRepository


class SaleRecordRepository(BaseRepository[SaleRecordModel]):
    """Sale record table operations. Lists default to newest first."""

    table = "SaleRecord"
    model = SaleRecordModel
    columns = ("customerId", "carId", "dealershipId", "purchaseDate")

    def find_by_customer(self, customer_id: int) -> List[SaleRecordModel]:
        return self._fetch_all(self._select("customerId = :customerId"), {"customerId": customer_id})

    def find_by_car(self, car_id: int) -> List[SaleRecordModel]:
        return self._fetch_all(self._select("carId = :carId"), {"carId": car_id})

    def find_by_dealership(self, dealership_id: int) -> List[SaleRecordModel]:
        return self._fetch_all(
            self._select("dealershipId = :dealershipId"), {"dealershipId": dealership_id}
        )

    def find_by_date_range(self, start_date: str, end_date: str) -> List[SaleRecordModel]:
        """Find sales within the inclusive date range, latest purchase first."""
        return self._fetch_all(
            self._select(
                "purchaseDate >= :startDate AND purchaseDate <= :endDate", order="purchaseDate DESC"
            ),
            {"startDate": start_date, "endDate": end_date},
        )
