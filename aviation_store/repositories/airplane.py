"""Airplane repository."""

from typing import List, Optional

from ..models import AirplaneModel
from .base import BaseRepository


class AirplaneRepository(BaseRepository[AirplaneModel]):
    """Airplane table operations. Lists default to newest first."""

    table = "airplanes"
    model = AirplaneModel
    columns = ("type", "passengerCapacity", "maxSpeed", "range")

    def find_by_type(self, airplane_type: str) -> List[AirplaneModel]:
        return self._fetch_all(self._select("type = :type"), {"type": airplane_type})

    def search_by_type(self, term: str) -> List[AirplaneModel]:
        """Find airplanes whose type contains ``term``."""
        return self._fetch_all(self._select(self._like("type")), {"term": self._contains(term)})

    def find_by_min_capacity(self, min_capacity: int) -> List[AirplaneModel]:
        """Find airplanes seating at least ``min_capacity``, largest first."""
        return self._fetch_all(
            self._select("passengerCapacity >= :minCapacity", order="passengerCapacity DESC"),
            {"minCapacity": min_capacity},
        )

    def find_by_speed_range(self, min_speed: int, max_speed: int) -> List[AirplaneModel]:
        """Find airplanes with a top speed within the inclusive range, fastest first."""
        return self._fetch_all(
            self._select("maxSpeed >= :minSpeed AND maxSpeed <= :maxSpeed", order="maxSpeed DESC"),
            {"minSpeed": min_speed, "maxSpeed": max_speed},
        )

    def get_highest_capacity(self) -> Optional[AirplaneModel]:
        return self._fetch_one(self._select(order="passengerCapacity DESC", limit=1))

    def get_longest_range(self) -> Optional[AirplaneModel]:
        return self._fetch_one(self._select(order='"range" DESC', limit=1))

    def get_fastest(self) -> Optional[AirplaneModel]:
        return self._fetch_one(self._select(order="maxSpeed DESC", limit=1))
