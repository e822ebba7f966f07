"""Flight repository."""

from typing import List

from ..models import FlightModel
from .base import BaseRepository, ConflictPolicy


class FlightRepository(BaseRepository[FlightModel]):
    """
    Flight table operations.

    Inserting a flight whose id already exists overwrites the stored row
    unless ``ConflictPolicy.ABORT`` is passed explicitly.
    """

    table = "flights"
    model = FlightModel
    columns = ("departure", "destination", "departureTime", "arrivalTime")
    default_conflict_policy = ConflictPolicy.REPLACE

    def find_by_departure(self, city: str) -> List[FlightModel]:
        return self._fetch_all(self._select("departure = :departure"), {"departure": city})

    def find_by_destination(self, city: str) -> List[FlightModel]:
        return self._fetch_all(self._select("destination = :destination"), {"destination": city})

    def find_by_route(self, departure: str, destination: str) -> List[FlightModel]:
        return self._fetch_all(
            self._select("departure = :departure AND destination = :destination"),
            {"departure": departure, "destination": destination},
        )

    def search_by_destination(self, term: str) -> List[FlightModel]:
        """Find flights whose destination contains ``term``."""
        return self._fetch_all(
            self._select(self._like("destination")), {"term": self._contains(term)}
        )
