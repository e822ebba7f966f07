"""Flight record model."""

from typing import Optional
from pydantic import BaseModel, ConfigDict, Field


class FlightModel(BaseModel):
    """
    Flight schedule entry stored in the ``flights`` table.

    Times are kept exactly as entered; they are not parsed as time values.
    """
    model_config = ConfigDict(populate_by_name=True)

    id: Optional[int] = Field(default=None, description="Store-assigned identifier")
    departure: str = Field(..., description="Departure city")
    destination: str = Field(..., description="Destination city")
    departure_time: str = Field(..., alias="departureTime", description="Departure time")
    arrival_time: str = Field(..., alias="arrivalTime", description="Arrival time")
