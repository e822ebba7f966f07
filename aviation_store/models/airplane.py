"""Airplane record model."""

from typing import Optional
from pydantic import BaseModel, ConfigDict, Field


class AirplaneModel(BaseModel):
    """
    Airplane model stored in the ``airplanes`` table.

    Speed is in km/h and range in km; neither is checked beyond being an
    integer.
    """
    model_config = ConfigDict(populate_by_name=True)

    id: Optional[int] = Field(default=None, description="Store-assigned identifier")
    type: str = Field(..., description="Aircraft type, e.g. 'Boeing 737'")
    passenger_capacity: int = Field(..., alias="passengerCapacity", description="Seats")
    max_speed: int = Field(..., alias="maxSpeed", description="Maximum speed in km/h")
    range: int = Field(..., description="Range in km")

    def __str__(self) -> str:
        return (
            f"{self.type}, capacity: {self.passenger_capacity}, "
            f"speed: {self.max_speed} km/h, range: {self.range} km"
        )
