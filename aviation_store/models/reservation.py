"""Reservation record model."""

from typing import Optional
from pydantic import BaseModel, ConfigDict, Field


class ReservationModel(BaseModel):
    """
    Flight reservation for a customer.

    ``customer_id`` and ``flight_id`` are plain integer references; the
    store does not check that they exist in their own tables.
    """
    model_config = ConfigDict(populate_by_name=True)

    id: Optional[int] = Field(default=None, description="Store-assigned identifier")
    customer_id: int = Field(..., alias="customerId", description="Referenced customer ID")
    flight_id: int = Field(..., alias="flightId", description="Referenced flight ID")
    flight_date: str = Field(..., alias="flightDate", description="Flight date (YYYY-MM-DD)")
    reservation_name: str = Field(..., alias="reservationName", description="Reservation label")
