"""
Car sale record model.

Sale records share the sales store with reservations. Identifiers are
assigned by the store on insert like every other entity.
"""

from typing import Optional
from pydantic import BaseModel, ConfigDict, Field


class SaleRecordModel(BaseModel):
    """Sales transaction linking a customer, a car and a dealership."""
    model_config = ConfigDict(populate_by_name=True)

    id: Optional[int] = Field(default=None, description="Store-assigned identifier")
    customer_id: int = Field(..., alias="customerId", description="Purchasing customer ID")
    car_id: int = Field(..., alias="carId", description="Sold car ID")
    dealership_id: int = Field(..., alias="dealershipId", description="Dealership ID")
    purchase_date: str = Field(..., alias="purchaseDate", description="Purchase date")

    @property
    def display_title(self) -> str:
        return f"Sale Record #{self.id}"

    @property
    def display_subtitle(self) -> str:
        return f"Customer: {self.customer_id} | Car: {self.car_id} | Date: {self.purchase_date}"

    @property
    def detail_info(self) -> str:
        return (
            f"Sale ID: {self.id}\n"
            f"Customer ID: {self.customer_id}\n"
            f"Car ID: {self.car_id}\n"
            f"Dealership ID: {self.dealership_id}\n"
            f"Purchase Date: {self.purchase_date}"
        )

    def is_valid(self) -> bool:
        """Check that all references are positive and a date was given."""
        return (
            self.customer_id > 0
            and self.car_id > 0
            and self.dealership_id > 0
            and bool(self.purchase_date.strip())
        )
