"""
Customer record model.

Customers are stored in the ``Customer`` table of the customers store.
Uniqueness is not enforced by the table; callers check for duplicates
with ``CustomerRepository.count_duplicates`` before inserting.
"""

from typing import Optional
from pydantic import BaseModel, ConfigDict, Field


class CustomerModel(BaseModel):
    """
    Customer information model.

    Field aliases match the column names of the ``Customer`` table so that
    a result row validates directly into a model.
    """
    model_config = ConfigDict(populate_by_name=True)

    id: Optional[int] = Field(default=None, description="Store-assigned identifier")
    first_name: str = Field(..., alias="firstName", description="First name")
    last_name: str = Field(..., alias="lastName", description="Last name")
    address: str = Field(..., description="Postal address")
    date_of_birth: str = Field(..., alias="dateOfBirth", description="Date of birth (YYYY-MM-DD)")

    @property
    def full_name(self) -> str:
        return f"{self.first_name} {self.last_name}"
