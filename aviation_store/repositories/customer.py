"""Customer repository."""

from typing import List, Optional

from ..models import CustomerModel
from .base import BaseRepository

NAME_ORDER = "lastName ASC, firstName ASC"


class CustomerRepository(BaseRepository[CustomerModel]):
    """
    Customer table operations.

    Customers list alphabetically by last name, then first name.
    Duplicate detection is advisory: ``count_duplicates`` lets the caller
    decide before inserting, nothing blocks a second identical row.
    """

    table = "Customer"
    model = CustomerModel
    columns = ("firstName", "lastName", "address", "dateOfBirth")
    default_order = NAME_ORDER

    def get_latest(self) -> Optional[CustomerModel]:
        """Get the most recently added customer."""
        return self._fetch_one(self._select(order="id DESC", limit=1))

    def count_duplicates(self, first_name: str, last_name: str, address: str) -> int:
        """Count customers sharing first name, last name and address."""
        return self._scalar_int(
            'SELECT COUNT(*) FROM "Customer" '
            "WHERE firstName = :firstName AND lastName = :lastName AND address = :address",
            {"firstName": first_name, "lastName": last_name, "address": address},
        )

    def search_by_name(self, term: str) -> List[CustomerModel]:
        """Find customers whose first or last name contains ``term``."""
        return self._fetch_all(
            self._select(f"{self._like('firstName')} OR {self._like('lastName')}"),
            {"term": self._contains(term)},
        )

    def find_by_birth_month(self, month: int) -> List[CustomerModel]:
        """
        Find customers born in a month, earliest day of month first.

        Args:
            month: Month number, 1-12
        """
        return self._fetch_all(
            self._select(
                "substr(dateOfBirth, 6, 2) = :month",
                order="substr(dateOfBirth, 9, 2) ASC, " + NAME_ORDER,
            ),
            {"month": f"{int(month):02d}"},
        )

    def find_birthdays_on(self, month_day: str) -> List[CustomerModel]:
        """
        Find customers whose date of birth falls on a given day of the year.

        Args:
            month_day: ``MM-DD`` fragment, e.g. today's ``date.strftime('%m-%d')``
        """
        return self._fetch_all(
            self._select(self._like("dateOfBirth", "fragment")),
            {"fragment": f"%-{self._escape_like(month_day)}"},
        )
