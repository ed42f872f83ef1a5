"""
Rental Query Service

Read-only access to rentals. No business rules apply here.
"""

from typing import List

from exceptions import RentalNotFoundError
from models import Rental
from services.interfaces import IRentalStore


class RentalQueryService:
    """Listing and point lookups for rentals."""

    def __init__(self, rentals: IRentalStore):
        """
        Initialize RentalQueryService.

        Args:
            rentals: Rental store
        """
        self.rentals = rentals

    def list_rentals(self) -> List[Rental]:
        """
        All rentals in insertion order, open and closed alike.
        """
        return self.rentals.get_all()

    def list_rentals_by_user(self, user_id: int) -> List[Rental]:
        """
        Every rental a user has ever opened, in insertion order.

        Args:
            user_id: Owning user ID
        """
        return self.rentals.get_rentals_by_user_id(user_id)

    def get_rental(self, rental_id: int) -> Rental:
        """
        Get a single rental.

        Args:
            rental_id: Rental ID

        Returns:
            The rental

        Raises:
            RentalNotFoundError: If no rental has this ID
        """
        rental = self.rentals.get_by_id(rental_id)
        if rental is None:
            raise RentalNotFoundError(rental_id)
        return rental
