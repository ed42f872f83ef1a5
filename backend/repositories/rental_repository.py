"""
Rental repository for rental-specific data access operations.
"""

from datetime import datetime
from typing import List, Optional, Sequence
from sqlalchemy import insert, update
from sqlalchemy.orm import Session, selectinload

from models import Rental, rental_movies
from services.interfaces import IRentalStore
from .base_repository import BaseRepository
from .rental_specifications import OpenRentalSpec, RentalsByUserSpec


class RentalRepository(BaseRepository[Rental], IRentalStore):
    """Repository for Rental model operations."""

    def __init__(self, db: Session):
        super().__init__(db, Rental)

    def get_by_id(self, rental_id: int) -> Optional[Rental]:
        """
        Get a rental with its movies eagerly loaded.

        Args:
            rental_id: Rental ID

        Returns:
            Rental instance or None if not found
        """
        return self.db.query(self.model).options(
            selectinload(self.model.movies)
        ).filter(self.model.id == rental_id).first()

    def get_all(self) -> List[Rental]:
        """Get all rentals in insertion order with their movies eagerly loaded."""
        return self.db.query(self.model).options(
            selectinload(self.model.movies)
        ).order_by(self.model.id).all()

    def get_rentals_by_user_id(self, user_id: int) -> List[Rental]:
        """
        Get every rental owned by a user, open or closed.

        Args:
            user_id: Owning user ID

        Returns:
            Rentals ordered by ID
        """
        return self.db.query(self.model).filter(
            RentalsByUserSpec(user_id).to_sql_filter()
        ).order_by(self.model.id).all()

    def get_open_rental_for_user(self, user_id: int) -> Optional[Rental]:
        """
        Get the user's open rental, if any.

        Args:
            user_id: Owning user ID

        Returns:
            The open rental or None
        """
        spec = RentalsByUserSpec(user_id) & OpenRentalSpec()
        return self.db.query(self.model).filter(spec.to_sql_filter()).first()

    def create_rental(
        self,
        user_id: int,
        date: datetime,
        end_date: datetime,
        movie_ids: Sequence[int]
    ) -> Rental:
        """
        Insert an open rental linked to its movies and flush it.

        The flush fires the partial unique index on open rentals, so a second
        open rental for the same user raises IntegrityError here. Movie links
        keep the order of ``movie_ids``.

        Args:
            user_id: Owning user ID
            date: Creation timestamp
            end_date: Due timestamp
            movie_ids: Movies the rental holds, in request order

        Returns:
            The flushed rental (with its ID assigned)
        """
        rental = self.create(Rental(user_id=user_id, date=date, end_date=end_date, closed=False))
        self.db.execute(
            insert(rental_movies),
            [
                {"rental_id": rental.id, "movie_id": movie_id, "position": position}
                for position, movie_id in enumerate(movie_ids)
            ]
        )
        return rental

    def close_rental(self, rental_id: int) -> bool:
        """
        Conditionally mark a rental closed.

        Only an open row is updated, so two concurrent finishes cannot both
        succeed.

        Args:
            rental_id: Rental to close

        Returns:
            True if the rental transitioned to closed
        """
        result = self.db.execute(
            update(self.model)
            .where(self.model.id == rental_id, OpenRentalSpec().to_sql_filter())
            .values(closed=True)
            .execution_options(synchronize_session=False)
        )
        return result.rowcount == 1
