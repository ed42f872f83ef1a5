"""
Movie repository for movie-specific data access operations.
"""

from typing import Sequence
from sqlalchemy import func, update
from sqlalchemy.orm import Session

from models import Movie
from services.interfaces import IMovieStore
from .base_repository import BaseRepository
from .rental_specifications import AvailableMovieSpec


class MovieRepository(BaseRepository[Movie], IMovieStore):
    """Repository for Movie model operations."""

    def __init__(self, db: Session):
        super().__init__(db, Movie)

    def claim_for_rental(self, movie_ids: Sequence[int], rental_id: int) -> int:
        """
        Conditionally point movies at a rental.

        The update only touches rows whose back-reference is still NULL, so
        two transactions racing for the same movie cannot both claim it.

        Args:
            movie_ids: Movies to claim
            rental_id: Claiming rental

        Returns:
            Number of requested movies now held by the rental
        """
        self.db.execute(
            update(self.model)
            .where(self.model.id.in_(movie_ids), AvailableMovieSpec().to_sql_filter())
            .values(rental_id=rental_id)
            .execution_options(synchronize_session=False)
        )
        return self.db.query(func.count(self.model.id)).filter(
            self.model.id.in_(movie_ids),
            self.model.rental_id == rental_id
        ).scalar() or 0

    def release_rental(self, rental_id: int) -> int:
        """
        Clear the back-reference of every movie held by a rental.

        Args:
            rental_id: Rental being closed

        Returns:
            Number of movies released
        """
        held = self.db.query(func.count(self.model.id)).filter(
            self.model.rental_id == rental_id
        ).scalar() or 0
        self.db.execute(
            update(self.model)
            .where(self.model.rental_id == rental_id)
            .values(rental_id=None)
            .execution_options(synchronize_session=False)
        )
        return held
