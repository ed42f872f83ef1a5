"""
Rental-specific Specifications

Concrete specifications for querying rentals and movies.
"""

from models import Movie, Rental
from domain.policies.movie_availability import is_available
from .specifications import Specification


class OpenRentalSpec(Specification[Rental]):
    """Rentals that have not been finished."""

    def is_satisfied_by(self, rental: Rental) -> bool:
        return not rental.closed

    def to_sql_filter(self):
        return Rental.closed.is_(False)


class RentalsByUserSpec(Specification[Rental]):
    """Rentals owned by a specific user."""

    def __init__(self, user_id: int):
        """
        Initialize specification.

        Args:
            user_id: Owning user ID
        """
        self.user_id = user_id

    def is_satisfied_by(self, rental: Rental) -> bool:
        return rental.user_id == self.user_id

    def to_sql_filter(self):
        return Rental.user_id == self.user_id


class AvailableMovieSpec(Specification[Movie]):
    """Movies not held by any open rental."""

    def is_satisfied_by(self, movie: Movie) -> bool:
        return is_available(movie)

    def to_sql_filter(self):
        return Movie.rental_id.is_(None)
