"""
Rental Service

Entry point the API layer uses for rentals. Composes the validator, the
lifecycle service and the query service over a single database session so
that validation and creation run in the same unit of work.
"""

from typing import List, Sequence
from sqlalchemy.orm import Session

from models import Rental
from repositories.movie_repository import MovieRepository
from repositories.rental_repository import RentalRepository
from repositories.user_repository import UserRepository
from services.rental_lifecycle_service import RentalLifecycleService
from services.rental_query_service import RentalQueryService
from services.rental_validator import RentalValidator


class RentalService:
    """Service for rental-related business logic."""

    def __init__(self, db: Session):
        """
        Initialize RentalService.

        Args:
            db: Database session
        """
        self.db = db
        users = UserRepository(db)
        movies = MovieRepository(db)
        rentals = RentalRepository(db)

        self.validator = RentalValidator(users=users, movies=movies, rentals=rentals)
        self.lifecycle = RentalLifecycleService(db, rentals=rentals, movies=movies)
        self.queries = RentalQueryService(rentals)

    def create_rental(self, user_id: int, movie_ids: Sequence[int]) -> Rental:
        """
        Validate a rental request and persist it.

        Raises:
            ApplicationError subclasses from the validator or lifecycle service
        """
        request = self.validator.validate_and_prepare(user_id=user_id, movie_ids=movie_ids)
        return self.lifecycle.create(request=request)

    def finish_rental(self, rental_id: int) -> Rental:
        return self.lifecycle.finish(rental_id=rental_id)

    def get_rentals(self) -> List[Rental]:
        return self.queries.list_rentals()

    def get_rental_by_id(self, rental_id: int) -> Rental:
        return self.queries.get_rental(rental_id)
