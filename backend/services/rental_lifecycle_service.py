"""
Rental Lifecycle Service

Persists validated rental requests and closes rentals (open -> closed).

Creation inserts the rental and claims each movie's back-reference inside
one transaction. The store backs the validator's checks: the partial unique
index rejects a second open rental for a user, and the conditional movie
claim rejects a movie another transaction got to first. Either conflict rolls
the whole creation back.

Finishing a rental clears the back-reference of every movie it held so the
movies can be rented again; the rental keeps its movie list through the
rental_movies association. Finishing an already-closed rental is rejected
with RentalAlreadyClosedError and changes nothing.
"""

from datetime import timedelta
from typing import Optional
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session
import logging

from config.settings import settings
from domain.value_objects.rental_status import RentalStatus
from dtos.internal.rental_request import RentalRequest
from exceptions import (
    DatabaseError,
    MovieInRentalError,
    MovieNotFoundError,
    PendingRentalError,
    RentalAlreadyClosedError,
    RentalNotFoundError,
)
from models import Rental
from repositories.movie_repository import MovieRepository
from repositories.rental_repository import RentalRepository
from services.interfaces import IMovieStore, IRentalStore
from utils.datetime_utils import utcnow
from utils.logging_utils import log_operation

logger = logging.getLogger(__name__)


class RentalLifecycleService:
    """Service for creating and finishing rentals."""

    def __init__(
        self,
        db: Session,
        rentals: Optional[IRentalStore] = None,
        movies: Optional[IMovieStore] = None,
        rental_period_days: Optional[int] = None
    ):
        """
        Initialize RentalLifecycleService.

        Args:
            db: Database session owning the transaction
            rentals: Rental store (defaults to a RentalRepository on ``db``)
            movies: Movie store (defaults to a MovieRepository on ``db``)
            rental_period_days: Days until a new rental is due
        """
        self.db = db
        self.rentals = rentals or RentalRepository(db)
        self.movies = movies or MovieRepository(db)
        self.rental_period = timedelta(
            days=rental_period_days if rental_period_days is not None else settings.rental_period_days
        )

    @log_operation("create_rental")
    def create(self, request: RentalRequest) -> Rental:
        """
        Persist a validated rental request as a new open rental.

        Args:
            request: Output of RentalValidator.validate_and_prepare

        Returns:
            The committed rental

        Raises:
            MovieNotFoundError: If a movie disappeared after validation
            PendingRentalError: If another open rental for the user won the race
            MovieInRentalError: If another rental claimed one of the movies first
            DatabaseError: On any other store failure
        """
        found = {movie.id for movie in self.movies.get_by_ids(request.movie_ids)}
        for movie_id in request.movie_ids:
            if movie_id not in found:
                raise MovieNotFoundError(movie_id)

        now = utcnow()
        try:
            rental = self.rentals.create_rental(
                user_id=request.user_id,
                date=now,
                end_date=now + self.rental_period,
                movie_ids=request.movie_ids
            )
            claimed = self.movies.claim_for_rental(request.movie_ids, rental.id)
            if claimed != len(request.movie_ids):
                self.db.rollback()
                raise MovieInRentalError()
            self.db.commit()
        except IntegrityError as e:
            self.db.rollback()
            if self.rentals.get_open_rental_for_user(request.user_id) is not None:
                raise PendingRentalError(request.user_id) from e
            raise DatabaseError("create_rental", f"Failed to create rental: {e.orig}") from e
        except SQLAlchemyError as e:
            self.db.rollback()
            raise DatabaseError("create_rental", f"Failed to create rental: {e}") from e

        self.db.refresh(rental)
        logger.info(
            f"Created rental {rental.id} for user {rental.user_id} "
            f"with movies {rental.movie_ids}, due {rental.end_date.isoformat()}"
        )
        return rental

    @log_operation("finish_rental")
    def finish(self, rental_id: int) -> Rental:
        """
        Close an open rental and release its movies.

        Args:
            rental_id: Rental ID

        Returns:
            The closed rental

        Raises:
            RentalNotFoundError: If no rental has this ID
            RentalAlreadyClosedError: If the rental is already closed
            DatabaseError: On store failure
        """
        rental = self.rentals.get_by_id(rental_id)
        if rental is None:
            raise RentalNotFoundError(rental_id)

        if not RentalStatus.of(rental).can_transition_to(RentalStatus.CLOSED):
            raise RentalAlreadyClosedError(rental_id)

        try:
            if not self.rentals.close_rental(rental_id):
                self.db.rollback()
                raise RentalAlreadyClosedError(rental_id)
            released = self.movies.release_rental(rental_id)
            self.db.commit()
        except SQLAlchemyError as e:
            self.db.rollback()
            raise DatabaseError("finish_rental", f"Failed to finish rental {rental_id}: {e}") from e

        self.db.refresh(rental)
        logger.info(f"Finished rental {rental_id}, released {released} movie(s)")
        return rental
