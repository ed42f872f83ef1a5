"""
Rental Validator

Decides whether a requested rental is legal. Checks run in a fixed order and
stop at the first failure, so a request that breaks several rules always
surfaces the same error:

1. the user exists                      -> UserNotFoundError
2. the user has no open rental          -> PendingRentalError
3. every requested movie exists         -> MovieNotFoundError
4. no requested movie is already rented -> MovieInRentalError
5. the user is old enough for each one  -> InsufficientAgeError

The validator only reads from the stores it is given; persisting the
validated request is the lifecycle service's job.
"""

from typing import Sequence

from domain.policies.age_policy import AgePolicy
from domain.policies.movie_availability import is_available
from dtos.internal.rental_request import RentalRequest
from exceptions import (
    InsufficientAgeError,
    MovieInRentalError,
    MovieNotFoundError,
    PendingRentalError,
    UserNotFoundError,
)
from services.interfaces import IMovieStore, IRentalStore, IUserStore
from utils.logging_utils import log_operation


class RentalValidator:
    """Ordered business-rule checks for rental creation."""

    def __init__(
        self,
        users: IUserStore,
        movies: IMovieStore,
        rentals: IRentalStore,
        age_policy: AgePolicy | None = None
    ):
        """
        Initialize RentalValidator.

        Args:
            users: User lookups
            movies: Movie lookups
            rentals: Rental lookups
            age_policy: Adults-only rule (defaults to the configured adult age)
        """
        self.users = users
        self.movies = movies
        self.rentals = rentals
        self.age_policy = age_policy or AgePolicy()

    @log_operation("validate_rental")
    def validate_and_prepare(self, user_id: int, movie_ids: Sequence[int]) -> RentalRequest:
        """
        Run every check and return the validated request.

        Args:
            user_id: Renting user
            movie_ids: Requested movies, in request order

        Returns:
            RentalRequest carrying the validated user and movie IDs

        Raises:
            UserNotFoundError, PendingRentalError, MovieNotFoundError,
            MovieInRentalError, InsufficientAgeError: first failing check
            DataIntegrityError: If the user's stored birth date is unusable
        """
        user = self.users.get_by_id(user_id)
        if user is None:
            raise UserNotFoundError(user_id)

        if self.rentals.get_open_rental_for_user(user_id) is not None:
            raise PendingRentalError(user_id)

        movies = []
        for movie_id in movie_ids:
            movie = self.movies.get_by_id(movie_id)
            if movie is None:
                raise MovieNotFoundError(movie_id)
            movies.append(movie)

        for movie in movies:
            if not is_available(movie):
                raise MovieInRentalError(movie.id)

        for movie in movies:
            if not self.age_policy.is_eligible(user.birth_date, movie.adults_only):
                raise InsufficientAgeError(user_id, movie.id)

        return RentalRequest(user_id=user_id, movie_ids=tuple(movie_ids))
