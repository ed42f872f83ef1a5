"""
Service Interfaces

Abstract base classes for the data accessors the rental services depend on,
following the Dependency Inversion Principle. Production code passes the
SQLAlchemy repositories; tests can pass in-memory fakes.
"""

from abc import ABC, abstractmethod
from datetime import datetime
from typing import Any, List, Optional, Sequence


class IUserStore(ABC):
    """
    Read access to users. Users are owned outside the rental core.
    """

    @abstractmethod
    def get_by_id(self, user_id: int) -> Optional[Any]:
        """
        Look up a user.

        Args:
            user_id: User ID

        Returns:
            User record (with ``id`` and ``birth_date``) or None
        """
        pass


class IMovieStore(ABC):
    """
    Access to movies and their rental back-reference.
    """

    @abstractmethod
    def get_by_id(self, movie_id: int) -> Optional[Any]:
        """
        Look up a movie.

        Args:
            movie_id: Movie ID

        Returns:
            Movie record (with ``id``, ``adults_only`` and ``rental_id``) or None
        """
        pass

    @abstractmethod
    def get_by_ids(self, movie_ids: Sequence[int]) -> List[Any]:
        """Movies whose ID is in ``movie_ids``; missing IDs are omitted."""
        pass

    @abstractmethod
    def claim_for_rental(self, movie_ids: Sequence[int], rental_id: int) -> int:
        """
        Point every still-available movie in ``movie_ids`` at ``rental_id``.

        Movies already held by a rental are left untouched.

        Returns:
            Number of movies now held by ``rental_id``
        """
        pass

    @abstractmethod
    def release_rental(self, rental_id: int) -> int:
        """
        Clear the back-reference of every movie held by ``rental_id``.

        Returns:
            Number of movies released
        """
        pass


class IRentalStore(ABC):
    """
    Access to rental records.
    """

    @abstractmethod
    def get_by_id(self, rental_id: int) -> Optional[Any]:
        """Rental by ID, or None."""
        pass

    @abstractmethod
    def get_all(self) -> List[Any]:
        """All rentals in insertion order."""
        pass

    @abstractmethod
    def get_rentals_by_user_id(self, user_id: int) -> List[Any]:
        """Every rental (open or closed) owned by ``user_id``."""
        pass

    @abstractmethod
    def get_open_rental_for_user(self, user_id: int) -> Optional[Any]:
        """The open rental owned by ``user_id``, or None."""
        pass

    @abstractmethod
    def create_rental(
        self,
        user_id: int,
        date: datetime,
        end_date: datetime,
        movie_ids: Sequence[int]
    ) -> Any:
        """
        Insert an open rental holding ``movie_ids``, keeping their order.

        Raises:
            sqlalchemy.exc.IntegrityError: If the store already holds an
                open rental for ``user_id``
        """
        pass

    @abstractmethod
    def close_rental(self, rental_id: int) -> bool:
        """
        Mark an open rental closed.

        Returns:
            True if the rental was open and is now closed, False if it was
            already closed
        """
        pass
