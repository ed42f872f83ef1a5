"""Tests for rental creation and finishing against an in-memory database.

Coverage:
- Creation persists an open rental, its due date and the movie claims
- Store-level guards when validation is bypassed (open rental per user, movie claims)
- Finishing closes the rental, releases its movies and keeps its movie list
- Double finish and unknown rentals
"""

from datetime import timedelta

import pytest

from dtos.internal.rental_request import RentalRequest
from exceptions import (
    MovieInRentalError,
    MovieNotFoundError,
    PendingRentalError,
    RentalAlreadyClosedError,
    RentalNotFoundError,
)
from models import Movie, Rental
from services.rental_lifecycle_service import RentalLifecycleService
from tests.factories import make_movie, make_rental, make_user


@pytest.fixture
def lifecycle(db_session):
    return RentalLifecycleService(db_session, rental_period_days=3)


def test_create_persists_open_rental(db_session, lifecycle):
    user = make_user(db_session)
    first, second = make_movie(db_session), make_movie(db_session)

    rental = lifecycle.create(RentalRequest(user_id=user.id, movie_ids=(first.id, second.id)))

    assert rental.id is not None
    assert rental.user_id == user.id
    assert rental.closed is False
    assert rental.movie_ids == [first.id, second.id]
    assert rental.end_date - rental.date == timedelta(days=3)
    assert db_session.get(Movie, first.id).rental_id == rental.id
    assert db_session.get(Movie, second.id).rental_id == rental.id


def test_create_uses_configured_rental_period(db_session):
    user, movie = make_user(db_session), make_movie(db_session)

    rental = RentalLifecycleService(db_session, rental_period_days=7).create(
        RentalRequest(user_id=user.id, movie_ids=(movie.id,))
    )

    assert rental.end_date - rental.date == timedelta(days=7)


def test_create_rejects_second_open_rental_at_store_level(db_session, lifecycle):
    user = make_user(db_session)
    make_rental(db_session, user=user)
    movie = make_movie(db_session)

    with pytest.raises(PendingRentalError):
        lifecycle.create(RentalRequest(user_id=user.id, movie_ids=(movie.id,)))

    assert db_session.query(Rental).count() == 1
    assert db_session.get(Movie, movie.id).rental_id is None


def test_create_rejects_movie_claimed_by_another_rental(db_session, lifecycle):
    held = make_movie(db_session)
    make_rental(db_session, movies=[held])
    user = make_user(db_session)
    free = make_movie(db_session)

    with pytest.raises(MovieInRentalError):
        lifecycle.create(RentalRequest(user_id=user.id, movie_ids=(free.id, held.id)))

    assert db_session.query(Rental).filter(Rental.user_id == user.id).count() == 0
    assert db_session.get(Movie, free.id).rental_id is None


def test_create_rejects_movie_deleted_after_validation(db_session, lifecycle):
    user = make_user(db_session)

    with pytest.raises(MovieNotFoundError):
        lifecycle.create(RentalRequest(user_id=user.id, movie_ids=(404,)))

    assert db_session.query(Rental).count() == 0


def test_finish_closes_rental_and_releases_movies(db_session, lifecycle):
    movies = [make_movie(db_session), make_movie(db_session)]
    rental = make_rental(db_session, movies=movies)

    finished = lifecycle.finish(rental.id)

    assert finished.closed is True
    assert finished.movie_ids == [m.id for m in movies]
    for movie in movies:
        assert db_session.get(Movie, movie.id).rental_id is None


def test_finish_keeps_dates(db_session, lifecycle):
    rental = make_rental(db_session)
    date, end_date = rental.date, rental.end_date

    finished = lifecycle.finish(rental.id)

    assert (finished.date, finished.end_date) == (date, end_date)


def test_finish_twice_is_rejected(db_session, lifecycle):
    rental = make_rental(db_session)
    lifecycle.finish(rental.id)

    with pytest.raises(RentalAlreadyClosedError) as exc_info:
        lifecycle.finish(rental.id)

    assert exc_info.value.kind == "RentalAlreadyClosed"
    assert db_session.get(Rental, rental.id).closed is True


def test_finish_unknown_rental(lifecycle):
    with pytest.raises(RentalNotFoundError) as exc_info:
        lifecycle.finish(1)

    assert exc_info.value.message == "Rental not found."


def test_finished_rental_frees_user_and_movies_for_new_rental(db_session, lifecycle):
    user, movie = make_user(db_session), make_movie(db_session)
    first = lifecycle.create(RentalRequest(user_id=user.id, movie_ids=(movie.id,)))
    lifecycle.finish(first.id)

    second = lifecycle.create(RentalRequest(user_id=user.id, movie_ids=(movie.id,)))

    assert second.id != first.id
    assert db_session.get(Movie, movie.id).rental_id == second.id
    assert db_session.get(Rental, first.id).movie_ids == [movie.id]


def test_create_keeps_request_order_of_movies(db_session, lifecycle):
    user = make_user(db_session)
    first, second, third = make_movie(db_session), make_movie(db_session), make_movie(db_session)

    rental = lifecycle.create(RentalRequest(user_id=user.id, movie_ids=(third.id, first.id, second.id)))

    assert rental.movie_ids == [third.id, first.id, second.id]
