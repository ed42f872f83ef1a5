"""API tests for the /rentals endpoints.

Each test gets a fresh in-memory database; the app's get_db dependency is
overridden to hand out sessions bound to it.
"""

from datetime import datetime

import pytest
from fastapi.testclient import TestClient

from database import get_db
from main import app
from models import Movie, Rental
from tests.factories import make_movie, make_rental, make_user
from utils.datetime_utils import utc_today

OVERSIZED_ID = 2**63


@pytest.fixture
def client(session_factory):
    def override_get_db():
        db = session_factory()
        try:
            yield db
        finally:
            db.close()

    app.dependency_overrides[get_db] = override_get_db
    yield TestClient(app)
    app.dependency_overrides.clear()


def rental_count(db_session) -> int:
    db_session.expire_all()
    return db_session.query(Rental).count()


def assert_rental_json(body: dict, rental: Rental):
    assert set(body) == {"id", "date", "endDate", "userId", "closed", "movies"}
    assert body["id"] == rental.id
    assert datetime.fromisoformat(body["date"]) == rental.date
    assert datetime.fromisoformat(body["endDate"]) == rental.end_date
    assert body["userId"] == rental.user_id
    assert body["closed"] is rental.closed
    assert body["movies"] == rental.movie_ids


# =============================================================================
# POST /rentals
# =============================================================================


class TestCreateRentalBody:
    def test_empty_body(self, client, db_session):
        assert client.post("/rentals", json={}).status_code == 422
        assert rental_count(db_session) == 0

    def test_user_id_not_a_number(self, client):
        response = client.post("/rentals", json={"userId": "NaN", "moviesId": [1]})
        assert response.status_code == 422

    def test_user_id_numeric_string(self, client):
        response = client.post("/rentals", json={"userId": "1", "moviesId": [1]})
        assert response.status_code == 422

    def test_movies_id_not_an_array(self, client, db_session):
        user, movie = make_user(db_session), make_movie(db_session)

        response = client.post("/rentals", json={"userId": user.id, "moviesId": movie.id})

        assert response.status_code == 422
        assert rental_count(db_session) == 0

    def test_movies_id_empty(self, client):
        assert client.post("/rentals", json={"userId": 1, "moviesId": []}).status_code == 422

    def test_movies_id_duplicates(self, client):
        assert client.post("/rentals", json={"userId": 1, "moviesId": [1, 1]}).status_code == 422

    def test_non_positive_ids(self, client):
        assert client.post("/rentals", json={"userId": 0, "moviesId": [1]}).status_code == 422
        assert client.post("/rentals", json={"userId": 1, "moviesId": [-1]}).status_code == 422

    @pytest.mark.parametrize("body", [
        {"userId": OVERSIZED_ID, "moviesId": [1]},
        {"userId": 1, "moviesId": [OVERSIZED_ID]},
    ])
    def test_ids_beyond_integer_range(self, client, body):
        assert client.post("/rentals", json=body).status_code == 422


class TestCreateRental:
    def test_user_not_found(self, client):
        response = client.post("/rentals", json={"userId": 1, "moviesId": [1]})

        assert response.status_code == 404
        assert response.json() == {"detail": {"kind": "UserNotFound", "message": "User not found."}}

    def test_user_already_has_rental(self, client, db_session):
        user = make_user(db_session)
        make_rental(db_session, user=user)

        response = client.post("/rentals", json={"userId": user.id, "moviesId": [1]})

        assert response.status_code == 402
        assert response.json()["detail"] == {
            "kind": "PendingRentalExists",
            "message": "The user already have a rental!"
        }

    def test_movie_not_found(self, client, db_session):
        user = make_user(db_session)

        response = client.post("/rentals", json={"userId": user.id, "moviesId": [1]})

        assert response.status_code == 404
        assert response.json()["detail"]["message"] == "Movie not found."

    def test_movie_in_rental(self, client, db_session):
        user, movie = make_user(db_session), make_movie(db_session)
        make_rental(db_session, movies=[movie])

        response = client.post("/rentals", json={"userId": user.id, "moviesId": [movie.id]})

        assert response.status_code == 409
        assert response.json()["detail"]["message"] == "Movie already in a rental."

    def test_adults_only_movie_for_minor(self, client, db_session):
        user = make_user(db_session, birth_date=utc_today())
        movie = make_movie(db_session, adults_only=True)

        response = client.post("/rentals", json={"userId": user.id, "moviesId": [movie.id]})

        assert response.status_code == 403
        assert response.json()["detail"]["kind"] == "AgeRestricted"
        assert rental_count(db_session) == 0

    def test_created(self, client, db_session):
        user, movie = make_user(db_session), make_movie(db_session)

        response = client.post("/rentals", json={"userId": user.id, "moviesId": [movie.id]})

        assert response.status_code == 201
        body = response.json()
        assert body["userId"] == user.id
        assert body["closed"] is False
        assert body["movies"] == [movie.id]
        assert datetime.fromisoformat(body["endDate"]) > datetime.fromisoformat(body["date"])
        db_session.expire_all()
        assert db_session.get(Movie, movie.id).rental_id == body["id"]

    def test_created_movies_keep_request_order(self, client, db_session):
        user = make_user(db_session)
        first, second = make_movie(db_session), make_movie(db_session)

        response = client.post("/rentals", json={"userId": user.id, "moviesId": [second.id, first.id]})

        assert response.status_code == 201
        assert response.json()["movies"] == [second.id, first.id]

    def test_second_creation_for_same_user_fails(self, client, db_session):
        user = make_user(db_session)
        first, second = make_movie(db_session), make_movie(db_session)

        assert client.post("/rentals", json={"userId": user.id, "moviesId": [first.id]}).status_code == 201
        response = client.post("/rentals", json={"userId": user.id, "moviesId": [second.id]})

        assert response.status_code == 402
        assert rental_count(db_session) == 1


# =============================================================================
# POST /rentals/finish
# =============================================================================


class TestFinishRental:
    def test_empty_body(self, client):
        assert client.post("/rentals/finish", json={}).status_code == 422

    def test_rental_id_not_a_number(self, client):
        assert client.post("/rentals/finish", json={"rentalId": "NaN"}).status_code == 422

    def test_rental_id_beyond_integer_range(self, client):
        assert client.post("/rentals/finish", json={"rentalId": OVERSIZED_ID}).status_code == 422

    def test_rental_not_found(self, client):
        response = client.post("/rentals/finish", json={"rentalId": 1})

        assert response.status_code == 404
        assert response.json()["detail"]["message"] == "Rental not found."

    def test_closes_rental(self, client, db_session):
        rental = make_rental(db_session)
        movie_ids = rental.movie_ids

        response = client.post("/rentals/finish", json={"rentalId": rental.id})

        assert response.status_code == 200
        assert response.json()["closed"] is True
        db_session.expire_all()
        assert db_session.get(Rental, rental.id).closed is True
        assert all(db_session.get(Movie, m).rental_id is None for m in movie_ids)

    def test_finish_twice(self, client, db_session):
        rental = make_rental(db_session)

        assert client.post("/rentals/finish", json={"rentalId": rental.id}).status_code == 200
        response = client.post("/rentals/finish", json={"rentalId": rental.id})

        assert response.status_code == 409
        assert response.json()["detail"]["kind"] == "RentalAlreadyClosed"


# =============================================================================
# GET /rentals
# =============================================================================


class TestListRentals:
    def test_empty(self, client):
        response = client.get("/rentals")

        assert response.status_code == 200
        assert response.json() == []

    def test_all_rentals(self, client, db_session):
        rental = make_rental(db_session)

        response = client.get("/rentals")

        assert response.status_code == 200
        body = response.json()
        assert len(body) == 1
        assert_rental_json(body[0], rental)


# =============================================================================
# GET /rentals/{id}
# =============================================================================


class TestGetRental:
    @pytest.mark.parametrize("raw_id", [
        "abc", "NaN", "0", "-1", "1.5", "5%0A", str(OVERSIZED_ID), "99999999999999999999"
    ])
    def test_invalid_id(self, client, raw_id):
        response = client.get(f"/rentals/{raw_id}")

        assert response.status_code == 400
        assert response.json()["detail"]["kind"] == "MalformedRequest"

    def test_not_found(self, client):
        assert client.get("/rentals/1").status_code == 404

    def test_largest_id_is_looked_up(self, client):
        assert client.get(f"/rentals/{2**63 - 1}").status_code == 404

    def test_found(self, client, db_session):
        rental = make_rental(db_session, closed=True)

        response = client.get(f"/rentals/{rental.id}")

        assert response.status_code == 200
        assert_rental_json(response.json(), rental)


def test_health(client):
    assert client.get("/health").json()["status"] == "ok"
