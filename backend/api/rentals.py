"""
Rentals API endpoints
"""
import re
from typing import List
from fastapi import APIRouter, Depends

from constants import DatabaseConfig, HTTPStatus
from dependencies import get_rental_service
from dtos.request.rental_request import CreateRentalRequest, FinishRentalRequest
from dtos.response.rental_response import RentalResponse
from exceptions import ValidationError
from services.rental_service import RentalService
from utils.error_handlers import handle_api_errors

router = APIRouter()

_DIGITS = re.compile(r"[0-9]{1,19}")


def parse_rental_id(raw: str) -> int:
    """
    Parse a path segment as a positive rental ID.

    Raises:
        ValidationError: If the segment is not a positive integer that fits
            in an INTEGER primary key
    """
    if not _DIGITS.fullmatch(raw) or not 0 < int(raw) <= DatabaseConfig.MAX_ID:
        raise ValidationError("Rental id must be a positive integer.", {"id": raw})
    return int(raw)


@router.get("/rentals", response_model=List[RentalResponse])
@handle_api_errors("Rental listing")
def list_rentals(service: RentalService = Depends(get_rental_service)):
    """
    List every rental in insertion order
    """
    return service.get_rentals()


@router.get("/rentals/{rental_id}", response_model=RentalResponse)
@handle_api_errors("Rental lookup")
def get_rental(rental_id: str, service: RentalService = Depends(get_rental_service)):
    """
    Get a single rental

    The ID is taken as a string and validated here so a malformed ID is a
    400 rather than FastAPI's 422.
    """
    return service.get_rental_by_id(parse_rental_id(rental_id))


@router.post("/rentals", response_model=RentalResponse, status_code=HTTPStatus.CREATED)
@handle_api_errors("Rental creation")
def create_rental(body: CreateRentalRequest, service: RentalService = Depends(get_rental_service)):
    """
    Open a rental for a user

    Failures: 404 user/movie not found, 402 user already has an open rental,
    409 movie already rented, 403 adults-only movie for an underage user.
    """
    return service.create_rental(user_id=body.userId, movie_ids=body.moviesId)


@router.post("/rentals/finish", response_model=RentalResponse)
@handle_api_errors("Rental finish")
def finish_rental(body: FinishRentalRequest, service: RentalService = Depends(get_rental_service)):
    """
    Close a rental and make its movies available again
    """
    return service.finish_rental(body.rentalId)
