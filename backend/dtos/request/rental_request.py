"""
Rental Request DTOs

DTOs for rental-related API requests. Field names follow the public JSON
contract (camelCase).
"""

from typing import Annotated, List

from pydantic import BaseModel, Field, field_validator

from constants import DatabaseConfig

PositiveId = Annotated[int, Field(strict=True, gt=0, le=DatabaseConfig.MAX_ID)]


class CreateRentalRequest(BaseModel):
    """
    Request DTO for opening a rental.
    """

    userId: PositiveId = Field(description="ID of the renting user")
    moviesId: List[PositiveId] = Field(min_length=1, description="IDs of the movies to rent, in request order")

    @field_validator("moviesId")
    @classmethod
    def validate_unique_movies(cls, v):
        """A movie can only appear once in a rental."""
        if len(set(v)) != len(v):
            raise ValueError("moviesId must not contain duplicates")
        return v

    class Config:
        """Pydantic configuration."""
        extra = "forbid"
        json_schema_extra = {
            "example": {
                "userId": 1,
                "moviesId": [3, 7]
            }
        }


class FinishRentalRequest(BaseModel):
    """
    Request DTO for closing a rental.
    """

    rentalId: PositiveId = Field(description="ID of the rental to finish")

    class Config:
        """Pydantic configuration."""
        extra = "forbid"
        json_schema_extra = {
            "example": {
                "rentalId": 1
            }
        }
