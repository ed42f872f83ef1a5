"""
Rental Response DTOs

DTOs for rental-related API responses.
"""

from datetime import datetime
from typing import List

from pydantic import BaseModel, Field


class RentalResponse(BaseModel):
    """
    Response DTO for a rental.

    Built from the ORM model by attribute name and serialized with the
    camelCase keys of the public contract. Timestamps serialize as ISO-8601.
    """

    id: int = Field(description="Rental ID")
    date: datetime = Field(description="Creation timestamp (UTC)")
    end_date: datetime = Field(serialization_alias="endDate", description="Due timestamp (UTC)")
    user_id: int = Field(serialization_alias="userId", description="Owning user ID")
    closed: bool = Field(description="Whether the rental has been finished")
    movie_ids: List[int] = Field(serialization_alias="movies", description="IDs of the movies in the rental")

    class Config:
        """Pydantic configuration."""
        from_attributes = True  # Allow creation from ORM models
