"""
Request DTOs

DTOs for incoming API requests. These decouple the API from database models
and provide a clear contract for what data the API expects.
"""

from .rental_request import CreateRentalRequest, FinishRentalRequest

__all__ = ["CreateRentalRequest", "FinishRentalRequest"]
