"""
Response DTOs

DTOs for outgoing API responses. These decouple the API from database models
and provide a clear contract for what data the API returns.
"""

from .rental_response import RentalResponse

__all__ = ["RentalResponse"]
