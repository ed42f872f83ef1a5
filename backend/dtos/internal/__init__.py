"""
Internal DTOs

DTOs for service-to-service communication.
"""

from .rental_request import RentalRequest

__all__ = ["RentalRequest"]
