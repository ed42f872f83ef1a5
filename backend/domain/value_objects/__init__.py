"""
Domain Value Objects

Value objects are immutable types that represent descriptive aspects of the domain.
They have no conceptual identity and are compared by their values, not by ID.
"""

from .rental_status import RentalStatus

__all__ = ["RentalStatus"]
