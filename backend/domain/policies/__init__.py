"""
Domain Policies

Pure business rules evaluated by the rental validator. Policies take plain
values or entities and return a decision; they never touch the database.
"""

from .age_policy import AgePolicy, calculate_age, is_eligible
from .movie_availability import is_available

__all__ = [
    "AgePolicy",
    "calculate_age",
    "is_eligible",
    "is_available",
]
