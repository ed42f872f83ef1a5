"""
Internal Rental DTOs

DTOs passed from the rental validator to the lifecycle service.
"""

from dataclasses import dataclass
from typing import Tuple


@dataclass(frozen=True)
class RentalRequest:
    """
    A rental request that passed every business check and is safe to persist.

    Only the rental validator builds these.
    """

    user_id: int
    movie_ids: Tuple[int, ...]
