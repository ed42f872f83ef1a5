"""
RentalStatus Value Object

Immutable representation of where a rental sits in its lifecycle.
"""

from enum import Enum


class RentalStatus(str, Enum):
    """
    Rental lifecycle: OPEN -> CLOSED, exactly once.

    The database stores this as the boolean ``closed`` column; this enum
    gives services a type-safe view of it.
    """

    OPEN = "open"
    CLOSED = "closed"

    def is_terminal(self) -> bool:
        """Check if this state is terminal (no further transitions)."""
        return self is RentalStatus.CLOSED

    def can_transition_to(self, new_status: "RentalStatus") -> bool:
        """
        Check if transition to new status is valid.

        Args:
            new_status: Target status

        Returns:
            True if transition is allowed
        """
        valid_transitions = {
            RentalStatus.OPEN: {RentalStatus.CLOSED},
            RentalStatus.CLOSED: set(),
        }

        return new_status in valid_transitions.get(self, set())

    @classmethod
    def of(cls, rental) -> "RentalStatus":
        """Status of a rental record (anything with a ``closed`` attribute)."""
        return cls.CLOSED if rental.closed else cls.OPEN
