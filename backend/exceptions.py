"""
Custom exception classes for the application.

This module defines domain-specific exceptions that provide better error handling
and clearer error messages throughout the application. Every business-rule
outcome carries a stable ``kind`` that the API layer maps to a status code.
"""


class ApplicationError(Exception):
    """Base exception for all application errors"""

    kind = "ApplicationError"

    def __init__(self, message: str, details: dict | None = None):
        self.message = message
        self.details = details or {}
        super().__init__(self.message)

    def to_dict(self) -> dict:
        """Serializable form used in API error bodies"""
        return {"kind": self.kind, "message": self.message}


class ConfigurationError(ApplicationError):
    """Raised when there's a configuration issue"""

    kind = "ConfigurationError"

    def __init__(self, message: str, invalid_keys: list[str] | None = None):
        details = {"invalid_keys": invalid_keys} if invalid_keys else {}
        super().__init__(message, details)


class ValidationError(ApplicationError):
    """Raised when a request is structurally malformed"""

    kind = "MalformedRequest"

    def __init__(self, message: str, invalid_fields: dict | None = None):
        details = {"invalid_fields": invalid_fields} if invalid_fields else {}
        super().__init__(message, details)


class NotFoundError(ApplicationError):
    """Raised when a referenced record does not exist"""

    kind = "NotFound"
    entity = "Record"

    def __init__(self, entity_id: int | None = None, message: str | None = None):
        details = {"id": entity_id} if entity_id is not None else {}
        super().__init__(message or f"{self.entity} not found.", details)


class UserNotFoundError(NotFoundError):
    kind = "UserNotFound"
    entity = "User"


class MovieNotFoundError(NotFoundError):
    kind = "MovieNotFound"
    entity = "Movie"


class RentalNotFoundError(NotFoundError):
    kind = "RentalNotFound"
    entity = "Rental"


class PendingRentalError(ApplicationError):
    """Raised when the user still holds an open rental"""

    kind = "PendingRentalExists"

    def __init__(self, user_id: int):
        super().__init__("The user already have a rental!", {"user_id": user_id})


class MovieInRentalError(ApplicationError):
    """Raised when a requested movie is held by another open rental"""

    kind = "MovieAlreadyRented"

    def __init__(self, movie_id: int | None = None):
        details = {"movie_id": movie_id} if movie_id is not None else {}
        super().__init__("Movie already in a rental.", details)


class InsufficientAgeError(ApplicationError):
    """Raised when an adults-only movie is requested by an underage user"""

    kind = "AgeRestricted"

    def __init__(self, user_id: int, movie_id: int):
        super().__init__("Cannot see that movie.", {"user_id": user_id, "movie_id": movie_id})


class RentalAlreadyClosedError(ApplicationError):
    """Raised when finishing a rental that is already closed"""

    kind = "RentalAlreadyClosed"

    def __init__(self, rental_id: int):
        super().__init__("Rental already finished.", {"rental_id": rental_id})


class DataIntegrityError(ApplicationError):
    """Raised when stored data violates an assumption (e.g. a missing birth date)"""

    kind = "DataIntegrityError"

    def __init__(self, message: str, field: str | None = None):
        details = {"field": field} if field else {}
        super().__init__(message, details)


class DatabaseError(ApplicationError):
    """Raised when database operations fail"""

    kind = "DatabaseError"

    def __init__(self, operation: str, message: str):
        details = {"operation": operation}
        super().__init__(message, details)
