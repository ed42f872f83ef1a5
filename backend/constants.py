"""
Application-wide constants and configuration keys.

This module centralizes all magic strings and numbers used throughout the application
to improve maintainability and reduce duplication.
"""


class RentalPolicy:
    """Business rule defaults (overridable through config.settings)"""

    RENTAL_PERIOD_DAYS = 3  # Days between a rental's date and its end date
    ADULT_AGE = 18  # Minimum whole-year age for adults-only movies


class ServerConfig:
    """Server configuration constants"""

    HOST = "0.0.0.0"
    PORT = 5000


class LoggingConfig:
    """Rotating log file configuration"""

    FILE_NAME = "backend.log"
    FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'
    MAX_BYTES = 10 * 1024 * 1024  # 10MB
    BACKUP_COUNT = 5


class DatabaseConfig:
    """Database connection tuning and key limits"""

    BUSY_TIMEOUT_MS = 5000  # Wait up to 5s for locks instead of failing immediately
    POOL_SIZE = 20
    MAX_OVERFLOW = 30
    POOL_RECYCLE_SECONDS = 3600
    MAX_ID = 2**63 - 1  # Largest value an INTEGER primary key can hold


class HTTPStatus:
    """HTTP status codes used throughout the application"""

    # Success
    OK = 200
    CREATED = 201

    # Client Errors
    BAD_REQUEST = 400
    PAYMENT_REQUIRED = 402
    FORBIDDEN = 403
    NOT_FOUND = 404
    CONFLICT = 409
    UNPROCESSABLE_ENTITY = 422

    # Server Errors
    INTERNAL_SERVER_ERROR = 500
    SERVICE_UNAVAILABLE = 503
