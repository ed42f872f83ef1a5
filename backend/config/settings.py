"""
Runtime Configuration

Reads the rental backend's settings from environment variables once at import.
Every variable is optional; defaults match a local single-node deployment
backed by a SQLite file in the user's home directory.

Variables:
- RENTALS_DATA_DIR: base directory for the database and logs
- RENTALS_DATABASE_URL: SQLAlchemy URL (defaults to <data dir>/rentals.db)
- RENTALS_LOG_DIR: directory for the rotating log file
- RENTALS_LOG_LEVEL: root log level name
- RENTALS_RENTAL_PERIOD_DAYS: days between a rental's date and its end date
- RENTALS_ADULT_AGE: minimum age for adults-only movies
- RENTALS_HOST / RENTALS_PORT: bind address for the uvicorn server
"""
import os
import logging
from dataclasses import dataclass
from pathlib import Path

from constants import RentalPolicy, ServerConfig
from exceptions import ConfigurationError

logger = logging.getLogger(__name__)

_LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


def _read_positive_int(name: str, default: int) -> int:
    """
    Read a positive integer from the environment.

    Raises:
        ConfigurationError: If the variable is set but not a positive integer
    """
    raw = os.environ.get(name)
    if raw is None or raw.strip() == "":
        return default
    try:
        value = int(raw)
    except ValueError:
        raise ConfigurationError(f"{name} must be an integer, got {raw!r}", [name])
    if value <= 0:
        raise ConfigurationError(f"{name} must be positive, got {value}", [name])
    return value


@dataclass(frozen=True)
class Settings:
    data_dir: Path
    database_url: str
    log_dir: Path
    log_level: str
    rental_period_days: int
    adult_age: int
    host: str
    port: int


def load_settings() -> Settings:
    """
    Build a Settings instance from the current environment.

    Returns:
        Settings with defaults applied

    Raises:
        ConfigurationError: If any variable holds an invalid value
    """
    data_dir = Path(os.environ.get("RENTALS_DATA_DIR") or Path.home() / ".movie-rentals")
    database_url = os.environ.get("RENTALS_DATABASE_URL") or f"sqlite:///{data_dir / 'rentals.db'}"
    log_dir = Path(os.environ.get("RENTALS_LOG_DIR") or data_dir / "logs")

    log_level = os.environ.get("RENTALS_LOG_LEVEL", "INFO").upper()
    if log_level not in _LOG_LEVELS:
        raise ConfigurationError(f"RENTALS_LOG_LEVEL must be one of {', '.join(_LOG_LEVELS)}", ["RENTALS_LOG_LEVEL"])

    return Settings(
        data_dir=data_dir,
        database_url=database_url,
        log_dir=log_dir,
        log_level=log_level,
        rental_period_days=_read_positive_int("RENTALS_RENTAL_PERIOD_DAYS", RentalPolicy.RENTAL_PERIOD_DAYS),
        adult_age=_read_positive_int("RENTALS_ADULT_AGE", RentalPolicy.ADULT_AGE),
        host=os.environ.get("RENTALS_HOST") or ServerConfig.HOST,
        port=_read_positive_int("RENTALS_PORT", ServerConfig.PORT),
    )


settings = load_settings()
