"""
Age Policy

Decides whether a user may rent a movie based on the movie's adults-only flag
and the user's age in whole years.
"""

from datetime import date, datetime
from typing import Optional

from config.settings import settings
from exceptions import DataIntegrityError
from utils.datetime_utils import utc_today


def _as_date(birth_date) -> date:
    if isinstance(birth_date, datetime):
        return birth_date.date()
    if isinstance(birth_date, date):
        return birth_date
    raise DataIntegrityError(f"Invalid birth date: {birth_date!r}", field="birth_date")


def calculate_age(birth_date, today: Optional[date] = None) -> int:
    """
    Age in whole years on ``today`` (defaults to the current UTC date).

    Raises:
        DataIntegrityError: If birth_date is missing or not a date
    """
    born = _as_date(birth_date)
    today = today or utc_today()
    age = today.year - born.year
    if (today.month, today.day) < (born.month, born.day):
        age -= 1
    return age


class AgePolicy:
    """Adults-only gate with a configurable threshold."""

    def __init__(self, adult_age: Optional[int] = None):
        self.adult_age = adult_age if adult_age is not None else settings.adult_age

    def is_eligible(self, birth_date, adults_only: bool, today: Optional[date] = None) -> bool:
        if not adults_only:
            return True
        return calculate_age(birth_date, today) >= self.adult_age


def is_eligible(birth_date, adults_only: bool, today: Optional[date] = None) -> bool:
    """Module-level shortcut using the configured adult age"""
    return AgePolicy().is_eligible(birth_date, adults_only, today)
