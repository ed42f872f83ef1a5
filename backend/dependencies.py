"""
Dependency injection providers for FastAPI.

This module provides factory functions for creating repository and service instances,
following the Dependency Inversion Principle. Tests swap the database session
through ``app.dependency_overrides[get_db]``.
"""

from sqlalchemy.orm import Session
from fastapi import Depends
from database import get_db
from services.rental_service import RentalService


def get_rental_service(db: Session = Depends(get_db)) -> RentalService:
    """
    Factory function for creating RentalService instances.

    Args:
        db: Database session (injected)

    Returns:
        RentalService bound to the request's session
    """
    return RentalService(db)
