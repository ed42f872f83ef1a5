"""
User repository for user-specific data access operations.
"""

from sqlalchemy.orm import Session

from models import User
from services.interfaces import IUserStore
from .base_repository import BaseRepository


class UserRepository(BaseRepository[User], IUserStore):
    """Repository for User model operations."""

    def __init__(self, db: Session):
        super().__init__(db, User)
