"""
SQLAlchemy models for the user service.
"""

from user_service.kernel.models.base import Base, TimestampMixin
from user_service.kernel.models.user import User

__all__ = [
    "Base",
    "TimestampMixin",
    "User",
]
