"""
User model for identity management.
"""

from sqlalchemy import Integer, String
from sqlalchemy.orm import Mapped, mapped_column

from user_service.kernel.models.base import Base, BigIntegerId, TimestampMixin


class User(Base, TimestampMixin):
    """User account model. ``phone_number`` is the natural key."""
    
    __tablename__ = "users"
    
    id: Mapped[int] = mapped_column(
        BigIntegerId,
        primary_key=True,
        autoincrement=True,
    )
    phone_number: Mapped[str] = mapped_column(
        String(13),
        unique=True,
        index=True,
        nullable=False,
    )
    full_name: Mapped[str] = mapped_column(
        String(60),
        nullable=False,
    )
    password_hash: Mapped[str] = mapped_column(
        String(255),
        nullable=False,
    )
    total_login: Mapped[int] = mapped_column(
        Integer,
        default=0,
        server_default="0",
        nullable=False,
    )
    
    def __repr__(self) -> str:
        return f"<User {self.id}>"
