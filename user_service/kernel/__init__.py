"""
Stable Kernel Layer

- Identity Core (credentials, tokens, profile workflow)
- Models (SQLAlchemy table definitions)

Invariants:
- Password hashes and tokens are never logged or returned to callers
- Phone number uniqueness is enforced by the database constraint alone
"""

from user_service.kernel.models import User

__all__ = [
    "User",
]
