"""
Identity Core - Authentication and user management.
"""

from user_service.kernel.identity.password import PasswordHasher, verify_password, hash_password
from user_service.kernel.identity.jwt import (
    JWTManager,
    AccessTokenPayload,
    extract_bearer_token,
)
from user_service.kernel.identity.dispatch import BackgroundDispatcher, TaskDispatcher
from user_service.kernel.identity.store import (
    Credential,
    Identity,
    SqlAlchemyUserStore,
    UserStore,
)
from user_service.kernel.identity.identity_service import IdentityService

__all__ = [
    "PasswordHasher",
    "verify_password",
    "hash_password",
    "JWTManager",
    "AccessTokenPayload",
    "extract_bearer_token",
    "BackgroundDispatcher",
    "TaskDispatcher",
    "Credential",
    "Identity",
    "SqlAlchemyUserStore",
    "UserStore",
    "IdentityService",
]
