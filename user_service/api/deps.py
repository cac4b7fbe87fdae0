"""
FastAPI dependencies for authentication and the identity service.
"""

from functools import lru_cache
from typing import Annotated, Optional

from fastapi import Depends, HTTPException, Request, status

from user_service.config import get_settings
from user_service.database import async_session_maker
from user_service.kernel.identity.dispatch import BackgroundDispatcher
from user_service.kernel.identity.errors import TokenInvalidError
from user_service.kernel.identity.identity_service import IdentityService
from user_service.kernel.identity.jwt import JWTManager, extract_bearer_token
from user_service.kernel.identity.password import PasswordHasher
from user_service.kernel.identity.store import SqlAlchemyUserStore
from user_service.logging_config import get_logger

logger = get_logger(__name__)


@lru_cache
def get_jwt_manager() -> JWTManager:
    """Process-wide JWT manager; its keys are loaded once."""
    return JWTManager.from_settings(get_settings())


@lru_cache
def get_dispatcher() -> BackgroundDispatcher:
    """Process-wide dispatcher for fire-and-forget jobs."""
    return BackgroundDispatcher()


def get_identity_service(
    jwt_manager: Annotated[JWTManager, Depends(get_jwt_manager)],
    dispatcher: Annotated[BackgroundDispatcher, Depends(get_dispatcher)],
) -> IdentityService:
    settings = get_settings()
    return IdentityService(
        store=SqlAlchemyUserStore(async_session_maker),
        hasher=PasswordHasher(settings.bcrypt_cost),
        jwt_manager=jwt_manager,
        dispatcher=dispatcher,
        operation_timeout=settings.operation_timeout_seconds,
    )


Identities = Annotated[IdentityService, Depends(get_identity_service)]


async def get_current_user_id(
    request: Request,
    jwt_manager: Annotated[JWTManager, Depends(get_jwt_manager)],
) -> int:
    """Id of the user the bearer token was issued for, or 403."""
    token = extract_bearer_token(request.headers.get("Authorization"))
    if token is None:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Forbidden",
        )
    
    try:
        return jwt_manager.verify_access_token(token)
    except TokenInvalidError as e:
        logger.info("Rejected access token: %s", e)
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Forbidden",
        )


CurrentUserId = Annotated[int, Depends(get_current_user_id)]


def get_request_id(request: Request) -> Optional[str]:
    """Get request correlation ID (set by RequestIdMiddleware)."""
    return getattr(request.state, "request_id", None)
