"""
Identity service for user management operations.
"""

import asyncio
from typing import Awaitable, Optional, TypeVar

from user_service.kernel.identity.dispatch import TaskDispatcher
from user_service.kernel.identity.errors import NotFoundError
from user_service.kernel.identity.jwt import JWTManager
from user_service.kernel.identity.outcomes import (
    Conflict,
    IssuedToken,
    LoginOutcome,
    NotFound,
    RegisterOutcome,
    Success,
    UpdateOutcome,
    WrongCredential,
)
from user_service.kernel.identity.password import PasswordHasher
from user_service.kernel.identity.store import Identity, UserStore
from user_service.logging_config import get_logger

logger = get_logger(__name__)

T = TypeVar("T")


class IdentityService:
    """
    Service for user identity operations.

    Handles registration, login, and profile reads and updates. Inputs are
    expected to have passed the shape rules in ``validation`` already.
    Phone number uniqueness is left to the store's constraint; conflicts
    come back as ``Conflict`` values rather than exceptions.
    """

    def __init__(
        self,
        store: UserStore,
        hasher: PasswordHasher,
        jwt_manager: JWTManager,
        dispatcher: TaskDispatcher,
        operation_timeout: Optional[float] = None,
    ):
        self.store = store
        self.hasher = hasher
        self.jwt_manager = jwt_manager
        self.dispatcher = dispatcher
        self.operation_timeout = operation_timeout

    async def _bounded(self, awaitable: Awaitable[T]) -> T:
        if self.operation_timeout is None:
            return await awaitable
        return await asyncio.wait_for(awaitable, timeout=self.operation_timeout)

    async def register_user(
        self,
        phone_number: str,
        full_name: str,
        password: str,
    ) -> RegisterOutcome:
        """
        Register a new user.

        Args:
            phone_number: User's phone number (unique)
            full_name: User's full name
            password: Plain text password

        Returns:
            ``Success`` with the new user id, or ``Conflict`` if the phone
            number is already registered

        Raises:
            HashingError: If the password cannot be hashed; the store is
                not touched in that case
        """
        password_hash = await self._bounded(asyncio.to_thread(self.hasher.hash, password))

        result = await self._bounded(
            self.store.create_user(phone_number, full_name, password_hash)
        )
        if result.phone_number_exists:
            logger.info("Registration rejected: phone number taken")
            return Conflict()

        logger.info("User registered", extra={"user_id": result.id})
        return Success(result.id)

    async def authenticate(
        self,
        phone_number: str,
        password: str,
    ) -> LoginOutcome:
        """
        Check a phone number and password and issue an access token.

        On success the user's login counter is bumped in the background;
        that update never delays or fails the login.

        Returns:
            ``Success`` with the issued token, ``NotFound`` for an unknown
            phone number, or ``WrongCredential`` for a wrong password
        """
        try:
            credential = await self._bounded(self.store.find_credential_by_phone(phone_number))
        except NotFoundError:
            return NotFound()

        matched = await self._bounded(
            asyncio.to_thread(self.hasher.verify, password, credential.hashed_secret)
        )
        if not matched:
            logger.info("Login rejected: wrong password", extra={"user_id": credential.id})
            return WrongCredential()

        token, expires_at = self.jwt_manager.create_access_token(credential.id)

        user_id = credential.id

        async def bump_login_count() -> None:
            await self._bounded(self.store.increment_login_count(user_id))

        self.dispatcher.dispatch("increment_login_count", bump_login_count)

        logger.info("User logged in", extra={"user_id": user_id})
        return Success(IssuedToken(user_id=user_id, token=token, expires_at=expires_at))

    async def get_profile(self, user_id: int) -> Identity:
        """
        Get a user's profile.

        Raises:
            NotFoundError: If no user has this id
        """
        return await self._bounded(self.store.find_identity_by_id(user_id))

    async def update_profile(
        self,
        user_id: int,
        phone_number: Optional[str] = None,
        full_name: Optional[str] = None,
    ) -> UpdateOutcome:
        """
        Update user profile.

        Empty or missing fields keep their stored value; the merged record
        is written back in full.

        Args:
            user_id: The user's ID
            phone_number: New phone number (optional)
            full_name: New full name (optional)

        Returns:
            ``Success`` with the user id, or ``Conflict`` if the new phone
            number belongs to someone else

        Raises:
            NotFoundError: If no user has this id
        """
        current = await self.get_profile(user_id)

        new_phone_number = phone_number or current.phone_number
        new_full_name = full_name or current.full_name

        phone_number_exists = await self._bounded(
            self.store.update_identity(user_id, new_phone_number, new_full_name)
        )
        if phone_number_exists:
            logger.info("Profile update rejected: phone number taken", extra={"user_id": user_id})
            return Conflict()

        logger.info("Profile updated", extra={"user_id": user_id})
        return Success(user_id)
