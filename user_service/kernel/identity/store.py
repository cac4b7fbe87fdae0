"""
User persistence: the store contract the identity workflow depends on and
its SQLAlchemy implementation.
"""

from dataclasses import dataclass
from typing import Optional, Protocol

from sqlalchemy import select, update
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from user_service.kernel.identity.errors import NotFoundError
from user_service.kernel.models.user import User

# PostgreSQL SQLSTATE for unique_violation
UNIQUE_VIOLATION = "23505"


@dataclass(frozen=True)
class Identity:
    id: int
    phone_number: str
    full_name: str


@dataclass(frozen=True)
class Credential:
    id: int
    phone_number: str
    hashed_secret: str

    def __repr__(self) -> str:
        return f"Credential(id={self.id}, phone_number={self.phone_number!r})"


@dataclass(frozen=True)
class CreateUserResult:
    id: Optional[int] = None
    phone_number_exists: bool = False


class UserStore(Protocol):
    """Storage operations used by ``IdentityService``."""

    async def create_user(
        self, phone_number: str, full_name: str, hashed_secret: str
    ) -> CreateUserResult:
        ...

    async def find_credential_by_phone(self, phone_number: str) -> Credential:
        ...

    async def find_identity_by_id(self, user_id: int) -> Identity:
        ...

    async def update_identity(self, user_id: int, phone_number: str, full_name: str) -> bool:
        """Returns True when the new phone number is already taken."""
        ...

    async def increment_login_count(self, user_id: int) -> None:
        ...


def is_unique_violation(exc: IntegrityError) -> bool:
    """Tell a uniqueness conflict apart from other integrity errors."""
    orig = exc.orig
    code = getattr(orig, "sqlstate", None) or getattr(orig, "pgcode", None)
    if code is not None:
        return code == UNIQUE_VIOLATION
    if getattr(orig, "sqlite_errorname", None) == "SQLITE_CONSTRAINT_UNIQUE":
        return True
    return "UNIQUE constraint failed" in str(orig)


class SqlAlchemyUserStore:
    """
    ``UserStore`` over an async SQLAlchemy session factory.

    Every call runs in its own short session, so the store can be shared
    by concurrent requests and by detached background jobs.
    """

    def __init__(self, session_maker: async_sessionmaker[AsyncSession]):
        self._session_maker = session_maker

    async def create_user(
        self, phone_number: str, full_name: str, hashed_secret: str
    ) -> CreateUserResult:
        async with self._session_maker() as session:
            user = User(
                phone_number=phone_number,
                full_name=full_name,
                password_hash=hashed_secret,
            )
            session.add(user)
            try:
                await session.commit()
            except IntegrityError as e:
                await session.rollback()
                if is_unique_violation(e):
                    return CreateUserResult(phone_number_exists=True)
                raise
            return CreateUserResult(id=user.id)

    async def find_credential_by_phone(self, phone_number: str) -> Credential:
        async with self._session_maker() as session:
            query = select(User.id, User.phone_number, User.password_hash).where(
                User.phone_number == phone_number
            )
            row = (await session.execute(query)).one_or_none()
        if row is None:
            raise NotFoundError(f"no user with phone number {phone_number}")
        return Credential(id=row.id, phone_number=row.phone_number, hashed_secret=row.password_hash)

    async def find_identity_by_id(self, user_id: int) -> Identity:
        async with self._session_maker() as session:
            query = select(User.id, User.phone_number, User.full_name).where(User.id == user_id)
            row = (await session.execute(query)).one_or_none()
        if row is None:
            raise NotFoundError(f"no user with id {user_id}")
        return Identity(id=row.id, phone_number=row.phone_number, full_name=row.full_name)

    async def update_identity(self, user_id: int, phone_number: str, full_name: str) -> bool:
        async with self._session_maker() as session:
            query = (
                update(User)
                .where(User.id == user_id)
                .values(phone_number=phone_number, full_name=full_name)
            )
            try:
                result = await session.execute(query)
                await session.commit()
            except IntegrityError as e:
                await session.rollback()
                if is_unique_violation(e):
                    return True
                raise
        if result.rowcount == 0:
            raise NotFoundError(f"no user with id {user_id}")
        return False

    async def increment_login_count(self, user_id: int) -> None:
        async with self._session_maker() as session:
            query = (
                update(User)
                .where(User.id == user_id)
                .values(total_login=User.total_login + 1)
            )
            await session.execute(query)
            await session.commit()
