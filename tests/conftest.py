"""
Pytest fixtures for user service tests.
"""

import os
import tempfile

# Point the app at SQLite before anything reads settings
_tmp = tempfile.NamedTemporaryFile(suffix=".db", delete=False)
_tmp.close()
os.environ.setdefault("DATABASE_URL", f"sqlite+aiosqlite:///{_tmp.name}")

from typing import AsyncGenerator, Awaitable, Callable, List, Tuple

import pytest
import pytest_asyncio
from cryptography.hazmat.primitives import serialization
from cryptography.hazmat.primitives.asymmetric import rsa
from httpx import ASGITransport, AsyncClient
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker

from user_service.config import get_settings

get_settings.cache_clear()

from user_service.api.deps import get_identity_service, get_jwt_manager
from user_service.database import create_engine, create_session_maker, init_db
from user_service.kernel.identity.identity_service import IdentityService
from user_service.kernel.identity.jwt import JWTManager
from user_service.kernel.identity.password import PasswordHasher
from user_service.kernel.identity.store import SqlAlchemyUserStore
from user_service.kernel.models.user import User
from user_service.main import app


def _generate_pem_pair() -> Tuple[str, str]:
    key = rsa.generate_private_key(public_exponent=65537, key_size=2048)
    private_pem = key.private_bytes(
        encoding=serialization.Encoding.PEM,
        format=serialization.PrivateFormat.TraditionalOpenSSL,
        encryption_algorithm=serialization.NoEncryption(),
    ).decode()
    public_pem = key.public_key().public_bytes(
        encoding=serialization.Encoding.PEM,
        format=serialization.PublicFormat.SubjectPublicKeyInfo,
    ).decode()
    return private_pem, public_pem


@pytest.fixture(scope="session")
def rsa_keys() -> Tuple[str, str]:
    """(private_pem, public_pem) shared by the whole session."""
    return _generate_pem_pair()


@pytest.fixture(scope="session")
def foreign_rsa_keys() -> Tuple[str, str]:
    """A second, unrelated key pair."""
    return _generate_pem_pair()


@pytest.fixture
def jwt_manager(rsa_keys) -> JWTManager:
    """Create a JWT manager for tests."""
    private_pem, public_pem = rsa_keys
    return JWTManager(
        private_key=private_pem,
        public_key=public_pem,
        access_token_expire_minutes=60,
    )


@pytest.fixture
def hasher() -> PasswordHasher:
    """Cheapest bcrypt cost, to keep the suite fast."""
    return PasswordHasher(rounds=4)


class RecordingDispatcher:
    """Collects dispatched jobs instead of running them."""

    def __init__(self) -> None:
        self.jobs: List[Tuple[str, Callable[[], Awaitable[None]]]] = []

    def dispatch(self, name: str, job: Callable[[], Awaitable[None]]) -> None:
        self.jobs.append((name, job))

    async def run_all(self) -> None:
        for _, job in self.jobs:
            await job()
        self.jobs.clear()


@pytest.fixture
def dispatcher() -> RecordingDispatcher:
    return RecordingDispatcher()


@pytest_asyncio.fixture
async def db_engine(tmp_path) -> AsyncGenerator[AsyncEngine, None]:
    """A fresh SQLite database file per test."""
    engine = create_engine(f"sqlite+aiosqlite:///{tmp_path / 'users.db'}")
    await init_db(engine)
    yield engine
    await engine.dispose()


@pytest.fixture
def session_maker(db_engine) -> async_sessionmaker[AsyncSession]:
    return create_session_maker(db_engine)


@pytest.fixture
def user_store(session_maker) -> SqlAlchemyUserStore:
    return SqlAlchemyUserStore(session_maker)


@pytest.fixture
def identity_service(user_store, hasher, jwt_manager, dispatcher) -> IdentityService:
    return IdentityService(
        store=user_store,
        hasher=hasher,
        jwt_manager=jwt_manager,
        dispatcher=dispatcher,
        operation_timeout=5.0,
    )


@pytest_asyncio.fixture
async def client(identity_service, jwt_manager) -> AsyncGenerator[AsyncClient, None]:
    """HTTP client against the app, wired to the test database and keys."""
    app.dependency_overrides[get_identity_service] = lambda: identity_service
    app.dependency_overrides[get_jwt_manager] = lambda: jwt_manager
    transport = ASGITransport(app=app, raise_app_exceptions=False)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac
    app.dependency_overrides.clear()


@pytest.fixture
def api_prefix() -> str:
    return get_settings().api_v1_prefix


@pytest.fixture
def auth_headers() -> Callable[[str], dict]:
    """Build an Authorization header for a token."""
    def _headers(token: str) -> dict:
        return {"Authorization": f"Bearer {token}"}
    return _headers


@pytest.fixture
def login_count(session_maker) -> Callable[[int], Awaitable[int]]:
    """Read a user's total_login straight from the database."""
    async def _count(user_id: int) -> int:
        async with session_maker() as session:
            query = select(User.total_login).where(User.id == user_id)
            return (await session.execute(query)).scalar_one()
    return _count
