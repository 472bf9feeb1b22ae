"""Shared fixtures: per-test SQLite database, cipher, stub validator, HTTP client."""

import os

os.environ.setdefault("FRIDGECHEF_ENCRYPTION_SECRET", "test-master-secret")
os.environ.setdefault("FRIDGECHEF_ENV", "test")

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine

from fridgechef.database import Base, get_db
from fridgechef.errors import InvalidCredentialError, ProviderUnavailableError
from fridgechef.main import app
from fridgechef.models.user import User
from fridgechef.services.key_validator import get_validator
from fridgechef.utils.crypto import MasterSecret, SecretCipher, get_cipher


class StubValidator:
    """Stands in for ProviderKeyValidator; ``outcome`` is accept|reject|unavailable."""

    def __init__(self) -> None:
        self.outcome = "accept"
        self.calls: list[tuple[str, str, str]] = []

    async def validate(self, secret: str, provider: str, model: str) -> None:
        self.calls.append((secret, provider, model))
        if self.outcome == "reject":
            raise InvalidCredentialError(f"Invalid {provider} API key. Please check your API key.")
        if self.outcome == "unavailable":
            raise ProviderUnavailableError(f"Could not reach {provider} API")


@pytest_asyncio.fixture
async def session_factory(tmp_path):
    engine = create_async_engine(f"sqlite+aiosqlite:///{tmp_path / 'test.db'}")
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)
    await engine.dispose()


@pytest_asyncio.fixture
async def db(session_factory):
    async with session_factory() as session:
        yield session


@pytest.fixture
def cipher() -> SecretCipher:
    return SecretCipher(MasterSecret("test-master-secret"))


@pytest.fixture
def validator() -> StubValidator:
    return StubValidator()


@pytest_asyncio.fixture
async def user_id(db) -> str:
    user = User(name="Test Cook", email="cook@example.com")
    db.add(user)
    await db.commit()
    return user.id


@pytest_asyncio.fixture
async def client(session_factory, cipher, validator):
    async def _get_db():
        async with session_factory() as session:
            yield session

    app.dependency_overrides[get_db] = _get_db
    app.dependency_overrides[get_cipher] = lambda: cipher
    app.dependency_overrides[get_validator] = lambda: validator
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as ac:
        yield ac
    app.dependency_overrides.clear()
