import os

# Settings are read once at import time, so the test environment must be in
# place before anything from usercred is imported.
os.environ["APP_ENV"] = "test"
os.environ["JWT_ALGORITHM"] = "HS256"
os.environ["JWT_SECRET_KEY"] = "test-signing-key-that-is-long-enough-0123456789"
os.environ["BCRYPT_WORK_FACTOR"] = "4"
os.environ["USER_STORE"] = "memory"
os.environ["DATABASE_URL"] = "sqlite+aiosqlite:///:memory:"
os.environ["LOG_JSON"] = "false"

from datetime import datetime, timedelta, timezone

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient

from usercred.core.application import create_application
from usercred.domain.services.credential_service import CredentialService
from usercred.infrastructure.dependency_injection.auth_dependencies import (
    get_credential_service,
    get_token_issuer,
)
from usercred.infrastructure.repositories import InMemoryUserRepository
from usercred.infrastructure.services import BcryptPasswordHasher, JwtTokenIssuer

TEST_SIGNING_KEY = os.environ["JWT_SECRET_KEY"]


class FakeClock:
    """Settable clock for token expiry tests."""

    def __init__(self, now: datetime | None = None):
        self.now = now or datetime(2024, 1, 1, 12, 0, tzinfo=timezone.utc)

    def __call__(self) -> datetime:
        return self.now

    def advance(self, **kwargs) -> None:
        self.now += timedelta(**kwargs)


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def password_hasher():
    return BcryptPasswordHasher(rounds=4)


@pytest.fixture
def token_issuer(clock):
    return JwtTokenIssuer(signing_key=TEST_SIGNING_KEY, algorithm="HS256", clock=clock)


@pytest.fixture
def user_repository():
    return InMemoryUserRepository()


@pytest.fixture
def credential_service(user_repository, password_hasher, token_issuer):
    return CredentialService(
        user_repository=user_repository,
        password_hasher=password_hasher,
        token_issuer=token_issuer,
        token_ttl=timedelta(minutes=15),
        default_timeout=5.0,
    )


@pytest.fixture
def app(credential_service, token_issuer):
    application = create_application()
    application.dependency_overrides[get_credential_service] = lambda: credential_service
    application.dependency_overrides[get_token_issuer] = lambda: token_issuer
    yield application
    application.dependency_overrides.clear()


@pytest_asyncio.fixture
async def async_client(app):
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client
