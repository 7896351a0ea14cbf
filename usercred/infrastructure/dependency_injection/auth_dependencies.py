"""Dependency injection for the credential services.

Every provider is a cached factory, so the hasher, the token issuer, the user
store and the credential service are each built once per process and shared
by all requests. The FastAPI lifespan calls them at startup to fail fast on
bad configuration; tests replace them through ``app.dependency_overrides``.
"""

from functools import lru_cache
from typing import Annotated

from fastapi import Depends
from structlog import get_logger

from usercred.core.config.settings import settings
from usercred.domain.interfaces.repositories import IUserRepository
from usercred.domain.interfaces.security import IPasswordHasher, ITokenIssuer
from usercred.domain.interfaces.services import ICredentialService
from usercred.domain.services.credential_service import CredentialService
from usercred.infrastructure.repositories import InMemoryUserRepository, UserRepository
from usercred.infrastructure.services import BcryptPasswordHasher, JwtTokenIssuer

logger = get_logger(__name__)

# ---------------------------------------------------------------------------
# Infrastructure Layer Dependencies
# ---------------------------------------------------------------------------


@lru_cache
def get_password_hasher() -> IPasswordHasher:
    return BcryptPasswordHasher()


@lru_cache
def get_token_issuer() -> ITokenIssuer:
    return JwtTokenIssuer()


@lru_cache
def get_user_repository() -> IUserRepository:
    """Factory that returns the configured user store.

    ``USER_STORE=memory`` selects the in-process store; anything else uses
    the SQL store on ``DATABASE_URL``.
    """
    if settings.USER_STORE == "memory":
        logger.info("Using in-memory user store")
        return InMemoryUserRepository()

    from usercred.infrastructure.database.async_db import AsyncSessionFactory

    return UserRepository(AsyncSessionFactory)


# ---------------------------------------------------------------------------
# Domain Service Dependencies
# ---------------------------------------------------------------------------


@lru_cache
def get_credential_service() -> ICredentialService:
    return CredentialService(
        user_repository=get_user_repository(),
        password_hasher=get_password_hasher(),
        token_issuer=get_token_issuer(),
    )


# ---------------------------------------------------------------------------
# Type aliases for dependency injection
# ---------------------------------------------------------------------------

CredentialServiceDep = Annotated[ICredentialService, Depends(get_credential_service)]
TokenIssuerDep = Annotated[ITokenIssuer, Depends(get_token_issuer)]
