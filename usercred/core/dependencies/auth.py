from __future__ import annotations

from typing import Annotated, Optional

from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from usercred.core.exceptions import AuthenticationError
from usercred.domain.value_objects.token import UserClaims
from usercred.infrastructure.dependency_injection.auth_dependencies import TokenIssuerDep

__all__ = [
    "get_current_claims",
    "CurrentClaims",
]


# ``auto_error`` is off so a missing header reaches the 401 handler with the
# standard error body instead of FastAPI's 403.
bearer_scheme = HTTPBearer(auto_error=False)


async def get_current_claims(  # noqa: D401
    token_issuer: TokenIssuerDep,
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(bearer_scheme),
) -> UserClaims:
    """Return the claims of the bearer token on the request.

    Only the token is checked; no store lookup happens here.

    Raises:
        AuthenticationError: If no bearer token was sent.
        TokenInvalidError: If the token is malformed or badly signed.
        TokenExpiredError: If the token is past its expiry.
    """
    if credentials is None or not credentials.credentials:
        raise AuthenticationError()
    return token_issuer.verify(credentials.credentials)


CurrentClaims = Annotated[UserClaims, Depends(get_current_claims)]
