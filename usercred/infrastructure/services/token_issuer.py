"""Signed bearer tokens (JWT) for authenticated users.

Tokens are stateless: the issuer keeps no record of what it issued and
there is no revocation list. Expiry is checked against an injectable clock
so that tests can move time forward without sleeping.
"""

import math
import secrets
from datetime import datetime, timedelta, timezone
from typing import Callable, Optional, Union

import jwt
from jwt import PyJWTError
from structlog import get_logger

from usercred.core.config.auth import SYMMETRIC_ALGORITHMS
from usercred.core.config.settings import settings
from usercred.core.exceptions import TokenExpiredError, TokenInvalidError
from usercred.domain.interfaces.security import ITokenIssuer
from usercred.domain.security.logging_service import secure_logging_service
from usercred.domain.value_objects.token import Token, UserClaims

logger = get_logger(__name__)

Clock = Callable[[], datetime]


def system_clock() -> datetime:
    return datetime.now(timezone.utc)


class JwtTokenIssuer(ITokenIssuer):
    """Issues and verifies JWTs bound to a :class:`UserClaims` identity.

    Attributes:
        algorithm: JWS algorithm, e.g. HS256 or RS256.
        issuer: Value of the ``iss`` claim, checked on verify.
        audience: Value of the ``aud`` claim, checked on verify.
    """

    def __init__(
        self,
        signing_key: Optional[str] = None,
        verification_key: Optional[str] = None,
        algorithm: Optional[str] = None,
        issuer: Optional[str] = None,
        audience: Optional[str] = None,
        clock: Clock = system_clock,
    ):
        self.algorithm = algorithm or settings.JWT_ALGORITHM
        self._signing_key = signing_key or settings.signing_key
        if verification_key is None and self.algorithm in SYMMETRIC_ALGORITHMS:
            verification_key = signing_key
        self._verification_key = verification_key or settings.verification_key
        self.issuer = issuer or settings.JWT_ISSUER
        self.audience = audience or settings.JWT_AUDIENCE
        self._clock = clock

    def issue(self, claims: UserClaims, ttl: timedelta) -> Token:
        if ttl <= timedelta(0):
            raise ValueError("Token ttl must be positive")

        now = self._clock()
        # Whole seconds, rounded up, so the advertised expiry matches the signed claim.
        exp = math.ceil((now + ttl).timestamp())
        expires_at = datetime.fromtimestamp(exp, timezone.utc)
        payload = {
            **claims.to_payload(),
            "iss": self.issuer,
            "aud": self.audience,
            "iat": int(now.timestamp()),
            "exp": exp,
            "jti": secrets.token_urlsafe(16),
        }
        value = jwt.encode(payload, self._signing_key, algorithm=self.algorithm)
        logger.debug("Access token issued", user_id=str(claims.id), ttl_seconds=int(ttl.total_seconds()))
        return Token(value=value, expires_at=expires_at)

    def verify(self, token: Union[Token, str]) -> UserClaims:
        raw = token.value if isinstance(token, Token) else token
        if not raw:
            raise TokenInvalidError()

        try:
            payload = jwt.decode(
                raw,
                self._verification_key,
                algorithms=[self.algorithm],
                issuer=self.issuer,
                audience=self.audience,
                # Time-based claims are checked below against the injected clock.
                options={
                    "verify_exp": False,
                    "verify_iat": False,
                    "require": ["exp", "sub", "iss", "aud"],
                },
            )
        except PyJWTError as e:
            logger.info("Token rejected", reason=type(e).__name__, token=secure_logging_service.mask_token(raw))
            raise TokenInvalidError() from e

        exp = payload.get("exp")
        if not isinstance(exp, (int, float)):
            raise TokenInvalidError()
        if self._clock().timestamp() > exp:
            logger.info("Token rejected", reason="expired")
            raise TokenExpiredError()

        try:
            return UserClaims.from_payload(payload)
        except ValueError as e:
            raise TokenInvalidError() from e
