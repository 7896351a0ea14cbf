"""Password hashing with bcrypt via passlib.

The cost factor is read from configuration and embedded in every hash, so it
can be raised over time without invalidating stored hashes: verification
always uses the cost recorded in the hash itself.
"""

from typing import Optional

import structlog
from passlib.context import CryptContext

from usercred.core.config.settings import settings
from usercred.core.exceptions import InvalidArgumentError
from usercred.domain.interfaces.security import IPasswordHasher

logger = structlog.get_logger(__name__)

# bcrypt only reads the first 72 bytes of its input.
BCRYPT_MAX_BYTES = 72


class BcryptPasswordHasher(IPasswordHasher):
    """bcrypt implementation of :class:`IPasswordHasher`.

    Security:
        - Fresh random salt per hash (handled by bcrypt)
        - Constant-time comparison on verify
        - Inputs longer than bcrypt's 72-byte window are rejected instead of
          silently truncated, so two distinct passwords never collide
    """

    def __init__(self, rounds: Optional[int] = None):
        self.rounds = rounds or settings.BCRYPT_WORK_FACTOR
        self._context = CryptContext(
            schemes=["bcrypt"],
            deprecated="auto",
            bcrypt__rounds=self.rounds,
        )
        logger.debug("Password hasher initialized", scheme="bcrypt", rounds=self.rounds)

    @staticmethod
    def _exceeds_limit(password: str) -> bool:
        return len(password.encode("utf-8")) > BCRYPT_MAX_BYTES

    def hash(self, password: str) -> str:
        if not password:
            raise InvalidArgumentError("Password is required for hashing")
        if self._exceeds_limit(password):
            raise InvalidArgumentError("Password is too long to hash")
        return self._context.hash(password)

    def verify(self, password: str, hashed: str) -> bool:
        if not password or not hashed:
            raise InvalidArgumentError("Both password and hash are required for comparison")
        if self._exceeds_limit(password):
            # Could never have been hashed, so it cannot match.
            return False
        try:
            return self._context.verify(password, hashed)
        except ValueError:
            logger.warning("Stored password hash is malformed")
            return False
