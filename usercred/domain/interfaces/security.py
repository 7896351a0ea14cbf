"""Security service interfaces: password hashing and token issuance.

Both services are pure functions of their inputs plus read-only, process-wide
configuration, so a single instance is shared by all requests and may be
called from worker threads without locking.
"""

from abc import ABC, abstractmethod
from datetime import timedelta
from typing import Union

from usercred.domain.value_objects.token import Token, UserClaims


class IPasswordHasher(ABC):
    """One-way, salted, adaptive password hashing."""

    @abstractmethod
    def hash(self, password: str) -> str:
        """Hashes a password with a fresh random salt.

        Args:
            password: The plaintext password.

        Returns:
            A self-describing string holding algorithm, cost, salt and digest.

        Raises:
            InvalidArgumentError: If `password` is empty or cannot be hashed
                without truncation.
        """
        raise NotImplementedError

    @abstractmethod
    def verify(self, password: str, hashed: str) -> bool:
        """Checks a password against a stored hash in constant time.

        Args:
            password: The plaintext candidate.
            hashed: A string produced by :meth:`hash`.

        Returns:
            `True` on a match, `False` otherwise.

        Raises:
            InvalidArgumentError: If either argument is empty.
        """
        raise NotImplementedError


class ITokenIssuer(ABC):
    """Issues and verifies signed, short-lived bearer tokens."""

    @abstractmethod
    def issue(self, claims: UserClaims, ttl: timedelta) -> Token:
        """Signs a token embedding `claims` that expires at ``now + ttl``."""
        raise NotImplementedError

    @abstractmethod
    def verify(self, token: Union[Token, str]) -> UserClaims:
        """Verifies a token and returns its claims unchanged.

        Raises:
            TokenInvalidError: If the signature or structure is bad.
            TokenExpiredError: If the token is past its expiry.
        """
        raise NotImplementedError
