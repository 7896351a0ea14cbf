"""Token value objects.

A token binds a user identity (the claims) to an expiry. Tokens are stateless:
nothing about an issued token is stored server-side.
"""

from dataclasses import dataclass
from datetime import datetime
from typing import Any, ClassVar, Dict, Mapping
from uuid import UUID


@dataclass(frozen=True)
class UserClaims:
    """Identity attributes carried inside a bearer token."""

    id: UUID
    username: str
    email: str

    REQUIRED: ClassVar[tuple] = ("sub", "username", "email")

    def to_payload(self) -> Dict[str, Any]:
        return {"sub": str(self.id), "username": self.username, "email": self.email}

    @classmethod
    def from_payload(cls, payload: Mapping[str, Any]) -> "UserClaims":
        """Build claims from a decoded token payload.

        Raises:
            ValueError: If a claim is missing or the subject is not a UUID.
        """
        missing = [name for name in cls.REQUIRED if not payload.get(name)]
        if missing:
            raise ValueError(f"Missing required claims: {missing}")
        return cls(
            id=UUID(str(payload["sub"])),
            username=str(payload["username"]),
            email=str(payload["email"]),
        )


@dataclass(frozen=True)
class Token:
    """An issued bearer token and its expiry."""

    value: str
    expires_at: datetime
    token_type: str = "bearer"

    def __post_init__(self):
        if not self.value:
            raise ValueError("Token value cannot be empty")
        if len(self.value.split(".")) != 3:
            raise ValueError("Invalid JWT token format")

    def __str__(self) -> str:
        return self.value

    def __repr__(self) -> str:
        return f"Token(token_type={self.token_type!r}, expires_at={self.expires_at.isoformat()!r})"
