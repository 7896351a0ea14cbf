"""Response Pydantic models for the users endpoints."""

from datetime import datetime
from typing import Dict, Optional
from uuid import UUID

from pydantic import BaseModel

from usercred.domain.entities.user import PublicUser, Role
from usercred.domain.interfaces.services import LoginResult


class UserOut(BaseModel):
    """Serialised representation of :class:`~usercred.domain.entities.user.PublicUser`."""

    id: UUID
    username: str
    email: str
    active: bool
    role: Role
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    @classmethod
    def from_public(cls, user: PublicUser) -> "UserOut":
        return cls(
            id=user.id,
            username=user.username,
            email=user.email,
            active=user.active,
            role=user.role,
            created_at=user.created_at,
            updated_at=user.updated_at,
        )


class LoginResponse(BaseModel):
    """Response returned by ``POST /users/login``."""

    user: UserOut
    token: str
    token_type: str = "bearer"
    expires_at: datetime

    @classmethod
    def from_result(cls, result: LoginResult) -> "LoginResponse":
        return cls(
            user=UserOut.from_public(result.user),
            token=result.token.value,
            token_type=result.token.token_type,
            expires_at=result.token.expires_at,
        )


class MessageResponse(BaseModel):
    message: str


class ErrorResponse(BaseModel):
    """Body of every error response."""

    detail: str
    code: str
    errors: Optional[Dict[str, str]] = None
