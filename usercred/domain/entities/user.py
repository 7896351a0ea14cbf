from dataclasses import dataclass
from datetime import datetime, timezone
from enum import Enum
from typing import Optional
from uuid import UUID, uuid4

from sqlalchemy import DateTime
from sqlalchemy import Enum as SAEnum
from sqlmodel import Column, Field, SQLModel, String


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


class Role(str, Enum):
    """Represents the role of a user within the system.

    Attributes:
        ADMIN: Confers administrative privileges.
        USER: Represents a standard user. Every registered account starts here.
    """

    ADMIN = "admin"
    USER = "user"


class User(SQLModel, table=True):
    """Represents a stored User record.

    The record is owned by the user store: only the store assigns ``id``,
    ``created_at`` and ``updated_at``. ``password_hash`` holds the opaque
    bcrypt string and must never leave the domain layer; callers receive a
    :class:`PublicUser` instead.

    Attributes:
        id: Immutable UUID assigned at creation.
        username: Unique username, 3-30 characters.
        email: Unique, lowercased email address.
        password_hash: Self-describing bcrypt hash (cost, salt and digest).
        active: Inactive users cannot log in.
        role: The user's role. Not settable through registration.
        created_at: When the record was inserted.
        updated_at: When the record was last modified.
    """

    __tablename__ = "users"

    id: UUID = Field(
        default_factory=uuid4,
        primary_key=True,
        description="The unique identifier for the user.",
    )
    username: str = Field(
        sa_column=Column(String(30), unique=True, index=True, nullable=False),
        description="Unique username.",
    )
    email: str = Field(
        sa_column=Column(String(254), unique=True, index=True, nullable=False),
        description="Unique, lowercased email address.",
    )
    password_hash: str = Field(
        sa_column=Column(String(255), nullable=False),
        description="Bcrypt hash of the password.",
    )
    active: bool = Field(default=True)
    role: Role = Field(
        default=Role.USER,
        sa_column=Column(
            SAEnum(Role, name="role", values_callable=lambda roles: [r.value for r in roles]),
            nullable=False,
            default=Role.USER,
        ),
    )
    created_at: datetime = Field(
        default_factory=utcnow,
        sa_column=Column(DateTime(timezone=True), nullable=False),
    )
    updated_at: datetime = Field(
        default_factory=utcnow,
        sa_column=Column(DateTime(timezone=True), nullable=False),
    )


@dataclass(frozen=True)
class NewUser:
    """Insert payload for a registration. Carries no role or active flag."""

    username: str
    email: str
    password_hash: str

    def __repr__(self) -> str:
        return f"NewUser(username={self.username!r}, email={self.email!r})"


@dataclass(frozen=True)
class PublicUser:
    """The outward view of a user: every field except the password hash."""

    id: UUID
    username: str
    email: str
    active: bool
    role: Role
    created_at: Optional[datetime]
    updated_at: Optional[datetime]

    @classmethod
    def from_entity(cls, user: User) -> "PublicUser":
        return cls(
            id=user.id,
            username=user.username,
            email=user.email,
            active=user.active,
            role=Role(user.role),
            created_at=user.created_at,
            updated_at=user.updated_at,
        )
