"""In-process user store.

Used for local runs (``USER_STORE=memory``) and tests. A single
``asyncio.Lock`` serializes writes, which gives ``insert`` the same
at-most-one-wins guarantee as a database unique constraint.
"""

import asyncio
from datetime import datetime, timezone
from typing import Any, Dict, List, Mapping, Optional
from uuid import UUID

from structlog import get_logger

from usercred.core.exceptions import AlreadyExistsError, NotFoundError
from usercred.domain.entities.user import NewUser, User
from usercred.domain.interfaces.repositories import IUserRepository

logger = get_logger(__name__)


class InMemoryUserRepository(IUserRepository):
    """Dict-backed :class:`IUserRepository`.

    Returned users are copies, so callers can never mutate stored state
    without going through ``update_by_id``.
    """

    def __init__(self) -> None:
        self._users: Dict[UUID, User] = {}
        self._lock = asyncio.Lock()

    @staticmethod
    def _copy(user: User) -> User:
        return User(
            id=user.id,
            username=user.username,
            email=user.email,
            password_hash=user.password_hash,
            active=user.active,
            role=user.role,
            created_at=user.created_at,
            updated_at=user.updated_at,
        )

    async def find_by_email(self, email: str) -> Optional[User]:
        email_value = email.strip().lower()
        for user in self._users.values():
            if user.email == email_value:
                return self._copy(user)
        return None

    async def find_by_id(self, user_id: UUID) -> Optional[User]:
        user = self._users.get(user_id)
        return self._copy(user) if user else None

    async def insert(self, new_user: NewUser) -> User:
        email_value = new_user.email.lower()
        async with self._lock:
            for existing in self._users.values():
                if existing.email == email_value or existing.username == new_user.username:
                    raise AlreadyExistsError()
            now = datetime.now(timezone.utc)
            user = User(
                username=new_user.username,
                email=email_value,
                password_hash=new_user.password_hash,
                created_at=now,
                updated_at=now,
            )
            self._users[user.id] = user
        logger.debug("User inserted", user_id=str(user.id), store="memory")
        return self._copy(user)

    async def update_by_id(self, user_id: UUID, fields: Mapping[str, Any]) -> User:
        self._check_updatable(fields)
        async with self._lock:
            user = self._users.get(user_id)
            if user is None:
                raise NotFoundError()
            for name, value in fields.items():
                setattr(user, name, value)
            user.updated_at = datetime.now(timezone.utc)
        return self._copy(user)

    def all(self) -> List[User]:
        return [self._copy(user) for user in self._users.values()]
