"""User Repository implementation using SQLAlchemy.

The repository is built once at startup around a session factory and opens
a short-lived ``AsyncSession`` per call, so it can be shared by all requests.

The database's unique constraints on ``username`` and ``email`` make
``insert`` atomic: when two registrations race, the loser's commit fails with
an ``IntegrityError``, which is reported as ``AlreadyExistsError``.
Connection-level failures are reported as ``UnavailableError``.
"""

from datetime import datetime, timezone
from typing import Any, Mapping, Optional
from uuid import UUID

from sqlalchemy import func, select
from sqlalchemy.exc import IntegrityError, InterfaceError, OperationalError
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker
from structlog import get_logger

from usercred.core.exceptions import AlreadyExistsError, NotFoundError, UnavailableError
from usercred.domain.entities.user import NewUser, User
from usercred.domain.interfaces.repositories import IUserRepository
from usercred.domain.security.logging_service import secure_logging_service

logger = get_logger(__name__)

CONNECTION_ERRORS = (OperationalError, InterfaceError)


class UserRepository(IUserRepository):
    """SQLAlchemy implementation of :class:`IUserRepository`.

    Args:
        session_factory: Factory producing ``AsyncSession`` objects; sessions
            must be created with ``expire_on_commit=False`` so returned users
            stay readable after commit.
    """

    def __init__(self, session_factory: async_sessionmaker[AsyncSession]):
        self._session_factory = session_factory

    async def find_by_email(self, email: str) -> Optional[User]:
        email_value = email.strip().lower()
        try:
            async with self._session_factory() as session:
                statement = select(User).where(func.lower(User.email) == email_value)
                result = await session.execute(statement)
                user = result.scalars().first()
        except CONNECTION_ERRORS as e:
            logger.error("Error retrieving user by email", error_type=type(e).__name__, operation="find_by_email")
            raise UnavailableError() from e

        logger.debug(
            "User lookup by email completed",
            email=secure_logging_service.mask_email(email_value),
            found=user is not None,
            operation="find_by_email",
        )
        return user

    async def find_by_id(self, user_id: UUID) -> Optional[User]:
        try:
            async with self._session_factory() as session:
                user = await session.get(User, user_id)
        except CONNECTION_ERRORS as e:
            logger.error("Error retrieving user by ID", error_type=type(e).__name__, operation="find_by_id")
            raise UnavailableError() from e

        logger.debug("User lookup by ID completed", user_id=str(user_id), found=user is not None, operation="find_by_id")
        return user

    async def insert(self, new_user: NewUser) -> User:
        now = datetime.now(timezone.utc)
        user = User(
            username=new_user.username,
            email=new_user.email.lower(),
            password_hash=new_user.password_hash,
            created_at=now,
            updated_at=now,
        )
        async with self._session_factory() as session:
            try:
                session.add(user)
                await session.commit()
                await session.refresh(user)
            except IntegrityError as e:
                await session.rollback()
                logger.info(
                    "Insert rejected by uniqueness constraint",
                    username=secure_logging_service.mask_username(new_user.username),
                    email=secure_logging_service.mask_email(new_user.email),
                    operation="insert",
                )
                raise AlreadyExistsError() from e
            except CONNECTION_ERRORS as e:
                await session.rollback()
                logger.error("Error inserting user", error_type=type(e).__name__, operation="insert")
                raise UnavailableError() from e

        logger.info("User inserted", user_id=str(user.id), operation="insert")
        return user

    async def update_by_id(self, user_id: UUID, fields: Mapping[str, Any]) -> User:
        self._check_updatable(fields)
        async with self._session_factory() as session:
            try:
                user = await session.get(User, user_id)
                if user is None:
                    raise NotFoundError()
                for name, value in fields.items():
                    setattr(user, name, value)
                user.updated_at = datetime.now(timezone.utc)
                await session.commit()
                await session.refresh(user)
            except CONNECTION_ERRORS as e:
                await session.rollback()
                logger.error(
                    "Error updating user",
                    user_id=str(user_id),
                    error_type=type(e).__name__,
                    operation="update_by_id",
                )
                raise UnavailableError() from e

        logger.info("User updated", user_id=str(user_id), fields=sorted(fields), operation="update_by_id")
        return user
