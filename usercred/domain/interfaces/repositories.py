"""Repository interfaces for abstracting data persistence in the domain layer.

The credential service depends on :class:`IUserRepository` only; concrete
adapters live in :mod:`usercred.infrastructure.repositories`. The service
never assumes that two separate repository calls are atomic together: the
store's own uniqueness constraint on ``insert`` is the authoritative signal.
"""

from abc import ABC, abstractmethod
from typing import Any, Mapping, Optional
from uuid import UUID

from usercred.domain.entities.user import NewUser, User


class IUserRepository(ABC):
    """An interface defining the contract for user persistence operations.

    Implementations report a connection outage as
    :class:`~usercred.core.exceptions.UnavailableError`.
    """

    #: Fields that ``update_by_id`` accepts.
    UPDATABLE_FIELDS = frozenset({"password_hash"})

    @abstractmethod
    async def find_by_email(self, email: str) -> Optional[User]:
        """Retrieves a user by email address (case-insensitively).

        Args:
            email: The email address to search for.

        Returns:
            The `User`, or `None` if no user has that email.
        """
        raise NotImplementedError

    @abstractmethod
    async def find_by_id(self, user_id: UUID) -> Optional[User]:
        """Retrieves a user by their unique identifier.

        Args:
            user_id: The user's UUID.

        Returns:
            The `User`, or `None` if no user has that id.
        """
        raise NotImplementedError

    @abstractmethod
    async def insert(self, new_user: NewUser) -> User:
        """Persists a new user.

        Must be atomic with respect to the username and email uniqueness
        constraints: when two inserts race on the same value, at most one
        succeeds.

        Args:
            new_user: The registration payload with an already-hashed password.

        Returns:
            The stored `User` with its id and timestamps assigned.

        Raises:
            AlreadyExistsError: If the username or email is taken.
        """
        raise NotImplementedError

    @abstractmethod
    async def update_by_id(self, user_id: UUID, fields: Mapping[str, Any]) -> User:
        """Updates whitelisted fields of an existing user and bumps ``updated_at``.

        Args:
            user_id: The user's UUID.
            fields: Mapping of field name to new value. Only
                ``UPDATABLE_FIELDS`` are accepted.

        Returns:
            The updated `User`.

        Raises:
            NotFoundError: If no user has that id.
            ValueError: If a field outside ``UPDATABLE_FIELDS`` is given.
        """
        raise NotImplementedError

    @classmethod
    def _check_updatable(cls, fields: Mapping[str, Any]) -> None:
        unknown = set(fields) - cls.UPDATABLE_FIELDS
        if unknown:
            raise ValueError(f"Fields not updatable: {sorted(unknown)}")
        if not fields:
            raise ValueError("No fields to update")
