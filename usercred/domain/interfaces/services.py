"""Application service interface consumed by the API adapters."""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Optional, Union
from uuid import UUID

from usercred.domain.entities.user import PublicUser
from usercred.domain.value_objects.token import Token


@dataclass(frozen=True)
class LoginResult:
    """A successful login: the user (without password hash) and a bearer token."""

    user: PublicUser
    token: Token


class ICredentialService(ABC):
    """Registration, login, lookup and password change workflows.

    Every operation accepts an optional ``timeout`` in seconds bounding the
    whole operation; exceeding it raises ``UnavailableError``.
    """

    @abstractmethod
    async def register(
        self, username: str, email: str, password: str, timeout: Optional[float] = None
    ) -> PublicUser:
        raise NotImplementedError

    @abstractmethod
    async def login(
        self, email: str, password: str, timeout: Optional[float] = None
    ) -> LoginResult:
        raise NotImplementedError

    @abstractmethod
    async def get(
        self, user_id: Union[UUID, str], timeout: Optional[float] = None
    ) -> PublicUser:
        raise NotImplementedError

    @abstractmethod
    async def change_password(
        self,
        user_id: Union[UUID, str],
        old_password: str,
        new_password: str,
        timeout: Optional[float] = None,
    ) -> PublicUser:
        raise NotImplementedError
