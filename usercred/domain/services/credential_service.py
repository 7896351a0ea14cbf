"""Credential workflows: register, login, get and change password.

The service owns no state beyond the collaborators handed to its
constructor, so one instance serves every request concurrently.

Each operation runs under a single deadline. When the deadline passes, the
pending step is cancelled and ``UnavailableError`` is raised. Store writes
are shielded once issued: cancelling or timing out the caller abandons the
wait, but the write itself runs to completion so the store never holds a
half-applied change. bcrypt work runs on worker threads so the event loop
keeps serving other requests while a hash is computed.
"""

import asyncio
from datetime import timedelta
from typing import Any, Awaitable, Callable, Optional, TypeVar, Union
from uuid import UUID, uuid4

from structlog import get_logger

from usercred.core.config.settings import settings
from usercred.core.exceptions import (
    AlreadyExistsError,
    CredentialError,
    InternalError,
    InvalidArgumentError,
    InvalidCredentialsError,
    InvalidPasswordError,
    NotFoundError,
    UnavailableError,
    ValidationError,
)
from usercred.domain.entities.user import NewUser, PublicUser
from usercred.domain.interfaces.repositories import IUserRepository
from usercred.domain.interfaces.security import IPasswordHasher, ITokenIssuer
from usercred.domain.interfaces.services import ICredentialService, LoginResult
from usercred.domain.security.logging_service import secure_logging_service
from usercred.domain.validation.credentials import (
    parse_user_id,
    validate_login,
    validate_password_change,
    validate_registration,
)
from usercred.domain.value_objects.token import UserClaims

logger = get_logger(__name__)

T = TypeVar("T")

# Verified against when the email is unknown, so a miss costs one bcrypt
# comparison just like a wrong password does.
_DUMMY_PASSWORD = "usercred-timing-equalizer"


class _Deadline:
    """Absolute point on the event loop clock an operation must finish by."""

    def __init__(self, timeout: float):
        self._loop = asyncio.get_running_loop()
        self._expires_at = self._loop.time() + timeout

    def remaining(self) -> float:
        return self._expires_at - self._loop.time()

    async def run(
        self,
        fn: Callable[..., Awaitable[T]],
        *args: Any,
        shield: bool = False,
    ) -> T:
        """Awaits ``fn(*args)`` for at most the remaining time.

        The coroutine is only created once there is time left, so an expired
        deadline never starts a store call.
        """
        remaining = self.remaining()
        if remaining <= 0:
            raise asyncio.TimeoutError()
        awaitable = fn(*args)
        if shield:
            awaitable = asyncio.shield(awaitable)
        return await asyncio.wait_for(awaitable, timeout=remaining)


class CredentialService(ICredentialService):
    """Default :class:`ICredentialService`.

    Attributes:
        token_ttl: Lifetime of tokens issued by :meth:`login`.
        default_timeout: Deadline in seconds used when a caller passes none.
    """

    def __init__(
        self,
        user_repository: IUserRepository,
        password_hasher: IPasswordHasher,
        token_issuer: ITokenIssuer,
        token_ttl: Optional[timedelta] = None,
        default_timeout: Optional[float] = None,
    ):
        self._user_repository = user_repository
        self._password_hasher = password_hasher
        self._token_issuer = token_issuer
        self.token_ttl = token_ttl or timedelta(minutes=settings.ACCESS_TOKEN_EXPIRE_MINUTES)
        self.default_timeout = default_timeout or settings.OPERATION_TIMEOUT_SECONDS
        self._dummy_hash = password_hasher.hash(_DUMMY_PASSWORD)

    async def _execute(
        self,
        operation: str,
        work: Callable[[_Deadline, Any], Awaitable[T]],
        timeout: Optional[float],
        **log_context: Any,
    ) -> T:
        """Runs one operation under a deadline and normalizes its errors.

        Errors from the credential taxonomy propagate unchanged. A timeout
        becomes ``UnavailableError`` and anything else becomes
        ``InternalError``. Cancellation always propagates.
        """
        request_logger = logger.bind(operation=operation, correlation_id=str(uuid4()), **log_context)
        deadline = _Deadline(timeout if timeout is not None else self.default_timeout)
        try:
            result = await work(deadline, request_logger)
        except InvalidArgumentError as e:
            # Input was validated before reaching the hasher.
            request_logger.error("Hasher rejected validated input", error=e.message)
            raise InternalError() from e
        except CredentialError as e:
            request_logger.info("Operation rejected", error_code=e.code)
            raise
        except asyncio.TimeoutError as e:
            request_logger.warning("Operation deadline exceeded")
            raise UnavailableError() from e
        except Exception as e:
            request_logger.error("Operation failed unexpectedly", error_type=type(e).__name__, exc_info=True)
            raise InternalError() from e
        request_logger.debug("Operation completed")
        return result

    async def register(
        self, username: str, email: str, password: str, timeout: Optional[float] = None
    ) -> PublicUser:
        data = validate_registration(username, email, password)

        async def work(deadline: _Deadline, request_logger: Any) -> PublicUser:
            if await deadline.run(self._user_repository.find_by_email, data.email) is not None:
                raise AlreadyExistsError()
            password_hash = await deadline.run(asyncio.to_thread, self._password_hasher.hash, data.password)
            user = await deadline.run(
                self._user_repository.insert,
                NewUser(username=data.username, email=data.email, password_hash=password_hash),
                shield=True,
            )
            request_logger.info("User registered", user_id=str(user.id))
            return PublicUser.from_entity(user)

        return await self._execute(
            "register",
            work,
            timeout,
            username=secure_logging_service.mask_username(data.username),
            email=secure_logging_service.mask_email(data.email),
        )

    async def login(self, email: str, password: str, timeout: Optional[float] = None) -> LoginResult:
        data = validate_login(email, password)

        async def work(deadline: _Deadline, request_logger: Any) -> LoginResult:
            user = await deadline.run(self._user_repository.find_by_email, data.email)
            if user is None:
                await deadline.run(asyncio.to_thread, self._password_hasher.verify, data.password, self._dummy_hash)
                raise InvalidCredentialsError()
            matches = await deadline.run(
                asyncio.to_thread, self._password_hasher.verify, data.password, user.password_hash
            )
            if not matches or not user.active:
                raise InvalidCredentialsError()
            token = self._token_issuer.issue(
                UserClaims(id=user.id, username=user.username, email=user.email),
                self.token_ttl,
            )
            request_logger.info("User logged in", user_id=str(user.id))
            return LoginResult(user=PublicUser.from_entity(user), token=token)

        return await self._execute(
            "login", work, timeout, email=secure_logging_service.mask_email(data.email)
        )

    async def get(self, user_id: Union[UUID, str], timeout: Optional[float] = None) -> PublicUser:
        try:
            parsed_id = parse_user_id(user_id)
        except ValidationError as e:
            # A malformed id can never name a stored user.
            raise NotFoundError() from e

        async def work(deadline: _Deadline, request_logger: Any) -> PublicUser:
            user = await deadline.run(self._user_repository.find_by_id, parsed_id)
            if user is None:
                raise NotFoundError()
            return PublicUser.from_entity(user)

        return await self._execute("get", work, timeout, user_id=str(parsed_id))

    async def change_password(
        self,
        user_id: Union[UUID, str],
        old_password: str,
        new_password: str,
        timeout: Optional[float] = None,
    ) -> PublicUser:
        data = validate_password_change(user_id, old_password, new_password)

        async def work(deadline: _Deadline, request_logger: Any) -> PublicUser:
            user = await deadline.run(self._user_repository.find_by_id, data.user_id)
            if user is None:
                raise NotFoundError()
            matches = await deadline.run(
                asyncio.to_thread, self._password_hasher.verify, data.old_password, user.password_hash
            )
            if not matches:
                raise InvalidPasswordError()
            password_hash = await deadline.run(asyncio.to_thread, self._password_hasher.hash, data.new_password)
            updated = await deadline.run(
                self._user_repository.update_by_id,
                data.user_id,
                {"password_hash": password_hash},
                shield=True,
            )
            request_logger.info("Password changed", user_id=str(updated.id))
            return PublicUser.from_entity(updated)

        return await self._execute("change_password", work, timeout, user_id=str(data.user_id))
