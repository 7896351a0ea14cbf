"""Centralized, structured exception hierarchy for usercred.

Every error carries a machine-readable ``code`` for programmatic handling
and a human-readable ``message`` that is safe to return to a client. The
HTTP mapping lives in :mod:`usercred.core.handlers`; the domain layer only
raises these types.

The messages of :class:`InvalidCredentialsError` and :class:`NotFoundError`
are fixed so that a client can never tell an unknown email from a wrong
password, or a missing record from a deleted one.
"""

from __future__ import annotations

from typing import Final, Mapping

__all__: Final = [
    "CredentialError",
    "ValidationError",
    "InvalidArgumentError",
    "AlreadyExistsError",
    "InvalidCredentialsError",
    "NotFoundError",
    "InvalidPasswordError",
    "AuthenticationError",
    "TokenInvalidError",
    "TokenExpiredError",
    "UnavailableError",
    "InternalError",
]


class CredentialError(Exception):
    """Base exception class for all custom errors in the application.

    Attributes:
        message (str): A human-readable error message, safe for clients.
        code (str): A unique, machine-readable error code.
    """

    message: str
    code: str = "generic_error"

    def __init__(self, message: str, code: str = "generic_error"):
        self.message = message
        self.code = code
        Exception.__init__(self, self.message)

    def __str__(self) -> str:
        return self.message


# ---------------------------------------------------------------------------
# Input errors
# ---------------------------------------------------------------------------


class ValidationError(CredentialError):
    """Raised when operation input is malformed.

    ``fields`` maps each failing field to the reason it failed, so the caller
    can correct every problem in one round trip.
    """

    def __init__(
        self,
        fields: Mapping[str, str],
        message: str = "Request validation failed",
        code: str = "validation_error",
    ):
        self.fields = dict(fields)
        super().__init__(message, code)


class InvalidArgumentError(CredentialError, ValueError):
    """Raised by low-level primitives (hasher) on empty or unusable input."""

    def __init__(self, message: str, code: str = "invalid_argument"):
        super().__init__(message, code)


# ---------------------------------------------------------------------------
# Domain errors
# ---------------------------------------------------------------------------


class AlreadyExistsError(CredentialError):
    """Raised when a username or email is already taken."""

    def __init__(
        self,
        message: str = "Username or email already exists",
        code: str = "already_exists",
    ):
        super().__init__(message, code)


class InvalidCredentialsError(CredentialError):
    """Raised on any login failure.

    Unknown email, inactive account and wrong password all produce this same
    error with the same message.
    """

    def __init__(
        self,
        message: str = "Email or password is invalid",
        code: str = "invalid_credentials",
    ):
        super().__init__(message, code)


class NotFoundError(CredentialError):
    """Raised when a requested user does not exist."""

    def __init__(self, message: str = "User not found", code: str = "not_found"):
        super().__init__(message, code)


class InvalidPasswordError(CredentialError):
    """Raised when the current password given on a password change is wrong."""

    def __init__(self, message: str = "Old password is invalid", code: str = "invalid_password"):
        super().__init__(message, code)


# ---------------------------------------------------------------------------
# Token errors (map to 401 Unauthorized)
# ---------------------------------------------------------------------------


class AuthenticationError(CredentialError):
    """Base for bearer-token failures."""

    def __init__(self, message: str = "Not authenticated", code: str = "unauthorized"):
        super().__init__(message, code)


class TokenInvalidError(AuthenticationError):
    """Raised when a token is malformed, tampered with or signed by another key."""

    def __init__(self, message: str = "Token is invalid", code: str = "token_invalid"):
        super().__init__(message, code)


class TokenExpiredError(AuthenticationError):
    """Raised when a token's expiry is in the past."""

    def __init__(self, message: str = "Token has expired", code: str = "token_expired"):
        super().__init__(message, code)


# ---------------------------------------------------------------------------
# Operational errors
# ---------------------------------------------------------------------------


class UnavailableError(CredentialError):
    """Raised when a collaborator times out or is down. Retryable by the caller."""

    def __init__(
        self,
        message: str = "Service temporarily unavailable",
        code: str = "unavailable",
    ):
        super().__init__(message, code)


class InternalError(CredentialError):
    """Raised for unexpected failures. The message never carries internals."""

    def __init__(self, message: str = "An unexpected error occurred", code: str = "internal_error"):
        super().__init__(message, code)
