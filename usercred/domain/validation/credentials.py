"""Typed input validation for each credential operation.

Each ``validate_*`` function checks every field of one operation, collects
all failures, and either returns a normalized, typed input object or raises
:class:`~usercred.core.exceptions.ValidationError` whose ``fields`` lists
each failing field with its reason.
"""

import re
from dataclasses import dataclass
from typing import Any, Dict, Optional
from uuid import UUID

from email_validator import EmailNotValidError, validate_email

from usercred.core.exceptions import ValidationError

USERNAME_MIN_LENGTH = 3
USERNAME_MAX_LENGTH = 30
USERNAME_PATTERN = re.compile(r"^[A-Za-z0-9_.-]+$")

PASSWORD_MIN_LENGTH = 6
# bcrypt only reads the first 72 bytes of its input.
PASSWORD_MAX_BYTES = 72


@dataclass(frozen=True)
class RegistrationInput:
    username: str
    email: str
    password: str

    def __repr__(self) -> str:
        return f"RegistrationInput(username={self.username!r}, email={self.email!r})"


@dataclass(frozen=True)
class LoginInput:
    email: str
    password: str

    def __repr__(self) -> str:
        return f"LoginInput(email={self.email!r})"


@dataclass(frozen=True)
class PasswordChangeInput:
    user_id: UUID
    old_password: str
    new_password: str

    def __repr__(self) -> str:
        return f"PasswordChangeInput(user_id={self.user_id!r})"


def _check_username(value: Any, errors: Dict[str, str]) -> Optional[str]:
    if not isinstance(value, str):
        errors["username"] = "Username must be a string"
        return None
    username = value.strip()
    if not USERNAME_MIN_LENGTH <= len(username) <= USERNAME_MAX_LENGTH:
        errors["username"] = (
            f"Username must be between {USERNAME_MIN_LENGTH} and "
            f"{USERNAME_MAX_LENGTH} characters"
        )
        return None
    if not USERNAME_PATTERN.match(username):
        errors["username"] = "Username may only contain letters, digits, '_', '.' and '-'"
        return None
    return username


def _check_email(value: Any, errors: Dict[str, str]) -> Optional[str]:
    if not isinstance(value, str) or not value.strip():
        errors["email"] = "Email is required"
        return None
    try:
        result = validate_email(value.strip(), check_deliverability=False)
    except EmailNotValidError:
        errors["email"] = "Email address is not valid"
        return None
    return result.normalized.lower()


def _check_new_password(value: Any, field: str, errors: Dict[str, str]) -> Optional[str]:
    if not isinstance(value, str):
        errors[field] = "Password must be a string"
        return None
    if len(value) < PASSWORD_MIN_LENGTH:
        errors[field] = f"Password must be at least {PASSWORD_MIN_LENGTH} characters long"
        return None
    if len(value.encode("utf-8")) > PASSWORD_MAX_BYTES:
        errors[field] = f"Password must not exceed {PASSWORD_MAX_BYTES} bytes"
        return None
    return value


def _check_present_password(value: Any, field: str, errors: Dict[str, str]) -> Optional[str]:
    if not isinstance(value, str) or not value:
        errors[field] = "Password is required"
        return None
    return value


def _check_user_id(value: Any, errors: Dict[str, str]) -> Optional[UUID]:
    if isinstance(value, UUID):
        return value
    try:
        return UUID(str(value))
    except (TypeError, ValueError):
        errors["id"] = "User id must be a UUID"
        return None


def validate_registration(username: Any, email: Any, password: Any) -> RegistrationInput:
    """Validate the registration payload.

    Raises:
        ValidationError: Listing every failing field.
    """
    errors: Dict[str, str] = {}
    clean_username = _check_username(username, errors)
    clean_email = _check_email(email, errors)
    clean_password = _check_new_password(password, "password", errors)
    if errors:
        raise ValidationError(errors)
    return RegistrationInput(clean_username, clean_email, clean_password)


def validate_login(email: Any, password: Any) -> LoginInput:
    """Validate the login payload. Only shape is checked, not password policy."""
    errors: Dict[str, str] = {}
    clean_email = _check_email(email, errors)
    clean_password = _check_present_password(password, "password", errors)
    if errors:
        raise ValidationError(errors)
    return LoginInput(clean_email, clean_password)


def validate_password_change(user_id: Any, old_password: Any, new_password: Any) -> PasswordChangeInput:
    """Validate a password change: the old password only needs to be present,
    the new one must satisfy the password policy."""
    errors: Dict[str, str] = {}
    clean_id = _check_user_id(user_id, errors)
    clean_old = _check_present_password(old_password, "old_password", errors)
    clean_new = _check_new_password(new_password, "new_password", errors)
    if errors:
        raise ValidationError(errors)
    return PasswordChangeInput(clean_id, clean_old, clean_new)


def parse_user_id(user_id: Any) -> UUID:
    """Parse a user id.

    Raises:
        ValidationError: If the value is not a UUID.
    """
    errors: Dict[str, str] = {}
    clean_id = _check_user_id(user_id, errors)
    if errors:
        raise ValidationError(errors)
    return clean_id
