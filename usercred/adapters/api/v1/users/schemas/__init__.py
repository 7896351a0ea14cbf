"""Re-export request and response models for the users endpoints."""

# flake8: noqa: F401 – re-export

from .requests import ChangePasswordRequest, LoginRequest, RegisterRequest
from .responses import ErrorResponse, LoginResponse, MessageResponse, UserOut

__all__ = [
    "RegisterRequest",
    "LoginRequest",
    "ChangePasswordRequest",
    "UserOut",
    "LoginResponse",
    "MessageResponse",
    "ErrorResponse",
]
