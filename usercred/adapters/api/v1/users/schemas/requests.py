"""Request-payload Pydantic models for the users endpoints.

Fields are plain strings: the credential service validates them and reports
every failing field at once, so the models only check that each field is
present.
"""

from pydantic import BaseModel, Field


class RegisterRequest(BaseModel):
    """Payload expected by ``POST /users/register``."""

    username: str = Field(..., examples=["john_doe"])
    email: str = Field(..., examples=["john@example.com"])
    password: str = Field(..., examples=["s3cret-pass"])

    def __repr__(self) -> str:
        return f"RegisterRequest(username={self.username!r}, email={self.email!r})"


class LoginRequest(BaseModel):
    """Payload expected by ``POST /users/login``."""

    email: str = Field(..., examples=["john@example.com"])
    password: str = Field(..., examples=["s3cret-pass"])

    def __repr__(self) -> str:
        return f"LoginRequest(email={self.email!r})"


class ChangePasswordRequest(BaseModel):
    """Payload expected by ``PUT /users/{id}/password``."""

    old_password: str = Field(..., description="Current password for verification")
    new_password: str = Field(..., description="New password, 6 characters to 72 bytes")

    def __repr__(self) -> str:
        return "ChangePasswordRequest()"
