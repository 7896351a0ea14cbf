"""Domain interfaces (ports) implemented by the infrastructure layer."""

from .repositories import IUserRepository
from .security import IPasswordHasher, ITokenIssuer
from .services import ICredentialService, LoginResult

__all__ = [
    "IUserRepository",
    "IPasswordHasher",
    "ITokenIssuer",
    "ICredentialService",
    "LoginResult",
]
