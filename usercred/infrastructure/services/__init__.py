"""Concrete security services."""

from .password_hasher import BcryptPasswordHasher
from .token_issuer import JwtTokenIssuer, system_clock

__all__ = ["BcryptPasswordHasher", "JwtTokenIssuer", "system_clock"]
