from .token import Token, UserClaims

__all__ = ["Token", "UserClaims"]
