"""Subpackage aggregating individual users route modules."""

__all__ = [
    "register",
    "login",
    "get_user",
    "change_password",
]
