from .user import NewUser, PublicUser, Role, User

__all__ = ["NewUser", "PublicUser", "Role", "User"]
