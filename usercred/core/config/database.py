"""
Database connection settings.
"""
from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings


class DatabaseSettings(BaseSettings):
    """
    Defines settings for the user store.

    Security Note:
        - DATABASE_URL may embed credentials and must never be logged.
    Performance Note:
        - DB_POOL_SIZE only applies to server databases; SQLite ignores it.
    """
    DATABASE_URL: str = "sqlite+aiosqlite:///./usercred.db"
    DB_ECHO: bool = False
    DB_POOL_SIZE: int = Field(ge=1, default=5)
    USER_STORE: Literal["sql", "memory"] = "sql"
