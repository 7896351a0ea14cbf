"""
Application-specific settings.
"""
from pydantic import Field, field_validator
from pydantic_settings import BaseSettings


class AppSettings(BaseSettings):
    """
    Defines application-wide settings like project name, debug mode and logging.

    Security Note:
        - LOG_JSON should stay enabled outside development so log lines are
          machine-parsable and never mixed with raw request data.
    """
    PROJECT_NAME: str = "usercred"
    VERSION: str = "0.1.0"
    APP_ENV: str = "development"
    DEBUG: bool = False

    API_HOST: str = "0.0.0.0"
    API_PORT: int = Field(ge=1, le=65535, default=3000)
    API_PREFIX: str = ""

    LOG_LEVEL: str = "INFO"
    LOG_JSON: bool = True

    @field_validator("API_PREFIX", mode="before")
    @classmethod
    def normalize_api_prefix(cls, v: str | None) -> str:
        """
        Normalizes the route prefix to either "" or "/segment" without a trailing slash.

        Args:
            v: Raw prefix from the environment.

        Returns:
            The normalized prefix.
        """
        if not v:
            return ""
        v = "/" + v.strip().strip("/")
        return "" if v == "/" else v
