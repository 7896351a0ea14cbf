"""Application lifecycle management.

This module handles application startup and shutdown events, ensuring proper
initialization and cleanup of application resources.
"""

from contextlib import asynccontextmanager

from fastapi import FastAPI

from usercred.core.config.settings import settings
from usercred.core.logging import logger
from usercred.infrastructure.dependency_injection.auth_dependencies import (
    get_credential_service,
    get_password_hasher,
    get_token_issuer,
)


def create_lifespan_manager():
    """Create the application lifespan manager.

    Returns:
        AsyncContextManager: The lifespan manager for the FastAPI application
    """

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        """Creates the users table for the SQL store and builds the shared
        hasher, issuer and credential service so configuration errors surface
        before the first request.

        Args:
            app (FastAPI): The FastAPI application instance
        """
        # Startup
        if settings.USER_STORE == "sql":
            from usercred.infrastructure.database.async_db import create_async_db_and_tables

            await create_async_db_and_tables()
        get_password_hasher()
        get_token_issuer()
        get_credential_service()
        logger.info("application_startup", env=settings.APP_ENV, version=settings.VERSION, store=settings.USER_STORE)

        yield

        # Shutdown
        if settings.USER_STORE == "sql":
            from usercred.infrastructure.database.async_db import dispose_engine

            await dispose_engine()
        logger.info("application_shutdown", env=settings.APP_ENV)

    return lifespan
