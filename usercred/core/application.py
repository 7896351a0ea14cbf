"""Application factory for creating and configuring the FastAPI application.

This module provides a factory function to create a properly configured FastAPI
application with its exception handlers and routers registered.
"""

from fastapi import FastAPI
from fastapi.responses import JSONResponse

from usercred.adapters.api.v1 import api_router
from usercred.core.config.settings import settings
from usercred.core.handlers import register_exception_handlers
from usercred.core.lifecycle import create_lifespan_manager


def create_application() -> FastAPI:
    """Create and configure the FastAPI application.

    Returns:
        FastAPI: The configured FastAPI application instance
    """
    app = FastAPI(
        title=settings.PROJECT_NAME,
        version=settings.VERSION,
        description="User registration, login and password management.",
        debug=settings.DEBUG,
        lifespan=create_lifespan_manager(),
        default_response_class=JSONResponse,
    )

    register_exception_handlers(app)

    app.include_router(api_router, prefix=settings.API_PREFIX)

    return app
