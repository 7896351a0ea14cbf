"""Main application entry point for the FastAPI application.

Run with ``uvicorn usercred.main:app``.
"""

import uvicorn

from usercred.core.application import create_application
from usercred.core.config.settings import settings
from usercred.core.initialization import initialize_application

# Initialize the application
initialize_application()

# Create the FastAPI application
app = create_application()


def run() -> None:
    uvicorn.run("usercred.main:app", host=settings.API_HOST, port=settings.API_PORT, log_config=None)


if __name__ == "__main__":
    run()
