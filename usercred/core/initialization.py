"""Application initialization and setup.

This module handles the initialization tasks required before the application
starts: environment variable loading and logging configuration.
"""

from dotenv import load_dotenv

from usercred.core.logging import configure_from_settings


def initialize_application() -> None:
    """Initialize the application with all necessary setup tasks.

    Variables already present in the process environment take precedence over
    the ``.env`` file.
    """
    load_dotenv(override=False)

    configure_from_settings()
