"""Configuration package: aggregated pydantic settings."""

from .settings import Settings, settings

__all__ = ["Settings", "settings"]
