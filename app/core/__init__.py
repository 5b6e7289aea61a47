"""Core: config and application bootstrap.

Single place for settings, lifespan, exception handlers and rate limits.
"""

from app.core.config import Settings, get_settings

__all__ = ["Settings", "get_settings"]
