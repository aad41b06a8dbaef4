"""Core: configuration, constants, lifespan, exception handling, rate limiting."""

from menuhub.core.config import Settings, get_settings

__all__ = ["Settings", "get_settings"]
