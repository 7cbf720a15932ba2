"""Core: settings and shared constants."""

from storage_gateway.core.config import Settings, get_settings

__all__ = ["Settings", "get_settings"]
