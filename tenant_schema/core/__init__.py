"""Core: settings for scripts and services."""

from tenant_schema.core.config import Settings, get_settings

__all__ = ["Settings", "get_settings"]
