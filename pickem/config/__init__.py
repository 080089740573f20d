"""Configuration for Pickem."""

from pickem.config.settings import Settings, get_settings

__all__ = ["Settings", "get_settings"]
