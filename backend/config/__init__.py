"""
Application configuration.
"""

from .settings import Settings, load_settings, settings

__all__ = ["Settings", "load_settings", "settings"]
