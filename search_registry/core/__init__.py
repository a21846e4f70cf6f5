"""Core: config, constants, and composition root.

Single place for settings and shared constants.
"""

from search_registry.core.config import get_settings

__all__ = ["get_settings"]
