"""
Clouding client configuration.

Settings come from ``CLOUDING_*`` environment variables or a ``.env`` file.
"""

from clouding.config.settings import Settings, get_settings

__all__ = ["Settings", "get_settings"]
