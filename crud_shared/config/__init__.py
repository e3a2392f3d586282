"""
Configuration module: Settings and logging.
"""

from crud_shared.config.settings import settings, get_settings, Settings
from crud_shared.config.logging import get_logger, setup_logging

__all__ = [
    # settings
    "settings",
    "get_settings",
    "Settings",
    # logging
    "get_logger",
    "setup_logging",
]
