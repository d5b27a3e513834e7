# Common utilities and shared modules
"""
Shared components used by the card publisher:
- Project configuration (YAML + .env)
- Logging configuration
"""

from .config import settings, PROJECT_ROOT, CONFIG_DIR, Settings
from .logging import get_logger, setup_logging

__all__ = [
    "settings",
    "PROJECT_ROOT",
    "CONFIG_DIR",
    "Settings",
    "get_logger",
    "setup_logging",
]
