# Common utilities and shared modules
"""
Shared components used by the optimizer:
- Project configuration
- Logging configuration
"""

from .config import settings, PROJECT_ROOT, Settings, RankingSettings
from .logging import setup_logging

__all__ = [
    "settings",
    "PROJECT_ROOT",
    "Settings",
    "RankingSettings",
    "setup_logging",
]
