"""Cleaner settings package.

Settings precedence (highest to lowest):
1. Explicit overrides (CLI flags)
2. Environment variables
3. Project file (.tailwind-cleaner.json in the scan root)
4. Defaults
"""

from .config_loader import PROJECT_CONFIG_FILENAME, ConfigLoader, load_config
from .models import (
    DEFAULT_CATEGORIES,
    DEFAULT_COLOR_API_URL,
    DEFAULT_COLOR_UTILITIES,
    DEFAULT_UNIT_PREFIXES,
    CleanerConfig,
)

__all__ = [
    "CleanerConfig",
    "ConfigLoader",
    "load_config",
    "PROJECT_CONFIG_FILENAME",
    "DEFAULT_CATEGORIES",
    "DEFAULT_COLOR_API_URL",
    "DEFAULT_COLOR_UTILITIES",
    "DEFAULT_UNIT_PREFIXES",
]
