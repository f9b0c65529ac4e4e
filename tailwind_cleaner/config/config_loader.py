"""Cleaner settings loading with project file and environment support."""

import json
import os
from pathlib import Path
from typing import Any

from pydantic import ValidationError as PydanticValidationError

from ..cleaner_logging import get_logger
from ..cli.errors import ConfigurationError
from .models import CleanerConfig

logger = get_logger()

PROJECT_CONFIG_FILENAME = ".tailwind-cleaner.json"

_TRUTHY = {"1", "true", "yes", "on"}


class ConfigLoader:
    """Settings loader for a scan root."""

    def __init__(self, project_path: Path | None = None, config_file: Path | None = None):
        self.project_path = Path(project_path) if project_path else Path.cwd()
        self.config_file = (
            Path(config_file) if config_file else self.project_path / PROJECT_CONFIG_FILENAME
        )

    def load(self, **overrides: Any) -> CleanerConfig:
        """Load settings from all sources.

        Precedence (highest to lowest):
        1. Explicit overrides (None values are ignored)
        2. Environment variables
        3. Project file (.tailwind-cleaner.json)
        4. Defaults

        Raises:
            ConfigurationError: If the project file is unreadable or any
                value fails validation.
        """
        config_dict: dict[str, Any] = {}

        if self.config_file.exists():
            file_settings = self._load_file()
            config_dict.update(file_settings)
            logger.debug(f"Loaded {len(file_settings)} settings from {self.config_file}")

        env_settings = self._load_env()
        if env_settings:
            config_dict.update(env_settings)
            logger.debug(f"Applied {len(env_settings)} environment variables")

        explicit = {k: v for k, v in overrides.items() if v is not None}
        config_dict.update(explicit)
        if explicit:
            logger.debug(f"Applied {len(explicit)} explicit overrides")

        try:
            return CleanerConfig(**config_dict)
        except PydanticValidationError as e:
            raise ConfigurationError(
                f"Invalid cleaner settings: {e.errors()[0]['msg']}",
                config_file=str(self.config_file) if self.config_file.exists() else None,
            ) from e

    def _load_file(self) -> dict[str, Any]:
        try:
            data = json.loads(self.config_file.read_text(encoding="utf-8"))
        except (OSError, json.JSONDecodeError) as e:
            raise ConfigurationError(
                f"Cannot read settings file: {e}", config_file=str(self.config_file)
            ) from e
        if not isinstance(data, dict):
            raise ConfigurationError(
                "Settings file must contain a JSON object",
                config_file=str(self.config_file),
            )
        return data

    @staticmethod
    def _load_env() -> dict[str, Any]:
        env_vars = {
            "name_prefix": os.environ.get("TAILWIND_CLEANER_NAME_PREFIX"),
            "class_prefix": os.environ.get("TAILWIND_CLEANER_CLASS_PREFIX"),
            "color_api_url": os.environ.get("TAILWIND_CLEANER_COLOR_API_URL"),
        }
        settings = {key: value for key, value in env_vars.items() if value is not None}

        offline = os.environ.get("TAILWIND_CLEANER_OFFLINE")
        if offline is not None:
            settings["use_color_api"] = offline.strip().lower() not in _TRUTHY
        return settings


def load_config(
    project_path: Path | None = None,
    config_file: Path | None = None,
    **overrides: Any,
) -> CleanerConfig:
    """Load cleaner settings for a scan root.

    Args:
        project_path: Scan root; its .tailwind-cleaner.json is used if present.
        config_file: Explicit settings file replacing the project file.
        **overrides: Explicit setting overrides.

    Returns:
        Validated CleanerConfig.
    """
    return ConfigLoader(project_path=project_path, config_file=config_file).load(**overrides)
