"""CLI utilities package.

Modules:
    output: OutputManager for consistent CLI output with color/quiet support
    errors: Structured error types with recovery suggestions
"""

from .errors import (
    CLIError,
    ColorServiceUnavailableError,
    ConfigurationError,
    ConfigWriteError,
    ErrorCategory,
    ProjectNotFoundError,
    ValidationError,
    handle_exception,
)
from .output import OutputConfig, OutputManager, should_use_color

__all__ = [
    # Output
    "OutputConfig",
    "OutputManager",
    "should_use_color",
    # Errors
    "CLIError",
    "ErrorCategory",
    "ColorServiceUnavailableError",
    "ConfigurationError",
    "ConfigWriteError",
    "ProjectNotFoundError",
    "ValidationError",
    "handle_exception",
]
