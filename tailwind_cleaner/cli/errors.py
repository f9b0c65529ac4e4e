"""Structured error types for CLI with recovery suggestions.

This module provides a consistent error handling framework for the CLI,
with categorized error types and actionable recovery suggestions.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any


class ErrorCategory(Enum):
    """Categories of CLI errors for organization and handling."""

    CONNECTION = "connection"  # Color naming service, network issues
    CONFIGURATION = "configuration"  # Invalid cleaner or Tailwind config
    FILE_SYSTEM = "file_system"  # Path issues, permissions
    VALIDATION = "validation"  # Invalid arguments
    RUNTIME = "runtime"  # Unexpected errors


@dataclass
class CLIError(Exception):
    """Base class for structured CLI errors with recovery suggestions.

    Attributes:
        category: Error category for grouping.
        message: Human-readable error message.
        suggestion: Optional actionable recovery suggestion.
        details: Optional additional details dict.
        exit_code: Exit code to use when this error causes termination.
    """

    category: ErrorCategory
    message: str
    suggestion: str | None = None
    details: dict[str, Any] | None = field(default_factory=dict)
    exit_code: int = 1

    def __post_init__(self) -> None:
        """Initialize the exception with the message."""
        super().__init__(self.message)

    def format(self, use_color: bool = True) -> str:
        """Format the error for display.

        Args:
            use_color: Whether to include ANSI color codes.

        Returns:
            Formatted error string with suggestion if available.
        """
        red = "\033[91m" if use_color else ""
        cyan = "\033[96m" if use_color else ""
        dim = "\033[2m" if use_color else ""
        reset = "\033[0m" if use_color else ""

        lines = [f"{red}Error:{reset} {self.message}"]

        if self.suggestion:
            lines.append(f"{cyan}Suggestion:{reset} {self.suggestion}")

        if self.details:
            for key, value in self.details.items():
                lines.append(f"{dim}  {key}: {value}{reset}")

        return "\n".join(lines)

    def __str__(self) -> str:
        """Return the formatted error message."""
        return self.format(use_color=False)


class ColorServiceUnavailableError(CLIError):
    """Error reaching the color naming service."""

    def __init__(
        self,
        url: str,
        original_error: str | None = None,
        stage: str | None = None,
    ):
        message = f"Color naming service failed at {url}"
        if original_error:
            message = f"{message}: {original_error}"

        details: dict[str, Any] = {"url": url}
        if stage:
            details["stage"] = stage

        super().__init__(
            category=ErrorCategory.CONNECTION,
            message=message,
            suggestion=(
                "Check your network connection, or rerun with --offline to "
                "name colors from the local CSS color table"
            ),
            details=details,
            exit_code=1,
        )


class ProjectNotFoundError(CLIError):
    """Error when the scan root doesn't exist."""

    def __init__(self, path: str):
        super().__init__(
            category=ErrorCategory.FILE_SYSTEM,
            message=f"Project directory not found: {path}",
            suggestion="Verify the path exists and you have read permissions",
            details={"path": path},
            exit_code=1,
        )


class ConfigurationError(CLIError):
    """Error in the cleaner settings."""

    def __init__(
        self,
        message: str,
        config_file: str | None = None,
        suggestion: str | None = None,
    ):
        default_suggestion = "Check your .tailwind-cleaner.json syntax and field types"
        super().__init__(
            category=ErrorCategory.CONFIGURATION,
            message=message,
            suggestion=suggestion or default_suggestion,
            details={"config_file": config_file} if config_file else None,
            exit_code=1,
        )


class ConfigWriteError(CLIError):
    """Error writing the merged Tailwind configuration."""

    def __init__(self, config_file: str, original_error: str | None = None):
        message = f"Could not update {config_file}"
        if original_error:
            message = f"{message}: {original_error}"
        super().__init__(
            category=ErrorCategory.FILE_SYSTEM,
            message=message,
            suggestion="Check write permissions; source files were already rewritten",
            details={"config_file": config_file},
            exit_code=1,
        )


class ValidationError(CLIError):
    """Error for invalid CLI arguments or input."""

    def __init__(self, message: str, suggestion: str | None = None):
        super().__init__(
            category=ErrorCategory.VALIDATION,
            message=message,
            suggestion=suggestion or "Check the command syntax with --help",
            exit_code=2,
        )


def handle_exception(
    error: Exception,
    use_color: bool = True,
    verbose: bool = False,
) -> tuple[str, int]:
    """Convert any exception to formatted output and exit code.

    Args:
        error: The exception to handle.
        use_color: Whether to use color in output.
        verbose: Whether to include full traceback.

    Returns:
        Tuple of (formatted_message, exit_code).
    """
    import traceback

    if isinstance(error, CLIError):
        message = error.format(use_color=use_color)
        exit_code = error.exit_code
    else:
        red = "\033[91m" if use_color else ""
        reset = "\033[0m" if use_color else ""
        message = f"{red}Error:{reset} {str(error)}"
        exit_code = 1

    if verbose:
        message += "\n\nTraceback:\n" + traceback.format_exc()

    return message, exit_code
