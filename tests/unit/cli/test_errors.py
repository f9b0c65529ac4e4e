"""Tests for CLI error handling module."""

from __future__ import annotations

from tailwind_cleaner.cli.errors import (
    CLIError,
    ColorServiceUnavailableError,
    ConfigurationError,
    ConfigWriteError,
    ErrorCategory,
    ProjectNotFoundError,
    ValidationError,
    handle_exception,
)


class TestErrorCategory:
    """Tests for ErrorCategory enum."""

    def test_categories_exist(self):
        """Test that all expected categories exist."""
        assert ErrorCategory.CONNECTION.value == "connection"
        assert ErrorCategory.CONFIGURATION.value == "configuration"
        assert ErrorCategory.FILE_SYSTEM.value == "file_system"
        assert ErrorCategory.VALIDATION.value == "validation"
        assert ErrorCategory.RUNTIME.value == "runtime"


class TestCLIError:
    """Tests for base CLIError class."""

    def test_basic_error(self):
        """Test basic error creation."""
        error = CLIError(category=ErrorCategory.RUNTIME, message="Something went wrong")
        assert error.category == ErrorCategory.RUNTIME
        assert error.message == "Something went wrong"
        assert error.exit_code == 1
        assert error.suggestion is None

    def test_format_with_color(self):
        """Test formatted output with colors."""
        error = CLIError(
            category=ErrorCategory.RUNTIME,
            message="Something went wrong",
            suggestion="Try again",
        )
        formatted = error.format(use_color=True)
        assert "Something went wrong" in formatted
        assert "Try again" in formatted
        assert "\033[91m" in formatted  # Red color code

    def test_format_without_color(self):
        """Test formatted output without colors."""
        error = CLIError(
            category=ErrorCategory.RUNTIME,
            message="Something went wrong",
            suggestion="Try again",
            details={"file": "src/App.jsx"},
        )
        formatted = error.format(use_color=False)
        assert formatted.startswith("Error: Something went wrong")
        assert "Suggestion: Try again" in formatted
        assert "file: src/App.jsx" in formatted
        assert "\033[" not in formatted  # No ANSI codes

    def test_exception_inheritance(self):
        """Test that CLIError is an Exception."""
        error = CLIError(category=ErrorCategory.RUNTIME, message="Test error")
        assert isinstance(error, Exception)
        assert "Test error" in str(error)


class TestColorServiceUnavailableError:
    """Tests for ColorServiceUnavailableError."""

    def test_message_and_details(self):
        """Test URL, cause and stage."""
        error = ColorServiceUnavailableError(
            url="https://api.color.pizza/v1/",
            original_error="HTTP 500",
            stage="fetch_color_catalog",
        )
        assert "api.color.pizza" in error.message
        assert "HTTP 500" in error.message
        assert error.details["stage"] == "fetch_color_catalog"
        assert "--offline" in error.suggestion

    def test_category(self):
        """Test error category and exit code."""
        error = ColorServiceUnavailableError(url="https://colors.test/")
        assert error.category == ErrorCategory.CONNECTION
        assert error.exit_code == 1
        assert "stage" not in error.details


class TestProjectNotFoundError:
    """Tests for ProjectNotFoundError."""

    def test_basic_error(self):
        """Test basic project not found error."""
        error = ProjectNotFoundError(path="/path/to/project")
        assert "/path/to/project" in error.message
        assert "verify" in error.suggestion.lower()
        assert error.category == ErrorCategory.FILE_SYSTEM


class TestConfigurationError:
    """Tests for ConfigurationError."""

    def test_with_config_file(self):
        """Test error with config file."""
        error = ConfigurationError(
            message="Invalid JSON",
            config_file="/path/to/.tailwind-cleaner.json",
        )
        assert error.details["config_file"] == "/path/to/.tailwind-cleaner.json"
        assert ".tailwind-cleaner.json" in error.suggestion

    def test_custom_suggestion(self):
        """Test error with custom suggestion."""
        error = ConfigurationError(message="Invalid format", suggestion="Remove the key")
        assert error.suggestion == "Remove the key"
        assert error.details is None


class TestConfigWriteError:
    """Tests for ConfigWriteError."""

    def test_message(self):
        """Test the config path and cause in the message."""
        error = ConfigWriteError("tailwind.config.js", "Permission denied")
        assert error.message == "Could not update tailwind.config.js: Permission denied"
        assert error.details["config_file"] == "tailwind.config.js"


class TestValidationError:
    """Tests for ValidationError."""

    def test_exit_code(self):
        """Test that usage errors exit with 2."""
        error = ValidationError("Bad prefix")
        assert error.exit_code == 2
        assert "--help" in error.suggestion


class TestHandleException:
    """Tests for handle_exception function."""

    def test_cli_error(self):
        """Test handling CLIError."""
        message, code = handle_exception(ValidationError("Bad prefix"), use_color=False)
        assert "Bad prefix" in message
        assert code == 2

    def test_generic_exception(self):
        """Test handling generic exception."""
        message, code = handle_exception(RuntimeError("Unexpected"), use_color=False)
        assert message == "Error: Unexpected"
        assert code == 1

    def test_verbose_includes_traceback(self):
        """Test traceback output in verbose mode."""
        try:
            raise RuntimeError("Deep failure")
        except RuntimeError as e:
            message, _ = handle_exception(e, use_color=False, verbose=True)
        assert "Traceback" in message
