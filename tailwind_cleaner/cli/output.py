"""Centralized output manager for the run report.

Supports the NO_COLOR environment variable, a --no-color flag, quiet
mode, and plain-text symbol fallbacks.

Following the NO_COLOR standard: https://no-color.org/
"""

from __future__ import annotations

import os
import sys
from dataclasses import dataclass, field
from typing import TextIO

import click


def should_use_color(
    explicit_flag: bool | None = None,
    stream: TextIO | None = None,
) -> bool:
    """Determine if color output should be used.

    Priority order:
    1. Explicit --no-color flag (if passed)
    2. NO_COLOR environment variable
    3. FORCE_COLOR environment variable
    4. TTY detection (only colorize if output is a terminal)

    Args:
        explicit_flag: True = force colors, False = force no colors,
            None = auto-detect.
        stream: Output stream to check for TTY. Defaults to stdout.

    Returns:
        True if colors should be used, False otherwise.
    """
    if explicit_flag is not None:
        return explicit_flag

    if "NO_COLOR" in os.environ:
        return False

    if "FORCE_COLOR" in os.environ:
        return True

    if stream is None:
        stream = sys.stdout
    if hasattr(stream, "isatty") and not stream.isatty():
        return False

    return True


@dataclass
class OutputConfig:
    """Configuration for CLI output behavior.

    Attributes:
        use_color: Whether to use ANSI color codes in output.
        quiet: Suppress all output except errors and the summary.
        verbose: Enable detailed debug output.
        stream: Output stream (default: stdout).
        err_stream: Error stream (default: stderr).
    """

    use_color: bool = True
    quiet: bool = False
    verbose: bool = False
    stream: TextIO = field(default_factory=lambda: sys.stdout)
    err_stream: TextIO = field(default_factory=lambda: sys.stderr)

    @classmethod
    def from_flags(
        cls,
        verbose: bool = False,
        quiet: bool = False,
        no_color: bool = False,
    ) -> "OutputConfig":
        """Create OutputConfig from CLI flags."""
        use_color = should_use_color(explicit_flag=False if no_color else None)
        return cls(use_color=use_color, quiet=quiet, verbose=verbose)


class OutputManager:
    """Centralized output handler for CLI.

    Example:
        >>> output = OutputManager(OutputConfig(use_color=False))
        >>> output.success("Updated tailwind.config.js")
        [OK] Updated tailwind.config.js
        >>> output.warning("No name found for #123456")
        [WARN] No name found for #123456
    """

    COLORS = {
        "green": "\033[92m",
        "red": "\033[91m",
        "yellow": "\033[93m",
        "blue": "\033[94m",
        "cyan": "\033[96m",
        "bold": "\033[1m",
        "dim": "\033[2m",
        "reset": "\033[0m",
    }

    SYMBOLS = {
        "success": {"color": "\033[92m✓\033[0m", "plain": "[OK]"},
        "error": {"color": "\033[91m✗\033[0m", "plain": "[FAIL]"},
        "warning": {"color": "\033[93m⚠\033[0m", "plain": "[WARN]"},
        "info": {"color": "\033[94mℹ\033[0m", "plain": "[INFO]"},
        "skip": {"color": "\033[2m○\033[0m", "plain": "[SKIP]"},
    }

    def __init__(self, config: OutputConfig | None = None):
        self.config = config or OutputConfig()

    def _get_symbol(self, symbol_type: str) -> str:
        symbol_data = self.SYMBOLS.get(symbol_type, self.SYMBOLS["info"])
        return symbol_data["color"] if self.config.use_color else symbol_data["plain"]

    def _colorize(self, text: str, color: str) -> str:
        if not self.config.use_color:
            return text
        color_code = self.COLORS.get(color, "")
        reset = self.COLORS["reset"]
        return f"{color_code}{text}{reset}"

    def _output(
        self,
        message: str,
        symbol_type: str | None = None,
        err: bool = False,
        force: bool = False,
    ) -> None:
        """Output a message with optional symbol prefix.

        Args:
            message: Message to output.
            symbol_type: Type of symbol to prefix (or None for no symbol).
            err: Output to stderr instead of stdout.
            force: Output even in quiet mode.
        """
        if self.config.quiet and not err and not force:
            return

        stream = self.config.err_stream if err else self.config.stream

        if symbol_type:
            line = f"{self._get_symbol(symbol_type)} {message}"
        else:
            line = message

        click.echo(line, file=stream)

    def success(self, message: str, force: bool = False) -> None:
        """Output a success message."""
        self._output(message, symbol_type="success", force=force)

    def error(self, message: str) -> None:
        """Output an error message (always shown, even in quiet mode)."""
        self._output(message, symbol_type="error", err=True, force=True)

    def warning(self, message: str, force: bool = False) -> None:
        """Output a warning message."""
        self._output(message, symbol_type="warning", force=force)

    def info(self, message: str) -> None:
        """Output an info message (suppressed in quiet mode)."""
        self._output(message, symbol_type="info")

    def debug(self, message: str) -> None:
        """Output a debug message (only in verbose mode)."""
        if not self.config.verbose:
            return
        self._output(f"DEBUG: {self._colorize(message, 'dim')}")

    def header(self, title: str) -> None:
        """Output an underlined header line (bold if colors enabled)."""
        if self.config.quiet:
            return
        self._output(self._colorize(title, "bold"))
        self._output("=" * len(title))

    def section(self, title: str) -> None:
        """Output a blank line followed by a section title."""
        self.newline()
        self._output(self._colorize(title, "cyan"))

    def newline(self) -> None:
        """Output a blank line (suppressed in quiet mode)."""
        if not self.config.quiet:
            click.echo("", file=self.config.stream)

    def plain(self, message: str, force: bool = False) -> None:
        """Output plain text without symbol prefix."""
        self._output(message, force=force)

    def tree(self, rows: list[tuple[str, object]], force: bool = False) -> None:
        """Output label/value rows as a tree.

        Args:
            rows: (label, value) pairs in display order.
            force: Output even in quiet mode.
        """
        for index, (label, value) in enumerate(rows):
            branch = "└──" if index == len(rows) - 1 else "├──"
            self._output(f"{branch} {label}: {value}", force=force)
