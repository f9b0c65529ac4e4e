"""Tests for CLI output module."""

from __future__ import annotations

import os
from io import StringIO
from unittest.mock import patch

from tailwind_cleaner.cli.output import (
    OutputConfig,
    OutputManager,
    should_use_color,
)


def make_manager(**kwargs) -> tuple[OutputManager, StringIO, StringIO]:
    stream, err_stream = StringIO(), StringIO()
    config = OutputConfig(stream=stream, err_stream=err_stream, **kwargs)
    return OutputManager(config), stream, err_stream


class TestShouldUseColor:
    """Tests for should_use_color function."""

    def test_explicit_flag(self):
        """Explicit flag should win."""
        assert should_use_color(explicit_flag=True) is True
        assert should_use_color(explicit_flag=False) is False

    def test_no_color_env_var(self):
        """NO_COLOR env var should disable colors."""
        with patch.dict(os.environ, {"NO_COLOR": ""}):
            assert should_use_color() is False

    def test_force_color_env(self):
        """FORCE_COLOR env var should enable colors."""
        with patch.dict(os.environ, {"FORCE_COLOR": "1"}, clear=True):
            assert should_use_color(stream=StringIO()) is True

    def test_non_tty_stream(self):
        """Non-TTY stream should disable colors."""
        with patch.dict(os.environ, {}, clear=True):
            assert should_use_color(stream=StringIO()) is False


class TestOutputConfig:
    """Tests for OutputConfig dataclass."""

    def test_from_flags(self):
        """Test creating config from CLI flags."""
        config = OutputConfig.from_flags(verbose=True, quiet=True, no_color=True)
        assert config.verbose is True
        assert config.quiet is True
        assert config.use_color is False


class TestOutputManager:
    """Tests for OutputManager class."""

    def test_plain_symbols(self):
        """Test plain-text symbols without colors."""
        manager, stream, _ = make_manager(use_color=False)
        manager.success("Updated tailwind.config.js")
        manager.warning("No name found for #123456")
        manager.info("Dry run")

        assert stream.getvalue().splitlines() == [
            "[OK] Updated tailwind.config.js",
            "[WARN] No name found for #123456",
            "[INFO] Dry run",
        ]

    def test_colored_symbols(self):
        """Test ANSI symbols with colors enabled."""
        manager, stream, _ = make_manager(use_color=True)
        assert "\033[92m" in manager._get_symbol("success")

        # click strips ANSI codes for non-terminal streams
        manager.success("Done")
        assert stream.getvalue() == "✓ Done\n"

    def test_error_goes_to_stderr(self):
        """Test that errors are written to the error stream even when quiet."""
        manager, stream, err_stream = make_manager(use_color=False, quiet=True)
        manager.error("Could not update tailwind.config.js")

        assert stream.getvalue() == ""
        assert err_stream.getvalue() == "[FAIL] Could not update tailwind.config.js\n"

    def test_quiet_suppresses_unforced_output(self):
        """Test quiet mode and the force flag."""
        manager, stream, _ = make_manager(use_color=False, quiet=True)
        manager.info("hidden")
        manager.header("Hidden")
        manager.newline()
        manager.plain("shown", force=True)

        assert stream.getvalue() == "shown\n"

    def test_debug_only_when_verbose(self):
        """Test debug output gating."""
        manager, stream, _ = make_manager(use_color=False)
        manager.debug("not shown")
        assert stream.getvalue() == ""

        manager, stream, _ = make_manager(use_color=False, verbose=True)
        manager.debug("shown")
        assert stream.getvalue() == "DEBUG: shown\n"

    def test_header_is_underlined(self):
        """Test the header underline length."""
        manager, stream, _ = make_manager(use_color=False)
        manager.header("Summary")
        assert stream.getvalue() == "Summary\n=======\n"

    def test_tree(self):
        """Test tree rows."""
        manager, stream, _ = make_manager(use_color=False)
        manager.tree([("Files processed", 2), ("Replacements", 6)])

        assert stream.getvalue().splitlines() == [
            "├── Files processed: 2",
            "└── Replacements: 6",
        ]

    def test_section(self):
        """Test that a section starts with a blank line."""
        manager, stream, _ = make_manager(use_color=False)
        manager.section("New tokens")
        assert stream.getvalue() == "\nNew tokens\n"
