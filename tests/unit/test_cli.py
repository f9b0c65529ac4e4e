"""Unit tests for CLI functionality."""

import json
from pathlib import Path

import pytest
from click.testing import CliRunner

from tailwind_cleaner.cli_full import cli
from tailwind_cleaner.color_service.client import ColorServiceClient
from tailwind_cleaner.tailwind_config.js_object import parse_exported_object

from tests.conftest import make_color_transport


@pytest.fixture
def runner():
    return CliRunner()


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    monkeypatch.delenv("TAILWIND_CLEANER_OFFLINE", raising=False)
    monkeypatch.delenv("TAILWIND_CLEANER_NAME_PREFIX", raising=False)
    monkeypatch.delenv("TAILWIND_CLEANER_CLASS_PREFIX", raising=False)


def patch_color_service(monkeypatch, **transport_options):
    """Make the pipeline's own client talk to the fake color service."""

    def factory(base_url, timeout):
        return ColorServiceClient(
            base_url=base_url,
            timeout=timeout,
            transport=make_color_transport(**transport_options),
        )

    monkeypatch.setattr("tailwind_cleaner.pipeline.ColorServiceClient", factory)


class TestMainCLI:
    """Test main CLI group functionality."""

    def test_cli_help(self, runner):
        """Test CLI help output."""
        result = runner.invoke(cli, ["--help"])

        assert result.exit_code == 0
        assert "Tailwind Cleaner" in result.output
        for command in ("clean", "colors", "values"):
            assert command in result.output

    def test_cli_version(self, runner):
        """Test CLI version command."""
        result = runner.invoke(cli, ["--version"])

        assert result.exit_code == 0
        assert "1.0.0" in result.output

    def test_command_help_lists_options(self, runner):
        """Test the shared options."""
        result = runner.invoke(cli, ["clean", "--help"])

        assert result.exit_code == 0
        for option in ("--offline", "--dry-run", "--write-mode", "--class-prefix", "--settings"):
            assert option in result.output


class TestCleanCommand:
    """Tests for the combined command."""

    def test_offline_run(self, runner, temp_project: Path):
        """Test a full offline run rewriting files and creating the config."""
        result = runner.invoke(cli, ["clean", str(temp_project), "--offline", "--no-color"])

        assert result.exit_code == 0, result.output
        assert "Tailwind Arbitrary Value Cleaner" in result.output
        assert "New tokens" in result.output
        assert "Replacements: 6" in result.output
        assert "Offline matches: 2" in result.output

        app = (temp_project / "src" / "App.jsx").read_text()
        assert 'className="bg-red p-16 w-1/2"' in app
        card = (temp_project / "src" / "components" / "Card.tsx").read_text()
        assert "w-1/3 mt-r-1-5" in card
        assert "[#123457]" not in card

        assert "bg-[#ff0000]" in (temp_project / "src" / "notes.md").read_text()
        assert "bg-[#ff0000]" in (temp_project / "node_modules" / "lib" / "index.js").read_text()

        data = parse_exported_object((temp_project / "tailwind.config.js").read_text())
        assert data["theme"]["extend"]["colors"]["red"] == "#ff0000"
        assert data["theme"]["extend"]["width"] == {"1/2": "50%", "1/3": "33.333333%"}

    def test_online_run(self, runner, temp_project: Path, monkeypatch):
        """Test naming through the color service."""
        patch_color_service(monkeypatch, nearest={"123457": "Deep Sea Blue"})
        result = runner.invoke(cli, ["clean", str(temp_project), "--no-color"])

        assert result.exit_code == 0, result.output
        assert "Catalog exact matches: 1" in result.output
        assert "Nearest matches: 1" in result.output
        card = (temp_project / "src" / "components" / "Card.tsx").read_text()
        assert "text-deep-sea-blue" in card

    def test_dry_run(self, runner, temp_project: Path):
        """Test that a dry run writes nothing."""
        app_before = (temp_project / "src" / "App.jsx").read_text()
        result = runner.invoke(cli, ["clean", str(temp_project), "--offline", "--dry-run", "--no-color"])

        assert result.exit_code == 0, result.output
        assert "Dry run" in result.output
        assert (temp_project / "src" / "App.jsx").read_text() == app_before
        assert not (temp_project / "tailwind.config.js").exists()

    def test_quiet_keeps_summary(self, runner, temp_project: Path):
        """Test that quiet mode still prints the summary."""
        result = runner.invoke(cli, ["clean", str(temp_project), "--offline", "--quiet", "--no-color"])

        assert result.exit_code == 0
        assert "New tokens" not in result.output
        assert "Files modified: 2" in result.output

    def test_second_run_is_noop(self, runner, temp_project: Path):
        """Test that rerunning changes nothing."""
        runner.invoke(cli, ["clean", str(temp_project), "--offline"])
        config_text = (temp_project / "tailwind.config.js").read_text()

        result = runner.invoke(cli, ["clean", str(temp_project), "--offline", "--no-color"])
        assert result.exit_code == 0
        assert "Replacements: 0" in result.output
        assert "already up to date" in result.output
        assert (temp_project / "tailwind.config.js").read_text() == config_text


class TestScopedCommands:
    """Tests for the colors and values commands."""

    def test_colors_with_prefix(self, runner, temp_project: Path):
        """Test color-only cleanup with a name prefix."""
        result = runner.invoke(cli, ["colors", "brand", str(temp_project), "--offline", "--no-color"])

        assert result.exit_code == 0, result.output
        assert "Tailwind Color Cleaner" in result.output
        app = (temp_project / "src" / "App.jsx").read_text()
        assert 'className="bg-brand-red p-[15.6px] w-[50%]"' in app

        data = parse_exported_object((temp_project / "tailwind.config.js").read_text())
        assert list(data["theme"]["extend"]) == ["colors"]

    def test_values_only(self, runner, temp_project: Path):
        """Test dimension-only cleanup."""
        result = runner.invoke(cli, ["values", str(temp_project), "--no-color"])

        assert result.exit_code == 0, result.output
        app = (temp_project / "src" / "App.jsx").read_text()
        assert 'className="bg-[#ff0000] p-16 w-1/2"' in app


class TestErrors:
    """Tests for failure exit codes."""

    def test_missing_root(self, runner, tmp_path: Path):
        """Test a scan root that does not exist."""
        result = runner.invoke(cli, ["clean", str(tmp_path / "missing")])

        assert result.exit_code == 1
        assert "Project directory not found" in result.output

    def test_catalog_failure(self, runner, temp_project: Path, monkeypatch):
        """Test that an unreachable color service aborts before rewriting."""
        patch_color_service(monkeypatch, fail_catalog=True)
        app_before = (temp_project / "src" / "App.jsx").read_text()

        result = runner.invoke(cli, ["clean", str(temp_project), "--no-color"])

        assert result.exit_code == 1
        assert "Color naming service failed" in result.output
        assert "--offline" in result.output
        assert (temp_project / "src" / "App.jsx").read_text() == app_before

    def test_invalid_settings_file(self, runner, temp_project: Path):
        """Test a malformed settings file."""
        (temp_project / ".tailwind-cleaner.json").write_text("{oops")

        result = runner.invoke(cli, ["clean", str(temp_project), "--offline"])
        assert result.exit_code == 1
        assert "Cannot read settings file" in result.output

    def test_settings_flag(self, runner, temp_project: Path, tmp_path: Path):
        """Test an explicit settings file."""
        settings = tmp_path / "cleaner.json"
        settings.write_text(json.dumps({"use_color_api": False, "extensions": [".md"]}))

        result = runner.invoke(cli, ["clean", str(temp_project), "--settings", str(settings), "--no-color"])

        assert result.exit_code == 0, result.output
        assert "bg-red" in (temp_project / "src" / "notes.md").read_text()
        assert "bg-[#ff0000]" in (temp_project / "src" / "App.jsx").read_text()

    def test_json_log_format_needs_log_file(self, runner, temp_project: Path):
        """Test that JSON logging without a log file is a usage error."""
        result = runner.invoke(cli, ["clean", str(temp_project), "--offline", "--log-format", "json"])

        assert result.exit_code == 2
        assert "--log-file" in result.output
        assert "bg-[#ff0000]" in (temp_project / "src" / "App.jsx").read_text()

    def test_json_log_file(self, runner, temp_project: Path, tmp_path: Path):
        """Test that the log file holds one JSON object per line."""
        log_file = tmp_path / "cleaner.jsonl"
        result = runner.invoke(
            cli,
            ["clean", str(temp_project), "--offline", "--log-file", str(log_file), "--log-format", "json"],
        )

        assert result.exit_code == 0, result.output
        entries = [json.loads(line) for line in log_file.read_text().splitlines()]
        assert any(entry["message"] == "Stage: merge_config" for entry in entries)

    def test_invalid_color_prefix(self, runner, temp_project: Path):
        """Test that a prefix that cannot start a token name is rejected."""
        result = runner.invoke(cli, ["colors", "1st!", str(temp_project), "--offline"])

        assert result.exit_code == 2
        assert "Invalid color name prefix" in result.output
        assert not (temp_project / "tailwind.config.js").exists()

    def test_unusable_config_is_reported(self, runner, temp_project: Path):
        """Test that a config the merger cannot place tokens in is a warning."""
        (temp_project / "tailwind.config.js").write_text("export default withPlugins(base)\n")

        result = runner.invoke(cli, ["clean", str(temp_project), "--offline", "--no-color"])

        assert result.exit_code == 0
        assert "[WARN] Could not update" in result.output
        assert "bg-red" in (temp_project / "src" / "App.jsx").read_text()
