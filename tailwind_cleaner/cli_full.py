"""Click-based CLI interface for the Tailwind cleaner."""

import re
import sys
from pathlib import Path
from typing import Any

import click

from .cleaner_logging import setup_logging
from .cli.errors import ProjectNotFoundError, ValidationError, handle_exception
from .cli.output import OutputConfig, OutputManager
from .config import load_config
from .pipeline import CleanerPipeline, RunResult
from .tokens import TokenSource

_PREFIX_RE = re.compile(r"^[A-Za-z][A-Za-z0-9-]*$")


def common_options(f: Any) -> Any:
    """Options shared by every cleanup command."""
    f = click.option("--verbose", "-v", is_flag=True, help="Enable verbose output")(f)
    f = click.option("--quiet", "-q", is_flag=True, help="Only print errors and the summary")(f)
    f = click.option("--no-color", is_flag=True, help="Disable colored output")(f)
    f = click.option(
        "--settings",
        type=click.Path(exists=True, dir_okay=False),
        help="Settings file (default: ROOT/.tailwind-cleaner.json)",
    )(f)
    f = click.option(
        "--config-file",
        help="Tailwind config file, relative to ROOT (default: tailwind.config.js)",
    )(f)
    f = click.option("--class-prefix", help="Tailwind class prefix, e.g. 'tw-'")(f)
    f = click.option(
        "--offline",
        is_flag=True,
        help="Name colors from the local CSS color table instead of the network service",
    )(f)
    f = click.option("--dry-run", is_flag=True, help="Report changes without writing files")(f)
    f = click.option(
        "--write-mode",
        type=click.Choice(["auto", "splice", "rewrite"]),
        help="How new tokens are written into the Tailwind config",
    )(f)
    f = click.option(
        "--log-file",
        type=click.Path(dir_okay=False),
        help="Also write a full debug log to this file",
    )(f)
    f = click.option(
        "--log-format",
        type=click.Choice(["text", "json"]),
        default="text",
        help="Format of the --log-file output",
    )(f)
    return f


@click.group()
@click.version_option(version="1.0.0")
def cli() -> None:
    """Tailwind Cleaner - replace arbitrary values with named design tokens."""


@cli.command()
@click.argument("root", default=".", type=click.Path(file_okay=False))
@common_options
def clean(root: str, **options: Any) -> None:
    """Replace arbitrary colors and dimensions in one pass.

    Examples:
        tailwind-cleaner clean
        tailwind-cleaner clean ./web --offline --dry-run
    """
    _run(root, "Tailwind Arbitrary Value Cleaner", {}, **options)


@cli.command()
@click.argument("prefix", required=False)
@click.argument("root", default=".", type=click.Path(file_okay=False))
@common_options
def colors(prefix: str | None, root: str, **options: Any) -> None:
    """Replace arbitrary colors only, optionally prefixing every new name.

    Examples:
        tailwind-cleaner colors
        tailwind-cleaner colors brand ./web
    """
    _run(
        root,
        "Tailwind Color Cleaner",
        {"handle_dimensions": False, "name_prefix": prefix},
        **options,
    )


@cli.command()
@click.argument("root", default=".", type=click.Path(file_okay=False))
@common_options
def values(root: str, **options: Any) -> None:
    """Replace arbitrary dimensions (sizes, spacing, calc) only.

    Examples:
        tailwind-cleaner values
        tailwind-cleaner values ./web --write-mode splice
    """
    _run(root, "Tailwind Arbitrary Value Cleaner", {"handle_colors": False}, **options)


def _run(
    root: str,
    title: str,
    command_overrides: dict[str, Any],
    verbose: bool,
    quiet: bool,
    no_color: bool,
    settings: str | None,
    config_file: str | None,
    class_prefix: str | None,
    offline: bool,
    dry_run: bool,
    write_mode: str | None,
    log_file: str | None,
    log_format: str,
) -> None:
    output = OutputManager(OutputConfig.from_flags(verbose=verbose, quiet=quiet, no_color=no_color))

    overrides: dict[str, Any] = {
        "tailwind_config": config_file,
        "class_prefix": class_prefix,
        "use_color_api": False if offline else None,
        "dry_run": True if dry_run else None,
        "config_write_mode": write_mode,
    }
    overrides.update(command_overrides)

    try:
        if log_format == "json" and not log_file:
            raise ValidationError(
                "--log-format json applies to the log file only",
                suggestion="Add --log-file PATH or drop --log-format",
            )
        name_prefix = command_overrides.get("name_prefix")
        if name_prefix and not _PREFIX_RE.match(name_prefix):
            raise ValidationError(
                f"Invalid color name prefix: {name_prefix!r}",
                suggestion="Use letters, digits and hyphens, starting with a letter",
            )
        setup_logging(
            quiet=quiet,
            verbose=verbose,
            log_file=Path(log_file) if log_file else None,
            log_format=log_format,
        )

        project_path = Path(root)
        if not project_path.is_dir():
            raise ProjectNotFoundError(str(project_path))

        config = load_config(project_path, Path(settings) if settings else None, **overrides)

        output.header(title)
        if config.dry_run:
            output.info("Dry run: no files will be written")
        result = CleanerPipeline(project_path, config).run()
    except Exception as e:
        message, exit_code = handle_exception(e, use_color=output.config.use_color, verbose=verbose)
        click.echo(message, err=True)
        sys.exit(exit_code)

    _display_result(result, output)
    sys.exit(0)


_SOURCE_LABELS = {
    TokenSource.CATALOG: "catalog",
    TokenSource.NEAREST: "nearest",
    TokenSource.OFFLINE: "offline",
    TokenSource.GENERATED: "generated",
}


def _display_result(result: RunResult, output: OutputManager) -> None:
    """Print the run report."""
    if result.discovered:
        output.section("New tokens")
        for item in result.discovered:
            label = _SOURCE_LABELS.get(item.source, item.source.value)
            output.plain(f"  {item.category}.{item.name} = {item.config_value} ({label})")

    if output.config.verbose and result.modified_files:
        output.section("Modified files")
        for file_path in result.modified_files:
            output.plain(f"  {file_path}")

    stats = result.stats
    output.section("Summary")
    output.tree(
        [
            ("Files processed", stats.files_processed),
            ("Files modified", stats.files_modified),
            ("Replacements", stats.replacements),
            ("Config matches", stats.config_matches),
            ("Catalog exact matches", stats.catalog_exact_matches),
            ("Nearest matches", stats.nearest_matches),
            ("Offline matches", stats.offline_matches),
            ("Unresolved colors", stats.unresolved_colors),
            ("Generated names", stats.generated_names),
        ],
        force=True,
    )
    output.newline()

    if result.config_updated:
        strategies = f" via {', '.join(result.merge_strategies)}" if result.merge_strategies else ""
        output.success(
            f"Added {result.tokens_written} tokens to {result.config_path} "
            f"({result.merge_mode}{strategies})"
        )
    elif result.dry_run and result.tokens_written:
        output.info(f"Dry run: {result.tokens_written} tokens would be added to {result.config_path}")
    elif not result.has_errors:
        output.info("Tailwind config already up to date")

    for error in result.errors:
        output.warning(error, force=True)

    output.success(f"Done in {result.execution_time_ms / 1000:.2f}s")


if __name__ == "__main__":
    cli()
