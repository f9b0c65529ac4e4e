"""Rewriting arbitrary-value utility classes to token names."""

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

from ..cleaner_logging import LogCategory, get_category_logger
from ..naming.color_namer import ColorNamer
from ..naming.dimension_namer import DimensionNamer
from ..values.parser import (
    NonOpaqueColorError,
    NotAColorError,
    has_unit_token,
    looks_like_color,
    normalize_literal,
    parse_color,
)
from .utilities import build_dimension_map, build_site_pattern

logger = get_category_logger(LogCategory.SCAN)


@dataclass
class Replacement:
    """One rewritten class."""

    original: str  # e.g. "bg-[#ff0000]"
    replacement: str  # e.g. "bg-red"

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        return {"original": self.original, "replacement": self.replacement}


@dataclass
class ReplacementResult:
    """Text after rewriting plus the individual replacements made."""

    text: str
    replacements: list[Replacement] = field(default_factory=list)

    @property
    def count(self) -> int:
        return len(self.replacements)

    @property
    def changed(self) -> bool:
        return self.count > 0


class ReplacementEngine:
    """Finds arbitrary-value sites and swaps them for named utilities.

    Colors are tried first for color utilities; literals that carry a
    unit (or are a ``calc()``) are named as dimensions when the utility
    belongs to a dimension category. Everything else is left alone.
    """

    def __init__(
        self,
        session,
        color_namer: ColorNamer | None = None,
        dimension_namer: DimensionNamer | None = None,
        class_prefix: str | None = None,
    ):
        self.session = session
        self.config = session.config
        self.color_namer = color_namer or ColorNamer(session)
        self.dimension_namer = dimension_namer or DimensionNamer(session)
        self.class_prefix = class_prefix if class_prefix is not None else self.config.class_prefix

        self.color_utilities = (
            frozenset(self.config.color_utilities) if self.config.handle_colors else frozenset()
        )
        self.dimension_map = (
            build_dimension_map(self.config.categories) if self.config.handle_dimensions else {}
        )
        self.pattern = build_site_pattern(
            list(self.color_utilities) + list(self.dimension_map), self.class_prefix
        )
        self._color_pattern = build_site_pattern(self.color_utilities, self.class_prefix)

    def _rewrite(self, utility: str, name: str) -> str:
        return f"{self.class_prefix or ''}{utility}-{name}"

    def _name_site(self, utility: str, raw_value: str) -> str | None:
        literal = normalize_literal(raw_value)

        if utility in self.color_utilities:
            try:
                return self.color_namer.name_for(parse_color(literal))
            except NonOpaqueColorError:
                logger.debug(f"Skipping translucent color: {utility}-[{raw_value}]")
                return None
            except NotAColorError:
                pass

        # Color syntax never becomes a fontSize or borderWidth token
        category = self.dimension_map.get(utility)
        if category is None or looks_like_color(literal) or not has_unit_token(literal):
            return None
        return self.dimension_namer.name_for(category, literal)

    def replace_in_text(self, text: str) -> ReplacementResult:
        """Rewrite every nameable site in ``text``.

        Args:
            text: File contents.

        Returns:
            ReplacementResult with the new text and each replacement.
        """
        replacements: list[Replacement] = []

        def substitute(match) -> str:
            name = self._name_site(match.group("utility"), match.group("value"))
            if name is None:
                return match.group(0)
            rewritten = self._rewrite(match.group("utility"), name)
            replacements.append(Replacement(original=match.group(0), replacement=rewritten))
            return rewritten

        new_text = self.pattern.sub(substitute, text)
        return ReplacementResult(text=new_text, replacements=replacements)

    def collect_colors(self, text: str) -> set[str]:
        """Canonical hexes of all color sites in ``text``."""
        colors: set[str] = set()
        for match in self._color_pattern.finditer(text):
            try:
                colors.add(parse_color(normalize_literal(match.group("value"))))
            except NotAColorError:
                continue
        return colors

    def process_file(self, file_path: Path, dry_run: bool | None = None) -> bool:
        """Rewrite one file in place.

        Read and write failures are logged and leave the file untouched.

        Returns:
            True if the file had at least one replacement.
        """
        dry_run = self.config.dry_run if dry_run is None else dry_run
        stats = self.session.stats
        stats.files_processed += 1

        try:
            text = file_path.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as e:
            logger.warning(f"Skipping unreadable file {file_path}: {e}", extra={"file_path": str(file_path)})
            return False

        result = self.replace_in_text(text)
        if not result.changed:
            return False

        if not dry_run:
            try:
                file_path.write_text(result.text, encoding="utf-8")
            except OSError as e:
                logger.warning(f"Could not write {file_path}: {e}", extra={"file_path": str(file_path)})
                return False

        stats.files_modified += 1
        stats.replacements += result.count
        logger.debug(
            f"{file_path}: {result.count} replacements",
            extra={"file_path": str(file_path)},
        )
        return True

    def collect_file_colors(self, file_path: Path) -> set[str]:
        """Canonical hexes used in a file; unreadable files yield none."""
        try:
            return self.collect_colors(file_path.read_text(encoding="utf-8"))
        except (OSError, UnicodeDecodeError) as e:
            logger.warning(f"Skipping unreadable file {file_path}: {e}", extra={"file_path": str(file_path)})
            return set()
