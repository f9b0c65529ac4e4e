"""Merging newly named tokens into tailwind.config.js.

Two write modes exist. Splicing edits the original text in place, one
category at a time, through an ordered chain of strategies; the first
strategy that recognizes the config's shape wins. Rewriting parses the
exported object, merges into it and serializes the whole module again,
which is only possible for configs made of plain data.

``auto`` rewrites when non-color categories are being added and the
config parses strictly, and splices otherwise.
"""

import re
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Any

from ..cleaner_logging import LogCategory, get_category_logger
from ..exceptions import CleanerError
from ..tokens import COLORS, TokenTable
from .js_object import (
    ConfigSyntaxError,
    format_js_value,
    format_key,
    parse_exported_object,
    render_config_module,
)
from .text_utils import (
    find_exported_object,
    find_matching,
    find_object_property,
    find_property,
    iter_properties,
    line_indent,
    strip_comments,
)

logger = get_category_logger(LogCategory.CONFIG)

DEFAULT_CONTENT = ["./src/**/*.{js,jsx,ts,tsx}", "./public/index.html"]
DEFAULT_INDENT = "  "

WRITE_MODES = ("auto", "splice", "rewrite")


class ConfigMergeError(CleanerError):
    """Raised when no strategy can place tokens into the config text."""


@dataclass
class MergeContext:
    """One category's worth of new entries to place."""

    category: str
    entries: dict[str, str]  # name -> value as written in the config
    indent_unit: str = DEFAULT_INDENT

    def entry_blocks(self) -> list[str]:
        """The entries rendered as ``key: 'value'`` lines."""
        return [f"{format_key(name)}: {format_js_value(value)}" for name, value in self.entries.items()]

    def category_block(self) -> str:
        """The whole ``category: {...}`` property."""
        return object_block(self.category, self.entry_blocks(), self.indent_unit)


@dataclass
class MergeResult:
    """Outcome of a merge."""

    text: str
    mode: str  # "unchanged", "synthesize", "splice" or "rewrite"
    tokens_written: int = 0
    strategies: list[str] = field(default_factory=list)

    @property
    def changed(self) -> bool:
        return self.tokens_written > 0


def detect_indent_unit(text: str) -> str:
    """Guess the indentation step used in a config file."""
    match = re.search(r"\{[ \t]*\n([ \t]+)\S", text)
    return match.group(1) if match else DEFAULT_INDENT


def _indent_block(block: str, indent: str) -> str:
    return "\n".join(f"{indent}{line}" if line.strip() else line for line in block.split("\n"))


def object_block(key: str, blocks: list[str], indent_unit: str = DEFAULT_INDENT) -> str:
    """Render ``key: { ... }`` with the given property blocks inside."""
    body = ",\n".join(_indent_block(block, indent_unit) for block in blocks)
    return f"{format_key(key)}: {{\n{body}\n}}"


def insert_properties(text: str, open_index: int, blocks: list[str], indent_unit: str) -> str:
    """Insert property blocks before the closing brace of an object.

    Existing content, including comments, is kept as is. A separating
    comma is added when the last existing property lacks one, and a
    trailing comma is added when the object already uses them.
    """
    masked = strip_comments(text)
    close = find_matching(masked, open_index)
    if close is None:
        raise ConfigMergeError(f"Unbalanced object at offset {open_index}")

    properties = iter_properties(masked, open_index)
    owner_indent = line_indent(text, open_index)
    if properties and "\n" in text[open_index : properties[0].start]:
        entry_indent = line_indent(text, properties[0].start)
    else:
        entry_indent = owner_indent + indent_unit

    last = close - 1
    while last > open_index and masked[last].isspace():
        last -= 1
    has_entries = last > open_index
    separator = "," if has_entries and masked[last] != "," else ""
    trailing = "," if has_entries and masked[last] == "," else ""

    gap = text[last + 1 : close].rstrip(" \t")
    if not gap.endswith("\n"):
        gap += "\n"

    body = ",\n".join(_indent_block(block, entry_indent) for block in blocks)
    return f"{text[: last + 1]}{separator}{gap}{body}{trailing}\n{owner_indent}{text[close:]}"


def _locate_theme(masked: str) -> int | None:
    """Offset of the ``{`` of the exported object's ``theme`` value."""
    start = find_exported_object(masked)
    if start is not None:
        theme = find_object_property(masked, start, "theme")
        return theme.value_start if theme is not None else None
    match = re.search(r"\btheme\s*:\s*\{", masked)
    return match.end() - 1 if match else None


class MergeStrategy(ABC):
    """One way of placing a category's entries into config text."""

    name: str = "strategy"

    @abstractmethod
    def apply(self, text: str, context: MergeContext) -> str | None:
        """Return the rewritten text, or None if this shape doesn't apply."""
        ...


class ExtendCategoryStrategy(MergeStrategy):
    """``theme.extend.<category>`` exists: append entries to it."""

    name = "extend-category"

    def apply(self, text: str, context: MergeContext) -> str | None:
        masked = strip_comments(text)
        theme_start = _locate_theme(masked)
        if theme_start is None:
            return None
        extend = find_object_property(masked, theme_start, "extend")
        if extend is None:
            return None
        category = find_object_property(masked, extend.value_start, context.category)
        if category is None:
            return None
        return insert_properties(
            text, category.value_start, context.entry_blocks(), context.indent_unit
        )


class ThemeCategoryStrategy(MergeStrategy):
    """``theme.<category>`` exists without ``extend``: move it under ``extend``."""

    name = "theme-category"

    def apply(self, text: str, context: MergeContext) -> str | None:
        masked = strip_comments(text)
        theme_start = _locate_theme(masked)
        if theme_start is None or find_property(masked, theme_start, "extend") is not None:
            return None
        category = find_object_property(masked, theme_start, context.category)
        if category is None:
            return None
        text = insert_properties(
            text, category.value_start, context.entry_blocks(), context.indent_unit
        )

        masked = strip_comments(text)
        theme_start = _locate_theme(masked)
        category = find_object_property(masked, theme_start, context.category)
        indent = line_indent(text, category.start)
        lines = text[category.start : category.value_end].split("\n")
        moved = "\n".join(
            [lines[0]] + [f"{context.indent_unit}{line}" if line.strip() else line for line in lines[1:]]
        )
        replacement = f"extend: {{\n{indent}{context.indent_unit}{moved}\n{indent}}}"
        return text[: category.start] + replacement + text[category.value_end :]


class ThemeWithoutExtendStrategy(MergeStrategy):
    """``theme`` exists without ``extend``: add ``extend.<category>``."""

    name = "theme-add-extend"

    def apply(self, text: str, context: MergeContext) -> str | None:
        masked = strip_comments(text)
        theme_start = _locate_theme(masked)
        if theme_start is None or find_property(masked, theme_start, "extend") is not None:
            return None
        block = object_block("extend", [context.category_block()], context.indent_unit)
        return insert_properties(text, theme_start, [block], context.indent_unit)


class ExtendWithoutCategoryStrategy(MergeStrategy):
    """``theme.extend`` exists without the category: add the category block."""

    name = "extend-add-category"

    def apply(self, text: str, context: MergeContext) -> str | None:
        masked = strip_comments(text)
        theme_start = _locate_theme(masked)
        if theme_start is None:
            return None
        extend = find_object_property(masked, theme_start, "extend")
        if extend is None or find_property(masked, extend.value_start, context.category):
            return None
        return insert_properties(
            text, extend.value_start, [context.category_block()], context.indent_unit
        )


class ExportedObjectStrategy(MergeStrategy):
    """No ``theme`` at all: add ``theme.extend.<category>`` to the export."""

    name = "export-add-theme"

    def apply(self, text: str, context: MergeContext) -> str | None:
        masked = strip_comments(text)
        start = find_exported_object(masked)
        if start is None or find_property(masked, start, "theme") is not None:
            return None
        extend = object_block("extend", [context.category_block()], context.indent_unit)
        theme = object_block("theme", [extend], context.indent_unit)
        return insert_properties(text, start, [theme], context.indent_unit)


class AppendTailStrategy(MergeStrategy):
    """Last resort for CommonJS configs: merge at load time from a tail snippet."""

    name = "append-tail"

    def apply(self, text: str, context: MergeContext) -> str | None:
        if "module.exports" not in strip_comments(text):
            return None

        category = context.category
        accessor = f".{category}" if re.match(r"^[A-Za-z_$][\w$]*$", category) else f"[{format_js_value(category)}]"
        target = f"module.exports.theme.extend{accessor}"
        entries = ",\n".join(f"{context.indent_unit}{line}" for line in context.entry_blocks())
        snippet = (
            "\nmodule.exports.theme = module.exports.theme || {};\n"
            "module.exports.theme.extend = module.exports.theme.extend || {};\n"
            f"{target} = {{\n"
            f"{context.indent_unit}...({target} || {{}}),\n"
            f"{entries}\n"
            "};\n"
        )
        return text.rstrip() + "\n" + snippet


class MergeStrategyChain:
    """Ordered strategies; the first applicable one handles a category."""

    def __init__(self) -> None:
        self._strategies: list[MergeStrategy] = []

    def register(self, strategy: MergeStrategy) -> None:
        """Append a strategy to the chain."""
        self._strategies.append(strategy)

    @property
    def strategies(self) -> list[MergeStrategy]:
        return list(self._strategies)

    def apply(self, text: str, context: MergeContext) -> tuple[str, str]:
        """Place one category's entries.

        Returns:
            Tuple of (new_text, strategy_name).

        Raises:
            ConfigMergeError: If no strategy applies.
        """
        for strategy in self._strategies:
            result = strategy.apply(text, context)
            if result is not None:
                logger.debug(f"Merged {context.category} with {strategy.name}")
                return result, strategy.name
        raise ConfigMergeError(f"No merge strategy could place '{context.category}' tokens")


def default_chain() -> MergeStrategyChain:
    """The standard strategy order."""
    chain = MergeStrategyChain()
    chain.register(ExtendCategoryStrategy())
    chain.register(ThemeCategoryStrategy())
    chain.register(ThemeWithoutExtendStrategy())
    chain.register(ExtendWithoutCategoryStrategy())
    chain.register(ExportedObjectStrategy())
    chain.register(AppendTailStrategy())
    return chain


def synthesize_config(
    tokens: dict[str, dict[str, str]],
    class_prefix: str | None = None,
) -> str:
    """Render a minimal config module holding ``tokens`` under ``theme.extend``."""
    data: dict[str, Any] = {"content": list(DEFAULT_CONTENT)}
    if class_prefix:
        data["prefix"] = class_prefix
    data["theme"] = {"extend": tokens}
    data["plugins"] = []
    return render_config_module(data)


def pending_tokens(new_tokens: TokenTable, known: TokenTable | None = None) -> dict[str, dict[str, str]]:
    """New entries in config orientation, colors first, minus known values."""
    pending: dict[str, dict[str, str]] = {}
    for category in sorted(new_tokens.categories, key=lambda name: name != COLORS):
        prefix = "#" if category == COLORS else ""
        entries: dict[str, str] = {}
        for value, name in new_tokens.values(category).items():
            if known is not None and known.has_value(category, value):
                continue
            entries[name] = f"{prefix}{value}"
        if entries:
            pending[category] = entries
    return pending


class TailwindConfigMerger:
    """Writes new tokens into config text.

    Example:
        >>> merger = TailwindConfigMerger()
        >>> result = merger.merge(existing_text, session.new_tokens(), known)
        >>> path.write_text(result.text)
    """

    def __init__(self, write_mode: str = "auto", chain: MergeStrategyChain | None = None):
        if write_mode not in WRITE_MODES:
            raise ValueError(f"Unknown write mode: {write_mode}")
        self.write_mode = write_mode
        self.chain = chain or default_chain()

    def merge(
        self,
        existing_text: str | None,
        new_tokens: TokenTable,
        known: TokenTable | None = None,
        class_prefix: str | None = None,
    ) -> MergeResult:
        """Merge tokens into config text.

        Args:
            existing_text: Current file contents, or None if there is no file.
            new_tokens: Tokens named during the run.
            known: Tokens already in the config; their values are skipped.
            class_prefix: Tailwind ``prefix`` option for a synthesized config.

        Returns:
            MergeResult with the new text.

        Raises:
            ConfigMergeError: If splicing finds no place for a category.
        """
        pending = pending_tokens(new_tokens, known)
        count = sum(len(entries) for entries in pending.values())
        if not pending:
            return MergeResult(text=existing_text or "", mode="unchanged")

        if existing_text is None:
            return MergeResult(
                text=synthesize_config(pending, class_prefix),
                mode="synthesize",
                tokens_written=count,
            )

        wants_rewrite = self.write_mode == "rewrite" or (
            self.write_mode == "auto" and any(category != COLORS for category in pending)
        )
        if wants_rewrite:
            rewritten = self._rewrite(existing_text, pending)
            if rewritten is not None:
                return MergeResult(text=rewritten, mode="rewrite", tokens_written=count)

        return self._splice(existing_text, pending, count)

    def _rewrite(self, text: str, pending: dict[str, dict[str, str]]) -> str | None:
        try:
            data = parse_exported_object(text)
        except ConfigSyntaxError as e:
            logger.info(f"Config is not plain data, splicing instead: {e}")
            return None

        theme = data.setdefault("theme", {})
        if not isinstance(theme, dict):
            return None
        extend = theme.setdefault("extend", {})
        if not isinstance(extend, dict):
            return None
        for category, entries in pending.items():
            target = extend.setdefault(category, {})
            if not isinstance(target, dict):
                return None
            target.update(entries)

        masked = strip_comments(text)
        esm = "module.exports" not in masked and re.search(r"\bexport\s+default\b", masked) is not None
        return render_config_module(data, esm=esm)

    def _splice(self, text: str, pending: dict[str, dict[str, str]], count: int) -> MergeResult:
        indent_unit = detect_indent_unit(text)
        used: list[str] = []
        for category, entries in pending.items():
            context = MergeContext(category=category, entries=entries, indent_unit=indent_unit)
            text, strategy = self.chain.apply(text, context)
            used.append(strategy)
        return MergeResult(text=text, mode="splice", tokens_written=count, strategies=used)
