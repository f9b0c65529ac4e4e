"""Read tailwind.config.js into a token table.

The exported object is parsed structurally when it stays within plain
data. Configs that use ``require()``, spreads or functions are read
leniently instead: string, number and nested object values are kept,
other values are kept as None so their keys still reserve names. A
missing or unreadable file yields an empty table.
"""

import re
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

from ..cleaner_logging import LogCategory, get_category_logger
from ..naming.sanitize import RESERVED_NAMES
from ..tokens import COLORS, TokenTable
from ..values.parser import NotAColorError, normalize_literal, parse_color
from .js_object import ConfigSyntaxError, parse_exported_object, parse_js_object
from .text_utils import find_exported_object, find_object_property, iter_properties, strip_comments

logger = get_category_logger(LogCategory.CONFIG)

_PREFIX_RE = re.compile(r"\bprefix\s*:\s*(['\"])(.*?)\1")


@dataclass
class LoadedConfig:
    """The state of tailwind.config.js at the start of a run."""

    path: Path
    exists: bool = False
    text: str | None = None
    data: dict[str, Any] = field(default_factory=dict)
    structural: bool = False  # True when the exported object parsed strictly
    tokens: TokenTable = field(default_factory=TokenTable)

    @property
    def class_prefix(self) -> str | None:
        """The Tailwind ``prefix`` option, e.g. ``"tw-"``."""
        prefix = self.data.get("prefix")
        return prefix if isinstance(prefix, str) and prefix else None

    @property
    def readable(self) -> bool:
        """Whether the file exists and its text was read."""
        return self.exists and self.text is not None


def _scalar(text: str) -> Any:
    try:
        value = parse_js_object(text)
    except ConfigSyntaxError:
        return None
    return value if isinstance(value, (str, int, float)) and not isinstance(value, bool) else None


def _lenient_object(text: str, open_index: int) -> dict[str, Any]:
    """Collect the plain-data properties of an object, skipping the rest."""
    result: dict[str, Any] = {}
    for prop in iter_properties(text, open_index):
        if prop.key is None or prop.value_start is None:
            continue
        if prop.value_is_object(text):
            result[prop.key] = _lenient_object(text, prop.value_start)
            continue
        # Unreadable values are kept as None so the key stays reserved
        result[prop.key] = _scalar(text[prop.value_start : prop.value_end])
    return result


def lenient_config_data(source: str) -> dict[str, Any]:
    """Extract ``prefix`` and ``theme`` from a config the strict parser rejects."""
    stripped = strip_comments(source)
    data: dict[str, Any] = {}

    start = find_exported_object(stripped)
    if start is not None:
        theme = find_object_property(stripped, start, "theme")
        theme_start = theme.value_start if theme is not None else None
    else:
        match = re.search(r"\btheme\s*:\s*\{", stripped)
        theme_start = match.end() - 1 if match else None

    if theme_start is not None:
        data["theme"] = _lenient_object(stripped, theme_start)

    prefix = _PREFIX_RE.search(stripped)
    if prefix:
        data["prefix"] = prefix.group(2)
    return data


def flatten_tokens(values: dict[str, Any], parent: str | None = None) -> list[tuple[str, str]]:
    """Flatten nested theme values into ``(name, value)`` pairs.

    ``{"primary": {"DEFAULT": "#00f", "500": "#00e"}}`` yields
    ``("primary", "#00f")`` and ``("primary-500", "#00e")``. Non-string
    leaves are ignored.
    """
    pairs: list[tuple[str, str]] = []
    for key, value in values.items():
        if key == "DEFAULT" and parent is not None:
            name = parent
        else:
            name = f"{parent}-{key}" if parent is not None else str(key)
        if isinstance(value, dict):
            pairs.extend(flatten_tokens(value, name))
        elif isinstance(value, str):
            pairs.append((name, value))
    return pairs


def flatten_names(values: dict[str, Any], parent: str | None = None) -> list[str]:
    """Every name a theme section defines, whatever its value.

    Nested scales contribute the parent key as well as each flattened
    child, so ``{"primary": {"500": ...}}`` yields ``primary`` and
    ``primary-500``.
    """
    names: list[str] = []
    for key, value in values.items():
        if key == "DEFAULT" and parent is not None:
            name = parent
        else:
            name = f"{parent}-{key}" if parent is not None else str(key)
        names.append(name)
        if isinstance(value, dict):
            names.extend(flatten_names(value, name))
    return names


def extract_tokens(data: dict[str, Any]) -> TokenTable:
    """Build the value -> name table from ``theme`` and ``theme.extend``."""
    table = TokenTable()
    theme = data.get("theme")
    if not isinstance(theme, dict):
        return table

    sections: list[tuple[str, Any]] = []
    extend = theme.get("extend")
    if isinstance(extend, dict):
        sections.extend(extend.items())
    sections.extend((k, v) for k, v in theme.items() if k != "extend")

    for category, values in sections:
        if not isinstance(values, dict):
            continue
        # Keys with unusable values still own their names
        for name in flatten_names(values):
            table.reserve(category, name)
        for name, value in flatten_tokens(values):
            if category == COLORS:
                if name in RESERVED_NAMES:
                    continue
                try:
                    table.add(COLORS, parse_color(value), name)
                except NotAColorError:
                    continue
            else:
                table.add(category, normalize_literal(value), name)
    return table


def parse_config_text(path: Path, text: str) -> LoadedConfig:
    """Interpret config text, falling back to lenient extraction."""
    try:
        data = parse_exported_object(text)
        structural = True
    except ConfigSyntaxError as e:
        logger.info(f"Reading {path.name} leniently: {e}")
        data = lenient_config_data(text)
        structural = False

    tokens = extract_tokens(data)
    logger.debug(
        f"Loaded {tokens.total_tokens} tokens from {path.name}",
        extra={"file_path": str(path)},
    )
    return LoadedConfig(
        path=path,
        exists=True,
        text=text,
        data=data,
        structural=structural,
        tokens=tokens,
    )


def load_tailwind_config(path: Path) -> LoadedConfig:
    """Load tailwind.config.js. Never raises.

    Args:
        path: Location of the config file.

    Returns:
        LoadedConfig; ``exists`` is False when there is no file.
    """
    path = Path(path)
    if not path.exists():
        logger.debug(f"No Tailwind config at {path}")
        return LoadedConfig(path=path)

    try:
        text = path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        logger.warning(f"Cannot read {path}: {e}", extra={"file_path": str(path)})
        return LoadedConfig(path=path, exists=True)

    return parse_config_text(path, text)
