"""Token name sanitization."""

import re

# Tailwind utility prefixes that must never become a bare color name.
RESERVED_NAMES = frozenset(
    [
        "border",
        "text",
        "bg",
        "ring",
        "shadow",
        "from",
        "via",
        "to",
        "accent",
        "decoration",
        "divide",
        "outline",
        "fill",
        "stroke",
        "caret",
        "placeholder",
        "current",
        "transparent",
        "inherit",
    ]
)

UNNAMED_COLOR = "unnamed-color"


def _collapse_hyphens(name: str) -> str:
    return re.sub(r"-+", "-", name).strip("-")


def sanitize_color_name(
    name: str,
    prefix: str | None = None,
    reserved: frozenset[str] = RESERVED_NAMES,
) -> str:
    """Turn a human color name into a token name.

    ``"Dark Slate Gray!"`` becomes ``dark-slate-gray``; with prefix ``brand``
    it becomes ``brand-dark-slate-gray``. Names that collide with a utility
    prefix or start with a digit are escaped with ``color-``.

    Args:
        name: Raw name from the catalog, nearest lookup or CSS table.
        prefix: Optional prefix for every generated color name.
        reserved: Names that must be escaped.

    Returns:
        A non-empty name made of ``[a-z0-9-]``.
    """
    sanitized = re.sub(r"[^a-z0-9\s-]", "", name.lower())
    sanitized = _collapse_hyphens(re.sub(r"\s+", "-", sanitized))

    if sanitized and prefix:
        sanitized = f"{prefix}-{sanitized}"

    if sanitized in reserved or re.match(r"^\d", sanitized):
        sanitized = f"color-{sanitized}"

    if not sanitized:
        sanitized = f"{prefix}-{UNNAMED_COLOR}" if prefix else UNNAMED_COLOR
    return sanitized


def sanitize_dimension_name(name: str) -> str:
    """Keep alphanumerics, ``-`` and ``.``; collapse and trim hyphens."""
    return _collapse_hyphens(re.sub(r"[^A-Za-z0-9.-]", "-", name))
