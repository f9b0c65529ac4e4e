"""Utility-class tables and the arbitrary-value site pattern."""

import re
from collections.abc import Iterable


def build_dimension_map(categories: dict[str, list[str]]) -> dict[str, str]:
    """Map each dimension utility to its theme category.

    A utility listed under several categories belongs to the first one.
    """
    utility_map: dict[str, str] = {}
    for category, utilities in categories.items():
        for utility in utilities:
            utility_map.setdefault(utility, category)
    return utility_map


def build_site_pattern(utilities: Iterable[str], class_prefix: str | None = None) -> re.Pattern:
    """Compile the pattern for ``{prefix}{utility}-[{literal}]`` sites.

    Utilities are tried longest first so that ``ring-offset-[...]`` is not
    read as ``ring``. Groups: ``utility`` and ``value``.
    """
    names = sorted(set(utilities), key=lambda u: (-len(u), u))
    if not names:
        # Matches nothing
        return re.compile(r"(?!x)x")
    alternation = "|".join(re.escape(name) for name in names)
    prefix = re.escape(class_prefix or "")
    return re.compile(rf"\b{prefix}(?P<utility>{alternation})-\[(?P<value>[^\]\s]+)\]")
