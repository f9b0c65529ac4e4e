"""Algorithmic names for dimension values.

Resolution order for a (category, value) pair:
1. A name already in tailwind.config.js for that category
2. The name assigned earlier in this run
3. A common fraction shortcut (``50%`` -> ``1/2``)
4. A unit-specific generated name, made unique within the category
"""

import math
import re

from ..cleaner_logging import LogCategory, get_category_logger
from ..tokens import TokenSource
from ..values.parser import (
    DimensionKind,
    NotADimensionError,
    ParsedDimension,
    js_round,
    normalize_literal,
    parse_dimension,
)
from .sanitize import sanitize_dimension_name

logger = get_category_logger(LogCategory.NAMING)

# Exact literal matches only; 33.3% is not a third.
FRACTION_NAMES: dict[str, str] = {
    "100%": "full",
    "50%": "1/2",
    "33.333333%": "1/3",
    "33.33%": "1/3",
    "66.666667%": "2/3",
    "66.67%": "2/3",
    "25%": "1/4",
    "75%": "3/4",
    "20%": "1/5",
    "40%": "2/5",
    "60%": "3/5",
    "80%": "4/5",
}

_REM_FRACTIONS = {"0.25": "25", "0.50": "5", "0.75": "75"}
_OPERATOR_WORDS = {"+": "-plus-", "-": "-minus-", "*": "-times-", "/": "-div-"}


def format_number(value: float) -> str:
    """Render a number the way JavaScript prints it: ``2.0`` -> ``2``."""
    if value.is_integer():
        return str(int(value))
    return repr(value)


def calc_name(expression: str) -> str:
    """Name a ``calc()`` expression with operator words.

    ``calc(100% - 2rem)`` becomes ``calc-100-minus-2rem``.
    """
    inner = expression.strip()
    if inner.lower().startswith("calc(") and inner.endswith(")"):
        inner = inner[5:-1]

    inner = re.sub(r"var\(\s*--[\w-]+\s*(?:,[^)]*)?\)", "var", inner)
    inner = re.sub(r"theme\([^)]*\)", "theme", inner)
    inner = re.sub(r"\s*([+*/-])\s*", lambda m: _OPERATOR_WORDS[m.group(1)], inner)
    inner = re.sub(r"[^a-z0-9-]", "-", inner, flags=re.IGNORECASE)
    inner = re.sub(r"-+", "-", inner).strip("-")
    return f"calc-{inner}"


class DimensionNamer:
    """Assigns token names to dimension literals for one run.

    All state lives on the shared session so that names stay stable
    across files and commands within the run.
    """

    def __init__(self, session):
        self.session = session
        self.config = session.config

    def name_for(self, category: str, value: str) -> str:
        """Resolve a dimension literal to a token name. Never fails.

        Args:
            category: Theme category, e.g. ``"spacing"``.
            value: The literal as found between the brackets.

        Returns:
            The token name to use after the utility, e.g. ``"16"``.
        """
        value = normalize_literal(value)

        existing = self.session.known.lookup(category, value)
        if existing is not None:
            self.session.stats.config_matches += 1
            return existing

        assigned = self.session.assigned.lookup(category, value)
        if assigned is not None:
            return assigned

        base = self.generate(value)
        if value not in FRACTION_NAMES:
            base = sanitize_dimension_name(base) or sanitize_dimension_name(value)
        name = self.session.registry(category).claim(base)

        self.session.record(category, value, name, TokenSource.GENERATED)
        self.session.stats.generated_names += 1
        logger.debug(f"{category}: {value} -> {name}", extra={"value": value, "token_name": name})
        return name

    def generate(self, value: str) -> str:
        """Build the unsanitized base name for a normalized literal."""
        if value in FRACTION_NAMES:
            return FRACTION_NAMES[value]
        try:
            dimension = parse_dimension(value)
        except NotADimensionError:
            return value
        return self._name_dimension(dimension)

    def _name_dimension(self, dimension: ParsedDimension) -> str:
        kind = dimension.kind
        if kind == DimensionKind.CALC:
            return calc_name(dimension.expression or dimension.raw)
        if kind == DimensionKind.OPAQUE or dimension.magnitude is None:
            return dimension.raw

        magnitude = dimension.magnitude
        unit = dimension.unit or ""
        if kind == DimensionKind.OTHER:
            return re.sub(
                r"[^a-z0-9-]", "-", f"{format_number(magnitude)}{unit}", flags=re.IGNORECASE
            )

        size = abs(magnitude)
        if kind == DimensionKind.VIEWPORT:
            head = unit
            tail = str(js_round(size))
        elif kind == DimensionKind.REM:
            head = self.config.unit_prefix(unit)
            tail = self._rem_tail(size)
        elif kind == DimensionKind.EM:
            head = self.config.unit_prefix(unit)
            tail = format_number(size).replace(".", "-")
        else:
            # PIXEL and PERCENT
            head = self.config.unit_prefix(unit)
            tail = str(js_round(size))

        if magnitude < 0:
            return f"{head}-neg-{tail}"
        return f"{head}-{tail}"

    @staticmethod
    def _rem_tail(size: float) -> str:
        if size.is_integer():
            return format_number(size)
        suffix = _REM_FRACTIONS.get(f"{math.fmod(size, 1):.2f}")
        if suffix:
            return f"{math.floor(size)}-{suffix}"
        return format_number(size).replace(".", "-")
