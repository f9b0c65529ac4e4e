"""Parsing of Tailwind arbitrary-value literals.

Turns the text between the brackets of ``bg-[...]`` / ``w-[...]`` into a
canonical color (6-digit lowercase hex) or a typed dimension.
"""

import math
import re
from dataclasses import dataclass
from enum import Enum
from typing import Any

from ..exceptions import CleanerError


class NotAColorError(CleanerError, ValueError):
    """Raised when a literal is not an opaque color."""


class NonOpaqueColorError(NotAColorError):
    """Raised when a literal is a color whose alpha is not 1."""


class NotADimensionError(CleanerError, ValueError):
    """Raised when a literal carries no recognized unit."""


class DimensionKind(Enum):
    """Kinds of dimension values."""

    PIXEL = "px"
    REM = "rem"
    EM = "em"
    PERCENT = "%"
    VIEWPORT = "viewport"
    CALC = "calc"
    OTHER = "other"  # numeric value with an unrecognized unit suffix
    OPAQUE = "opaque"  # contains a unit token but no parseable structure


# Order matters for the substring check: all tokens are tested.
UNIT_TOKENS = ("px", "rem", "em", "%", "vh", "vw", "vmin", "vmax")
VIEWPORT_UNITS = frozenset(["vh", "vw", "vmin", "vmax"])

_UNIT_KINDS = {
    "px": DimensionKind.PIXEL,
    "rem": DimensionKind.REM,
    "em": DimensionKind.EM,
    "%": DimensionKind.PERCENT,
    "vh": DimensionKind.VIEWPORT,
    "vw": DimensionKind.VIEWPORT,
    "vmin": DimensionKind.VIEWPORT,
    "vmax": DimensionKind.VIEWPORT,
}

_NUMBER_WITH_UNIT = re.compile(r"^([+-]?\d*\.?\d+)([a-z%]+)$", re.IGNORECASE)
_CALC = re.compile(r"^calc\(.+\)$", re.IGNORECASE | re.DOTALL)

_RGB_LEGACY = re.compile(
    r"^rgba?\(\s*(\d+)\s*,\s*(\d+)\s*,\s*(\d+)\s*(?:,\s*([\d.]+%?))?\s*\)$"
)
_RGB_MODERN = re.compile(
    r"^rgba?\(\s*(\d+)\s+(\d+)\s+(\d+)\s*(?:/\s*([\d.]+%?))?\s*\)$"
)
_HSL_LEGACY = re.compile(
    r"^hsla?\(\s*([+-]?[\d.]+)(?:deg)?\s*,\s*([\d.]+)%\s*,\s*([\d.]+)%\s*(?:,\s*([\d.]+%?))?\s*\)$"
)
_HSL_MODERN = re.compile(
    r"^hsla?\(\s*([+-]?[\d.]+)(?:deg)?\s+([\d.]+)%\s+([\d.]+)%\s*(?:/\s*([\d.]+%?))?\s*\)$"
)
_HEX_DIGITS = re.compile(r"^[0-9a-f]+$")
_COLOR_SYNTAX = re.compile(r"^(?:#|(?:rgba?|hsla?)\()")


@dataclass(frozen=True)
class ParsedDimension:
    """A typed dimension parsed from an arbitrary value.

    ``magnitude`` and ``unit`` are set for numeric kinds; ``expression``
    holds the raw text for CALC and OPAQUE values.
    """

    kind: DimensionKind
    raw: str
    magnitude: float | None = None
    unit: str | None = None
    expression: str | None = None

    @property
    def is_numeric(self) -> bool:
        """Whether the value has a magnitude and a unit."""
        return self.magnitude is not None

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        return {
            "kind": self.kind.value,
            "raw": self.raw,
            "magnitude": self.magnitude,
            "unit": self.unit,
            "expression": self.expression,
        }


def normalize_literal(text: str) -> str:
    """Apply Tailwind's underscore escape and collapse whitespace.

    ``calc(100%_-_2rem)`` becomes ``calc(100% - 2rem)``. The result is the
    canonical form used as a token-table key for dimensions.
    """
    return re.sub(r"\s+", " ", text.replace("_", " ")).strip()


def js_round(value: float) -> int:
    """Round half up, matching JavaScript's ``Math.round``."""
    return math.floor(value + 0.5)


def _channels_to_hex(r: int, g: int, b: int) -> str:
    if not all(0 <= c <= 255 for c in (r, g, b)):
        raise NotAColorError(f"Channel out of range: {r}, {g}, {b}")
    return f"{r:02x}{g:02x}{b:02x}"


def _require_opaque(alpha: str | None, text: str) -> None:
    if alpha is None:
        return
    try:
        if alpha.endswith("%"):
            opaque = float(alpha[:-1]) == 100
        else:
            opaque = float(alpha) == 1
    except ValueError as e:
        raise NotAColorError(f"Invalid alpha in: {text}") from e
    if not opaque:
        raise NonOpaqueColorError(f"Non-opaque color: {text}")


def _hue_to_channel(p: float, q: float, t: float) -> float:
    if t < 0:
        t += 1
    if t > 1:
        t -= 1
    if t < 1 / 6:
        return p + (q - p) * 6 * t
    if t < 1 / 2:
        return q
    if t < 2 / 3:
        return p + (q - p) * (2 / 3 - t) * 6
    return p


def hsl_to_hex(hue: float, saturation: float, lightness: float) -> str:
    """Convert HSL (all components in 0..1) to a 6-digit hex string."""
    if saturation == 0:
        r = g = b = lightness
    else:
        q = (
            lightness * (1 + saturation)
            if lightness < 0.5
            else lightness + saturation - lightness * saturation
        )
        p = 2 * lightness - q
        r = _hue_to_channel(p, q, hue + 1 / 3)
        g = _hue_to_channel(p, q, hue)
        b = _hue_to_channel(p, q, hue - 1 / 3)
    return _channels_to_hex(js_round(r * 255), js_round(g * 255), js_round(b * 255))


def parse_color(text: str) -> str:
    """Parse an opaque color literal to a canonical 6-digit lowercase hex.

    Supports: #RGB, #RGBA, #RRGGBB, #RRGGBBAA, rgb()/rgba() with commas or
    spaces and ``/ alpha``, hsl()/hsla() in both notations.

    Args:
        text: The color literal, already underscore-normalized.

    Returns:
        Hex string without the leading ``#``, e.g. ``"ff0000"``.

    Raises:
        NotAColorError: If the text is not a color or its alpha is not 1.
    """
    value = text.strip().lower()

    if value.startswith("#"):
        digits = value[1:]
        if not _HEX_DIGITS.match(digits):
            raise NotAColorError(f"Invalid hex color: {text}")
        if len(digits) == 3:
            rgb, alpha = "".join(c * 2 for c in digits), "ff"
        elif len(digits) == 4:
            rgb, alpha = "".join(c * 2 for c in digits[:3]), digits[3] * 2
        elif len(digits) == 6:
            rgb, alpha = digits, "ff"
        elif len(digits) == 8:
            rgb, alpha = digits[:6], digits[6:]
        else:
            raise NotAColorError(f"Invalid hex length: {text}")
        if alpha != "ff":
            raise NonOpaqueColorError(f"Non-opaque color: {text}")
        return rgb

    for pattern in (_RGB_LEGACY, _RGB_MODERN):
        match = pattern.match(value)
        if match:
            _require_opaque(match.group(4), text)
            r, g, b = (int(match.group(i)) for i in (1, 2, 3))
            return _channels_to_hex(r, g, b)

    for pattern in (_HSL_LEGACY, _HSL_MODERN):
        match = pattern.match(value)
        if match:
            _require_opaque(match.group(4), text)
            try:
                hue = float(match.group(1)) % 360 / 360
                saturation = float(match.group(2)) / 100
                lightness = float(match.group(3)) / 100
            except ValueError as e:
                raise NotAColorError(f"Invalid hsl() component in: {text}") from e
            return hsl_to_hex(hue, saturation, lightness)

    raise NotAColorError(f"Not a color: {text}")


def looks_like_color(text: str) -> bool:
    """Check whether a literal is written in color syntax.

    True for hex and rgb()/hsl() notations whether or not they parse, so
    translucent or malformed colors are never mistaken for dimensions.
    """
    return _COLOR_SYNTAX.match(text.strip().lower()) is not None


def has_unit_token(text: str) -> bool:
    """Check whether a literal mentions a recognized unit or is a calc()."""
    value = text.strip().lower()
    return value.startswith("calc(") or any(unit in value for unit in UNIT_TOKENS)


def parse_dimension(text: str) -> ParsedDimension:
    """Parse a dimension literal.

    Args:
        text: The literal, already underscore-normalized.

    Returns:
        ParsedDimension of the matching kind. Literals that mention a unit
        but do not fit the number+unit grammar come back as OTHER or OPAQUE.

    Raises:
        NotADimensionError: If the literal has no recognized unit at all.
    """
    value = text.strip()

    if _CALC.match(value):
        return ParsedDimension(kind=DimensionKind.CALC, raw=value, expression=value)

    if not has_unit_token(value):
        raise NotADimensionError(f"No recognized unit in: {text}")

    match = _NUMBER_WITH_UNIT.match(value)
    if not match:
        return ParsedDimension(kind=DimensionKind.OPAQUE, raw=value, expression=value)

    magnitude = float(match.group(1))
    unit = match.group(2).lower()
    kind = _UNIT_KINDS.get(unit, DimensionKind.OTHER)
    return ParsedDimension(kind=kind, raw=value, magnitude=magnitude, unit=unit)
