"""Token naming for colors and dimensions."""

from .color_namer import ColorNamer
from .dimension_namer import FRACTION_NAMES, DimensionNamer, calc_name
from .sanitize import RESERVED_NAMES, sanitize_color_name, sanitize_dimension_name

__all__ = [
    "ColorNamer",
    "DimensionNamer",
    "FRACTION_NAMES",
    "RESERVED_NAMES",
    "calc_name",
    "sanitize_color_name",
    "sanitize_dimension_name",
]
