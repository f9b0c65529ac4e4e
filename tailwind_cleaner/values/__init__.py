"""Arbitrary-value parsing: colors and dimensions."""

from .parser import (
    DimensionKind,
    NonOpaqueColorError,
    NotAColorError,
    NotADimensionError,
    ParsedDimension,
    has_unit_token,
    looks_like_color,
    normalize_literal,
    parse_color,
    parse_dimension,
)

__all__ = [
    "DimensionKind",
    "NonOpaqueColorError",
    "NotAColorError",
    "NotADimensionError",
    "ParsedDimension",
    "has_unit_token",
    "looks_like_color",
    "normalize_literal",
    "parse_color",
    "parse_dimension",
]
