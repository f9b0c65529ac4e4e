"""Arbitrary-value site detection and rewriting."""

from .engine import Replacement, ReplacementEngine, ReplacementResult
from .utilities import build_dimension_map, build_site_pattern

__all__ = [
    "Replacement",
    "ReplacementEngine",
    "ReplacementResult",
    "build_dimension_map",
    "build_site_pattern",
]
