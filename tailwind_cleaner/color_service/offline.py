"""Nearest CSS color name lookup without network access."""

import math

import webcolors

from ..tokens import ColorNameRecord


def _rgb(hex_value: str) -> tuple[int, int, int]:
    return (
        int(hex_value[0:2], 16),
        int(hex_value[2:4], 16),
        int(hex_value[4:6], 16),
    )


class OfflineColorNamer:
    """Names colors from the CSS3 named-color table.

    Distance is Euclidean in RGB space. Ties go to the name that sorts
    first, so results are deterministic.
    """

    def __init__(self) -> None:
        self._table: list[tuple[str, tuple[int, int, int]]] = sorted(
            (name, _rgb(webcolors.name_to_hex(name, spec="css3")[1:]))
            for name in webcolors.names("css3")
        )

    def nearest(self, hex_value: str) -> ColorNameRecord:
        """Return the closest CSS3 color name for a canonical hex."""
        target = _rgb(hex_value)
        best_name, best_distance = "", math.inf
        for name, rgb in self._table:
            distance = math.dist(target, rgb)
            if distance < best_distance:
                best_name, best_distance = name, distance
        return ColorNameRecord(name=best_name, distance=best_distance)
