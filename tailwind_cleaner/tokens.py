"""Design token models for arbitrary-value cleanup.

This module defines the token table read from the Tailwind config, the
per-category name registry used for collision avoidance, and the records
produced while naming values during a run.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any

COLORS = "colors"


class TokenSource(Enum):
    """Where a token name came from."""

    CONFIG = "config"  # Already present in tailwind.config.js
    CATALOG = "catalog"  # Exact hit in the color catalog
    NEAREST = "nearest"  # Nearest match from the color service
    OFFLINE = "offline"  # Nearest match from the local color table
    GENERATED = "generated"  # Algorithmic dimension name


@dataclass
class ColorNameRecord:
    """A color name candidate for a hex value.

    Distance 0 means an exact catalog hit; anything greater is an
    approximation.
    """

    name: str
    distance: float = 0.0

    @property
    def is_exact(self) -> bool:
        """Whether the name is an exact catalog match."""
        return self.distance == 0

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        return {"name": self.name, "distance": self.distance}

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "ColorNameRecord":
        """Create from dictionary."""
        return cls(name=data["name"], distance=data.get("distance", 0.0))


@dataclass
class DiscoveredValue:
    """A value observed in source files together with its assigned name."""

    category: str  # e.g. "colors", "spacing"
    value: str  # Canonical value: "ff0000" for colors, "15.6px" for dimensions
    name: str  # Token name, e.g. "red" or "16"
    source: TokenSource

    @property
    def config_value(self) -> str:
        """The value as written into tailwind.config.js."""
        if self.category == COLORS:
            return f"#{self.value}"
        return self.value

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        return {
            "category": self.category,
            "value": self.value,
            "name": self.name,
            "source": self.source.value,
        }


@dataclass
class TokenTable:
    """Token values by category, keyed value -> name.

    The inverse of the ``{name: value}`` orientation in tailwind.config.js,
    so that "is this value already named?" is a dict lookup. Every name
    ever added is also tracked per category, even when two names share a
    value and only one of them is kept in the value map.
    """

    categories: dict[str, dict[str, str]] = field(default_factory=dict)
    _names: dict[str, set[str]] = field(default_factory=dict, repr=False)

    def __post_init__(self) -> None:
        for category, values in self.categories.items():
            self._names.setdefault(category, set()).update(values.values())

    def add(self, category: str, value: str, name: str) -> None:
        """Record a token. The first name seen for a value is kept."""
        values = self.categories.setdefault(category, {})
        values.setdefault(value, name)
        self._names.setdefault(category, set()).add(name)

    def reserve(self, category: str, name: str) -> None:
        """Mark a name as taken without recording a value for it.

        Used for config keys whose value cannot be canonicalized, such as
        ``var(--red)`` colors or ``fontSize`` tuples.
        """
        self._names.setdefault(category, set()).add(name)

    def lookup(self, category: str, value: str) -> str | None:
        """Return the token name for a value, if present."""
        return self.categories.get(category, {}).get(value)

    def has_value(self, category: str, value: str) -> bool:
        """Check whether a value already has a token in a category."""
        return value in self.categories.get(category, {})

    def names(self, category: str) -> set[str]:
        """All token names recorded for a category."""
        return set(self._names.get(category, set()))

    def values(self, category: str) -> dict[str, str]:
        """The value -> name map for a category (empty if unknown)."""
        return dict(self.categories.get(category, {}))

    @property
    def total_tokens(self) -> int:
        """Total number of distinct values across all categories."""
        return sum(len(values) for values in self.categories.values())

    def __bool__(self) -> bool:
        return self.total_tokens > 0

    def to_config_dict(self) -> dict[str, dict[str, str]]:
        """Convert to the ``{category: {name: value}}`` config orientation."""
        result: dict[str, dict[str, str]] = {}
        for category, values in self.categories.items():
            prefix = "#" if category == COLORS else ""
            result[category] = {name: f"{prefix}{value}" for value, name in values.items()}
        return result

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        return {"categories": {k: dict(v) for k, v in self.categories.items()}}

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "TokenTable":
        """Create from dictionary."""
        return cls(categories={k: dict(v) for k, v in data.get("categories", {}).items()})


class NameRegistry:
    """Token names taken within one category.

    Seeded with the names committed in the config and grown with every
    name assigned during the run; it never shrinks.
    """

    def __init__(self, category: str, committed: set[str] | None = None):
        self.category = category
        self._names: set[str] = set(committed or ())

    def __contains__(self, name: str) -> bool:
        return name in self._names

    def __len__(self) -> int:
        return len(self._names)

    def register(self, name: str) -> None:
        """Mark a name as taken."""
        self._names.add(name)

    def ensure_unique(self, base_name: str) -> str:
        """Return ``base_name`` or the first free ``base_name-N`` variant."""
        if base_name not in self._names:
            return base_name
        counter = 1
        while f"{base_name}-{counter}" in self._names:
            counter += 1
        return f"{base_name}-{counter}"

    def claim(self, base_name: str) -> str:
        """Resolve collisions for ``base_name`` and register the result."""
        name = self.ensure_unique(base_name)
        self.register(name)
        return name
