"""Per-run state shared by the namers and the replacement engine."""

from dataclasses import asdict, dataclass, field
from typing import Any

from .config.models import CleanerConfig
from .tokens import DiscoveredValue, NameRegistry, TokenSource, TokenTable


@dataclass
class RunStats:
    """Counters reported at the end of a run."""

    files_processed: int = 0
    files_modified: int = 0
    replacements: int = 0
    config_matches: int = 0
    catalog_exact_matches: int = 0
    nearest_matches: int = 0
    offline_matches: int = 0
    unresolved_colors: int = 0
    generated_names: int = 0

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        return asdict(self)


class CleanerSession:
    """Everything a run knows about token names.

    ``known`` holds the tokens already committed in tailwind.config.js.
    ``assigned`` holds the names given out during this run, and every
    assignment is also appended to ``discovered`` in order. Names are
    reserved per category in a NameRegistry seeded from ``known``.
    """

    def __init__(self, config: CleanerConfig | None = None, known: TokenTable | None = None):
        self.config = config or CleanerConfig()
        self.known = known or TokenTable()
        self.assigned = TokenTable()
        self.discovered: list[DiscoveredValue] = []
        self.stats = RunStats()
        self._registries: dict[str, NameRegistry] = {}

    def registry(self, category: str) -> NameRegistry:
        """The name registry for a category, created on first use."""
        if category not in self._registries:
            self._registries[category] = NameRegistry(category, self.known.names(category))
        return self._registries[category]

    def record(self, category: str, value: str, name: str, source: TokenSource) -> None:
        """Remember a name assigned during this run."""
        self.assigned.add(category, value, name)
        self.discovered.append(
            DiscoveredValue(category=category, value=value, name=name, source=source)
        )

    def new_tokens(self) -> TokenTable:
        """Tokens assigned this run whose values are not in the config yet."""
        table = TokenTable()
        for item in self.discovered:
            if not self.known.has_value(item.category, item.value):
                table.add(item.category, item.value, item.name)
        return table
