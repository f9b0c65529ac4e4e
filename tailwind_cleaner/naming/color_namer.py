"""Color token naming.

Names are resolved in priority order:
1. The name already used for the hex in tailwind.config.js
2. An exact hit in the preloaded color catalog
3. The nearest name returned by the batched network lookup
4. The nearest CSS3 name from the offline table (if enabled)

A color that none of these can name is left as an arbitrary value.
"""

from collections.abc import Iterable

from ..cleaner_logging import LogCategory, get_category_logger
from ..color_service.client import ColorServiceClient, ColorServiceError
from ..color_service.offline import OfflineColorNamer
from ..tokens import COLORS, ColorNameRecord, TokenSource
from .sanitize import sanitize_color_name

logger = get_category_logger(LogCategory.NAMING)


class ColorNamer:
    """Assigns token names to canonical hex colors for one run."""

    def __init__(
        self,
        session,
        client: ColorServiceClient | None = None,
        offline: OfflineColorNamer | None = None,
    ):
        self.session = session
        self.config = session.config
        self.client = client
        self._offline = offline
        self._catalog: dict[str, str] = {}
        self._nearest: dict[str, ColorNameRecord] = {}
        self._unresolved: set[str] = set()

    @property
    def offline(self) -> OfflineColorNamer:
        """Lazy-initialized CSS3 table."""
        if self._offline is None:
            self._offline = OfflineColorNamer()
        return self._offline

    def preload_catalog(self) -> int:
        """Fetch the full color catalog once for exact matches.

        Returns:
            Number of catalog entries loaded (0 without a client).

        Raises:
            ColorServiceError: If the catalog cannot be fetched.
        """
        if self.client is None:
            return 0
        self._catalog = self.client.fetch_catalog()
        return len(self._catalog)

    def needs_lookup(self, hex_value: str) -> bool:
        """Whether a hex has no name from the config, run or catalog."""
        return not (
            self.session.known.has_value(COLORS, hex_value)
            or self.session.assigned.has_value(COLORS, hex_value)
            or hex_value in self._catalog
            or hex_value in self._nearest
        )

    def resolve_nearest(self, hex_values: Iterable[str]) -> int:
        """Batch-resolve every still-unnamed hex with one nearest lookup.

        A failed lookup is logged and left to the offline fallback when it
        is enabled.

        Returns:
            Number of hexes sent to the service.

        Raises:
            ColorServiceError: If the lookup fails and the offline fallback
                is disabled.
        """
        pending = sorted({h for h in hex_values if self.needs_lookup(h)})
        if not pending or self.client is None:
            return 0

        try:
            self._nearest.update(self.client.fetch_nearest(pending))
        except ColorServiceError as e:
            if not self.config.offline_fallback:
                raise
            logger.warning(f"Nearest color lookup failed, falling back to CSS names: {e}")
        return len(pending)

    def add_nearest(self, hex_value: str, record: ColorNameRecord) -> None:
        """Seed a nearest-match result."""
        self._nearest[hex_value] = record

    def name_for(self, hex_value: str) -> str | None:
        """Resolve a canonical hex to a token name.

        Returns:
            The token name, or None when no source can name the color.
        """
        existing = self.session.known.lookup(COLORS, hex_value)
        if existing is not None:
            self.session.stats.config_matches += 1
            return existing

        assigned = self.session.assigned.lookup(COLORS, hex_value)
        if assigned is not None:
            return assigned

        stats = self.session.stats
        if hex_value in self._catalog:
            raw_name, source = self._catalog[hex_value], TokenSource.CATALOG
            stats.catalog_exact_matches += 1
        elif hex_value in self._nearest:
            raw_name, source = self._nearest[hex_value].name, TokenSource.NEAREST
            stats.nearest_matches += 1
        elif self.config.offline_fallback:
            record = self.offline.nearest(hex_value)
            self._nearest[hex_value] = record
            raw_name, source = record.name, TokenSource.OFFLINE
            stats.offline_matches += 1
        else:
            if hex_value not in self._unresolved:
                self._unresolved.add(hex_value)
                stats.unresolved_colors += 1
                logger.warning(f"No name found for #{hex_value}", extra={"value": hex_value})
            return None

        base = sanitize_color_name(raw_name, prefix=self.config.name_prefix)
        name = self.session.registry(COLORS).claim(base)
        self.session.record(COLORS, hex_value, name, source)
        logger.debug(
            f"#{hex_value} -> {name} ({source.value})",
            extra={"value": hex_value, "token_name": name},
        )
        return name
