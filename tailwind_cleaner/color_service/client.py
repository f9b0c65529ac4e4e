"""HTTP client for the color naming service (color.pizza API shape)."""

from typing import Any

import httpx

from ..cleaner_logging import LogCategory, get_category_logger
from ..config.models import DEFAULT_COLOR_API_URL
from ..exceptions import CleanerError
from ..tokens import ColorNameRecord

logger = get_category_logger(LogCategory.NETWORK)

COLOR_LIST = "default"


class ColorServiceError(CleanerError):
    """Transport failure or unexpected response from the color service."""


class ColorServiceClient:
    """Synchronous client for catalog and nearest-name lookups.

    Example:
        >>> with ColorServiceClient() as client:
        ...     catalog = client.fetch_catalog()
        ...     names = client.fetch_nearest(["ff0001", "123456"])
    """

    def __init__(
        self,
        base_url: str = DEFAULT_COLOR_API_URL,
        timeout: float = 30.0,
        transport: httpx.BaseTransport | None = None,
    ):
        self.base_url = base_url
        self._client = httpx.Client(timeout=timeout, transport=transport)

    def __enter__(self) -> "ColorServiceClient":
        return self

    def __exit__(self, *exc_info: Any) -> None:
        self.close()

    def close(self) -> None:
        """Close the underlying HTTP connection pool."""
        self._client.close()

    def _get_colors(self, params: dict[str, str]) -> list[Any]:
        try:
            response = self._client.get(self.base_url, params=params)
            response.raise_for_status()
            payload = response.json()
        except httpx.TimeoutException as e:
            raise ColorServiceError(f"Timeout contacting {self.base_url}: {e}") from e
        except httpx.HTTPError as e:
            raise ColorServiceError(f"HTTP error from {self.base_url}: {e}") from e
        except ValueError as e:
            raise ColorServiceError(f"Invalid JSON from {self.base_url}") from e

        colors = payload.get("colors") if isinstance(payload, dict) else None
        if not isinstance(colors, list):
            raise ColorServiceError("Response is missing a 'colors' list")
        return colors

    def fetch_catalog(self) -> dict[str, str]:
        """Download the full named-color list.

        Returns:
            Mapping of canonical hex (lowercase, no ``#``) to raw color name.
            The first name listed for a hex wins.

        Raises:
            ColorServiceError: On transport errors or a malformed response.
        """
        colors = self._get_colors({"list": COLOR_LIST})
        catalog: dict[str, str] = {}
        for entry in colors:
            if not isinstance(entry, dict):
                raise ColorServiceError("Catalog entry is not an object")
            hex_value = entry.get("hex")
            name = entry.get("name")
            if not isinstance(hex_value, str) or not isinstance(name, str):
                raise ColorServiceError("Catalog entry lacks 'hex' or 'name'")
            catalog.setdefault(hex_value.lstrip("#").lower(), name)

        logger.info(f"Fetched {len(catalog)} catalog colors")
        return catalog

    def fetch_nearest(self, hex_values: list[str]) -> dict[str, ColorNameRecord]:
        """Look up the nearest named color for each hex in one request.

        Args:
            hex_values: Canonical hexes without ``#``.

        Returns:
            Mapping of each requested hex to its ColorNameRecord.

        Raises:
            ColorServiceError: On transport errors, a malformed response, or
                a response whose length differs from the request.
        """
        if not hex_values:
            return {}

        colors = self._get_colors(
            {
                "values": ",".join(hex_values),
                "list": COLOR_LIST,
                "goodnamesonly": "true",
                "noduplicates": "true",
            }
        )
        if len(colors) != len(hex_values):
            raise ColorServiceError(
                f"Expected {len(hex_values)} nearest colors, got {len(colors)}"
            )

        results: dict[str, ColorNameRecord] = {}
        for hex_value, entry in zip(hex_values, colors):
            if not isinstance(entry, dict) or not isinstance(entry.get("name"), str):
                raise ColorServiceError("Nearest entry lacks a 'name'")
            distance = entry.get("distance", 0)
            if not isinstance(distance, (int, float)):
                raise ColorServiceError("Nearest entry has a non-numeric 'distance'")
            results[hex_value] = ColorNameRecord(name=entry["name"], distance=float(distance))

        logger.debug(f"Resolved {len(results)} colors by nearest match")
        return results
