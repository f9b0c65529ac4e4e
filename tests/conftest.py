"""
Shared fixtures for the Tailwind Cleaner test suite.

Provides test fixtures for:
- Temporary project creation
- A fake color naming service (httpx.MockTransport)
- Sessions and settings for unit tests
"""

import logging
from collections.abc import Iterator
from pathlib import Path

import httpx
import pytest

from tailwind_cleaner.cleaner_logging import LOGGER_NAME
from tailwind_cleaner.color_service.client import ColorServiceClient
from tailwind_cleaner.config.models import CleanerConfig
from tailwind_cleaner.session import CleanerSession

TEST_API_URL = "https://colors.test/v1/"

CATALOG = [
    {"hex": "#ff0000", "name": "Red"},
    {"hex": "#0000FF", "name": "Blue"},
    {"hex": "#ffffff", "name": "White"},
    {"hex": "#222222", "name": "Text"},
]


def make_color_transport(
    catalog: list[dict] | None = None,
    nearest: dict[str, str] | None = None,
    fail_catalog: bool = False,
    fail_nearest: bool = False,
    requests: list[dict[str, str]] | None = None,
) -> httpx.MockTransport:
    """Build a transport that answers like the color naming service.

    Nearest lookups answer with the name from ``nearest`` for each hex
    (``"Mystery"`` when absent) at distance 12.5.
    """
    catalog = CATALOG if catalog is None else catalog
    nearest = nearest or {}

    def handler(request: httpx.Request) -> httpx.Response:
        params = dict(request.url.params)
        if requests is not None:
            requests.append(params)
        if "values" in params:
            if fail_nearest:
                return httpx.Response(503, json={"error": "unavailable"})
            hexes = params["values"].split(",")
            return httpx.Response(
                200,
                json={
                    "colors": [
                        {"name": nearest.get(h, "Mystery"), "distance": 12.5} for h in hexes
                    ]
                },
            )
        if fail_catalog:
            return httpx.Response(500, json={"error": "boom"})
        return httpx.Response(200, json={"colors": catalog})

    return httpx.MockTransport(handler)


@pytest.fixture(autouse=True)
def reset_package_logger() -> Iterator[None]:
    """Drop handlers installed by setup_logging during a test."""
    yield
    logger = logging.getLogger(LOGGER_NAME)
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()


@pytest.fixture
def color_client() -> Iterator[ColorServiceClient]:
    """Color service client backed by the fake service."""
    client = ColorServiceClient(
        base_url=TEST_API_URL,
        transport=make_color_transport(nearest={"123457": "Deep Sea Blue"}),
    )
    yield client
    client.close()


@pytest.fixture
def offline_config() -> CleanerConfig:
    """Settings that never touch the network."""
    return CleanerConfig(use_color_api=False)


@pytest.fixture
def session(offline_config: CleanerConfig) -> CleanerSession:
    """Fresh session with an empty token table."""
    return CleanerSession(offline_config)


@pytest.fixture
def temp_project(tmp_path: Path) -> Path:
    """Create a small front-end project with arbitrary-value classes."""
    project = tmp_path / "web"
    (project / "src" / "components").mkdir(parents=True)
    (project / "node_modules" / "lib").mkdir(parents=True)

    (project / "src" / "App.jsx").write_text(
        "export function App() {\n"
        '  return <div className="bg-[#ff0000] p-[15.6px] w-[50%]">Hi</div>;\n'
        "}\n"
    )
    (project / "src" / "components" / "Card.tsx").write_text(
        "export const Card = () => (\n"
        '  <section className="text-[#123457] w-[33.333333%] mt-[1.5rem]" />\n'
        ");\n"
    )
    (project / "src" / "notes.md").write_text("bg-[#ff0000] is not scanned here\n")
    (project / "node_modules" / "lib" / "index.js").write_text(
        'export const cls = "bg-[#ff0000]";\n'
    )
    return project
