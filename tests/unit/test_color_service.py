"""Unit tests for the color naming service client and offline table."""

import httpx
import pytest

from tailwind_cleaner.color_service import ColorServiceClient, ColorServiceError, OfflineColorNamer

from tests.conftest import TEST_API_URL, make_color_transport


def client_for(handler) -> ColorServiceClient:
    return ColorServiceClient(base_url=TEST_API_URL, transport=httpx.MockTransport(handler))


class TestFetchCatalog:
    """Tests for the catalog download."""

    def test_catalog_is_canonicalized(self):
        """Test lowercase hexes without '#'."""
        requests = []
        with ColorServiceClient(
            base_url=TEST_API_URL, transport=make_color_transport(requests=requests)
        ) as client:
            catalog = client.fetch_catalog()

        assert catalog["0000ff"] == "Blue"
        assert catalog["ff0000"] == "Red"
        assert requests == [{"list": "default"}]

    def test_first_name_wins(self):
        """Test duplicate hexes in the catalog."""
        transport = make_color_transport(
            catalog=[{"hex": "#ff0000", "name": "Red"}, {"hex": "#FF0000", "name": "Scarlet"}]
        )
        with ColorServiceClient(base_url=TEST_API_URL, transport=transport) as client:
            assert client.fetch_catalog() == {"ff0000": "Red"}

    def test_server_error(self):
        """Test that HTTP errors become ColorServiceError."""
        with ColorServiceClient(
            base_url=TEST_API_URL, transport=make_color_transport(fail_catalog=True)
        ) as client:
            with pytest.raises(ColorServiceError):
                client.fetch_catalog()

    def test_timeout(self):
        """Test that timeouts become ColorServiceError."""

        def handler(request):
            raise httpx.ReadTimeout("too slow", request=request)

        with client_for(handler) as client:
            with pytest.raises(ColorServiceError, match="Timeout"):
                client.fetch_catalog()

    def test_invalid_json(self):
        """Test a body that is not JSON."""
        with client_for(lambda request: httpx.Response(200, text="<html>")) as client:
            with pytest.raises(ColorServiceError, match="Invalid JSON"):
                client.fetch_catalog()

    @pytest.mark.parametrize(
        "payload",
        [{"items": []}, {"colors": "nope"}, {"colors": [["ff0000", "Red"]]}, {"colors": [{"hex": "#fff"}]}],
    )
    def test_malformed_payload(self, payload):
        """Test responses that do not have the expected shape."""
        with client_for(lambda request: httpx.Response(200, json=payload)) as client:
            with pytest.raises(ColorServiceError):
                client.fetch_catalog()


class TestFetchNearest:
    """Tests for the batched nearest lookup."""

    def test_batched_request(self):
        """Test one request carrying every hex in order."""
        requests = []
        transport = make_color_transport(nearest={"123457": "Deep Sea Blue"}, requests=requests)
        with ColorServiceClient(base_url=TEST_API_URL, transport=transport) as client:
            results = client.fetch_nearest(["123457", "abcdef"])

        assert len(requests) == 1
        assert requests[0]["values"] == "123457,abcdef"
        assert requests[0]["goodnamesonly"] == "true"
        assert requests[0]["noduplicates"] == "true"
        assert results["123457"].name == "Deep Sea Blue"
        assert results["abcdef"].name == "Mystery"
        assert results["abcdef"].distance == 12.5
        assert not results["abcdef"].is_exact

    def test_empty_request_skips_network(self):
        """Test that nothing is sent for an empty batch."""
        requests = []
        with ColorServiceClient(
            base_url=TEST_API_URL, transport=make_color_transport(requests=requests)
        ) as client:
            assert client.fetch_nearest([]) == {}
        assert requests == []

    def test_length_mismatch(self):
        """Test a response with fewer entries than requested."""
        payload = {"colors": [{"name": "Only One", "distance": 1}]}
        with client_for(lambda request: httpx.Response(200, json=payload)) as client:
            with pytest.raises(ColorServiceError, match="Expected 2"):
                client.fetch_nearest(["111111", "222222"])

    def test_non_numeric_distance(self):
        """Test validation of the distance field."""
        payload = {"colors": [{"name": "Odd", "distance": "far"}]}
        with client_for(lambda request: httpx.Response(200, json=payload)) as client:
            with pytest.raises(ColorServiceError):
                client.fetch_nearest(["111111"])

    def test_unavailable(self):
        """Test a 503 from the service."""
        with ColorServiceClient(
            base_url=TEST_API_URL, transport=make_color_transport(fail_nearest=True)
        ) as client:
            with pytest.raises(ColorServiceError):
                client.fetch_nearest(["111111"])


class TestOfflineColorNamer:
    """Tests for the CSS3 fallback table."""

    def test_exact_css_color(self):
        """Test a hex that is a CSS named color."""
        record = OfflineColorNamer().nearest("ff0000")
        assert record.name == "red"
        assert record.is_exact

    def test_nearest_css_color(self):
        """Test a hex close to a CSS named color."""
        record = OfflineColorNamer().nearest("fe0101")
        assert record.name == "red"
        assert record.distance > 0

    def test_gray_spelling_tie(self):
        """Test that equal-distance names resolve to the first in sort order."""
        assert OfflineColorNamer().nearest("808080").name == "gray"
