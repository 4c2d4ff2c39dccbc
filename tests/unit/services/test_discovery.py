"""Unit tests for DiscoveryClient.

These tests verify the DiscoveryClient correctly:
- Sends the domain, subdomain flag and optional limit to the map endpoint
- Authenticates with a bearer token
- Raises DiscoveryError for transport failures, non-200 responses and bad bodies
- Never retries a failed request

All HTTP calls are mocked using respx.
"""

import json

import httpx
import pytest
import respx

from crawlrelay.services.discovery import DiscoveryClient
from crawlrelay.services.errors import DiscoveryError
from tests.fixtures.payloads import (
    FIRECRAWL_MAP_URL,
    MOCK_MAP_RESPONSE_EMPTY,
    MOCK_MAP_RESPONSE_PAYMENT_REQUIRED,
    MOCK_MAP_RESPONSE_SUCCESS,
)


@respx.mock
@pytest.mark.asyncio
async def test_map_domain_returns_links() -> None:
    """Verify links are returned in API order with the expected request."""
    route = respx.post(FIRECRAWL_MAP_URL).mock(
        return_value=httpx.Response(200, json=MOCK_MAP_RESPONSE_SUCCESS)
    )

    async with DiscoveryClient(api_key="fc-test-key") as client:
        links = await client.map_domain("example.com")

    assert links == ["https://example.com/a", "https://example.com/b"]
    request = route.calls.last.request
    assert request.headers["Authorization"] == "Bearer fc-test-key"
    assert request.headers["Content-Type"] == "application/json"
    assert json.loads(request.content) == {
        "url": "example.com",
        "includeSubdomains": True,
    }


@respx.mock
@pytest.mark.asyncio
async def test_map_domain_sends_page_limit() -> None:
    route = respx.post(FIRECRAWL_MAP_URL).mock(
        return_value=httpx.Response(200, json=MOCK_MAP_RESPONSE_SUCCESS)
    )

    async with DiscoveryClient(api_key="k", page_limit=25) as client:
        await client.map_domain("example.com")

    assert json.loads(route.calls.last.request.content)["limit"] == 25


@respx.mock
@pytest.mark.asyncio
async def test_map_domain_empty_result_is_success() -> None:
    respx.post(FIRECRAWL_MAP_URL).mock(
        return_value=httpx.Response(200, json=MOCK_MAP_RESPONSE_EMPTY)
    )

    async with DiscoveryClient(api_key="k") as client:
        assert await client.map_domain("example.com") == []


@respx.mock
@pytest.mark.asyncio
async def test_map_domain_missing_links_is_empty() -> None:
    respx.post(FIRECRAWL_MAP_URL).mock(
        return_value=httpx.Response(200, json={"success": True})
    )

    async with DiscoveryClient(api_key="k") as client:
        assert await client.map_domain("example.com") == []


@respx.mock
@pytest.mark.asyncio
async def test_map_domain_non_200_raises_without_retry() -> None:
    """Verify a non-200 response fails once, carrying status and body."""
    route = respx.post(FIRECRAWL_MAP_URL).mock(
        return_value=httpx.Response(402, json=MOCK_MAP_RESPONSE_PAYMENT_REQUIRED)
    )

    async with DiscoveryClient(api_key="k") as client:
        with pytest.raises(DiscoveryError) as exc_info:
            await client.map_domain("example.com")

    assert exc_info.value.status_code == 402
    assert "402" in str(exc_info.value)
    assert "Insufficient credits" in str(exc_info.value)
    assert route.call_count == 1


@respx.mock
@pytest.mark.asyncio
async def test_map_domain_server_error_is_not_retried() -> None:
    route = respx.post(FIRECRAWL_MAP_URL).mock(return_value=httpx.Response(503))

    async with DiscoveryClient(api_key="k") as client:
        with pytest.raises(DiscoveryError):
            await client.map_domain("example.com")

    assert route.call_count == 1


@respx.mock
@pytest.mark.asyncio
async def test_map_domain_transport_error_raises() -> None:
    respx.post(FIRECRAWL_MAP_URL).mock(
        side_effect=httpx.ConnectError("Connection refused")
    )

    async with DiscoveryClient(api_key="k") as client:
        with pytest.raises(DiscoveryError) as exc_info:
            await client.map_domain("example.com")

    assert exc_info.value.status_code is None
    assert "Connection refused" in str(exc_info.value)


@respx.mock
@pytest.mark.asyncio
async def test_map_domain_invalid_json_raises() -> None:
    respx.post(FIRECRAWL_MAP_URL).mock(
        return_value=httpx.Response(200, text="<html>gateway</html>")
    )

    async with DiscoveryClient(api_key="k") as client:
        with pytest.raises(DiscoveryError):
            await client.map_domain("example.com")


@respx.mock
@pytest.mark.asyncio
async def test_map_domain_rejects_non_string_links() -> None:
    respx.post(FIRECRAWL_MAP_URL).mock(
        return_value=httpx.Response(200, json={"links": [{"url": "x"}]})
    )

    async with DiscoveryClient(api_key="k") as client:
        with pytest.raises(DiscoveryError):
            await client.map_domain("example.com")
