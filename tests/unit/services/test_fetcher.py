"""Unit tests for PageFetcher markdown conversion.

These tests verify the PageFetcher correctly:
- Fetches a page with a randomized user agent and converts HTML to markdown
- Falls back to a fixed user agent when generation fails
- Reports non-200 responses, transport errors and conversion errors as failures
- Issues exactly one request per call

All HTTP calls are mocked using respx.
"""

import httpx
import pytest
import respx

from crawlrelay.services import fetcher as fetcher_module
from crawlrelay.services.fetcher import (
    DEFAULT_USER_AGENT,
    PageFetcher,
    random_user_agent,
)
from tests.fixtures.payloads import EXAMPLE_PAGE_HTML


@respx.mock
@pytest.mark.asyncio
async def test_fetch_markdown_success() -> None:
    """Verify a 200 page is converted to markdown."""
    route = respx.get("https://example.com/a").mock(
        return_value=httpx.Response(200, html=EXAMPLE_PAGE_HTML)
    )

    async with PageFetcher() as fetcher:
        result = await fetcher.fetch_markdown("https://example.com/a")

    assert result.success is True
    assert result.status_code == 200
    assert result.markdown is not None
    assert "# Example Domain" in result.markdown
    assert "[More information...](https://www.iana.org/domains/example)" in (
        result.markdown
    )
    assert route.call_count == 1
    assert route.calls.last.request.headers["User-Agent"]


@respx.mock
@pytest.mark.asyncio
async def test_fetch_markdown_uses_fallback_user_agent(monkeypatch) -> None:
    """Verify the fixed user agent is sent when generation fails."""

    class _BrokenUserAgent:
        def __init__(self) -> None:
            raise RuntimeError("browser data unavailable")

    monkeypatch.setattr(fetcher_module, "UserAgent", _BrokenUserAgent)
    route = respx.get("https://example.com/a").mock(
        return_value=httpx.Response(200, html=EXAMPLE_PAGE_HTML)
    )

    async with PageFetcher() as fetcher:
        await fetcher.fetch_markdown("https://example.com/a")

    assert route.calls.last.request.headers["User-Agent"] == DEFAULT_USER_AGENT


@respx.mock
@pytest.mark.asyncio
async def test_fetch_markdown_non_200_returns_failure() -> None:
    """Verify a 404 is reported with the status code and is not retried."""
    route = respx.get("https://example.com/missing").mock(
        return_value=httpx.Response(404, text="not found")
    )

    async with PageFetcher() as fetcher:
        result = await fetcher.fetch_markdown("https://example.com/missing")

    assert result.success is False
    assert result.status_code == 404
    assert result.error == "failed to download URL: status code 404"
    assert route.call_count == 1


@respx.mock
@pytest.mark.asyncio
async def test_fetch_markdown_transport_error_returns_failure() -> None:
    respx.get("https://unreachable.example/").mock(
        side_effect=httpx.ConnectError("Name or service not known")
    )

    async with PageFetcher() as fetcher:
        result = await fetcher.fetch_markdown("https://unreachable.example/")

    assert result.success is False
    assert result.status_code is None
    assert result.error is not None
    assert result.error.startswith("failed to download URL:")
    assert "Name or service not known" in result.error


@pytest.mark.asyncio
async def test_fetch_markdown_invalid_url_returns_failure() -> None:
    """Verify URLs httpx cannot send are failures, not exceptions."""
    async with PageFetcher() as fetcher:
        result = await fetcher.fetch_markdown("ftp://example.com/file")

    assert result.success is False
    assert result.error is not None
    assert result.error.startswith("failed to download URL:")


@respx.mock
@pytest.mark.asyncio
async def test_fetch_markdown_conversion_error_returns_failure(monkeypatch) -> None:
    def _broken_markdownify(html: str, **options: object) -> str:
        raise ValueError("unsupported markup")

    monkeypatch.setattr(fetcher_module, "markdownify", _broken_markdownify)
    respx.get("https://example.com/a").mock(
        return_value=httpx.Response(200, html=EXAMPLE_PAGE_HTML)
    )

    async with PageFetcher() as fetcher:
        result = await fetcher.fetch_markdown("https://example.com/a")

    assert result.success is False
    assert result.status_code == 200
    assert result.error == "failed to convert HTML to Markdown: unsupported markup"


@respx.mock
@pytest.mark.asyncio
async def test_fetch_markdown_follows_redirects() -> None:
    respx.get("https://example.com/old").mock(
        return_value=httpx.Response(
            301, headers={"Location": "https://example.com/new"}
        )
    )
    respx.get("https://example.com/new").mock(
        return_value=httpx.Response(200, html="<h1>Moved</h1>")
    )

    async with PageFetcher() as fetcher:
        result = await fetcher.fetch_markdown("https://example.com/old")

    assert result.success is True
    assert result.markdown == "# Moved"


@respx.mock
@pytest.mark.asyncio
async def test_fetch_markdown_empty_rendering_keeps_raw_body() -> None:
    """Verify a body that renders to no markdown is still returned as content."""
    html = "<html><body></body></html>"
    respx.get("https://example.com/blank").mock(
        return_value=httpx.Response(200, html=html)
    )

    async with PageFetcher() as fetcher:
        result = await fetcher.fetch_markdown("https://example.com/blank")

    assert result.success is True
    assert result.markdown == html


def test_random_user_agent_returns_browser_string() -> None:
    assert random_user_agent().startswith("Mozilla/")
