"""Page fetcher that downloads a URL and converts its HTML to markdown."""

from __future__ import annotations

import logging

import httpx
from fake_useragent import UserAgent
from markdownify import ATX, markdownify

from crawlrelay.services.models import FetchResult

logger = logging.getLogger(__name__)

DEFAULT_USER_AGENT = (
    "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36 "
    "(KHTML, like Gecko) Chrome/58.0.3029.110 Safari/537.36"
)


def random_user_agent() -> str:
    """Return a random browser user agent, or a fixed one if generation fails."""
    try:
        return UserAgent().random
    except Exception as exc:  # noqa: BLE001
        logger.debug("User agent generation failed, using default: %s", exc)
        return DEFAULT_USER_AGENT


def html_to_markdown(html: str) -> str:
    """Convert an HTML document to markdown with ATX (``#``) headings."""
    return markdownify(html, heading_style=ATX).strip()


class PageFetcher:
    """Fetch single pages and convert them to markdown.

    Every request is a single GET with a randomized user agent to reduce
    trivial bot blocking. Nothing is retried: a failed fetch is reported in
    the returned FetchResult and the caller decides what to publish.

    Args:
        timeout: Request timeout in seconds; None disables the client timeout
    """

    def __init__(self, timeout: float | None = None) -> None:
        self._client = httpx.AsyncClient(timeout=timeout, follow_redirects=True)

    async def fetch_markdown(self, url: str) -> FetchResult:
        """Download a page and convert its body to markdown.

        A non-empty body whose markdown rendering is empty (only scripts or
        an empty <body>) is returned as its raw text so successful results
        always carry content.

        Args:
            url: Page URL

        Returns:
            FetchResult with markdown on success, or an error description
        """
        headers = {"User-Agent": random_user_agent()}
        try:
            response = await self._client.get(url, headers=headers)
        except (httpx.HTTPError, httpx.InvalidURL) as exc:
            return FetchResult(
                url=url, success=False, error=f"failed to download URL: {exc}"
            )

        if response.status_code != httpx.codes.OK:
            return FetchResult(
                url=url,
                success=False,
                error=f"failed to download URL: status code {response.status_code}",
                status_code=response.status_code,
            )

        try:
            markdown = html_to_markdown(response.text)
        except Exception as exc:  # noqa: BLE001
            return FetchResult(
                url=url,
                success=False,
                error=f"failed to convert HTML to Markdown: {exc}",
                status_code=response.status_code,
            )

        if not markdown:
            markdown = response.text.strip()

        return FetchResult(
            url=url,
            success=True,
            markdown=markdown,
            status_code=response.status_code,
        )

    async def close(self) -> None:
        """Close the underlying HTTP client."""
        await self._client.aclose()

    async def __aenter__(self) -> PageFetcher:
        """Enter async context manager."""
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        """Exit async context manager and cleanup resources."""
        await self.close()
