"""Discovery client for expanding a domain into URLs via the Firecrawl map API."""

from __future__ import annotations

from typing import Any

import httpx

from crawlrelay.core.config import DEFAULT_FIRECRAWL_API_URL
from crawlrelay.services.errors import DiscoveryError

# Response bodies can be large HTML error pages
MAX_ERROR_BODY_CHARS = 500


class DiscoveryClient:
    """Client for the Firecrawl ``/v1/map`` endpoint.

    The client issues exactly one request per call. Transient failures are
    not retried here: they raise DiscoveryError so the push subscription
    redelivers the whole crawl request.

    Example:
        >>> async with DiscoveryClient(api_key="fc-...") as client:
        ...     links = await client.map_domain("example.com")
    """

    def __init__(
        self,
        api_key: str,
        api_url: str = DEFAULT_FIRECRAWL_API_URL,
        include_subdomains: bool = True,
        page_limit: int | None = None,
        timeout: float | None = None,
    ) -> None:
        """Initialize the discovery client.

        Args:
            api_key: Firecrawl API key sent as a bearer token
            api_url: Full URL of the map endpoint
            include_subdomains: Whether discovery should include subdomains
            page_limit: Optional maximum number of links to request
            timeout: Request timeout in seconds; None disables the client timeout
        """
        self._api_url = api_url
        self._include_subdomains = include_subdomains
        self._page_limit = page_limit
        self._client = httpx.AsyncClient(
            timeout=timeout,
            headers={"Authorization": f"Bearer {api_key}"},
        )

    async def map_domain(self, domain: str) -> list[str]:
        """Discover the URLs belonging to a domain.

        Args:
            domain: Root domain or URL to expand

        Returns:
            Discovered links in the order the API returned them. An empty list
            means the API succeeded but found nothing.

        Raises:
            DiscoveryError: On transport failure, non-200 status or an
                undecodable response body
        """
        payload: dict[str, Any] = {
            "url": domain,
            "includeSubdomains": self._include_subdomains,
        }
        if self._page_limit is not None:
            payload["limit"] = self._page_limit

        try:
            response = await self._client.post(self._api_url, json=payload)
        except httpx.HTTPError as exc:
            raise DiscoveryError(f"failed to call discovery API: {exc}") from exc

        if response.status_code != httpx.codes.OK:
            body = response.text[:MAX_ERROR_BODY_CHARS]
            raise DiscoveryError(
                f"discovery API request failed with status "
                f"{response.status_code}: {body}",
                status_code=response.status_code,
            )

        return self._parse_links(response)

    async def close(self) -> None:
        """Close the underlying HTTP client."""
        await self._client.aclose()

    async def __aenter__(self) -> DiscoveryClient:
        """Enter async context manager."""
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        """Exit async context manager and cleanup resources."""
        await self.close()

    def _parse_links(self, response: httpx.Response) -> list[str]:
        try:
            data = response.json()
        except ValueError as exc:
            raise DiscoveryError(
                f"failed to decode discovery response: {exc}",
                status_code=response.status_code,
            ) from exc

        if not isinstance(data, dict):
            raise DiscoveryError(
                "failed to decode discovery response: expected a JSON object",
                status_code=response.status_code,
            )

        links = data.get("links") or []
        if not isinstance(links, list) or not all(
            isinstance(link, str) for link in links
        ):
            raise DiscoveryError(
                "failed to decode discovery response: links must be a list "
                "of strings",
                status_code=response.status_code,
            )
        return links
