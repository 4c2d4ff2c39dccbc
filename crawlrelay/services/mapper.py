"""Mapper service that expands a crawl request into per-URL tasks.

The mapper receives one CrawlRequest per push invocation, asks the discovery
API for every URL under the domain and publishes one URLTask per link. Pub/Sub
redelivery is the only retry mechanism: a failed discovery call or any failed
publish makes the whole request fail, and the redelivered request repeats
discovery and republishes every link. Downstream processing tolerates the
resulting duplicates.
"""

from __future__ import annotations

import asyncio
import logging
import secrets
import time

from pydantic import ValidationError

from crawlrelay.core.config import MapperSettings
from crawlrelay.core.interfaces import MessagePublisher
from crawlrelay.services.discovery import DiscoveryClient
from crawlrelay.services.errors import DiscoveryError, PublishError
from crawlrelay.services.models import CrawlRequest, MapOutcome, URLTask

logger = logging.getLogger(__name__)


def generate_job_id() -> str:
    """Generate a unique job identifier.

    Returns:
        Identifier of the form ``auto-{unix_seconds}-{8 hex chars}``
    """
    return f"auto-{int(time.time())}-{secrets.token_hex(4)}"


class MapperService:
    """Handle crawl requests delivered by the mapper's push subscription.

    Attributes:
        discovery: Client for the URL discovery API.
        publisher: Publisher for the URL task topic.

    Example:
        >>> service = MapperService(discovery, publisher, max_concurrent_publishes=50)
        >>> outcome = await service.handle(b'{"domain": "example.com"}')
        >>> print(outcome.published)
        2
    """

    def __init__(
        self,
        discovery: DiscoveryClient,
        publisher: MessagePublisher,
        max_concurrent_publishes: int = 100,
    ) -> None:
        """Initialize the mapper service.

        Args:
            discovery: Client for the URL discovery API
            publisher: Publisher for the URL task topic
            max_concurrent_publishes: Upper bound on in-flight publishes
        """
        self.discovery = discovery
        self.publisher = publisher
        self._max_concurrent_publishes = max_concurrent_publishes

    @classmethod
    def from_settings(
        cls, settings: MapperSettings, publisher: MessagePublisher
    ) -> MapperService:
        """Build a service with a discovery client configured from settings."""
        discovery = DiscoveryClient(
            api_key=settings.firecrawl_api_key.get_secret_value(),
            api_url=settings.firecrawl_api_url,
            include_subdomains=settings.include_subdomains,
            page_limit=settings.page_limit,
        )
        return cls(
            discovery=discovery,
            publisher=publisher,
            max_concurrent_publishes=settings.max_concurrent_publishes,
        )

    async def handle(self, data: bytes) -> MapOutcome:
        """Process one crawl request payload.

        Args:
            data: JSON payload of the push message

        Returns:
            MapOutcome for acknowledged requests, including dropped payloads

        Raises:
            DiscoveryError: If the discovery API call failed
            PublishError: If any URL task failed to publish
        """
        try:
            request = CrawlRequest.model_validate_json(data)
        except ValidationError as exc:
            logger.warning("Failed to parse crawl request, dropping: %s", exc)
            return MapOutcome(dropped=True, reason="malformed payload")

        if not request.domain:
            logger.warning("Domain is empty in crawl request, dropping")
            return MapOutcome(dropped=True, reason="empty domain")

        job_id = request.job_id
        if not job_id:
            job_id = generate_job_id()
            logger.info("Generated job id for domain %s: %s", request.domain, job_id)

        logger.info(
            "Received crawl request for domain: %s, job id: %s", request.domain, job_id
        )

        try:
            links = await self.discovery.map_domain(request.domain)
        except DiscoveryError as exc:
            logger.error(
                "Discovery failed for domain %s (job id: %s): %s",
                request.domain,
                job_id,
                exc,
            )
            raise

        if not links:
            logger.warning(
                "Discovery returned no URLs for domain %s (job id: %s)",
                request.domain,
                job_id,
            )
            return MapOutcome(domain=request.domain, job_id=job_id, published=0)

        await self.publish_links(links, job_id=job_id, domain=request.domain)

        logger.info(
            "Published %d URLs for domain %s (job id: %s)",
            len(links),
            request.domain,
            job_id,
        )
        return MapOutcome(domain=request.domain, job_id=job_id, published=len(links))

    async def publish_links(self, links: list[str], job_id: str, domain: str) -> None:
        """Publish one URL task per link and wait for every publish to finish.

        All publishes run to completion even when some fail, so the caller
        sees the full picture before the request is redelivered.

        Args:
            links: Discovered URLs
            job_id: Job identifier shared by every task
            domain: Domain of the originating request

        Raises:
            PublishError: If at least one publish failed
        """
        semaphore = asyncio.Semaphore(self._max_concurrent_publishes)

        async def _bounded_publish(link: str) -> str:
            async with semaphore:
                message = URLTask(url=link, job_id=job_id, domain=domain)
                return await self.publisher.publish(message.to_wire())

        tasks = [asyncio.create_task(_bounded_publish(link)) for link in links]
        results = await asyncio.gather(*tasks, return_exceptions=True)

        errors: list[tuple[str, BaseException]] = []
        for link, result in zip(links, results):
            if isinstance(result, BaseException):
                # Cancellation of the invocation is not a publish failure
                if isinstance(result, asyncio.CancelledError):
                    raise result
                logger.error("Failed to publish task for %s: %s", link, result)
                errors.append((link, result))

        if errors:
            first_link, first_error = errors[0]
            raise PublishError(
                f"encountered {len(errors)} errors while publishing. "
                f"First error ({first_link}): {first_error}",
                failed=len(errors),
                total=len(links),
            ) from first_error

    async def close(self) -> None:
        """Close the discovery client."""
        await self.discovery.close()
