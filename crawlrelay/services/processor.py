"""Processor service that turns one URL task into one published crawl result."""

from __future__ import annotations

import logging
from datetime import datetime, timezone

from pydantic import ValidationError

from crawlrelay.core.config import UNKNOWN, ProcessorSettings
from crawlrelay.core.interfaces import MessagePublisher
from crawlrelay.services.errors import PublishError, SerializationError
from crawlrelay.services.fetcher import PageFetcher
from crawlrelay.services.models import (
    CrawlResult,
    ProcessOutcome,
    ResultStatus,
    URLTask,
)

logger = logging.getLogger(__name__)


class ProcessorService:
    """Handle URL tasks delivered by the processor's push subscription.

    Page-level failures (unreachable host, non-200 status, conversion error)
    never fail the invocation. They are published as a result with
    ``status=error`` and the error text as content, so every attempted URL
    leaves a record downstream. Only a failure to serialize or publish the
    result is raised, which makes Pub/Sub redeliver the task.
    """

    def __init__(
        self,
        fetcher: PageFetcher,
        publisher: MessagePublisher,
        crawler_id: str = UNKNOWN,
        default_domain: str = UNKNOWN,
    ) -> None:
        """Initialize the processor service.

        Args:
            fetcher: Page fetcher used to download and convert pages
            publisher: Publisher for the crawl result topic
            crawler_id: Identity stamped on every result
            default_domain: Domain used when a task carries none
        """
        self.fetcher = fetcher
        self.publisher = publisher
        self.crawler_id = crawler_id
        self.default_domain = default_domain

    @classmethod
    def from_settings(
        cls, settings: ProcessorSettings, publisher: MessagePublisher
    ) -> ProcessorService:
        """Build a service with a page fetcher configured from settings."""
        return cls(
            fetcher=PageFetcher(timeout=settings.fetch_timeout),
            publisher=publisher,
            crawler_id=settings.crawler_id,
            default_domain=settings.domain_to_crawl,
        )

    async def handle(self, data: bytes) -> ProcessOutcome:
        """Process one URL task payload.

        Args:
            data: JSON payload of the push message

        Returns:
            ProcessOutcome for acknowledged tasks, including dropped payloads

        Raises:
            SerializationError: If the result could not be serialized
            PublishError: If the result could not be published
        """
        try:
            task = URLTask.model_validate_json(data)
        except ValidationError as exc:
            logger.warning("Failed to parse URL task, dropping: %s", exc)
            return ProcessOutcome(dropped=True, reason="malformed payload")

        if not task.url:
            logger.warning("URL is empty in task, dropping")
            return ProcessOutcome(dropped=True, reason="empty url")

        result = await self.process_task(task)

        try:
            body = result.to_wire()
        except (ValueError, TypeError) as exc:
            logger.error("Failed to serialize result for %s: %s", task.url, exc)
            raise SerializationError(
                f"failed to serialize result for {task.url}: {exc}"
            ) from exc

        try:
            message_id = await self.publisher.publish(body)
        except PublishError as exc:
            logger.error("Failed to publish result for %s: %s", task.url, exc)
            raise

        logger.info(
            "Processed and published result for URL: %s (status: %s)",
            task.url,
            result.status.value,
        )
        return ProcessOutcome(
            url=task.url,
            status=result.status,
            message_id=message_id,
            produced_at=result.produced_at,
        )

    async def process_task(self, task: URLTask) -> CrawlResult:
        """Fetch and convert the task's page into a crawl result.

        Args:
            task: URL task with a non-empty url

        Returns:
            CrawlResult with converted content or the failure description
        """
        fetched = await self.fetcher.fetch_markdown(task.url)
        if fetched.success:
            status = ResultStatus.SUCCESS
            content = fetched.markdown or ""
        else:
            logger.warning(
                "Failed to convert URL to markdown for %s: %s", task.url, fetched.error
            )
            status = ResultStatus.ERROR
            content = fetched.error or "unknown fetch error"

        return CrawlResult(
            url=task.url,
            content=content,
            produced_at=datetime.now(timezone.utc),
            crawler_id=self.crawler_id,
            domain=task.domain or self.default_domain,
            job_id=task.job_id or UNKNOWN,
            status=status,
        )

    async def close(self) -> None:
        """Close the page fetcher."""
        await self.fetcher.close()
