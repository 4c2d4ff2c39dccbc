"""Pub/Sub publisher used by both pipeline stages."""

from __future__ import annotations

import asyncio
import logging

from google.api_core.exceptions import GoogleAPIError
from google.auth.exceptions import GoogleAuthError
from google.cloud import pubsub_v1

from crawlrelay.services.errors import PublishError

logger = logging.getLogger(__name__)


class PubSubPublisher:
    """Publish messages to a single Google Cloud Pub/Sub topic.

    The underlying PublisherClient batches and sends messages on background
    threads. Each publish future is bridged into asyncio so the caller awaits
    the broker's confirmation, and cancelling the awaiting task cancels the
    wait.

    Args:
        project_id: Google Cloud project of the topic
        topic_id: Topic name within the project
        client: Optional preconfigured PublisherClient
    """

    def __init__(
        self,
        project_id: str,
        topic_id: str,
        client: pubsub_v1.PublisherClient | None = None,
    ) -> None:
        self._client = client or pubsub_v1.PublisherClient()
        self._topic_path = self._client.topic_path(project_id, topic_id)
        self._closed = False

    @property
    def topic_path(self) -> str:
        """Fully qualified topic path (``projects/{project}/topics/{topic}``)."""
        return self._topic_path

    async def publish(self, data: bytes) -> str:
        """Publish one message and wait until the broker confirms it.

        Args:
            data: Message body

        Returns:
            Server-assigned message id

        Raises:
            PublishError: If the client rejects the message or the publish fails
        """
        try:
            future = self._client.publish(self._topic_path, data)
            return await asyncio.wrap_future(future)
        except (GoogleAPIError, GoogleAuthError, RuntimeError, ValueError) as exc:
            raise PublishError(
                f"failed to publish to {self._topic_path}: {exc}"
            ) from exc

    async def close(self) -> None:
        """Flush pending messages and stop the client.

        Safe to call more than once.
        """
        if self._closed:
            return
        self._closed = True
        await asyncio.to_thread(self._client.stop)
        logger.debug("Publisher for %s stopped", self._topic_path)

    async def __aenter__(self) -> PubSubPublisher:
        """Enter async context manager."""
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        """Exit async context manager and cleanup resources."""
        await self.close()
