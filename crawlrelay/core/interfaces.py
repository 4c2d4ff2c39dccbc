"""Core protocol definitions for crawlrelay components.

This module provides canonical protocol definitions used across the codebase
for type checking and dependency injection.
"""

from typing import Protocol


class MessagePublisher(Protocol):
    """Protocol defining expected interface for topic publishing.

    This protocol is implemented by PubSubPublisher and used by the mapper and
    processor services, which publish one serialized message per call.

    Methods required:
    - publish: Sends one payload and waits for the broker to confirm it
    - close: Flushes and releases the underlying client
    """

    async def publish(self, data: bytes) -> str:
        """Publish one message.

        Args:
            data: Serialized message body

        Returns:
            Message identifier assigned by the broker

        Raises:
            PublishError: If the broker rejects or fails to confirm the message
        """
        ...

    async def close(self) -> None:
        """Release the publisher."""
        ...


class PushHandler(Protocol):
    """Protocol for services invoked once per push-delivered message.

    Implemented by MapperService and ProcessorService. Returning normally
    acknowledges the message; raising PipelineError asks for redelivery.
    """

    async def handle(self, data: bytes) -> object:
        """Process one decoded message payload."""
        ...
