"""In-memory stand-in for the Pub/Sub publisher."""

import json
from typing import Any

from crawlrelay.services.errors import PublishError


class FakePublisher:
    """Collect published messages in memory.

    Args:
        fail_on: Substrings; a message whose body contains any of them fails
            to publish with PublishError
    """

    def __init__(self, fail_on: tuple[str, ...] = ()) -> None:
        self.messages: list[bytes] = []
        self.attempts = 0
        self.closed = False
        self._fail_on = fail_on

    async def publish(self, data: bytes) -> str:
        self.attempts += 1
        text = data.decode("utf-8")
        if any(marker in text for marker in self._fail_on):
            raise PublishError(f"publish rejected for {text}")
        self.messages.append(data)
        return str(len(self.messages))

    async def close(self) -> None:
        self.closed = True

    @property
    def payloads(self) -> list[dict[str, Any]]:
        """Published messages decoded as JSON."""
        return [json.loads(message) for message in self.messages]
