"""Exceptions that make a push invocation fail and trigger redelivery.

Permanently malformed input never raises: the services log and acknowledge
it. Everything here is surfaced to the push endpoint as a 500 so Pub/Sub
redelivers the original message.
"""

from __future__ import annotations


class PipelineError(Exception):
    """Base class for failures that should be retried by redelivery."""


class DiscoveryError(PipelineError):
    """The URL discovery API call failed.

    Args:
        message: Human-readable description of the failure
        status_code: HTTP status returned by the API, if a response arrived
    """

    def __init__(self, message: str, status_code: int | None = None) -> None:
        super().__init__(message)
        self.status_code = status_code


class PublishError(PipelineError):
    """One or more messages could not be published.

    Args:
        message: Human-readable description of the failure
        failed: Number of publishes that failed
        total: Number of publishes attempted
    """

    def __init__(self, message: str, failed: int = 1, total: int = 1) -> None:
        super().__init__(message)
        self.failed = failed
        self.total = total


class SerializationError(PipelineError):
    """An outbound message could not be serialized."""
