"""Wire messages and service-layer result models for the crawl pipeline.

Messages exchanged over Pub/Sub use short wire names (``uid``, ``markdown``,
``timestamp``); the models expose descriptive attribute names and accept
either form on input.
"""

from dataclasses import dataclass
from datetime import datetime
from enum import Enum

from pydantic import AwareDatetime, BaseModel, ConfigDict, Field


class ResultStatus(str, Enum):
    """Outcome of processing a single page."""

    SUCCESS = "success"
    ERROR = "error"


class _WireModel(BaseModel):
    model_config = ConfigDict(
        frozen=True,
        populate_by_name=True,
        extra="ignore",
        strict=True,
    )

    def to_wire(self) -> bytes:
        """Serialize to the JSON body published on the topic."""
        return self.model_dump_json(by_alias=True).encode("utf-8")


class CrawlRequest(_WireModel):
    """Mapper input: a domain to expand into URLs."""

    domain: str = ""
    job_id: str = Field(default="", alias="uid")


class URLTask(_WireModel):
    """Mapper output and processor input: one discovered URL."""

    url: str = ""
    job_id: str = Field(default="", alias="uid")
    domain: str = ""


class CrawlResult(_WireModel):
    """Processor output: converted page content or an error description."""

    url: str
    content: str = Field(alias="markdown")
    produced_at: AwareDatetime = Field(alias="timestamp")
    crawler_id: str
    domain: str
    job_id: str = Field(alias="uid")
    status: ResultStatus


@dataclass(frozen=True)
class FetchResult:
    """Result for fetching and converting a single page.

    Args:
        url: Requested URL
        success: Whether the page was fetched and converted
        markdown: Converted markdown content
        error: Error message if fetch or conversion failed
        status_code: HTTP status code of the page response, if one arrived
    """

    url: str
    success: bool
    markdown: str | None = None
    error: str | None = None
    status_code: int | None = None


@dataclass(frozen=True)
class MapOutcome:
    """Acknowledged outcome of one mapper invocation.

    Args:
        domain: Domain from the request, if it parsed
        job_id: Job identifier used for published tasks
        published: Number of URL tasks published
        dropped: Whether the payload was dropped as permanently malformed
        reason: Why the payload was dropped
    """

    domain: str | None = None
    job_id: str | None = None
    published: int = 0
    dropped: bool = False
    reason: str | None = None


@dataclass(frozen=True)
class ProcessOutcome:
    """Acknowledged outcome of one processor invocation.

    Args:
        url: URL from the task, if it parsed
        status: Status of the published result
        message_id: Broker identifier of the published result
        produced_at: Timestamp stamped on the published result
        dropped: Whether the payload was dropped as permanently malformed
        reason: Why the payload was dropped
    """

    url: str | None = None
    status: ResultStatus | None = None
    message_id: str | None = None
    produced_at: datetime | None = None
    dropped: bool = False
    reason: str | None = None
