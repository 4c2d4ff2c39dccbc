"""Service layer for URL discovery, page processing and publishing."""

from crawlrelay.services.discovery import DiscoveryClient
from crawlrelay.services.errors import (
    DiscoveryError,
    PipelineError,
    PublishError,
    SerializationError,
)
from crawlrelay.services.fetcher import PageFetcher
from crawlrelay.services.mapper import MapperService, generate_job_id
from crawlrelay.services.models import (
    CrawlRequest,
    CrawlResult,
    FetchResult,
    MapOutcome,
    ProcessOutcome,
    ResultStatus,
    URLTask,
)
from crawlrelay.services.processor import ProcessorService
from crawlrelay.services.publisher import PubSubPublisher

__all__ = [
    "CrawlRequest",
    "CrawlResult",
    "DiscoveryClient",
    "DiscoveryError",
    "FetchResult",
    "generate_job_id",
    "MapOutcome",
    "MapperService",
    "PageFetcher",
    "PipelineError",
    "ProcessOutcome",
    "ProcessorService",
    "PublishError",
    "PubSubPublisher",
    "ResultStatus",
    "SerializationError",
    "URLTask",
]
