"""Shared pytest fixtures for unit tests.

Provides an in-memory publisher standing in for Pub/Sub and settings objects
that do not read the developer's .env file.
"""

import pytest

from crawlrelay.core.config import MapperSettings, ProcessorSettings
from tests.fixtures.publisher import FakePublisher


@pytest.fixture
def publisher() -> FakePublisher:
    """Publisher that accepts every message."""
    return FakePublisher()


@pytest.fixture
def mapper_settings() -> MapperSettings:
    """Mapper settings independent of the .env file."""
    return MapperSettings(
        _env_file=None,
        project_id="test-project",
        url_topic_id="url-tasks",
        firecrawl_api_key="fc-test-key",
        page_limit=None,
    )


@pytest.fixture
def processor_settings() -> ProcessorSettings:
    """Processor settings independent of the .env file."""
    return ProcessorSettings(
        _env_file=None,
        project_id="test-project",
        output_topic_id="crawl-results",
        crawler_id="crawler-1",
        domain_to_crawl="unknown",
    )
