"""Configuration module for the crawl pipeline services.

Provides Pydantic-based configuration management with environment variable
support. Each service reads its settings once at startup; a missing required
variable raises ``ValidationError`` and aborts the process.

Example:
    >>> from crawlrelay.core.config import ProcessorSettings
    >>> settings = ProcessorSettings(project_id="demo", output_topic_id="pages")
    >>> print(settings.crawler_id)
    'unknown'
"""

from pydantic import SecretStr, ValidationInfo, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

UNKNOWN = "unknown"

DEFAULT_FIRECRAWL_API_URL = "https://api.firecrawl.dev/v1/map"

LOG_LEVELS = frozenset({"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"})

_BASE_CONFIG = SettingsConfigDict(
    env_file=".env",
    env_file_encoding="utf-8",
    case_sensitive=False,
    validate_default=True,
    extra="ignore",
    frozen=True,
)


def _require_non_empty(name: str, v: str) -> str:
    if not v.strip():
        raise ValueError(f"{name} must not be empty")
    return v.strip()


def _validate_log_level(v: str) -> str:
    level = v.upper()
    if level not in LOG_LEVELS:
        raise ValueError(f"Unknown log level: {v}")
    return level


class MapperSettings(BaseSettings):
    """URL mapper service configuration.

    Attributes:
        project_id: Google Cloud project hosting the Pub/Sub topics (required)
        url_topic_id: Topic receiving one URL task per discovered link (required)
        firecrawl_api_key: Credential for the Firecrawl map API (required)
        firecrawl_api_url: Firecrawl map endpoint
        include_subdomains: Ask the discovery API to include subdomains
        page_limit: Optional cap on the number of links returned by discovery
        max_concurrent_publishes: Upper bound on in-flight publishes per request
        log_level: Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)

    Raises:
        ValidationError: If required fields are missing or values are invalid
    """

    project_id: str
    url_topic_id: str
    firecrawl_api_key: SecretStr

    firecrawl_api_url: str = DEFAULT_FIRECRAWL_API_URL
    include_subdomains: bool = True
    page_limit: int | None = None

    max_concurrent_publishes: int = 100

    log_level: str = "INFO"

    model_config = _BASE_CONFIG

    @field_validator("project_id", "url_topic_id")
    @classmethod
    def validate_required_ids(
        cls: type["MapperSettings"], v: str, info: ValidationInfo
    ) -> str:
        """Reject blank identifiers, which the deployment treats as unset."""
        return _require_non_empty(info.field_name, v)

    @field_validator("firecrawl_api_key")
    @classmethod
    def validate_api_key(
        cls: type["MapperSettings"], v: SecretStr
    ) -> SecretStr:
        """Reject a blank discovery API key."""
        if not v.get_secret_value().strip():
            raise ValueError("firecrawl_api_key must not be empty")
        return v

    @field_validator("page_limit")
    @classmethod
    def validate_page_limit(
        cls: type["MapperSettings"], v: int | None
    ) -> int | None:
        """Validate page_limit is positive when set."""
        if v is not None and v <= 0:
            raise ValueError("page_limit must be positive")
        return v

    @field_validator("max_concurrent_publishes")
    @classmethod
    def validate_max_concurrent_publishes(
        cls: type["MapperSettings"], v: int
    ) -> int:
        """Validate max_concurrent_publishes is positive.

        A discovery call can return thousands of links. The fan-out publishes
        them concurrently, at most this many at a time.
        """
        if v <= 0:
            raise ValueError("max_concurrent_publishes must be positive")
        return v

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls: type["MapperSettings"], v: str) -> str:
        return _validate_log_level(v)


class ProcessorSettings(BaseSettings):
    """Page processor service configuration.

    Attributes:
        project_id: Google Cloud project hosting the Pub/Sub topics (required)
        output_topic_id: Topic receiving one crawl result per page (required)
        crawler_id: Identity stamped on every result (default "unknown")
        domain_to_crawl: Domain used when a task carries none (default "unknown")
        fetch_timeout: Optional page fetch timeout in seconds; None leaves the
            request bounded only by the platform deadline
        log_level: Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
    """

    project_id: str
    output_topic_id: str

    crawler_id: str = UNKNOWN
    domain_to_crawl: str = UNKNOWN

    fetch_timeout: float | None = None

    log_level: str = "INFO"

    model_config = _BASE_CONFIG

    @field_validator("project_id", "output_topic_id")
    @classmethod
    def validate_required_ids(
        cls: type["ProcessorSettings"], v: str, info: ValidationInfo
    ) -> str:
        """Reject blank identifiers, which the deployment treats as unset."""
        return _require_non_empty(info.field_name, v)

    @field_validator("crawler_id", "domain_to_crawl")
    @classmethod
    def default_blank_to_unknown(cls: type["ProcessorSettings"], v: str) -> str:
        """Fall back to "unknown" when the variable is set but blank."""
        return v.strip() or UNKNOWN

    @field_validator("fetch_timeout")
    @classmethod
    def validate_fetch_timeout(
        cls: type["ProcessorSettings"], v: float | None
    ) -> float | None:
        if v is not None and v <= 0:
            raise ValueError("fetch_timeout must be positive")
        return v

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls: type["ProcessorSettings"], v: str) -> str:
        return _validate_log_level(v)


class ServerSettings(BaseSettings):
    """HTTP listener configuration shared by both services.

    Attributes:
        host: Interface to bind
        port: Port to listen on; Cloud Run injects ``PORT``
    """

    host: str = "0.0.0.0"
    port: int = 8080

    model_config = _BASE_CONFIG

    @field_validator("port")
    @classmethod
    def validate_port(cls: type["ServerSettings"], v: int) -> int:
        if not 0 < v < 65536:
            raise ValueError("port must be between 1 and 65535")
        return v
