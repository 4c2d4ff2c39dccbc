"""FastAPI applications for the mapper and processor push endpoints.

Each pipeline stage runs as its own service with the same HTTP surface:
``POST /`` receives push deliveries and ``GET /health`` reports liveness.
Settings are loaded once at startup; a missing required variable aborts the
process before it starts listening.

Example:
    uvicorn --factory crawlrelay.api.app:mapper_app --host 0.0.0.0 --port 8080
"""

import logging
from collections.abc import AsyncIterator, Callable
from contextlib import AbstractAsyncContextManager, asynccontextmanager

from fastapi import FastAPI

from crawlrelay.api.routes.health import router as health_router
from crawlrelay.api.routes.push import router as push_router
from crawlrelay.core.config import MapperSettings, ProcessorSettings
from crawlrelay.core.interfaces import PushHandler
from crawlrelay.core.logger import configure_logging
from crawlrelay.services.mapper import MapperService
from crawlrelay.services.processor import ProcessorService
from crawlrelay.services.publisher import PubSubPublisher

logger = logging.getLogger(__name__)

HandlerFactory = Callable[[], AbstractAsyncContextManager[PushHandler]]


def _create_app(service_name: str, handler_factory: HandlerFactory) -> FastAPI:
    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        """Open the stage's clients on startup and release them on shutdown."""
        async with handler_factory() as handler:
            app.state.handler = handler
            logger.info("%s service started", service_name.capitalize())
            yield
        logger.info("%s service stopped", service_name.capitalize())

    app = FastAPI(
        title=f"crawlrelay {service_name}",
        description=f"Pub/Sub push endpoint for the {service_name} stage",
        version="0.1.0",
        lifespan=lifespan,
    )
    app.state.service_name = service_name

    app.include_router(health_router)
    app.include_router(push_router)
    return app


def create_mapper_app(
    settings: MapperSettings, service: MapperService | None = None
) -> FastAPI:
    """Create the mapper application.

    Args:
        settings: Mapper configuration
        service: Optional prebuilt service; when given, the caller owns its
            clients and the app does not close them

    Returns:
        FastAPI application serving the mapper push endpoint
    """
    configure_logging(settings.log_level)

    @asynccontextmanager
    async def handler_factory() -> AsyncIterator[PushHandler]:
        if service is not None:
            yield service
            return
        async with PubSubPublisher(
            settings.project_id, settings.url_topic_id
        ) as publisher:
            built = MapperService.from_settings(settings, publisher)
            try:
                yield built
            finally:
                await built.close()

    return _create_app("mapper", handler_factory)


def create_processor_app(
    settings: ProcessorSettings, service: ProcessorService | None = None
) -> FastAPI:
    """Create the processor application.

    Args:
        settings: Processor configuration
        service: Optional prebuilt service; when given, the caller owns its
            clients and the app does not close them

    Returns:
        FastAPI application serving the processor push endpoint
    """
    configure_logging(settings.log_level)

    @asynccontextmanager
    async def handler_factory() -> AsyncIterator[PushHandler]:
        if service is not None:
            yield service
            return
        async with PubSubPublisher(
            settings.project_id, settings.output_topic_id
        ) as publisher:
            built = ProcessorService.from_settings(settings, publisher)
            try:
                yield built
            finally:
                await built.close()

    return _create_app("processor", handler_factory)


def mapper_app() -> FastAPI:
    """Build the mapper application from environment configuration."""
    return create_mapper_app(MapperSettings())


def processor_app() -> FastAPI:
    """Build the processor application from environment configuration."""
    return create_processor_app(ProcessorSettings())
