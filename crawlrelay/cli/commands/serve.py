"""Serve command for running a pipeline stage behind uvicorn."""

from __future__ import annotations

from enum import Enum

import typer
import uvicorn
from pydantic import ValidationError
from rich.console import Console

from crawlrelay.api.app import create_mapper_app, create_processor_app
from crawlrelay.cli.output import print_config_error
from crawlrelay.core.config import (
    MapperSettings,
    ProcessorSettings,
    ServerSettings,
)

console = Console()


class Stage(str, Enum):
    """Pipeline stage served by one process."""

    MAPPER = "mapper"
    PROCESSOR = "processor"


def serve_command(
    stage: Stage = typer.Argument(..., help="Pipeline stage to serve"),
    host: str | None = typer.Option(None, "--host", help="Interface to bind"),
    port: int | None = typer.Option(
        None, "-p", "--port", help="Port to listen on (default: $PORT or 8080)"
    ),
) -> None:
    """Run the push endpoint for one pipeline stage.

    Configuration is read from the environment. Missing required variables
    abort before the server starts.

    Args:
        stage: Which stage to serve.
        host: Interface override.
        port: Port override.
    """
    try:
        server = ServerSettings()
        if stage is Stage.MAPPER:
            app = create_mapper_app(MapperSettings())
        else:
            app = create_processor_app(ProcessorSettings())
    except ValidationError as exc:
        print_config_error(console, exc)
        raise typer.Exit(code=1) from exc

    uvicorn.run(
        app,
        host=host or server.host,
        port=port or server.port,
    )
