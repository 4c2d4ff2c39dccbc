"""Submit command for starting a crawl.

Publishes a crawl request to the topic the mapper's push subscription reads
from.
"""

from __future__ import annotations

import asyncio

import typer
from rich.console import Console

from crawlrelay.cli.output import print_failure
from crawlrelay.services.errors import PublishError
from crawlrelay.services.models import CrawlRequest
from crawlrelay.services.publisher import PubSubPublisher

console = Console()


def submit_command(
    domain: str = typer.Argument(..., help="Domain to crawl"),
    topic: str = typer.Option(
        ..., "-t", "--topic", envvar="INPUT_TOPIC_ID", help="Mapper input topic"
    ),
    project: str = typer.Option(
        ..., "-p", "--project", envvar="PROJECT_ID", help="Google Cloud project"
    ),
    uid: str = typer.Option(
        "", "--uid", help="Job id for the crawl (generated by the mapper if empty)"
    ),
) -> None:
    """Publish a crawl request for a domain.

    Args:
        domain: Domain to crawl.
        topic: Mapper input topic.
        project: Google Cloud project of the topic.
        uid: Optional job id.
    """
    if not domain.strip():
        raise typer.BadParameter("Domain must not be empty")

    request = CrawlRequest(domain=domain.strip(), job_id=uid)

    async def _run() -> str:
        async with PubSubPublisher(project, topic) as publisher:
            return await publisher.publish(request.to_wire())

    try:
        message_id = asyncio.run(_run())
    except PublishError as exc:
        print_failure(console, exc)
        raise typer.Exit(code=1) from exc

    console.print(
        f"Submitted crawl for {request.domain} to {topic} (message {message_id})"
    )
