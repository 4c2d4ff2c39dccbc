"""Map command for URL discovery.

Runs only the discovery step of the mapper for one domain and prints the
discovered URLs, without publishing anything.
"""

from __future__ import annotations

import asyncio
from pathlib import Path

import typer
from pydantic import ValidationError
from rich.console import Console

from crawlrelay.cli.output import print_config_error, print_failure
from crawlrelay.core.config import MapperSettings
from crawlrelay.services.discovery import DiscoveryClient
from crawlrelay.services.errors import DiscoveryError

console = Console()


def map_command(
    domain: str = typer.Argument(..., help="Domain to map"),
    limit: int | None = typer.Option(
        None, "-l", "--limit", help="Maximum number of URLs to discover"
    ),
    subdomains: bool = typer.Option(
        True,
        "--subdomains/--no-subdomains",
        help="Include URLs on subdomains",
    ),
    output: Path | None = typer.Option(None, "-o", "--output"),
) -> None:
    """Discover URLs for a domain via the discovery API.

    Args:
        domain: Domain to map.
        limit: Optional cap on discovered URLs (overrides PAGE_LIMIT).
        subdomains: When True, include subdomain URLs.
        output: Optional output file for URLs.
    """
    try:
        settings = MapperSettings()
    except ValidationError as exc:
        print_config_error(console, exc)
        raise typer.Exit(code=1) from exc

    async def _run() -> list[str]:
        """Execute the discovery request."""
        async with DiscoveryClient(
            api_key=settings.firecrawl_api_key.get_secret_value(),
            api_url=settings.firecrawl_api_url,
            include_subdomains=subdomains,
            page_limit=limit or settings.page_limit,
        ) as client:
            return await client.map_domain(domain)

    try:
        links = asyncio.run(_run())
    except DiscoveryError as exc:
        print_failure(console, exc)
        raise typer.Exit(code=1) from exc

    if output is None:
        for link in links:
            console.print(link, markup=False, highlight=False)
        console.print(f"Unique URLs: {len(set(links))}")
    else:
        output.write_text("\n".join(links) + "\n" if links else "")
        console.print(f"Wrote {len(links)} URLs to {output}")
