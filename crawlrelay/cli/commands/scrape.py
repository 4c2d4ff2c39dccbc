"""Scrape command for converting a single page to markdown."""

from __future__ import annotations

import asyncio
from pathlib import Path

import typer
from rich.console import Console

from crawlrelay.cli.output import print_failure
from crawlrelay.services.fetcher import PageFetcher
from crawlrelay.services.models import FetchResult

console = Console()


def scrape_command(
    url: str = typer.Argument(..., help="URL to scrape"),
    output: Path | None = typer.Option(None, "-o", "--output"),
    timeout: float | None = typer.Option(
        None, "-t", "--timeout", help="Fetch timeout in seconds"
    ),
) -> None:
    """Fetch one page and output its markdown, as the processor would."""

    async def _run() -> FetchResult:
        async with PageFetcher(timeout=timeout) as fetcher:
            return await fetcher.fetch_markdown(url)

    result = asyncio.run(_run())
    if not result.success:
        print_failure(console, result.error)
        raise typer.Exit(code=1)

    markdown = result.markdown or ""
    if output is None:
        console.print(markdown, markup=False, highlight=False)
    else:
        output.write_text(markdown)
        console.print(f"Wrote {len(markdown)} characters to {output}")
