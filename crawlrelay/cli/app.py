"""Typer application entry point for crawlrelay CLI."""

import typer

from crawlrelay.cli.commands import map as map_urls
from crawlrelay.cli.commands import scrape as scrape_command
from crawlrelay.cli.commands import serve as serve_command
from crawlrelay.cli.commands import submit as submit_command

app = typer.Typer(no_args_is_help=True, name="crawlrelay")

app.command(name="serve", help="Run a pipeline stage's push endpoint")(
    serve_command.serve_command
)
app.command(name="map", help="Discover URLs for a domain")(map_urls.map_command)
app.command(name="scrape", help="Fetch a page and print it as markdown")(
    scrape_command.scrape_command
)
app.command(name="submit", help="Publish a crawl request to the mapper topic")(
    submit_command.submit_command
)


if __name__ == "__main__":
    app()
