"""Unit tests for scrape CLI command."""

from __future__ import annotations

from pathlib import Path

from typer.testing import CliRunner

from crawlrelay.cli.app import app
from crawlrelay.services.models import FetchResult

runner = CliRunner()


def test_scrape_command_prints_markdown(monkeypatch) -> None:
    async def _fake_fetch(self, url: str) -> FetchResult:
        return FetchResult(url=url, success=True, markdown="# Title", status_code=200)

    monkeypatch.setattr(
        "crawlrelay.cli.commands.scrape.PageFetcher.fetch_markdown", _fake_fetch
    )

    result = runner.invoke(app, ["scrape", "https://example.com"])
    assert result.exit_code == 0
    assert "# Title" in result.output


def test_scrape_command_writes_file(tmp_path: Path, monkeypatch) -> None:
    async def _fake_fetch(self, url: str) -> FetchResult:
        return FetchResult(url=url, success=True, markdown="# Title", status_code=200)

    monkeypatch.setattr(
        "crawlrelay.cli.commands.scrape.PageFetcher.fetch_markdown", _fake_fetch
    )

    output_path = tmp_path / "page.md"
    result = runner.invoke(
        app, ["scrape", "https://example.com", "-o", str(output_path)]
    )
    assert result.exit_code == 0
    assert output_path.read_text() == "# Title"


def test_scrape_command_reports_failure(monkeypatch) -> None:
    async def _fake_fetch(self, url: str) -> FetchResult:
        return FetchResult(
            url=url,
            success=False,
            error="failed to download URL: status code 404",
            status_code=404,
        )

    monkeypatch.setattr(
        "crawlrelay.cli.commands.scrape.PageFetcher.fetch_markdown", _fake_fetch
    )

    result = runner.invoke(app, ["scrape", "https://example.com/missing"])
    assert result.exit_code == 1
    assert "status code 404" in result.output
