"""
Unit tests for bounded DOM scraping and the page context implementations.
"""

from __future__ import annotations

import asyncio
from unittest.mock import AsyncMock

import pytest
from docharvest.services.exceptions import ResolutionError, ScrapeFailedError, ScrapeTimeoutError
from docharvest.services.models import ScrapeResponse
from docharvest.services.protocols import PageContext
from docharvest.services.scraping import PlaywrightPageContext, SoupPageContext, scrape_download_url

SELECTORS = ['a[data-resin-target="download"]', "a.btn-download"]


class TestScrapeDownloadUrl:
    @pytest.mark.asyncio
    async def test_success(self, mock_page):
        assert await scrape_download_url(mock_page, SELECTORS) == "https://example.com/download/file"

    @pytest.mark.asyncio
    async def test_explicit_failure_carries_error(self, failing_page):
        with pytest.raises(ScrapeFailedError, match="Tried selectors"):
            await scrape_download_url(failing_page, SELECTORS)

    @pytest.mark.asyncio
    async def test_no_response(self):
        page = AsyncMock()
        page.scrape_download_url.return_value = None

        with pytest.raises(ScrapeFailedError):
            await scrape_download_url(page, SELECTORS)

    @pytest.mark.asyncio
    async def test_success_without_url_is_failure(self):
        page = AsyncMock()
        page.scrape_download_url.return_value = ScrapeResponse(success=True)

        with pytest.raises(ScrapeFailedError):
            await scrape_download_url(page, SELECTORS)

    @pytest.mark.asyncio
    async def test_timeout(self):
        async def never_answers(selectors):
            await asyncio.sleep(10)

        page = AsyncMock()
        page.scrape_download_url.side_effect = never_answers

        with pytest.raises(ScrapeTimeoutError):
            await scrape_download_url(page, SELECTORS, timeout=0.01)

    @pytest.mark.asyncio
    async def test_page_error_becomes_scrape_failure(self):
        page = AsyncMock()
        page.scrape_download_url.side_effect = RuntimeError("Execution context was destroyed")

        with pytest.raises(ScrapeFailedError, match="Execution context was destroyed") as exc_info:
            await scrape_download_url(page, SELECTORS)

        assert isinstance(exc_info.value.__cause__, RuntimeError)

    @pytest.mark.asyncio
    async def test_invalid_selector_on_snapshot_is_scrape_failure(self):
        page = SoupPageContext('<a class="btn-download" href="/f">Get</a>')

        with pytest.raises(ScrapeFailedError):
            await scrape_download_url(page, ["a[[broken"])

    def test_timeout_and_failure_are_distinct(self):
        assert not issubclass(ScrapeTimeoutError, ScrapeFailedError)
        assert not issubclass(ScrapeFailedError, ScrapeTimeoutError)
        assert issubclass(ScrapeTimeoutError, ResolutionError)
        assert issubclass(ScrapeFailedError, ResolutionError)


class TestSoupPageContext:
    def test_is_page_context(self):
        assert isinstance(SoupPageContext("<html></html>"), PageContext)

    @pytest.mark.asyncio
    async def test_first_matching_selector_wins(self):
        page = SoupPageContext(
            '<a class="btn-download" href="https://b.example/2">B</a>'
            '<a data-resin-target="download" href="https://a.example/1">A</a>'
        )

        response = await page.scrape_download_url(SELECTORS)

        assert response == ScrapeResponse(success=True, download_url="https://a.example/1")

    @pytest.mark.asyncio
    async def test_relative_href_joined_with_base(self):
        page = SoupPageContext(
            '<a class="btn-download" href="/index.php?rm=box_download_file&amp;file_id=9">Download</a>',
            base_url="https://app.box.com/file/9",
        )

        response = await page.scrape_download_url(SELECTORS)

        assert response.download_url == "https://app.box.com/index.php?rm=box_download_file&file_id=9"

    @pytest.mark.asyncio
    async def test_data_href_on_non_anchor(self):
        page = SoupPageContext('<div class="dl" data-href="/files/9">Download</div>', base_url="https://x.example/")

        response = await page.scrape_download_url(["div.dl"])

        assert response.success is True
        assert response.download_url == "/files/9"

    @pytest.mark.asyncio
    async def test_anchor_without_href_skipped(self):
        page = SoupPageContext('<a class="btn-download">no link</a><a data-resin-target="download">none</a>')

        response = await page.scrape_download_url(SELECTORS)

        assert response.success is False
        assert response.error == f"Download URL not found. Tried selectors: {', '.join(SELECTORS)}"

    @pytest.mark.asyncio
    async def test_sibling_combinator_selector(self):
        page = SoupPageContext(
            '<button data-testid="download-btn">Download</button><a href="https://cdn.example/f">file</a>'
        )

        response = await page.scrape_download_url(['button[data-testid="download-btn"] + a'])

        assert response.download_url == "https://cdn.example/f"


class TestPlaywrightPageContext:
    @pytest.mark.asyncio
    async def test_maps_evaluate_result(self):
        page = AsyncMock()
        page.evaluate.return_value = {"success": True, "downloadUrl": "https://cdn.example/f"}
        context = PlaywrightPageContext(page)

        response = await context.scrape_download_url(SELECTORS)

        assert response == ScrapeResponse(success=True, download_url="https://cdn.example/f")
        script, args = page.evaluate.call_args.args
        assert "querySelector" in script
        assert args == SELECTORS

    @pytest.mark.asyncio
    async def test_failure_result(self):
        page = AsyncMock()
        page.evaluate.return_value = {"success": False, "error": "Download URL not found. Tried selectors: a"}

        response = await PlaywrightPageContext(page).scrape_download_url(["a"])

        assert response.success is False
        assert response.error.startswith("Download URL not found")

    @pytest.mark.asyncio
    async def test_unexpected_result(self):
        page = AsyncMock()
        page.evaluate.return_value = None

        response = await PlaywrightPageContext(page).scrape_download_url(["a"])

        assert response.success is False
