"""
DOM scraping for download links.

A page context is asked to try a list of CSS selectors and report the first
element carrying a usable link. The request/response is bounded by a timeout;
a page that never answers raises :class:`ScrapeTimeoutError`, which callers can
tell apart from an explicit negative answer (:class:`ScrapeFailedError`).
"""

from __future__ import annotations

import asyncio
from typing import TYPE_CHECKING, Optional, Sequence
from urllib.parse import urljoin

import structlog
from bs4 import BeautifulSoup, Tag

from .exceptions import ScrapeFailedError, ScrapeTimeoutError
from .models import ScrapeResponse
from .protocols import PageContext

if TYPE_CHECKING:
    from playwright.async_api import Page

logger = structlog.get_logger(__name__)

DEFAULT_SCRAPE_TIMEOUT = 10.0


def _not_found(selectors: Sequence[str]) -> ScrapeResponse:
    return ScrapeResponse(
        success=False,
        error=f"Download URL not found. Tried selectors: {', '.join(selectors)}",
    )


async def scrape_download_url(
    page: PageContext,
    selectors: Sequence[str],
    timeout: float = DEFAULT_SCRAPE_TIMEOUT,
) -> str:
    """Ask ``page`` for a download link and wait at most ``timeout`` seconds.

    Raises:
        ScrapeTimeoutError: If the page context does not answer in time
        ScrapeFailedError: If it answers without a download URL or raises
    """
    log = logger.bind(selectors=list(selectors), timeout=timeout)
    try:
        response = await asyncio.wait_for(page.scrape_download_url(selectors), timeout=timeout)
    except asyncio.TimeoutError as e:
        log.warning("Page context did not answer scrape request")
        raise ScrapeTimeoutError(f"Page context did not respond within {timeout:g}s") from e
    except Exception as e:
        # Raised by the page itself, such as a closed tab or an invalid selector
        log.warning("Page context raised during scrape", error=str(e), error_type=type(e).__name__)
        raise ScrapeFailedError(f"Page context error: {e}") from e

    if response is None:
        raise ScrapeFailedError("No response from page context")
    if not response.success or not response.download_url:
        log.info("Page context found no download link", error=response.error)
        raise ScrapeFailedError(response.error or "Page context returned failure")

    log.debug("Scraped download URL", download_url=response.download_url)
    return response.download_url


class SoupPageContext:
    """Page context over a DOM snapshot parsed with BeautifulSoup."""

    def __init__(self, html: str | BeautifulSoup, base_url: Optional[str] = None, parser: str = "html.parser") -> None:
        self.soup = html if isinstance(html, BeautifulSoup) else BeautifulSoup(html, parser)
        self.base_url = base_url

    def _absolute(self, href: str) -> str:
        return urljoin(self.base_url, href) if self.base_url else href

    async def scrape_download_url(self, selectors: Sequence[str]) -> ScrapeResponse:
        for selector in selectors:
            element: Optional[Tag] = self.soup.select_one(selector)
            if element is None:
                continue
            href = element.get("href") if element.name == "a" else None
            if isinstance(href, str) and href.strip():
                return ScrapeResponse(success=True, download_url=self._absolute(href.strip()))
            fallback = element.get("data-href") or element.get("href")
            if isinstance(fallback, str) and fallback.strip():
                return ScrapeResponse(success=True, download_url=fallback.strip())
        return _not_found(selectors)


# Runs inside the browser; anchors report their resolved ``href`` property
_SCRAPE_JS = """
(selectors) => {
    for (const selector of selectors) {
        let element = null;
        try {
            element = document.querySelector(selector);
        } catch (e) {
            continue;
        }
        if (!element) continue;
        if (element instanceof HTMLAnchorElement && element.href) {
            return { success: true, downloadUrl: element.href };
        }
        const dataHref = element.getAttribute('data-href') || element.getAttribute('href');
        if (dataHref) {
            return { success: true, downloadUrl: dataHref };
        }
    }
    return { success: false, error: 'Download URL not found. Tried selectors: ' + selectors.join(', ') };
}
"""


class PlaywrightPageContext:
    """Page context backed by a live Playwright page."""

    def __init__(self, page: Page) -> None:
        self.page = page

    async def scrape_download_url(self, selectors: Sequence[str]) -> ScrapeResponse:
        result = await self.page.evaluate(_SCRAPE_JS, list(selectors))
        if not isinstance(result, dict):
            return ScrapeResponse(success=False, error="Unexpected response from page")
        return ScrapeResponse(
            success=bool(result.get("success")),
            download_url=result.get("downloadUrl"),
            error=result.get("error"),
        )
