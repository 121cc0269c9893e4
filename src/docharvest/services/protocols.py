"""
Protocols for cloud service handlers and live page contexts.
"""

from __future__ import annotations

from typing import Optional, Protocol, Sequence, runtime_checkable

from .models import ScrapeResponse, ServiceFileInfo, ServiceType


@runtime_checkable
class PageContext(Protocol):
    """A live page that can be asked to scrape itself for a download link."""

    async def scrape_download_url(self, selectors: Sequence[str]) -> ScrapeResponse:
        """Try each selector in order and return the first usable link.

        Args:
            selectors: CSS selectors, most specific first

        Returns:
            ScrapeResponse with ``download_url`` on success, ``error`` otherwise
        """
        ...


@runtime_checkable
class ServiceHandler(Protocol):
    """Detection and download resolution for one cloud service."""

    name: str
    type: ServiceType
    priority: int

    def detect(self, url: str) -> Optional[ServiceFileInfo]:
        """Return file info when ``url`` belongs to this service, else None."""
        ...

    async def get_download_url(self, info: ServiceFileInfo, page: Optional[PageContext] = None) -> str:
        """Resolve a fetchable URL for a detected file.

        Raises:
            PageContextRequiredError: If DOM scraping is needed and ``page`` is None
            StrategiesExhaustedError: If every strategy failed
        """
        ...

    def parse_title(self, tab_title: str) -> str:
        """Strip the service suffix from a browser tab title."""
        ...
