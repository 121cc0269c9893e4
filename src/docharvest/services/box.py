"""
Box service handler.

Box has no public direct-download URL shape, so resolution scrapes the live
page for the download control and falls back to the legacy download servlet.
"""

from __future__ import annotations

import re
from typing import List, Optional

import structlog

from .exceptions import PageContextRequiredError, ScrapeFailedError, ScrapeTimeoutError
from .models import BoxFileInfo, FileType, ServiceType
from .protocols import PageContext
from .scraping import DEFAULT_SCRAPE_TIMEOUT, scrape_download_url
from .titles import strip_title_suffix

logger = structlog.get_logger(__name__)

STANDARD_PATTERN = re.compile(r"^https://app\.box\.com/file/(\d+)")
SHARED_PATTERN = re.compile(r"^https://app\.box\.com/s/([a-zA-Z0-9]+)")
ENTERPRISE_PATTERN = re.compile(r"^https://([^.]+)\.app\.box\.com/file/(\d+)")

DOWNLOAD_SELECTORS: List[str] = [
    'a[data-resin-target="download"]',
    'button[data-testid="download-btn"] + a',
    "a.btn-download",
]


def legacy_download_url(file_id: str, enterprise_id: Optional[str] = None) -> str:
    base_url = f"https://{enterprise_id}.app.box.com" if enterprise_id else "https://app.box.com"
    return f"{base_url}/index.php?rm=box_download_file&file_id={file_id}"


class BoxService:
    """Handler for Box file, shared and enterprise URLs."""

    name = "Box"
    type = ServiceType.BOX
    priority = 40

    title_suffixes = (" - Box", " | Box")

    def __init__(self, scrape_timeout: float = DEFAULT_SCRAPE_TIMEOUT) -> None:
        self.scrape_timeout = scrape_timeout
        self.selectors = DOWNLOAD_SELECTORS

    def detect(self, url: str) -> Optional[BoxFileInfo]:
        match = STANDARD_PATTERN.match(url)
        if match:
            return BoxFileInfo(file_id=match.group(1), file_type=FileType.PDF, url=url)

        match = SHARED_PATTERN.match(url)
        if match:
            return BoxFileInfo(file_id=match.group(1), file_type=FileType.PDF, url=url)

        match = ENTERPRISE_PATTERN.match(url)
        if match:
            return BoxFileInfo(
                file_id=match.group(2),
                file_type=FileType.PDF,
                url=url,
                enterprise_id=match.group(1),
            )

        return None

    async def get_download_url(self, info: BoxFileInfo, page: Optional[PageContext] = None) -> str:
        if page is None:
            raise PageContextRequiredError("Page context required for Box download URL discovery")

        try:
            return await scrape_download_url(page, self.selectors, self.scrape_timeout)
        except (ScrapeFailedError, ScrapeTimeoutError) as e:
            logger.info(
                "Box DOM scrape failed, using download servlet",
                file_id=info.file_id,
                error=str(e),
                error_type=type(e).__name__,
            )

        return legacy_download_url(info.file_id, info.enterprise_id)

    def parse_title(self, tab_title: str) -> str:
        return strip_title_suffix(tab_title, self.title_suffixes)
