"""
OneDrive / SharePoint service handler.
"""

from __future__ import annotations

import re
from typing import List, Optional

import structlog

from .exceptions import PageContextRequiredError, ScrapeFailedError, StrategiesExhaustedError
from .models import FileType, OneDriveFileInfo, ServiceType
from .protocols import PageContext
from .scraping import DEFAULT_SCRAPE_TIMEOUT, scrape_download_url
from .titles import strip_title_suffix

logger = structlog.get_logger(__name__)

PERSONAL_PATTERN = re.compile(r"^https://onedrive\.live\.com/(edit|view)\.aspx\?.*resid=([^&]+)")
SHAREPOINT_PATTERN = re.compile(r"^https://([^.]+)\.sharepoint\.com/:([xwp]):/(.+)")
SHAREPOINT_LAYOUTS_PATTERN = re.compile(
    r"^https://([^.]+)\.sharepoint\.com/_layouts/15/Doc\.aspx\?.*sourcedoc=([^&]+)"
)

DOWNLOAD_SELECTORS: List[str] = [
    'a[data-automationid="downloadButton"]',
    'button[name="Download"] ~ a',
    'a[aria-label="Download"]',
]

_SHAREPOINT_PREFIXES = {"x": FileType.XLSX, "w": FileType.DOCX, "p": FileType.PPTX}

_PATH_REWRITES = (("/edit.aspx", "/download.aspx"), ("/view.aspx", "/download.aspx"))


def file_type_from_prefix(prefix: str) -> FileType:
    return _SHAREPOINT_PREFIXES.get(prefix, FileType.PDF)


def file_type_from_url(url: str) -> FileType:
    # "app=Excel" etc. are covered by the plain substring checks
    if "Excel" in url:
        return FileType.XLSX
    if "Word" in url:
        return FileType.DOCX
    if "PowerPoint" in url:
        return FileType.PPTX
    return FileType.PDF


def transform_to_download_url(url: str) -> Optional[str]:
    """Rewrite an edit/view page URL into its download URL, query untouched."""
    for segment, replacement in _PATH_REWRITES:
        if segment in url:
            return url.replace(segment, replacement, 1)
    return None


class OneDriveService:
    """Handler for OneDrive personal and SharePoint document URLs."""

    name = "OneDrive"
    type = ServiceType.ONEDRIVE
    priority = 30

    title_suffixes = (" - OneDrive", " - SharePoint")

    def __init__(self, scrape_timeout: float = DEFAULT_SCRAPE_TIMEOUT) -> None:
        self.scrape_timeout = scrape_timeout
        self.selectors = DOWNLOAD_SELECTORS

    def detect(self, url: str) -> Optional[OneDriveFileInfo]:
        match = PERSONAL_PATTERN.match(url)
        if match:
            return OneDriveFileInfo(
                file_id=match.group(2),
                file_type=file_type_from_url(url),
                url=url,
                is_sharepoint=False,
            )

        match = SHAREPOINT_PATTERN.match(url)
        if match:
            return OneDriveFileInfo(
                file_id=match.group(3),
                file_type=file_type_from_prefix(match.group(2)),
                url=url,
                is_sharepoint=True,
            )

        match = SHAREPOINT_LAYOUTS_PATTERN.match(url)
        if match:
            return OneDriveFileInfo(
                file_id=match.group(2),
                file_type=file_type_from_url(url),
                url=url,
                is_sharepoint=True,
                drive_id=match.group(1),
            )

        return None

    async def get_download_url(self, info: OneDriveFileInfo, page: Optional[PageContext] = None) -> str:
        transformed = transform_to_download_url(info.url)
        if transformed:
            return transformed

        if page is None:
            raise PageContextRequiredError("Page context required for OneDrive download URL discovery")

        try:
            return await scrape_download_url(page, self.selectors, self.scrape_timeout)
        except ScrapeFailedError as e:
            logger.warning("OneDrive DOM scrape failed", file_id=info.file_id, error=str(e))
            raise StrategiesExhaustedError(f"Failed to find OneDrive download URL: {e}") from e

    def parse_title(self, tab_title: str) -> str:
        return strip_title_suffix(tab_title, self.title_suffixes)
