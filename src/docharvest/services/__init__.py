"""
Cloud service detection and download URL resolution.

Each service handler matches its own URL shapes and resolves a fetchable URL
through an ordered strategy chain:
1. URL transform (OneDrive edit/view pages)
2. Direct append (Dropbox ``?dl=1``)
3. DOM scrape through a live page context (Box, OneDrive)
4. Synthesized endpoint (Box download servlet)
Google export URLs need no resolution.
"""

from .box import BoxService
from .dropbox import DropboxService
from .exceptions import (
    PageContextRequiredError,
    ResolutionError,
    ScrapeFailedError,
    ScrapeTimeoutError,
    StrategiesExhaustedError,
    UnsupportedServiceError,
)
from .google import GoogleService
from .models import (
    BoxFileInfo,
    DropboxFileInfo,
    FileType,
    GoogleFileInfo,
    OneDriveFileInfo,
    ScrapeResponse,
    ServiceFileInfo,
    ServiceInfo,
    ServiceType,
)
from .onedrive import OneDriveService
from .protocols import PageContext, ServiceHandler
from .registry import Detection, ServiceRegistry, create_default_registry
from .scraping import PlaywrightPageContext, SoupPageContext, scrape_download_url
from .titles import build_display_filename, document_filename, sanitize_filename

__all__ = [
    # Registry
    "ServiceRegistry",
    "Detection",
    "create_default_registry",
    # Handlers
    "GoogleService",
    "DropboxService",
    "BoxService",
    "OneDriveService",
    "ServiceHandler",
    # Models
    "ServiceType",
    "FileType",
    "ServiceFileInfo",
    "GoogleFileInfo",
    "DropboxFileInfo",
    "BoxFileInfo",
    "OneDriveFileInfo",
    "ServiceInfo",
    "ScrapeResponse",
    # Page contexts
    "PageContext",
    "SoupPageContext",
    "PlaywrightPageContext",
    "scrape_download_url",
    # Exceptions
    "ResolutionError",
    "PageContextRequiredError",
    "StrategiesExhaustedError",
    "ScrapeFailedError",
    "ScrapeTimeoutError",
    "UnsupportedServiceError",
    # Titles
    "sanitize_filename",
    "build_display_filename",
    "document_filename",
]
