"""
docharvest - Table and article discovery for arbitrary HTML, plus download
URL resolution for documents hosted on cloud services.
"""

from __future__ import annotations

__version__ = "0.1.0"

from .config import Config
from .extractor import DiscoveryResult, ExtractedContent, PageExtractor, TableData, TableInfo
from .services import ServiceRegistry, create_default_registry

__all__ = [
    "__version__",
    "Config",
    "PageExtractor",
    "DiscoveryResult",
    "ExtractedContent",
    "TableData",
    "TableInfo",
    "ServiceRegistry",
    "create_default_registry",
]
