"""
Data models for cloud service detection and download resolution.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional, Union


class ServiceType(str, Enum):
    """Supported cloud document services."""

    GOOGLE = "google"
    DROPBOX = "dropbox"
    BOX = "box"
    ONEDRIVE = "onedrive"


class FileType(str, Enum):
    """File types a resolved document can be opened as."""

    XLSX = "xlsx"
    DOCX = "docx"
    PPTX = "pptx"
    TXT = "txt"
    PDF = "pdf"

    @property
    def extension(self) -> str:
        return f".{self.value}"


@dataclass(slots=True, frozen=True, kw_only=True)
class GoogleFileInfo:
    file_id: str
    file_type: FileType
    url: str
    export_url: str
    service: ServiceType = field(default=ServiceType.GOOGLE, init=False)


@dataclass(slots=True, frozen=True, kw_only=True)
class DropboxFileInfo:
    file_id: str
    file_type: FileType
    url: str
    is_shared_link: bool
    service: ServiceType = field(default=ServiceType.DROPBOX, init=False)


@dataclass(slots=True, frozen=True, kw_only=True)
class BoxFileInfo:
    file_id: str
    file_type: FileType
    url: str
    enterprise_id: Optional[str] = None
    service: ServiceType = field(default=ServiceType.BOX, init=False)


@dataclass(slots=True, frozen=True, kw_only=True)
class OneDriveFileInfo:
    file_id: str
    file_type: FileType
    url: str
    is_sharepoint: bool
    drive_id: Optional[str] = None
    service: ServiceType = field(default=ServiceType.ONEDRIVE, init=False)


ServiceFileInfo = Union[GoogleFileInfo, DropboxFileInfo, BoxFileInfo, OneDriveFileInfo]


@dataclass(slots=True, frozen=True)
class ScrapeResponse:
    """Answer from a page context to a download URL scrape request."""

    success: bool
    download_url: Optional[str] = None
    error: Optional[str] = None


@dataclass(slots=True, frozen=True)
class ServiceInfo:
    """Metadata about a registered service."""

    type: ServiceType
    name: str
    display_name: str
    supported_file_types: List[FileType] = field(default_factory=list)
