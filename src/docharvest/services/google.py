"""
Google Workspace service handler.

Detects Sheets, Docs and Slides URLs and builds their export URLs.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import List, Optional

from .models import FileType, GoogleFileInfo, ServiceType
from .protocols import PageContext
from .titles import strip_title_suffix

_VALID_ID = re.compile(r"^[a-zA-Z0-9_-]+$")
MAX_ID_LENGTH = 100


@dataclass(frozen=True)
class GoogleDocKind:
    name: str
    path: str
    file_type: FileType

    @property
    def pattern(self) -> re.Pattern[str]:
        # Personal (/d/) and multi-account (/u/N/d/) URLs
        return re.compile(rf"^https://docs\.google\.com/{self.path}/(?:u/\d+/)?d/([a-zA-Z0-9_-]+)")

    def export_url(self, document_id: str) -> str:
        return f"https://docs.google.com/{self.path}/d/{document_id}/export?format={self.file_type.value}"


GOOGLE_DOC_KINDS: List[GoogleDocKind] = [
    GoogleDocKind("Google Sheets", "spreadsheets", FileType.XLSX),
    GoogleDocKind("Google Docs", "document", FileType.DOCX),
    GoogleDocKind("Google Slides", "presentation", FileType.PPTX),
]


def is_valid_document_id(document_id: str) -> bool:
    if len(document_id) > MAX_ID_LENGTH:
        return False
    return bool(_VALID_ID.match(document_id))


class GoogleService:
    """Handler for Google Sheets, Docs and Slides."""

    name = "Google Workspace"
    type = ServiceType.GOOGLE
    priority = 10

    title_suffixes = (" - Google Sheets", " - Google Docs", " - Google Slides")

    def __init__(self) -> None:
        self.kinds = GOOGLE_DOC_KINDS
        self._patterns = [(kind, kind.pattern) for kind in self.kinds]

    def detect(self, url: str) -> Optional[GoogleFileInfo]:
        for kind, pattern in self._patterns:
            match = pattern.match(url)
            if not match:
                continue
            document_id = match.group(1)
            if not is_valid_document_id(document_id):
                return None
            return GoogleFileInfo(
                file_id=document_id,
                file_type=kind.file_type,
                url=url,
                export_url=kind.export_url(document_id),
            )
        return None

    async def get_download_url(self, info: GoogleFileInfo, page: Optional[PageContext] = None) -> str:
        return info.export_url

    def parse_title(self, tab_title: str) -> str:
        return strip_title_suffix(tab_title, self.title_suffixes)
