"""
Dropbox service handler.

Shared links resolve to a direct download by forcing ``?dl=1``.
"""

from __future__ import annotations

import re
from typing import List, Optional, Tuple
from urllib.parse import unquote

from .models import DropboxFileInfo, FileType, ServiceType
from .protocols import PageContext
from .titles import strip_title_suffix

# (pattern, is_shared_link); shared links carry the filename as group 2
URL_PATTERNS: List[Tuple[re.Pattern[str], bool]] = [
    (re.compile(r"^https://www\.dropbox\.com/s/([a-zA-Z0-9]+)/([^?]+)"), True),
    (re.compile(r"^https://www\.dropbox\.com/scl/fi/([a-zA-Z0-9]+)/([^?]+)"), True),
    (re.compile(r"^https://www\.dropbox\.com/home/(.+)"), False),
    (re.compile(r"^https://www\.dropbox\.com/preview/([^?]+)"), False),
]

_KNOWN_EXTENSIONS = {
    "xlsx": FileType.XLSX,
    "docx": FileType.DOCX,
    "pptx": FileType.PPTX,
    "pdf": FileType.PDF,
}


def file_type_from_filename(filename: Optional[str]) -> FileType:
    """Map a filename extension to a file type: pdf without a name, txt when unrecognised."""
    if not filename:
        return FileType.PDF
    extension = filename.rsplit(".", 1)[-1].lower()
    return _KNOWN_EXTENSIONS.get(extension, FileType.TXT)


class DropboxService:
    """Handler for Dropbox shared links, home and preview pages."""

    name = "Dropbox"
    type = ServiceType.DROPBOX
    priority = 20

    title_suffixes = (" - Dropbox", " | Dropbox")

    def __init__(self) -> None:
        self.url_patterns = URL_PATTERNS

    def detect(self, url: str) -> Optional[DropboxFileInfo]:
        for pattern, is_shared_link in self.url_patterns:
            match = pattern.match(url)
            if not match:
                continue

            file_id = match.group(1)
            if pattern.groups >= 2:
                filename = unquote(match.group(2))
            else:
                # /home/ and /preview/ carry a path; the filename is its last segment
                filename = unquote(file_id).rsplit("/", 1)[-1]

            return DropboxFileInfo(
                file_id=file_id,
                file_type=file_type_from_filename(filename),
                url=url,
                is_shared_link=is_shared_link,
            )
        return None

    async def get_download_url(self, info: DropboxFileInfo, page: Optional[PageContext] = None) -> str:
        base_url = info.url.split("?", 1)[0]
        return f"{base_url}?dl=1"

    def parse_title(self, tab_title: str) -> str:
        return strip_title_suffix(tab_title, self.title_suffixes)
