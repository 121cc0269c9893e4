"""
Document title parsing utilities.

Turns browser tab titles into filesystem-safe filenames.
"""

from __future__ import annotations

import re
from typing import Sequence

from .models import FileType, ServiceFileInfo
from .protocols import ServiceHandler

UNSAFE_FILENAME_CHARS = re.compile(r'[/\\:*?"<>|]')

FILENAME_PREFIX = "open-with-"


def strip_title_suffix(tab_title: str, suffixes: Sequence[str]) -> str:
    """Remove the first matching service suffix, then trim."""
    for suffix in suffixes:
        if tab_title.endswith(suffix):
            return tab_title[: -len(suffix)].strip()
    return tab_title.strip()


def sanitize_filename(title: str) -> str:
    return UNSAFE_FILENAME_CHARS.sub("", title).strip()


def build_display_filename(title: str, file_type: FileType) -> str:
    return f"{FILENAME_PREFIX}{title}{file_type.extension}"


def document_filename(handler: ServiceHandler, info: ServiceFileInfo, tab_title: str) -> str:
    """Filename for a detected document, falling back to its id when the title is unusable."""
    title = sanitize_filename(handler.parse_title(tab_title))
    return build_display_filename(title or sanitize_filename(info.file_id), info.file_type)
