"""
Human-readable table names.

Priority: caption > aria-label > aria-describedby > nearby heading > id > "Table N".
"""

from __future__ import annotations

import re
from typing import Optional

from bs4 import Tag

from .dom import collapse_whitespace, raw_text

MAX_NAME_LENGTH = 100
HEADING_SIBLING_HOPS = 3

_HEADING = re.compile(r"^h[1-6]$")
_ID_SEPARATORS = re.compile(r"[-_]")


def sanitize_name(name: str, max_length: int = MAX_NAME_LENGTH) -> str:
    name = collapse_whitespace(name)
    if len(name) > max_length:
        return name[: max_length - 3] + "..."
    return name


def _document_root(element: Tag) -> Tag:
    root = element
    while root.parent is not None:
        root = root.parent
    return root


def _described_by_text(table: Tag) -> Optional[str]:
    described_by = table.get("aria-describedby")
    if not described_by or not isinstance(described_by, str):
        return None
    target = _document_root(table).find(id=described_by.strip())
    if target is None:
        return None
    text = raw_text(target).strip()
    return text or None


def _preceding_heading_text(table: Tag) -> Optional[str]:
    sibling = table.find_previous_sibling()
    hops = 0
    while sibling is not None and hops < HEADING_SIBLING_HOPS:
        if _HEADING.match(sibling.name or ""):
            text = raw_text(sibling).strip()
            if text:
                return text
        sibling = sibling.find_previous_sibling()
        hops += 1
    return None


def table_name(table: Tag, index: int, max_length: int = MAX_NAME_LENGTH) -> str:
    """Derive a label for ``table``; ``index`` is its 0-based discovery index."""
    caption = next((c for c in table.find_all("caption") if c.find_parent("table") is table), None)
    if caption is not None:
        text = raw_text(caption).strip()
        if text:
            return sanitize_name(text, max_length)

    aria_label = table.get("aria-label")
    if isinstance(aria_label, str) and aria_label.strip():
        return sanitize_name(aria_label, max_length)

    described = _described_by_text(table)
    if described:
        return sanitize_name(described, max_length)

    heading = _preceding_heading_text(table)
    if heading:
        return sanitize_name(heading, max_length)

    table_id = table.get("id")
    if isinstance(table_id, str):
        clean_id = collapse_whitespace(_ID_SEPARATORS.sub(" ", table_id))
        if clean_id:
            return sanitize_name(clean_id, max_length)

    return f"Table {index + 1}"
