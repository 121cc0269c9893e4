"""
Data models for discovery and extraction results.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, List, Sequence

from bs4 import Tag


@dataclass(slots=True, frozen=True)
class TableInfo:
    """Lightweight table metadata collected during discovery."""

    index: int
    name: str
    row_count: int
    column_count: int
    preview_rows: List[List[str]]


@dataclass(slots=True, frozen=True)
class TableData:
    """Full table grid with colspan/rowspan resolved."""

    name: str
    data: List[List[str]]
    has_header: bool

    @property
    def row_count(self) -> int:
        return len(self.data)

    @property
    def column_count(self) -> int:
        return len(self.data[0]) if self.data else 0


@dataclass(slots=True, frozen=True)
class DiscoveryResult:
    """Snapshot of one discovery pass.

    ``table_elements`` holds the live table elements that qualified, in the
    same order as ``tables``. Extraction is requested by passing this object
    back, so a result can only ever be extracted against the document it was
    discovered in.
    """

    tables: List[TableInfo]
    has_main_content: bool
    content_preview: str
    page_title: str
    table_elements: Sequence[Tag] = field(default=(), repr=False, compare=False)

    def __post_init__(self) -> None:
        if self.table_elements and len(self.table_elements) != len(self.tables):
            raise ValueError("table_elements must align with tables")

    def to_dict(self) -> dict[str, Any]:
        return {
            "tables": [
                {
                    "index": t.index,
                    "name": t.name,
                    "row_count": t.row_count,
                    "column_count": t.column_count,
                    "preview_rows": t.preview_rows,
                }
                for t in self.tables
            ],
            "has_main_content": self.has_main_content,
            "content_preview": self.content_preview,
            "page_title": self.page_title,
        }


@dataclass(slots=True, frozen=True)
class ExtractedContent:
    """Main text content with paragraph structure preserved."""

    text: str
    paragraphs: List[str]
    title: str

    @classmethod
    def from_paragraphs(cls, paragraphs: List[str], title: str) -> ExtractedContent:
        return cls(text="\n\n".join(paragraphs), paragraphs=list(paragraphs), title=title)

    def __post_init__(self) -> None:
        if self.text != "\n\n".join(self.paragraphs):
            raise ValueError("text must be the paragraphs joined by blank lines")
