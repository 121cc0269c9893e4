"""
docharvest Content Discovery and Extraction

Two passes over an in-memory DOM:
1. Discovery: fast scan for data tables and main text, for a selection UI
2. Extraction: full table grids (colspan/rowspan resolved) and paragraph text
   for the user's selection

Features:
- Layout and nested table filtering
- Table naming from caption, ARIA attributes, headings and ids
- Readability-style main content scoring
- Paragraph extraction with deduplication
"""

from .discovery import discover_content, discover_tables, discover_tables_with_elements
from .locator import content_preview, find_best_content, find_main_content, has_main_content
from .manager import PageExtractor
from .models import DiscoveryResult, ExtractedContent, TableData, TableInfo
from .naming import table_name
from .paragraphs import extract_main_content, extract_paragraphs
from .scorer import ContentScorer
from .tables import build_table_grid, detect_header, extract_tables

__all__ = [
    "PageExtractor",
    "DiscoveryResult",
    "ExtractedContent",
    "TableData",
    "TableInfo",
    "discover_content",
    "discover_tables",
    "discover_tables_with_elements",
    "build_table_grid",
    "detect_header",
    "extract_tables",
    "table_name",
    "ContentScorer",
    "find_main_content",
    "find_best_content",
    "has_main_content",
    "content_preview",
    "extract_main_content",
    "extract_paragraphs",
]
