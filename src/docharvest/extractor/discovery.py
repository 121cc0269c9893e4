"""
Lightweight page discovery.

Scans a document for extractable tables and main text without building full
table grids. Layout tables (single row/column, ``role="presentation"``) and
tables nested inside other tables are skipped.
"""

from __future__ import annotations

import logging
from typing import List, Optional, Tuple

from bs4 import BeautifulSoup, Tag

from ..config.config import DiscoveryConfig, ScoringConfig
from .dom import page_title, raw_text
from .locator import content_preview, has_main_content
from .models import DiscoveryResult, TableInfo
from .naming import table_name
from .tables import row_cells, table_rows

logger = logging.getLogger(__name__)

LAYOUT_ROLES = frozenset({"presentation", "none"})


def count_data_rows(table: Tag) -> int:
    """Rows with at least one non-empty cell."""
    return sum(1 for row in table_rows(table) if any(raw_text(cell).strip() for cell in row_cells(row)))


def count_columns(table: Tag) -> int:
    """Cell count of the first row that has cells."""
    for row in table_rows(table):
        cells = row_cells(row)
        if cells:
            return len(cells)
    return 0


def is_nested_table(table: Tag) -> bool:
    return table.find_parent("table") is not None


def table_preview(table: Tag, max_rows: int = 3, max_cell_length: int = 50) -> List[List[str]]:
    """First rows as plain text, no span handling."""
    preview: List[List[str]] = []
    for row in table_rows(table)[:max_rows]:
        row_data = []
        for cell in row_cells(row):
            text = raw_text(cell).strip()
            if len(text) > max_cell_length:
                text = text[: max_cell_length - 3] + "..."
            row_data.append(text)
        if row_data:
            preview.append(row_data)
    return preview


def _qualifying_tables(soup: BeautifulSoup, config: DiscoveryConfig) -> List[Tuple[Tag, int, int]]:
    """Outermost data tables with their data-row and column counts, in document order."""
    qualifying: List[Tuple[Tag, int, int]] = []
    for table in soup.find_all("table"):
        if is_nested_table(table):
            continue
        if table.get("role") in LAYOUT_ROLES:
            continue
        rows = count_data_rows(table)
        columns = count_columns(table)
        if rows < config.min_data_rows or columns < config.min_data_columns:
            continue
        qualifying.append((table, rows, columns))
    return qualifying


def discover_tables_with_elements(
    soup: BeautifulSoup, config: Optional[DiscoveryConfig] = None
) -> Tuple[List[TableInfo], List[Tag]]:
    """Discover data tables and return them with their live elements, index-aligned."""
    config = config or DiscoveryConfig()
    tables: List[TableInfo] = []
    elements: List[Tag] = []

    for index, (table, rows, columns) in enumerate(_qualifying_tables(soup, config)):
        tables.append(
            TableInfo(
                index=index,
                name=table_name(table, index, config.max_name_length),
                row_count=rows,
                column_count=columns,
                preview_rows=table_preview(table, config.preview_rows, config.preview_cell_length),
            )
        )
        elements.append(table)

    return tables, elements


def discover_tables(soup: BeautifulSoup, config: Optional[DiscoveryConfig] = None) -> List[TableInfo]:
    """Discover data tables, metadata only."""
    tables, _ = discover_tables_with_elements(soup, config)
    return tables


def discover_content(
    soup: BeautifulSoup,
    config: Optional[DiscoveryConfig] = None,
    scoring: Optional[ScoringConfig] = None,
) -> DiscoveryResult:
    """Full discovery pass: tables, main content check, preview and title."""
    config = config or DiscoveryConfig()
    min_length = (scoring or ScoringConfig()).min_content_length

    tables, elements = discover_tables_with_elements(soup, config)
    found_content = has_main_content(soup, min_length)
    preview = content_preview(soup, config.content_preview_length, min_length) if found_content else ""

    return DiscoveryResult(
        tables=tables,
        has_main_content=found_content,
        content_preview=preview,
        page_title=page_title(soup),
        table_elements=tuple(elements),
    )
