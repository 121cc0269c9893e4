"""
Table grid reconstruction.

Rebuilds the logical row/column grid of an HTML table, duplicating the text of
spanning cells into every position they cover.
"""

from __future__ import annotations

import logging
from typing import Iterable, List, Optional

from bs4 import Tag

from .dom import MAX_COLSPAN, MAX_ROWSPAN, collapse_whitespace, parse_int_attr, raw_text
from .models import DiscoveryResult, TableData
from .naming import table_name

logger = logging.getLogger(__name__)


def table_rows(table: Tag) -> List[Tag]:
    """Rows owned by this table, in document order (nested tables' rows excluded)."""
    return [row for row in table.find_all("tr") if row.find_parent("table") is table]


def row_cells(row: Tag) -> List[Tag]:
    return row.find_all(["td", "th"], recursive=False)


def cell_text(cell: Tag) -> str:
    """Whitespace-collapsed text of a cell, or its image alt text when empty."""
    text = collapse_whitespace(raw_text(cell))
    if text:
        return text
    img = cell.find("img")
    if img is not None:
        alt = img.get("alt")
        if isinstance(alt, str) and alt.strip():
            return alt.strip()
    return ""


def column_count(rows: Iterable[Tag]) -> int:
    """Widest row, counting each cell's colspan."""
    widest = 0
    for row in rows:
        width = sum(parse_int_attr(cell, "colspan", maximum=MAX_COLSPAN) for cell in row_cells(row))
        widest = max(widest, width)
    return widest


def detect_header(table: Tag) -> bool:
    """True when the table has a ``thead`` with rows or a th-majority first row."""
    for thead in table.find_all("thead"):
        if thead.find_parent("table") is table and thead.find("tr") is not None:
            return True

    rows = table_rows(table)
    if not rows:
        return False

    cells = row_cells(rows[0])
    if not cells:
        return False

    th_count = sum(1 for cell in cells if cell.name == "th")
    return th_count > len(cells) / 2


def build_grid(table: Tag) -> List[List[str]]:
    rows = table_rows(table)
    num_rows = len(rows)
    num_cols = column_count(rows)

    grid = [[""] * num_cols for _ in range(num_rows)]
    occupied = [[False] * num_cols for _ in range(num_rows)]

    for row_index, row in enumerate(rows):
        col_index = 0
        for cell in row_cells(row):
            # Skip positions already claimed by a rowspan from an earlier row
            while col_index < num_cols and occupied[row_index][col_index]:
                col_index += 1
            if col_index >= num_cols:
                break

            text = cell_text(cell)
            colspan = parse_int_attr(cell, "colspan", maximum=MAX_COLSPAN)
            rowspan = parse_int_attr(cell, "rowspan", maximum=MAX_ROWSPAN)

            for r in range(row_index, min(row_index + rowspan, num_rows)):
                for c in range(col_index, min(col_index + colspan, num_cols)):
                    # First writer wins when malformed spans overlap
                    if not occupied[r][c]:
                        grid[r][c] = text
                        occupied[r][c] = True

            col_index += colspan

    return grid


def build_table_grid(table: Tag, index: int) -> TableData:
    """Extract the full grid of one table."""
    return TableData(
        name=table_name(table, index),
        data=build_grid(table),
        has_header=detect_header(table),
    )


def extract_tables(discovery: DiscoveryResult, indices: Optional[Iterable[int]] = None) -> List[TableData]:
    """Extract tables previously qualified by discovery.

    Tables that fail to parse are logged and skipped; the rest are still returned.
    """
    elements = list(discovery.table_elements)
    wanted = range(len(elements)) if indices is None else indices

    results: List[TableData] = []
    for index in wanted:
        if not 0 <= index < len(elements):
            logger.warning("Requested table %d not found in discovery result (%d tables)", index, len(elements))
            continue
        try:
            table_data = build_table_grid(elements[index], index)
        except Exception as e:
            logger.error("Failed to extract table %d: %s", index, e, exc_info=True)
            continue

        if table_data.data and table_data.data[0]:
            results.append(table_data)
        else:
            logger.debug("Skipping empty table %d", index)

    return results
