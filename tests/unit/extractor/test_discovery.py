"""
Unit tests for the discovery pass.
"""

from __future__ import annotations

import pytest
from bs4 import BeautifulSoup
from docharvest.config.config import DiscoveryConfig
from docharvest.extractor.discovery import (
    count_columns,
    count_data_rows,
    discover_content,
    discover_tables,
    discover_tables_with_elements,
    table_preview,
)

DATA_TABLE = "<table{attrs}><tr><th>Name</th><th>Value</th></tr><tr><td>a</td><td>1</td></tr></table>"


def soup_of(html: str) -> BeautifulSoup:
    return BeautifulSoup(html, "html.parser")


class TestTableQualification:
    def test_data_table_is_discovered(self):
        tables = discover_tables(soup_of(DATA_TABLE.format(attrs="")))

        assert len(tables) == 1
        assert tables[0].index == 0
        assert tables[0].row_count == 2
        assert tables[0].column_count == 2

    @pytest.mark.parametrize("role", ["presentation", "none"])
    def test_layout_roles_excluded(self, role):
        assert discover_tables(soup_of(DATA_TABLE.format(attrs=f' role="{role}"'))) == []

    def test_single_column_table_excluded(self):
        html = "<table><tr><td>first</td></tr><tr><td>second</td></tr><tr><td>third</td></tr></table>"

        assert discover_tables(soup_of(html)) == []

    def test_single_data_row_excluded(self):
        html = "<table><tr><td>a</td><td>b</td></tr><tr><td> </td><td></td></tr></table>"

        assert discover_tables(soup_of(html)) == []

    def test_nested_table_excluded_parent_kept(self):
        html = """
        <table id="outer">
            <tr><td>Label</td><td>
                <table id="inner"><tr><td>i</td><td>j</td></tr><tr><td>k</td><td>l</td></tr></table>
            </td></tr>
            <tr><td>x</td><td>y</td></tr>
        </table>
        """

        tables = discover_tables(soup_of(html))

        assert [t.name for t in tables] == ["outer"]

    def test_indices_are_contiguous_in_document_order(self):
        html = (
            DATA_TABLE.format(attrs=' id="one"')
            + '<table role="presentation"><tr><td>x</td><td>y</td></tr><tr><td>z</td><td>w</td></tr></table>'
            + DATA_TABLE.format(attrs=' id="two"')
        )

        tables = discover_tables(soup_of(html))

        assert [(t.index, t.name) for t in tables] == [(0, "one"), (1, "two")]

    def test_both_entry_points_agree(self, article_soup):
        infos, elements = discover_tables_with_elements(article_soup)

        assert infos == discover_tables(article_soup)
        assert len(infos) == len(elements)
        assert all(element.name == "table" for element in elements)

    def test_thresholds_come_from_config(self):
        config = DiscoveryConfig(min_data_rows=3)

        assert discover_tables(soup_of(DATA_TABLE.format(attrs="")), config) == []


class TestCounts:
    def test_data_rows_ignore_blank_rows(self):
        table = soup_of(
            "<table><tr><td>a</td><td>b</td></tr><tr><td></td><td> </td></tr><tr><td>c</td><td></td></tr></table>"
        ).find("table")

        assert count_data_rows(table) == 2

    def test_columns_from_first_row_with_cells(self):
        table = soup_of("<table><tr></tr><tr><td>a</td><td>b</td><td>c</td></tr><tr><td>d</td></tr></table>").find(
            "table"
        )

        assert count_columns(table) == 3


class TestPreview:
    def test_first_three_rows(self):
        rows = "".join(f"<tr><td>r{i}</td><td>v{i}</td></tr>" for i in range(6))
        table = soup_of(f"<table>{rows}</table>").find("table")

        assert table_preview(table) == [["r0", "v0"], ["r1", "v1"], ["r2", "v2"]]

    def test_long_cells_truncated(self):
        table = soup_of(f"<table><tr><td>{'z' * 80}</td><td>short</td></tr></table>").find("table")

        preview = table_preview(table)

        assert preview[0][0] == "z" * 47 + "..."
        assert len(preview[0][0]) == 50
        assert preview[0][1] == "short"

    def test_cell_at_limit_untouched(self):
        table = soup_of(f"<table><tr><td>{'q' * 50}</td></tr></table>").find("table")

        assert table_preview(table) == [["q" * 50]]

    def test_rows_without_cells_dropped(self):
        table = soup_of("<table><tr></tr><tr><td>a</td></tr></table>").find("table")

        assert table_preview(table) == [["a"]]


class TestDiscoverContent:
    def test_article_page(self, article_soup):
        result = discover_content(article_soup)

        assert result.page_title == "Quarterly Results"
        assert result.has_main_content is True
        assert result.content_preview.startswith("Lorem ipsum dolor sit amet")
        assert len(result.tables) == 1
        assert result.tables[0].name == "Revenue by region"
        assert result.tables[0].row_count == 3
        assert result.tables[0].column_count == 3
        assert result.tables[0].preview_rows[0] == ["Region", "Q1", "Q2"]
        assert len(result.table_elements) == 1

    def test_nav_only_page(self, nav_only_html):
        result = discover_content(soup_of(nav_only_html))

        assert result.has_main_content is False
        assert result.content_preview == ""
        assert result.tables == []
        assert result.page_title == ""

    def test_multiline_title_is_collapsed(self):
        soup = soup_of("<html><head><title>\n  Quarterly\n   Results  \n</title></head><body></body></html>")

        assert discover_content(soup).page_title == "Quarterly Results"

    def test_preview_respects_configured_length(self):
        html = f"<article><p>{'word ' * 100}</p></article>"

        result = discover_content(soup_of(html), DiscoveryConfig(content_preview_length=60))

        assert result.has_main_content is True
        assert len(result.content_preview) <= 63
        assert result.content_preview.endswith("...")

    def test_document_is_not_modified(self, article_html):
        soup = soup_of(article_html)
        before = str(soup)

        discover_content(soup)

        assert str(soup) == before

    def test_to_dict_omits_elements(self, article_soup):
        payload = discover_content(article_soup).to_dict()

        assert set(payload) == {"tables", "has_main_content", "content_preview", "page_title"}
        assert payload["tables"][0]["name"] == "Revenue by region"
