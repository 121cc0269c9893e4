"""
Unit tests for title and filename helpers.
"""

from __future__ import annotations

from docharvest.services.google import GoogleService
from docharvest.services.models import FileType
from docharvest.services.titles import (
    build_display_filename,
    document_filename,
    sanitize_filename,
    strip_title_suffix,
)


class TestTitles:
    def test_strip_first_matching_suffix(self):
        assert strip_title_suffix("Plan - Google Docs", (" - Google Sheets", " - Google Docs")) == "Plan"

    def test_no_suffix_trims(self):
        assert strip_title_suffix("  Plan  ", (" - Box",)) == "Plan"

    def test_sanitize_removes_unsafe_characters(self):
        assert sanitize_filename('Q1/Q2: "Results" <draft>?*|\\') == "Q1Q2 Results draft"

    def test_display_filename(self):
        assert build_display_filename("Budget", FileType.XLSX) == "open-with-Budget.xlsx"

    def test_document_filename(self):
        google = GoogleService()
        info = google.detect("https://docs.google.com/document/d/1a2B3c4D5e6F7g8H9i0J/edit")

        assert document_filename(google, info, "Roadmap: 2025 - Google Docs") == "open-with-Roadmap 2025.docx"

    def test_document_filename_falls_back_to_id(self):
        google = GoogleService()
        info = google.detect("https://docs.google.com/document/d/1a2B3c4D5e6F7g8H9i0J/edit")

        assert document_filename(google, info, "??? - Google Docs") == "open-with-1a2B3c4D5e6F7g8H9i0J.docx"
