"""
PageExtractor: entry point for the discovery and extraction passes.

Parses HTML into a BeautifulSoup tree and runs the discovery pass, then
on-demand table and text extraction, logging timings along the way.
"""

from __future__ import annotations

import time
from typing import Dict, Iterable, List, Optional

import structlog
from bs4 import BeautifulSoup

from ..config.config import Config
from .discovery import discover_content
from .models import DiscoveryResult, ExtractedContent, TableData
from .paragraphs import extract_main_content
from .tables import extract_tables

logger = structlog.get_logger(__name__)


class PageExtractor:
    """
    Runs discovery and extraction over HTML documents.

    Features:
    - Discovery pass returning a self-contained DiscoveryResult
    - Table extraction for a selected subset of discovered tables
    - Main text extraction with readability-style scoring
    - Per-operation timing metrics
    """

    def __init__(self, config: Optional[Config] = None) -> None:
        self.config = config or Config()
        self.logger = logger.bind(component="PageExtractor")
        self._metrics: Dict[str, Dict[str, float]] = {
            name: {"calls": 0, "total_time": 0.0} for name in ("discover", "extract_tables", "extract_text")
        }

    def parse(self, html: str | bytes) -> BeautifulSoup:
        return BeautifulSoup(html, self.config.discovery.parser)

    def discover(self, document: str | bytes | BeautifulSoup) -> DiscoveryResult:
        """Run the discovery pass over a document."""
        soup = document if isinstance(document, BeautifulSoup) else self.parse(document)

        start = time.perf_counter()
        result = discover_content(soup, self.config.discovery, self.config.scoring)
        elapsed_ms = self._record("discover", start)

        self.logger.info(
            "Discovery completed",
            tables=len(result.tables),
            has_main_content=result.has_main_content,
            elapsed_ms=round(elapsed_ms, 2),
        )
        if elapsed_ms > self.config.discovery.soft_budget_ms:
            self.logger.warning(
                "Discovery exceeded soft budget",
                elapsed_ms=round(elapsed_ms, 2),
                budget_ms=self.config.discovery.soft_budget_ms,
            )
        return result

    def extract_tables(self, discovery: DiscoveryResult, indices: Optional[Iterable[int]] = None) -> List[TableData]:
        """Extract full grids for the selected tables of a discovery result."""
        selected = None if indices is None else list(indices)

        start = time.perf_counter()
        tables = extract_tables(discovery, selected)
        elapsed_ms = self._record("extract_tables", start)

        self.logger.info(
            "Table extraction completed",
            requested=len(discovery.tables) if selected is None else len(selected),
            extracted=len(tables),
            elapsed_ms=round(elapsed_ms, 2),
        )
        return tables

    def extract_text(self, document: str | bytes | BeautifulSoup) -> ExtractedContent:
        """Extract the main article text of a document."""
        soup = document if isinstance(document, BeautifulSoup) else self.parse(document)

        start = time.perf_counter()
        content = extract_main_content(soup, self.config.scoring)
        elapsed_ms = self._record("extract_text", start)

        self.logger.info(
            "Text extraction completed",
            paragraphs=len(content.paragraphs),
            characters=len(content.text),
            elapsed_ms=round(elapsed_ms, 2),
        )
        return content

    def _record(self, operation: str, start: float) -> float:
        elapsed = time.perf_counter() - start
        self._metrics[operation]["calls"] += 1
        self._metrics[operation]["total_time"] += elapsed
        return elapsed * 1000

    def get_metrics(self) -> Dict[str, Dict[str, float]]:
        metrics = {}
        for operation, raw in self._metrics.items():
            calls = raw["calls"]
            metrics[operation] = {
                "calls": calls,
                "total_time": raw["total_time"],
                "avg_time": raw["total_time"] / calls if calls > 0 else 0.0,
            }
        return metrics
