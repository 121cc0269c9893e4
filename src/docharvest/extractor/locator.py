"""
Main content location.

Two paths share the exclusion rules in :mod:`docharvest.extractor.dom`:

* the cheap path (:func:`find_main_content`) answers "is there an article
  here" during discovery and feeds the preview;
* the full path (:func:`find_best_content`) scores every candidate with
  :class:`ContentScorer` and is used only for extraction.
"""

from __future__ import annotations

import logging
from typing import List, Optional

from bs4 import BeautifulSoup, Tag

from ..config.config import ScoringConfig
from .dom import collapse_whitespace, is_excluded, raw_text, text_density
from .scorer import ContentScorer

logger = logging.getLogger(__name__)

MIN_CONTENT_LENGTH = 100
MIN_PREVIEW_PARAGRAPH = 50

SEMANTIC_SELECTORS = ["article", "main", '[role="main"]', '[role="article"]']

CONTENT_SELECTORS = [
    ".article-content",
    ".post-content",
    ".entry-content",
    ".content-body",
    ".article-body",
    ".story-body",
    "#content",
    "#main-content",
    ".main-content",
]


def _long_enough(element: Tag, min_length: int) -> bool:
    return len(raw_text(element).strip()) >= min_length


def _best_paragraph_parent(soup: BeautifulSoup, min_length: int) -> Optional[Tag]:
    best: Optional[Tag] = None
    best_score = 0.0
    for paragraph in soup.find_all("p"):
        parent = paragraph.parent
        if not isinstance(parent, Tag) or isinstance(parent, BeautifulSoup) or is_excluded(parent):
            continue
        if not _long_enough(parent, min_length):
            continue
        score = text_density(parent) * min(len(parent.find_all("p")), 10)
        if score > best_score:
            best_score = score
            best = parent
    return best


def find_main_content(soup: BeautifulSoup, min_length: int = MIN_CONTENT_LENGTH) -> Optional[Tag]:
    """Cheap heuristic locator: first qualifying candidate wins."""
    for selectors in (SEMANTIC_SELECTORS, CONTENT_SELECTORS):
        for selector in selectors:
            element = soup.select_one(selector)
            if element is not None and not is_excluded(element) and _long_enough(element, min_length):
                return element

    return _best_paragraph_parent(soup, min_length)


def has_main_content(soup: BeautifulSoup, min_length: int = MIN_CONTENT_LENGTH) -> bool:
    element = find_main_content(soup, min_length)
    return element is not None and _long_enough(element, min_length)


def truncate_preview(text: str, max_length: int) -> str:
    """Cut at a word boundary when one falls past 70% of the limit."""
    if len(text) <= max_length:
        return text
    truncated = text[:max_length]
    last_space = truncated.rfind(" ")
    if last_space > max_length * 0.7:
        return truncated[:last_space] + "..."
    return truncated + "..."


def content_preview(soup: BeautifulSoup, max_length: int = 200, min_length: int = MIN_CONTENT_LENGTH) -> str:
    element = find_main_content(soup, min_length)
    if element is None:
        return ""

    preview = ""
    first_paragraph = element.find("p")
    if first_paragraph is not None:
        preview = raw_text(first_paragraph).strip()

    if len(preview) < MIN_PREVIEW_PARAGRAPH:
        preview = raw_text(element).strip()

    return truncate_preview(collapse_whitespace(preview), max_length)


def _candidates(soup: BeautifulSoup) -> List[Tag]:
    candidates: List[Tag] = []
    seen: set[int] = set()

    def add(element: Tag) -> None:
        if id(element) not in seen and not is_excluded(element):
            seen.add(id(element))
            candidates.append(element)

    for element in soup.select(", ".join(SEMANTIC_SELECTORS)):
        add(element)
    for element in soup.select(", ".join(CONTENT_SELECTORS)):
        add(element)
    for element in soup.find_all(["div", "section"]):
        if len(element.find_all("p")) >= 2:
            add(element)
    return candidates


def find_best_content(soup: BeautifulSoup, config: Optional[ScoringConfig] = None) -> Optional[Tag]:
    """Full scoring locator used at extraction time."""
    scorer = ContentScorer(config)
    best: Optional[Tag] = None
    best_score = scorer.config.candidate_threshold

    for element in _candidates(soup):
        score = scorer.score(element)
        if score > best_score:
            best_score = score
            best = element

    if best is not None:
        logger.debug("Best content candidate <%s> scored %.2f", best.name, best_score)
    return best
