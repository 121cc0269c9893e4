"""
Paragraph extraction from a located content element.
"""

from __future__ import annotations

import logging
from typing import List, Optional

from bs4 import BeautifulSoup, Tag

from ..config.config import ScoringConfig
from .dom import clean_text, is_excluded, page_title
from .locator import find_best_content
from .models import ExtractedContent

logger = logging.getLogger(__name__)

MIN_PARAGRAPH_LENGTH = 20

PARAGRAPH_TAGS = frozenset({"p", "h1", "h2", "h3", "h4", "h5", "h6", "li", "blockquote", "pre"})


def extract_paragraphs(element: Tag, min_length: int = MIN_PARAGRAPH_LENGTH) -> List[str]:
    """Ordered, deduplicated paragraph texts under ``element``.

    Paragraph-level elements are leaves: nested paragraph tags inside them are
    part of their text, not separate paragraphs.
    """
    paragraphs: List[str] = []
    seen: set[str] = set()

    # Explicit stack instead of recursion so deep DOMs cannot hit the recursion limit
    stack: List[Tag] = [element]
    while stack:
        current = stack.pop()
        if is_excluded(current):
            continue

        if current.name in PARAGRAPH_TAGS:
            text = clean_text(current)
            if len(text) >= min_length and text not in seen:
                seen.add(text)
                paragraphs.append(text)
            continue

        children = [child for child in current.children if isinstance(child, Tag)]
        stack.extend(reversed(children))

    return paragraphs


def extract_main_content(soup: BeautifulSoup, config: Optional[ScoringConfig] = None) -> ExtractedContent:
    """Locate the best content element and extract its paragraphs."""
    title = page_title(soup)
    element = find_best_content(soup, config)
    if element is None:
        logger.debug("No main content candidate qualified")
        return ExtractedContent.from_paragraphs([], title)

    min_length = config.min_paragraph_length if config else MIN_PARAGRAPH_LENGTH
    return ExtractedContent.from_paragraphs(extract_paragraphs(element, min_length), title)
