"""
Main Content Scorer

Readability-style scoring of a candidate element for "is this the article
body". The scale is open: only the relative order of candidates matters.

Signals:
- Semantic tag and ARIA role bonuses
- Class/id boilerplate penalty and content bonus
- Text density (visible text vs. markup)
- Paragraph count (capped)
- Link density penalty
"""

from __future__ import annotations

import logging
from typing import Optional

from bs4 import Tag

from ..config.config import ScoringConfig
from .dom import CONTENT_PATTERNS, EXCLUDED_PATTERNS, class_and_id, link_density, raw_text, text_density

logger = logging.getLogger(__name__)


class ContentScorer:
    """Scores candidate elements for the full-path content locator."""

    def __init__(self, config: Optional[ScoringConfig] = None) -> None:
        self.config = config or ScoringConfig()

    def score(self, element: Tag) -> float:
        cfg = self.config

        # Too short to be an article body, regardless of other signals
        if len(raw_text(element).strip()) < cfg.min_content_length:
            return 0.0

        score = 0.0

        if element.name == "article":
            score += cfg.article_bonus
        if element.name == "main":
            score += cfg.main_bonus

        role = element.get("role")
        if role in ("main", "article"):
            score += cfg.role_bonus

        identity = class_and_id(element)
        if EXCLUDED_PATTERNS.search(identity):
            score -= cfg.excluded_pattern_penalty
        if CONTENT_PATTERNS.search(identity):
            score += cfg.content_pattern_bonus

        score += text_density(element) * cfg.density_weight

        paragraphs = len(element.find_all("p"))
        score += min(paragraphs, cfg.max_counted_paragraphs) * cfg.paragraph_weight

        if link_density(element) > cfg.link_density_limit:
            score -= cfg.link_density_penalty

        return score
