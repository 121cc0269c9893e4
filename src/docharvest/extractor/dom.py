"""
Shared DOM helpers for the table and text engines.

Everything here reads a BeautifulSoup tree without modifying it.
"""

from __future__ import annotations

import re
from typing import Optional

from bs4 import BeautifulSoup, Tag

# Tags never treated as, or walked into for, content
EXCLUDED_TAGS = frozenset(
    {
        "nav",
        "footer",
        "header",
        "aside",
        "script",
        "style",
        "noscript",
        "iframe",
        "form",
        "button",
        "input",
        "select",
        "textarea",
    }
)

EXCLUDED_PATTERNS = re.compile(
    r"nav|menu|sidebar|footer|header|comment|ad|promo|related|widget|social|share|subscribe|newsletter",
    re.IGNORECASE,
)

CONTENT_PATTERNS = re.compile(r"article|content|post|entry|story|body|text", re.IGNORECASE)

# Browser clamps for span attributes
MAX_COLSPAN = 1000
MAX_ROWSPAN = 65534

_WHITESPACE = re.compile(r"\s+")
_HIDDEN_STYLE = re.compile(r"(?:^|;)\s*(?:display\s*:\s*none|visibility\s*:\s*hidden)\s*(?:!important)?\s*(?:;|$)", re.I)


def collapse_whitespace(text: str) -> str:
    return _WHITESPACE.sub(" ", text).strip()


def raw_text(element: Tag) -> str:
    """Concatenated descendant text, the equivalent of ``textContent``."""
    return element.get_text()


def clean_text(element: Tag) -> str:
    return collapse_whitespace(element.get_text())


def inner_html(element: Tag) -> str:
    return element.decode_contents()


def class_and_id(element: Tag) -> str:
    classes = element.get("class") or []
    if isinstance(classes, str):
        classes = [classes]
    element_id = element.get("id") or ""
    return f"{' '.join(classes)} {element_id}"


def is_hidden(element: Tag) -> bool:
    """Hidden via inline style or the ``hidden`` attribute.

    A static snapshot has no computed style, so only inline declarations count.
    """
    if element.has_attr("hidden"):
        return True
    style = element.get("style")
    if not style or not isinstance(style, str):
        return False
    return bool(_HIDDEN_STYLE.search(style))


def is_excluded(element: Tag) -> bool:
    if element.name in EXCLUDED_TAGS:
        return True
    if EXCLUDED_PATTERNS.search(class_and_id(element)):
        return True
    return is_hidden(element)


def text_density(element: Tag) -> float:
    """Visible text length divided by markup length."""
    html = inner_html(element)
    if not html:
        return 0.0
    return len(clean_text(element)) / len(html)


def link_density(element: Tag) -> float:
    text_length = len(raw_text(element))
    if text_length == 0:
        return 0.0
    link_length = sum(len(raw_text(a)) for a in element.find_all("a"))
    return link_length / text_length


def page_title(soup: BeautifulSoup) -> str:
    title: Optional[Tag] = soup.find("title")
    if title is None:
        return ""
    return collapse_whitespace(title.get_text())


def parse_int_attr(element: Tag, name: str, default: int = 1, maximum: Optional[int] = None) -> int:
    """Parse a span attribute the way browsers do: leading digits, clamped to [1, maximum]."""
    value = element.get(name)
    if not value or not isinstance(value, str):
        return default
    match = re.match(r"\s*(\d+)", value)
    if not match:
        return default
    span = max(int(match.group(1)), 1)
    return min(span, maximum) if maximum is not None else span
