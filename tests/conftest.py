"""
Shared test configuration for docharvest.

Provides HTML fixtures and page-context doubles used across the unit tests.
"""

# Standard library imports
from unittest.mock import AsyncMock

# Third-party imports
import pytest
from bs4 import BeautifulSoup

# Local imports
from docharvest.services.models import ScrapeResponse

# ============================================================================
# Helpers
# ============================================================================


def make_soup(html: str) -> BeautifulSoup:
    """Parse an HTML fragment the way PageExtractor does by default."""
    return BeautifulSoup(html, "html.parser")


LOREM = (
    "Lorem ipsum dolor sit amet, consectetur adipiscing elit, sed do eiusmod tempor "
    "incididunt ut labore et dolore magna aliqua."
)


# ============================================================================
# Fixtures
# ============================================================================


@pytest.fixture
def article_html() -> str:
    """A typical article page with navigation, a data table and a footer."""
    return f"""
    <!DOCTYPE html>
    <html>
    <head><title>Quarterly Results</title></head>
    <body>
        <nav><a href="/">Home</a> <a href="/about">About</a> <a href="/contact">Contact</a></nav>
        <article class="post">
            <h1>Quarterly results exceed expectations</h1>
            <p>{LOREM}</p>
            <p>Ut enim ad minim veniam, quis nostrud exercitation ullamco laboris nisi ut aliquip.</p>
            <h2>Revenue by region</h2>
            <table id="revenue-by-region">
                <thead><tr><th>Region</th><th>Q1</th><th>Q2</th></tr></thead>
                <tbody>
                    <tr><td>North</td><td>10</td><td>12</td></tr>
                    <tr><td>South</td><td>8</td><td>9</td></tr>
                </tbody>
            </table>
            <p>Duis aute irure dolor in reprehenderit in voluptate velit esse cillum dolore.</p>
        </article>
        <footer><p>Copyright notice for the whole website and all of its pages.</p></footer>
    </body>
    </html>
    """


@pytest.fixture
def article_soup(article_html) -> BeautifulSoup:
    return make_soup(article_html)


@pytest.fixture
def nav_only_html() -> str:
    return """
    <html><body>
        <nav><a href="/a">First link</a><a href="/b">Second link</a><a href="/c">Third link</a></nav>
    </body></html>
    """


@pytest.fixture
def mock_page():
    """Page context whose scrape returns a fixed download URL."""
    page = AsyncMock()
    page.scrape_download_url.return_value = ScrapeResponse(
        success=True, download_url="https://example.com/download/file"
    )
    return page


@pytest.fixture
def failing_page():
    """Page context that answers without a download link."""
    page = AsyncMock()
    page.scrape_download_url.return_value = ScrapeResponse(
        success=False, error="Download URL not found. Tried selectors: a.btn-download"
    )
    return page
