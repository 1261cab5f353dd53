"""
HTML parsing via BeautifulSoup.
"""

from typing import Iterator

from bs4 import BeautifulSoup, Tag

_BS4_PARSER = "lxml"


def parse_html(html: str) -> BeautifulSoup:
    """Parse a full HTML document with the lxml backend."""
    return BeautifulSoup(html, _BS4_PARSER)


def iter_elements(soup: BeautifulSoup) -> Iterator[Tag]:
    """Yield every element of *soup* in document (pre-)order.

    Lazy, so callers can stop scanning part-way through a page.
    """
    for node in soup.descendants:
        if isinstance(node, Tag):
            yield node
