"""
Article link extraction.

Turns a fetched page into the ordered sequence of article identifiers it
links to.  Only anchors whose ``href`` carries the internal-link prefix of
the current fetch mode are considered, fragments are dropped, and
non-article pages (the home page, anything namespaced such as
``Talk:`` or ``Special:``) are skipped.
"""

import urllib.parse
from typing import Iterator

from wiki_path.config import (
    ANON_LINK_PREFIX,
    EXTERNAL_LINKS_ID,
    HOME_PAGE,
    NAMESPACE_SEPARATOR,
)
from wiki_path.extraction.html_parser import iter_elements, parse_html


def href_to_identifier(href: str, prefix: str, home_page: str = HOME_PAGE) -> str | None:
    """Return the article identifier *href* points to, or ``None`` if it
    is not an internal link to a real article.

    Percent-escapes are decoded (``Caf%C3%A9`` -> ``Café``) so identifiers
    compare equal to names typed by the user.
    """
    if not href.startswith(prefix):
        return None
    name = urllib.parse.unquote(href[len(prefix):].split("#", 1)[0])
    if not name or name == home_page or NAMESPACE_SEPARATOR in name:
        return None
    return name


class LinkExtractor:
    """Extracts candidate article identifiers from an HTML document.

    Parameters
    ----------
    prefix : str
        Internal-link prefix (``/wiki/`` for rendered pages, ``./`` for
        REST API HTML).
    home_page : str
        Identifier of the site's home page, never reported.
    include_external : bool
        When false, scanning stops at the element with id
        ``External_links``.  Pages without that marker are scanned fully.
    """

    def __init__(
        self,
        prefix: str = ANON_LINK_PREFIX,
        home_page: str = HOME_PAGE,
        include_external: bool = False,
    ) -> None:
        self.prefix = prefix
        self.home_page = home_page
        self.include_external = include_external

    def extract(self, html: str) -> Iterator[str]:
        """Yield identifiers in document order.  Duplicates are kept."""
        soup = parse_html(html)
        for el in iter_elements(soup):
            if not self.include_external and el.get("id") == EXTERNAL_LINKS_ID:
                break
            if el.name != "a":
                continue
            href = el.get("href")
            if not href:
                continue
            name = href_to_identifier(href, self.prefix, self.home_page)
            if name is not None:
                yield name
