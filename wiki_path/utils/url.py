"""
Article name helpers.
"""

import re
import urllib.parse

_WHITESPACE_RE = re.compile(r"\s+")


def canonical_identifier(name: str) -> str:
    """
    Turn a user-supplied article name into the identifier form produced by
    link extraction: surrounding whitespace trimmed, inner runs of
    whitespace replaced by a single underscore, percent-escapes decoded.

    Full article URLs (``https://en.wikipedia.org/wiki/Foo``) are accepted
    and reduced to their last path segment.
    """
    name = name.strip()
    parsed = urllib.parse.urlparse(name)
    if parsed.scheme in ("http", "https") and "/wiki/" in parsed.path:
        name = parsed.path.split("/wiki/", 1)[1]
    return _WHITESPACE_RE.sub("_", urllib.parse.unquote(name))
