"""
Article page fetching.
"""

import urllib.parse

import requests

from wiki_path.config import REQUEST_TIMEOUT, FetchMode
from wiki_path.errors import FetchError
from wiki_path.utils.log import log

# RFC 3986 path characters.  Identifiers are stored decoded, so "%" is
# always escaped.
_SAFE_PATH_CHARS = "/:@!$&'()*+,;=-._~"


class PageFetcher:
    """Issues one GET per article and returns the decoded document body."""

    def __init__(
        self,
        session: requests.Session,
        mode: FetchMode,
        timeout: float = REQUEST_TIMEOUT,
    ) -> None:
        self.session = session
        self.mode = mode
        self.timeout = timeout

    def url_for(self, identifier: str) -> str:
        return self.mode.url_template.format(
            urllib.parse.quote(identifier, safe=_SAFE_PATH_CHARS)
        )

    def fetch(self, identifier: str) -> str:
        """Return the HTML body of *identifier*.

        Raises ``FetchError`` on network failure, non-2xx status or a body
        that cannot be decoded.  No retries are attempted.
        """
        url = self.url_for(identifier)
        log.debug("[FETCH] %s", url)
        try:
            resp = self.session.get(url, timeout=self.timeout)
        except requests.RequestException as exc:
            raise FetchError(identifier, url, exc) from exc

        if not resp.ok:
            raise FetchError(identifier, url, f"HTTP {resp.status_code}")

        encoding = resp.encoding or "utf-8"
        try:
            return resp.content.decode(encoding)
        except (UnicodeDecodeError, LookupError) as exc:
            raise FetchError(identifier, url, exc) from exc
