"""
HTTP session creation for the path finder.

Provides sessions with:
* A descriptive User-Agent, as required by the Wikimedia API policy
* Connection pooling / keep-alive across the whole search
* ``Authorization: Bearer`` header when a personal API token is configured

Retries are disabled: a failed request is reported to the caller, which
treats the article as a dead end.
"""

import requests
from requests.adapters import HTTPAdapter
from urllib3.util.retry import Retry

from wiki_path.config import USER_AGENT


def build_session(token: str | None = None) -> requests.Session:
    """Return a ``requests.Session`` with keep-alive, a fixed User-Agent,
    HTML accept headers and, when *token* is given, bearer authorization."""
    session = requests.Session()
    adapter = HTTPAdapter(
        max_retries=Retry(total=0, read=False),
        pool_connections=4,
        pool_maxsize=4,
    )
    session.mount("http://", adapter)
    session.mount("https://", adapter)
    session.headers.update({
        "User-Agent": USER_AGENT,
        "Accept": "text/html,application/xhtml+xml;q=0.9,*/*;q=0.8",
        "Accept-Encoding": "gzip, deflate",
        "Connection": "keep-alive",
    })
    if token:
        session.headers.update(bearer_header(token))
    return session


def bearer_header(token: str) -> dict[str, str]:
    """Return the ``Authorization`` header for a Wikimedia personal API token."""
    return {"Authorization": f"Bearer {token}"}
