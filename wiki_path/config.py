"""
Configuration constants for the Wikipedia path finder.
"""

import os
from dataclasses import dataclass
from pathlib import Path

# ---------------------------------------------------------------------------
# Defaults
# ---------------------------------------------------------------------------
DEFAULT_MAX_DEPTH = 25
REQUEST_TIMEOUT = 30           # seconds per HTTP request

HOUR_SECS = 3600

# https://api.wikimedia.org/wiki/Rate_limits
ANON_RATE_LIMIT = 500          # requests per hour, anonymous
API_RATE_LIMIT = 5000          # requests per hour, personal API token

SITE = "en.wikipedia.org"

ANON_URL_TEMPLATE = f"https://{SITE}/wiki/{{}}"
API_URL_TEMPLATE = f"https://{SITE}/w/rest.php/v1/page/{{}}/html"

# Internal article links look like /wiki/Foo on the rendered page and
# ./Foo in the Parsoid HTML returned by the REST API.
ANON_LINK_PREFIX = "/wiki/"
API_LINK_PREFIX = "./"

HOME_PAGE = "Main_Page"
NAMESPACE_SEPARATOR = ":"
EXTERNAL_LINKS_ID = "External_links"

USER_AGENT = "wiki-path/1.0 (https://github.com/wiki-path/wiki-path; python-requests)"

# ---------------------------------------------------------------------------
# Credential storage
# ---------------------------------------------------------------------------
TOKEN_ENV_VAR = "WIKI_PATH_TOKEN"
CONFIG_DIR_ENV_VAR = "WIKI_PATH_CONFIG_DIR"
CONFIG_FILE_NAME = "config.json"


def config_dir() -> Path:
    """Directory holding the persisted configuration.

    ``$WIKI_PATH_CONFIG_DIR`` wins, then ``$XDG_CONFIG_HOME/wiki-path``,
    then ``~/.config/wiki-path``.
    """
    explicit = os.environ.get(CONFIG_DIR_ENV_VAR)
    if explicit:
        return Path(explicit)
    xdg = os.environ.get("XDG_CONFIG_HOME")
    base = Path(xdg) if xdg else Path.home() / ".config"
    return base / "wiki-path"


# ---------------------------------------------------------------------------
# Fetch modes
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class FetchMode:
    """How articles are requested and how their links are recognised."""
    name: str
    url_template: str
    link_prefix: str
    rate_limit: int            # requests per hour

    @property
    def request_interval(self) -> float:
        """Minimum seconds between two requests."""
        return HOUR_SECS / self.rate_limit


ANON_MODE = FetchMode("anonymous", ANON_URL_TEMPLATE, ANON_LINK_PREFIX, ANON_RATE_LIMIT)
API_MODE = FetchMode("api", API_URL_TEMPLATE, API_LINK_PREFIX, API_RATE_LIMIT)


def resolve_fetch_mode(token: str | None) -> FetchMode:
    """Authenticated API mode when a token is configured, anonymous otherwise."""
    return API_MODE if token else ANON_MODE


@dataclass
class SearchConfig:
    """Everything a search needs, resolved up front by the caller."""
    mode: FetchMode = ANON_MODE
    token: str | None = None
    max_depth: int = DEFAULT_MAX_DEPTH
    find_all: bool = False
    include_external: bool = False
    home_page: str = HOME_PAGE

    @classmethod
    def for_token(cls, token: str | None, **kwargs) -> "SearchConfig":
        return cls(mode=resolve_fetch_mode(token), token=token or None, **kwargs)
