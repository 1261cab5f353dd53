"""
wiki_path
=========
Find chains of links between Wikipedia articles by breadth-first search
over live pages.

Package structure
-----------------
wiki_path/
├── __init__.py       – package init and public API
├── config.py         – configuration constants, fetch modes, SearchConfig
├── errors.py         – exception hierarchy
├── credentials.py    – persisted API token
├── session.py        – requests.Session factory
├── cli.py            – argparse CLI (``python -m wiki_path``)
├── core/             – BFS scheduler, article registry, fetcher, rate limiter
├── extraction/       – article link extraction from HTML
└── utils/            – logging and article-name helpers

Quick start
-----------
    from wiki_path import PathSearch, SearchConfig

    search = PathSearch("Pizza", "Albert_Einstein", SearchConfig(max_depth=3))
    for match in search.iter_matches():
        print(match.path)
"""

__version__ = "1.0.0"

from .config import SearchConfig, FetchMode, resolve_fetch_mode
from .core import ArticleRegistry, PathMatch, PathSearch, RateLimiter, find_paths
from .errors import CredentialError, FetchError, WikiPathError
from .extraction import LinkExtractor

__all__ = [
    "__version__",
    "ArticleRegistry",
    "CredentialError",
    "FetchError",
    "FetchMode",
    "LinkExtractor",
    "PathMatch",
    "PathSearch",
    "RateLimiter",
    "SearchConfig",
    "WikiPathError",
    "find_paths",
    "resolve_fetch_mode",
]
