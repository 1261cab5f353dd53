"""Core search logic: BFS scheduler, article registry, fetching and rate limiting."""

from wiki_path.core.fetcher import PageFetcher
from wiki_path.core.ratelimit import RateLimiter
from wiki_path.core.registry import ArticleRegistry
from wiki_path.core.search import (
    Frontier,
    PathMatch,
    PathSearch,
    SearchState,
    find_paths,
)

__all__ = [
    "ArticleRegistry",
    "Frontier",
    "PageFetcher",
    "PathMatch",
    "PathSearch",
    "RateLimiter",
    "SearchState",
    "find_paths",
]
