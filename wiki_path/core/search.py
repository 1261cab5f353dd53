"""
Lazy breadth-first search over Wikipedia's link graph.

The graph is discovered while searching: every article of the current
level is fetched and parsed before any article of the next level, so the
first match reported in stop-at-first-hit mode has the minimum number of
hops.  Within a level, articles are expanded in discovery order and links
are followed in document order, which makes the result reproducible for a
fixed set of pages.

Supports:

* Stop at first hit, or report every match up to the depth bound
* Rate limiting derived from the Wikimedia hourly request budget
* Recovery from failed fetches (the article is treated as a dead end)
* Optional scanning of the "External links" section
"""

import time
from dataclasses import dataclass
from enum import Enum
from typing import Callable, Iterator

from wiki_path.config import SearchConfig
from wiki_path.core.fetcher import PageFetcher
from wiki_path.core.ratelimit import RateLimiter
from wiki_path.core.registry import ROOT, ArticleRegistry
from wiki_path.errors import FetchError
from wiki_path.extraction.links import LinkExtractor
from wiki_path.session import build_session
from wiki_path.utils.log import log


class SearchState(Enum):
    """Scheduler states."""

    EXPANDING = "expanding"
    FOUND = "found"
    EXHAUSTED = "exhausted"


@dataclass
class Frontier:
    """Position of the level-synchronised walk.

    ``current_index`` is the registry index of the next article to expand.
    """
    depth: int = 0
    current_index: int = ROOT
    level_length: int = 0
    next_level_length: int = 1


@dataclass
class PathMatch:
    """A chain of articles from the start to the target."""
    path: list[str]
    depth: int
    elapsed: float

    @property
    def length(self) -> int:
        """Number of articles on the path, both ends included."""
        return len(self.path)


@dataclass
class SearchStats:
    fetched: int = 0
    errors: int = 0
    matches: int = 0
    waited: float = 0.0
    expanded: int = 0


class PathSearch:
    """
    Level-synchronised BFS from *start* to *target*.

    Collaborators default to the real ones built from *config*; tests pass
    stubs.  *on_expand* is called with ``(identifier, depth)`` right before
    each article is fetched.
    """

    def __init__(
        self,
        start: str,
        target: str,
        config: SearchConfig | None = None,
        fetcher: PageFetcher | None = None,
        extractor: LinkExtractor | None = None,
        limiter: RateLimiter | None = None,
        on_expand: Callable[[str, int], None] | None = None,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self.config = config or SearchConfig()
        if self.config.max_depth < 0:
            raise ValueError(f"max_depth must be >= 0, got {self.config.max_depth}")
        self.start = start
        self.target = target
        self.fetcher = fetcher or PageFetcher(
            build_session(self.config.token), self.config.mode
        )
        self.extractor = extractor or LinkExtractor(
            prefix=self.config.mode.link_prefix,
            home_page=self.config.home_page,
            include_external=self.config.include_external,
        )
        self.limiter = limiter or RateLimiter.from_hourly_budget(
            self.config.mode.rate_limit
        )
        self.on_expand = on_expand
        self._clock = clock

        self.state = SearchState.EXPANDING
        self.registry = ArticleRegistry(start)
        self.frontier = Frontier()
        self.matches: list[PathMatch] = []
        self.stats = SearchStats()
        self._t0 = clock()

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    def run(self) -> list[PathMatch]:
        """Search to completion and return every match found."""
        return list(self.iter_matches())

    def iter_matches(self) -> Iterator[PathMatch]:
        """Yield matches as they are discovered.

        Each call starts a fresh search: registry and frontier are rebuilt.
        """
        self._reset()
        log.info("Searching %s -> %s (mode=%s, max depth=%d%s)",
                 self.start, self.target, self.config.mode.name,
                 self.config.max_depth,
                 ", all paths" if self.config.find_all else "")

        if self.start == self.target:
            yield self._record_match(ROOT)
            self.state = SearchState.FOUND
            return

        frontier = self.frontier
        while self.state is SearchState.EXPANDING:
            frontier.level_length = frontier.next_level_length
            frontier.next_level_length = 0
            log.info("[LEVEL] depth %d: %d article(s) to expand",
                     frontier.depth, frontier.level_length)

            end = frontier.current_index + frontier.level_length
            while frontier.current_index < end:
                index = frontier.current_index
                frontier.current_index += 1
                yield from self._expand(index)
                if self.state is SearchState.FOUND:
                    self._log_summary()
                    return

            if (frontier.depth >= self.config.max_depth
                    or frontier.next_level_length == 0):
                self.state = SearchState.EXHAUSTED
            else:
                frontier.depth += 1

        self._log_summary()

    # ------------------------------------------------------------------
    # Internal helpers
    # ------------------------------------------------------------------

    def _reset(self) -> None:
        self.state = SearchState.EXPANDING
        self.registry = ArticleRegistry(self.start)
        self.frontier = Frontier()
        self.matches = []
        self.stats = SearchStats()
        self._t0 = self._clock()

    def _expand(self, index: int) -> Iterator[PathMatch]:
        """Fetch one article and register the articles it links to."""
        identifier = self.registry.identifier(index)
        depth = self.frontier.depth
        self.stats.expanded += 1
        if self.on_expand is not None:
            self.on_expand(identifier, depth)

        self.stats.waited += self.limiter.wait_if_needed()
        try:
            body = self.fetcher.fetch(identifier)
        except FetchError as exc:
            self.stats.errors += 1
            log.error("[ERR] %s", exc)
            return
        self.stats.fetched += 1

        added = 0
        for name in self.extractor.extract(body):
            new_index = self.registry.insert_if_new(name, index)
            if new_index is None:
                continue
            added += 1
            self.frontier.next_level_length += 1
            if name == self.target:
                yield self._record_match(new_index)
                if not self.config.find_all:
                    self.state = SearchState.FOUND
                    return
        log.debug("  %s: %d new article(s)", identifier, added)

    def _record_match(self, index: int) -> PathMatch:
        path = self.registry.path_to(index)
        match = PathMatch(
            path=path,
            depth=len(path) - 1,
            elapsed=self._clock() - self._t0,
        )
        self.matches.append(match)
        self.stats.matches += 1
        log.info("[MATCH] %s (%d articles)", " -> ".join(path), match.length)
        return match

    def _log_summary(self) -> None:
        log.info(
            "Search %s. depth=%d  discovered=%d  expanded=%d  fetched=%d  err=%d  "
            "matches=%d  waited=%.1fs",
            self.state.value,
            self.frontier.depth,
            len(self.registry),
            self.stats.expanded,
            self.stats.fetched,
            self.stats.errors,
            self.stats.matches,
            self.stats.waited,
        )


def find_paths(
    start: str,
    target: str,
    config: SearchConfig | None = None,
    on_expand: Callable[[str, int], None] | None = None,
) -> Iterator[PathMatch]:
    """Convenience wrapper: run a search with the real HTTP collaborators."""
    return PathSearch(start, target, config, on_expand=on_expand).iter_matches()
