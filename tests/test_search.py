"""
Tests for the BFS path search: shortest-path property, stop-at-first-hit
and all-paths modes, depth bound, fetch-error recovery and determinism.
"""

import logging
import unittest
from unittest.mock import MagicMock

from wiki_path.config import API_MODE, SearchConfig
from wiki_path.core.fetcher import PageFetcher
from wiki_path.core.ratelimit import RateLimiter
from wiki_path.core.search import Frontier, PathSearch, SearchState
from wiki_path.errors import FetchError
from wiki_path.extraction.links import LinkExtractor
from wiki_path.utils.url import canonical_identifier


def _page(*links: str) -> str:
    anchors = "".join(f'<a href="/wiki/{name}">{name}</a>' for name in links)
    return f"<html><body><div>{anchors}</div></body></html>"


class FakeFetcher:
    """Serves pages from an in-memory link graph and records fetch order."""

    def __init__(self, graph: dict[str, list[str]], broken: set[str] = frozenset()):
        self.graph = graph
        self.broken = broken
        self.fetched: list[str] = []

    def fetch(self, identifier: str) -> str:
        self.fetched.append(identifier)
        if identifier in self.broken:
            raise FetchError(identifier, f"https://example.org/{identifier}", "boom")
        return _page(*self.graph.get(identifier, []))


def _search(graph, start, target, broken=frozenset(), **config_kwargs):
    fetcher = FakeFetcher(graph, broken)
    search = PathSearch(
        start,
        target,
        SearchConfig(**config_kwargs),
        fetcher=fetcher,
        extractor=LinkExtractor(),
        limiter=RateLimiter(0),
    )
    return search, fetcher


# ------------------------------------------------------------------ #
# Stop at first hit
# ------------------------------------------------------------------ #

class TestFirstHit(unittest.TestCase):

    def test_end_to_end_scenario(self):
        graph = {"A": ["B", "C"], "B": ["D"], "C": []}
        search, fetcher = _search(graph, "A", "D")
        matches = search.run()
        self.assertEqual(len(matches), 1)
        self.assertEqual(matches[0].path, ["A", "B", "D"])
        self.assertEqual(matches[0].length, 3)
        self.assertEqual(matches[0].depth, 2)
        self.assertIs(search.state, SearchState.FOUND)
        # C is never fetched: the match happens while expanding B.
        self.assertEqual(fetcher.fetched, ["A", "B"])

    def test_direct_link(self):
        search, fetcher = _search({"A": ["X", "T", "Y"]}, "A", "T")
        matches = search.run()
        self.assertEqual(matches[0].path, ["A", "T"])
        self.assertEqual(fetcher.fetched, ["A"])

    def test_stops_mid_document(self):
        graph = {"A": ["B", "T", "C"]}
        search, _ = _search(graph, "A", "T")
        search.run()
        # C comes after the target on the page and is never registered.
        self.assertIn("B", search.registry)
        self.assertNotIn("C", search.registry)

    def test_shortest_path_wins_over_earlier_longer_route(self):
        # B precedes D on the start page, but C only sits at depth 2, so
        # T is reached via D while depth 1 is still being expanded.
        graph = {
            "A": ["B", "D"],
            "B": ["C"],
            "C": ["T"],
            "D": ["T"],
        }
        search, fetcher = _search(graph, "A", "T")
        matches = search.run()
        self.assertEqual(matches[0].path, ["A", "D", "T"])
        self.assertNotIn("C", fetcher.fetched)

    def test_first_match_in_expansion_order_wins_ties(self):
        graph = {"A": ["B", "C"], "B": ["T"], "C": ["T"]}
        search, _ = _search(graph, "A", "T")
        self.assertEqual(search.run()[0].path, ["A", "B", "T"])

    def test_start_equals_target(self):
        search, fetcher = _search({"A": ["B"]}, "A", "A")
        matches = search.run()
        self.assertEqual(matches[0].path, ["A"])
        self.assertEqual(matches[0].length, 1)
        self.assertEqual(fetcher.fetched, [])

    def test_percent_encoded_link_matches_typed_target(self):
        fetcher = MagicMock()
        fetcher.fetch.side_effect = lambda ident: {
            "Physics": '<a href="/wiki/Quantum_mechanics">q</a>'
                       '<a href="/wiki/Schr%C3%B6dinger%27s_cat">s</a>',
        }.get(ident, "")
        search = PathSearch(
            canonical_identifier("Physics"),
            canonical_identifier("Schrödinger's cat"),
            SearchConfig(),
            fetcher=fetcher,
            extractor=LinkExtractor(),
            limiter=RateLimiter(0),
        )
        matches = search.run()
        self.assertEqual(matches[0].path, ["Physics", "Schrödinger's_cat"])

    def test_encoded_link_back_to_start_not_registered_twice(self):
        fetcher = MagicMock()
        fetcher.fetch.return_value = (
            '<a href="/wiki/Caf%C3%A9">c</a><a href="/wiki/Tea">t</a>'
        )
        search = PathSearch(
            canonical_identifier("Café"), "Z", SearchConfig(max_depth=0),
            fetcher=fetcher,
            extractor=LinkExtractor(),
            limiter=RateLimiter(0),
        )
        search.run()
        self.assertEqual(list(search.registry.identifiers()), ["Café", "Tea"])

    def test_elapsed_is_measured_from_search_start(self):
        ticks = iter([100.0, 100.0, 102.5])
        search = PathSearch(
            "A", "B", SearchConfig(),
            fetcher=FakeFetcher({"A": ["B"]}),
            extractor=LinkExtractor(),
            limiter=RateLimiter(0),
            clock=lambda: next(ticks),
        )
        match = search.run()[0]
        self.assertAlmostEqual(match.elapsed, 2.5)


# ------------------------------------------------------------------ #
# Exhaustion and depth bound
# ------------------------------------------------------------------ #

class TestExhaustion(unittest.TestCase):

    def test_no_path_returns_nothing(self):
        graph = {"A": ["B"], "B": ["C"], "C": []}
        search, fetcher = _search(graph, "A", "Z")
        self.assertEqual(search.run(), [])
        self.assertIs(search.state, SearchState.EXHAUSTED)
        self.assertEqual(fetcher.fetched, ["A", "B", "C"])

    def test_depth_bound_respected(self):
        # Chain A -> N1 -> N2 -> ... -> N9
        graph = {"A": ["N1"]}
        graph.update({f"N{i}": [f"N{i + 1}"] for i in range(1, 9)})
        fetcher = FakeFetcher(graph)
        depths = []
        search = PathSearch(
            "A", "N9", SearchConfig(max_depth=3),
            fetcher=fetcher,
            extractor=LinkExtractor(),
            limiter=RateLimiter(0),
            on_expand=lambda ident, depth: depths.append(depth),
        )
        self.assertEqual(search.run(), [])
        self.assertEqual(fetcher.fetched, ["A", "N1", "N2", "N3"])
        self.assertEqual(depths, [0, 1, 2, 3])
        self.assertEqual(search.stats.expanded, 4)

    def test_target_at_depth_bound_plus_one_is_found(self):
        # Nodes at max_depth are still fetched, so their children are seen.
        graph = {"A": ["B"], "B": ["T"]}
        search, _ = _search(graph, "A", "T", max_depth=1)
        self.assertEqual(search.run()[0].path, ["A", "B", "T"])

    def test_max_depth_zero_only_fetches_start(self):
        graph = {"A": ["B"], "B": ["T"]}
        search, fetcher = _search(graph, "A", "T", max_depth=0)
        self.assertEqual(search.run(), [])
        self.assertEqual(fetcher.fetched, ["A"])

    def test_negative_max_depth_rejected(self):
        with self.assertRaises(ValueError):
            _search({}, "A", "B", max_depth=-1)

    def test_frontier_counters(self):
        graph = {"A": ["B", "C"], "B": ["D", "E"], "C": ["F"]}
        search, _ = _search(graph, "A", "Z", max_depth=1)
        search.run()
        self.assertEqual(search.frontier.depth, 1)
        self.assertEqual(search.frontier.level_length, 2)
        self.assertEqual(search.frontier.next_level_length, 3)
        self.assertEqual(search.frontier.current_index, 4)


# ------------------------------------------------------------------ #
# Deduplication
# ------------------------------------------------------------------ #

class TestNoRevisits(unittest.TestCase):

    def test_cycles_are_not_refetched(self):
        graph = {"A": ["B", "A"], "B": ["A", "C", "B"], "C": ["A", "B"]}
        search, fetcher = _search(graph, "A", "Z")
        search.run()
        self.assertEqual(fetcher.fetched, ["A", "B", "C"])
        self.assertEqual(list(search.registry.identifiers()), ["A", "B", "C"])

    def test_duplicate_links_on_one_page_register_once(self):
        graph = {"A": ["B", "B", "C", "B"]}
        search, _ = _search(graph, "A", "Z")
        search.run()
        self.assertEqual(len(search.registry), 3)
        self.assertEqual(search.frontier.next_level_length, 0)


# ------------------------------------------------------------------ #
# All-paths mode
# ------------------------------------------------------------------ #

class TestAllPaths(unittest.TestCase):

    def test_target_reported_once_and_search_continues(self):
        graph = {
            "A": ["B", "C"],
            "B": ["T"],
            "C": ["T", "E"],
            "E": ["F"],
        }
        search, fetcher = _search(graph, "A", "T", find_all=True, max_depth=4)
        matches = search.run()
        self.assertEqual([m.path for m in matches], [["A", "B", "T"]])
        # The search kept going past the match until the graph ran out.
        self.assertIn("F", fetcher.fetched)
        self.assertIs(search.state, SearchState.EXHAUSTED)

    def test_stops_at_max_depth(self):
        graph = {"A": ["B"], "B": ["T", "C"], "C": ["D"], "D": ["E"]}
        search, fetcher = _search(graph, "A", "T", find_all=True, max_depth=2)
        matches = search.run()
        self.assertEqual(len(matches), 1)
        self.assertEqual(fetcher.fetched, ["A", "B", "T", "C"])

    def test_matches_are_yielded_incrementally(self):
        graph = {"A": ["T", "B"], "B": ["C"]}
        search, fetcher = _search(graph, "A", "T", find_all=True)
        it = search.iter_matches()
        first = next(it)
        self.assertEqual(first.path, ["A", "T"])
        self.assertEqual(fetcher.fetched, ["A"])
        self.assertEqual(list(it), [])


# ------------------------------------------------------------------ #
# Fetch failures
# ------------------------------------------------------------------ #

class TestFetchErrors(unittest.TestCase):

    def test_failed_fetch_is_a_dead_end(self):
        graph = {"A": ["B", "C"], "B": ["T"], "C": ["T"]}
        search, fetcher = _search(graph, "A", "T", broken={"B"})
        with self.assertLogs("wiki-path", level=logging.ERROR) as cm:
            matches = search.run()
        self.assertEqual(matches[0].path, ["A", "C", "T"])
        self.assertEqual(search.stats.errors, 1)
        self.assertTrue(any("'B'" in line for line in cm.output))

    def test_failed_start_exhausts(self):
        search, _ = _search({"A": ["T"]}, "A", "T", broken={"A"})
        with self.assertLogs("wiki-path", level=logging.ERROR):
            self.assertEqual(search.run(), [])
        self.assertIs(search.state, SearchState.EXHAUSTED)


# ------------------------------------------------------------------ #
# Determinism, hooks, collaborators
# ------------------------------------------------------------------ #

class TestSearchMisc(unittest.TestCase):

    GRAPH = {
        "A": ["B", "C", "D"],
        "B": ["E", "C", "F"],
        "C": ["G", "A"],
        "D": ["H", "T"],
        "E": ["T"],
    }

    def test_repeated_runs_are_identical(self):
        runs = []
        for _ in range(3):
            search, fetcher = _search(self.GRAPH, "A", "T")
            paths = [m.path for m in search.run()]
            runs.append((paths, fetcher.fetched, list(search.registry.identifiers())))
        self.assertEqual(runs[0], runs[1])
        self.assertEqual(runs[1], runs[2])
        self.assertEqual(runs[0][0], [["A", "D", "T"]])

    def test_rerun_resets_state(self):
        search, fetcher = _search(self.GRAPH, "A", "T")
        first = search.run()
        second = search.run()
        self.assertEqual([m.path for m in first], [m.path for m in second])
        self.assertEqual(len(search.matches), 1)
        self.assertEqual(fetcher.fetched, ["A", "B", "C", "D"] * 2)

    def test_on_expand_called_before_each_fetch(self):
        events = []
        fetcher = FakeFetcher({"A": ["B"], "B": ["C"]})
        original = fetcher.fetch

        def fetch(identifier):
            events.append(("fetch", identifier))
            return original(identifier)

        fetcher.fetch = fetch
        search = PathSearch(
            "A", "Z", SearchConfig(),
            fetcher=fetcher,
            extractor=LinkExtractor(),
            limiter=RateLimiter(0),
            on_expand=lambda ident, depth: events.append(("expand", ident, depth)),
        )
        search.run()
        self.assertEqual(events, [
            ("expand", "A", 0), ("fetch", "A"),
            ("expand", "B", 1), ("fetch", "B"),
            ("expand", "C", 2), ("fetch", "C"),
        ])

    def test_rate_limiter_called_once_per_fetch(self):
        limiter = MagicMock(spec=RateLimiter)
        limiter.wait_if_needed.return_value = 0.0
        search = PathSearch(
            "A", "Z", SearchConfig(),
            fetcher=FakeFetcher({"A": ["B", "C"]}),
            extractor=LinkExtractor(),
            limiter=limiter,
        )
        search.run()
        self.assertEqual(limiter.wait_if_needed.call_count, 3)

    def test_default_collaborators_follow_config(self):
        config = SearchConfig.for_token("secret", include_external=True)
        search = PathSearch("A", "B", config)
        self.assertIsInstance(search.fetcher, PageFetcher)
        self.assertIs(search.fetcher.mode, API_MODE)
        self.assertEqual(search.fetcher.session.headers["Authorization"], "Bearer secret")
        self.assertEqual(search.extractor.prefix, "./")
        self.assertTrue(search.extractor.include_external)
        self.assertAlmostEqual(search.limiter.interval, 0.72)

    def test_fresh_frontier(self):
        self.assertEqual(Frontier(), Frontier(depth=0, current_index=1,
                                              level_length=0, next_level_length=1))


if __name__ == "__main__":
    unittest.main()
