"""
Command-line interface for the Wikipedia path finder.
"""

import argparse
import logging
import sys
import time

from wiki_path import __version__
from wiki_path.config import API_RATE_LIMIT, ANON_RATE_LIMIT, DEFAULT_MAX_DEPTH, SearchConfig
from wiki_path.core.search import PathMatch, PathSearch
from wiki_path.credentials import clear_token, load_token, resolve_token, save_token
from wiki_path.errors import CredentialError
from wiki_path.utils.log import log, setup_logging
from wiki_path.utils.url import canonical_identifier


def format_duration(seconds: float) -> str:
    """Compact human-readable duration, e.g. ``1m 7s 412ms``."""
    total_ms = int(round(seconds * 1000))
    hours, rem = divmod(total_ms, 3_600_000)
    minutes, rem = divmod(rem, 60_000)
    secs, ms = divmod(rem, 1000)
    parts = [
        f"{value}{unit}"
        for value, unit in ((hours, "h"), (minutes, "m"), (secs, "s"), (ms, "ms"))
        if value
    ]
    return " ".join(parts) or "0s"


def print_match(match: PathMatch, out=None) -> None:
    out = out or sys.stdout
    print(f"Path: {match.path}", file=out)
    print(f"Length: {match.length}", file=out)
    print(f"Took {format_duration(match.elapsed)}", file=out, flush=True)


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog="wiki-path",
        description="Find chains of links between Wikipedia articles by "
                    "breadth-first search over live pages.",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=(
            "Examples:\n"
            "  wiki-path path Pizza Albert_Einstein\n"
            "  wiki-path path 'Python (programming language)' Monty_Python -v\n"
            "  wiki-path path Cat Dog --all --max-depth 2\n"
            "  wiki-path token --token <personal API token>\n"
        ),
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    parser.add_argument(
        "--debug", action="store_true",
        help="Enable verbose debug logging",
    )
    parser.add_argument(
        "-q", "--quiet", action="store_true",
        help="Only show warnings and errors on the console",
    )
    parser.add_argument(
        "--log-file",
        help="Write detailed logs to this file (always at DEBUG level)",
    )
    sub = parser.add_subparsers(dest="command", required=True, metavar="COMMAND")

    p_path = sub.add_parser("path", help="Find paths from one article to another")
    p_path.add_argument("start", help="Article to start from")
    p_path.add_argument("end", help="Article to reach")
    p_path.add_argument(
        "-v", "--verbose", action="store_true",
        help="Print article name and depth for each searched article",
    )
    p_path.add_argument(
        "-d", "--max-depth", type=int, default=DEFAULT_MAX_DEPTH, metavar="DEPTH",
        help=f"Maximum depth to search (default: {DEFAULT_MAX_DEPTH})",
    )
    p_path.add_argument(
        "-a", "--all", dest="find_all", action="store_true",
        help="Find all paths up to DEPTH",
    )
    p_path.add_argument(
        "-e", "--external", action="store_true",
        help='Search articles in the "External links" section',
    )

    p_token = sub.add_parser(
        "token",
        help="Manage the Wikimedia API token, which cuts the wait between "
             f"requests from {3600 / ANON_RATE_LIMIT:g}s to "
             f"{3600 / API_RATE_LIMIT:g}s",
    )
    p_token.add_argument("-t", "--token", help="Token to store")
    p_token.add_argument("-u", "--unset", action="store_true", help="Remove the stored token")

    args = parser.parse_args(argv)
    if args.command == "path" and args.max_depth < 0:
        parser.error("--max-depth must be >= 0")
    return args


def cmd_path(args: argparse.Namespace) -> int:
    token = resolve_token()
    config = SearchConfig.for_token(
        token,
        max_depth=args.max_depth,
        find_all=args.find_all,
        include_external=args.external,
    )
    log.info("Fetch mode: %s (%.2f s between requests)",
             config.mode.name, config.mode.request_interval)

    def show_expand(identifier: str, depth: int) -> None:
        print(f"{identifier} {depth}", flush=True)

    search = PathSearch(
        canonical_identifier(args.start),
        canonical_identifier(args.end),
        config,
        on_expand=show_expand if args.verbose else None,
    )
    try:
        for match in search.iter_matches():
            print_match(match)
    except KeyboardInterrupt:
        log.warning("Interrupted")
        return 130
    if not search.matches:
        log.info("No path found within depth %d", config.max_depth)
    return 0


def cmd_token(args: argparse.Namespace) -> int:
    try:
        if args.unset:
            if not clear_token():
                log.info("[TOKEN] No token stored")
        elif args.token is not None:
            save_token(args.token)
        else:
            token = load_token()
            if token:
                print(token)
    except CredentialError as exc:
        log.error("[ERR] %s", exc)
        return 1
    return 0


def main(argv: list[str] | None = None) -> int:
    args = parse_args(argv)

    setup_logging(debug=args.debug, log_file=args.log_file, quiet=args.quiet)

    if args.debug:
        logging.getLogger("urllib3").setLevel(logging.DEBUG)

    t0 = time.monotonic()
    if args.command == "token":
        return cmd_token(args)
    rc = cmd_path(args)
    log.debug("Total elapsed time: %.1f s", time.monotonic() - t0)
    return rc


if __name__ == "__main__":
    sys.exit(main())
