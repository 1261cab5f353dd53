"""Utility helpers for article names and logging."""

from wiki_path.utils.url import canonical_identifier
from wiki_path.utils.log import setup_logging, log

__all__ = [
    "canonical_identifier",
    "setup_logging",
    "log",
]
