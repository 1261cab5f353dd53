"""
wiki_path.extraction
====================
Sub-package for extracting article links from fetched pages.

Public API
----------
    from wiki_path.extraction import LinkExtractor
"""

from .links import LinkExtractor, href_to_identifier

__all__ = ["LinkExtractor", "href_to_identifier"]
