"""
css_url_parser.extract
======================
Reference extraction, deduplication and tree rewriting.

Public API
----------
    from css_url_parser.extract import get_urls_from_value, collect_url_groups, rewrite_tree
"""

from .core import (
    UrlFilter,
    UrlReference,
    clean_url,
    get_urls_from_value,
    needs_parse,
    split_url,
    walk_urls,
)
from .dedupe import UrlGroup, check_placeholder_template, collect_url_groups, placeholder_name
from .rewrite import rewrite_tree

__all__ = [
    "UrlFilter",
    "UrlReference",
    "UrlGroup",
    "check_placeholder_template",
    "clean_url",
    "collect_url_groups",
    "get_urls_from_value",
    "needs_parse",
    "placeholder_name",
    "rewrite_tree",
    "split_url",
    "walk_urls",
]
