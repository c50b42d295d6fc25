"""
css_url_parser.filters
======================
Inclusion predicates deciding which references get extracted.

The processor itself extracts everything; these helpers implement the usual
bundler policy of leaving absolute, protocol-relative and template-looking
URLs in place.
"""

import re
from typing import Callable, Iterable

# ``scheme:`` prefix (data:, http:, mailto:, …)
_SCHEME_RE = re.compile(r"^[a-z][a-z0-9+.\-]*:", re.IGNORECASE)
# ``C:\dir\file`` and ``C:/dir/file`` are paths, not schemes
_WINDOWS_PATH_RE = re.compile(r"^[a-z]:[\\/]", re.IGNORECASE)
# Leading characters that mark a fragment or a template expression
_TEMPLATE_RE = re.compile(r"^[{}\[\]#*;,'§$%&(=?`´^°<>]")


def is_url_request(url: str, allow_root_relative: bool = True) -> bool:
    """
    Return True if *url* points at a resource a bundler should resolve.

    * ``data:``, ``http://…`` and any other scheme → False
    * ``//cdn.example.com/x.png`` → False
    * ``#icon``, ``{{ asset }}``, ``%PUBLIC%/x.png`` → False
    * ``/img/x.png`` → ``allow_root_relative``
    """
    url = url.strip()
    if not url:
        return False
    if _SCHEME_RE.match(url) and not _WINDOWS_PATH_RE.match(url):
        return False
    if url.startswith("//"):
        return False
    if _TEMPLATE_RE.match(url):
        return False
    if url.startswith("/") and not allow_root_relative:
        return False
    return True


def build_filter(
    exclude: Iterable[str] = (),
    allow_absolute: bool = False,
    allow_root_relative: bool = True,
) -> Callable[[str], bool]:
    """
    Build an inclusion predicate for :class:`~css_url_parser.processor.UrlParser`.

    *exclude* is a list of regular expressions searched in the URL; a match
    rejects it.  With *allow_absolute* every URL passes the
    :func:`is_url_request` stage and only *exclude* applies.
    """
    patterns = [re.compile(p) for p in exclude]

    def _filter(url: str) -> bool:
        if not allow_absolute and not is_url_request(url, allow_root_relative):
            return False
        return not any(p.search(url) for p in patterns)

    return _filter
