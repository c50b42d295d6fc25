"""
css_url_parser.resolver
=======================
Final stage: substitute placeholders in rewritten CSS with real URLs.

The processor leaves ``___CSS_URL_IMPORT_<n>___`` tokens behind together with
an :class:`~css_url_parser.result.ImportRequest` per token.  A resolver
callable maps each request's URL to its final form (a hashed asset name, a
CDN path, …) and :func:`resolve_placeholders` writes it back, restoring the
fragment and adding quotes where CSS needs them.
"""

from __future__ import annotations

import logging
import re
import urllib.parse
from typing import Callable, Iterable, Optional

from .result import ImportRequest, ReplaceDirective

log = logging.getLogger("css-url-parser")

Resolve = Callable[[str], Optional[str]]

_SURROUNDING_QUOTES_RE = re.compile(r"""^(['"]).*\1$""", re.DOTALL)
_NEEDS_QUOTES_RE = re.compile(r"""["'() \t\n]""")


def render_url(url: str, hash: str = "", quoted_form: bool = False) -> str:
    """
    Render *url* for use inside ``url(…)`` or as an ``image-set()`` string.

    References that came from a bare string (*quoted_form*) must stay
    strings, and any URL containing quotes, parentheses or whitespace is
    quoted so the surrounding ``url()`` still parses.
    """
    if _SURROUNDING_QUOTES_RE.match(url):
        url = url[1:-1]
    if hash:
        url += hash
    if quoted_form or _NEEDS_QUOTES_RE.search(url):
        escaped = url.replace("\\", "\\\\").replace('"', '\\"').replace("\n", "\\n")
        return f'"{escaped}"'
    return url


def resolve_placeholders(
    text: str,
    messages: Iterable[object],
    resolve: Optional[Resolve] = None,
) -> str:
    """
    Replace every placeholder announced by a :class:`ReplaceDirective` in
    *messages* with the rendered URL of its :class:`ImportRequest`.

    *resolve* maps the extracted URL to its final value; returning ``None``
    (or passing no resolver) keeps the URL as extracted.
    """
    imports: dict[str, ImportRequest] = {}
    placeholders: list[str] = []
    for message in messages:
        if isinstance(message, ImportRequest):
            imports[message.placeholder] = message
        elif isinstance(message, ReplaceDirective):
            placeholders.append(message.placeholder)

    rendered: dict[str, str] = {}
    for placeholder in placeholders:
        request = imports.get(placeholder)
        if request is None:
            log.debug("No import request for placeholder %s", placeholder)
            continue
        url = request.url
        if resolve is not None:
            resolved = resolve(url)
            if resolved is not None:
                url = resolved
        rendered[placeholder] = render_url(url, request.hash, request.quoted_form)

    if not rendered:
        return text
    # one pass, longest name first: P1 must not match inside P10, and a
    # resolved URL is never scanned again
    pattern = re.compile("|".join(
        re.escape(name) for name in sorted(rendered, key=len, reverse=True)
    ))
    return pattern.sub(lambda m: rendered[m.group(0)], text)


def public_path_resolver(prefix: str) -> Resolve:
    """Resolver that joins every URL onto *prefix* (``/static/`` + ``img/a.png``)."""
    if prefix and not prefix.endswith("/"):
        prefix += "/"

    def _resolve(url: str) -> str:
        return urllib.parse.urljoin(prefix, url)

    return _resolve
