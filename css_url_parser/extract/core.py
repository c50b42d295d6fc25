"""
css_url_parser.extract.core
===========================
Finds ``url()`` and ``image-set()`` references inside one declaration value.

Public functions
----------------
    needs_parse(value) -> bool
    walk_urls(tree, callback) -> None
    split_url(url) -> (normalized, hash)
    get_urls_from_value(value, result, filter, decl) -> (tree, [UrlReference]) | None
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Callable, Optional

from ..config import IMAGE_SET_FUNC_RE, LINE_CONTINUATION_RE, NEEDS_PARSE_RE, URL_FUNC_RE
from ..value import FUNCTION, STRING, ValueNode, ValueTree, parse_value, stringify

log = logging.getLogger("css-url-parser")

# callback(node, raw_url, quoted_form); node is None for an empty url()
UrlCallback = Callable[[Optional[ValueNode], str, bool], None]
UrlFilter = Callable[[str], bool]


@dataclass(eq=False)
class UrlReference:
    node: ValueNode
    url: str
    hash: str
    quoted_form: bool

    @property
    def key(self) -> tuple[str, str, bool]:
        return (self.url, self.hash, self.quoted_form)


def needs_parse(value: str) -> bool:
    """Cheap pre-check: does *value* mention ``url(`` or ``image-set(`` at all?"""
    return NEEDS_PARSE_RE.search(value) is not None


def _is_url_func(node: ValueNode) -> bool:
    return node.kind == FUNCTION and URL_FUNC_RE.search(node.value) is not None


def _node_from_url_func(node: ValueNode) -> Optional[ValueNode]:
    return node.nodes[0] if node.nodes else None


def _url_from_url_func(node: ValueNode) -> str:
    if node.nodes and node.nodes[0].kind == STRING:
        return node.nodes[0].value
    return stringify(node.nodes)


def walk_urls(tree: ValueTree, callback: UrlCallback) -> None:
    """
    Call *callback* for every reference in *tree*.

    The walk never enters a ``url()`` or ``image-set()`` function, so nested
    references such as ``image-set(image-set(url(a)))`` are not reported.
    """

    def visit(node: ValueNode) -> Optional[bool]:
        if node.kind != FUNCTION:
            return None

        if URL_FUNC_RE.search(node.value):
            callback(_node_from_url_func(node), _url_from_url_func(node), False)
            return False

        if IMAGE_SET_FUNC_RE.match(node.value):
            for child in node.nodes:
                if _is_url_func(child):
                    callback(_node_from_url_func(child), _url_from_url_func(child), False)
                elif child.kind == STRING:
                    callback(child, child.value, True)
            return False

        return None

    tree.walk(visit)


def clean_url(raw: str) -> str:
    """Drop escaped line breaks and surrounding whitespace."""
    return LINE_CONTINUATION_RE.sub("", raw).strip()


def split_url(url: str) -> tuple[str, str]:
    """
    Split *url* into ``(normalized, hash)`` at the first ``#``.

    ``a.png?v=2#x`` -> ``("a.png?v=2", "#x")``;
    ``a.png?#x``    -> ``("a.png", "?#x")``;
    ``a.png?v=2``   -> ``("a.png?v=2", "")`` (a query alone is kept).
    """
    pos = url.find("#")
    if pos == -1:
        return url, ""
    label = url[pos + 1:]
    if pos > 0 and url[pos - 1] == "?":
        return url[:pos - 1], "?#" + label
    return url[:pos], "#" + label


def get_urls_from_value(
    value: str,
    result: Any,
    filter: Optional[UrlFilter] = None,
    decl: Any = None,
    strict: bool = False,
) -> Optional[tuple[ValueTree, list[UrlReference]]]:
    """
    Parse *value* and collect its references.

    Returns ``None`` when the value cannot contain a reference; otherwise the
    parsed tree plus every reference that survived the empty check and
    *filter*.  Empty references are reported through ``result.warn`` with
    *decl* (or the raw value when there is no declaration) as context.
    ``ValueParseError`` from a strict parse propagates to the caller.
    """
    if not needs_parse(value):
        return None

    tree = parse_value(value, strict=strict)
    urls: list[UrlReference] = []

    def on_url(node: Optional[ValueNode], raw: str, quoted_form: bool) -> None:
        url = clean_url(raw)
        if not url or node is None:
            context = str(decl) if decl is not None else value
            result.warn(f"Unable to find uri in '{context}'", decl)
            return

        if filter is not None and not filter(url):
            log.debug("Filtered out %r", url)
            return

        normalized, hash_ = split_url(url)
        urls.append(UrlReference(node, normalized, hash_, quoted_form))

    walk_urls(tree, on_url)
    return tree, urls
