"""
css_url_parser.processor
========================
Runs extraction, deduplication and rewriting over a list of declarations.

A run has three passes:

1. every declaration passing the quick ``url(`` / ``image-set(`` check is
   parsed and its references collected;
2. references from all declarations are grouped, and one
   :class:`ImportRequest` plus one :class:`ReplaceDirective` is emitted per
   group, in index order;
3. each parsed tree is rewritten and its text assigned back to the
   declaration.

No declaration is modified before pass 3, so a run that raises part-way
leaves its input untouched.

Declarations are duck-typed: anything with a mutable ``value`` string works.
A ``source`` attribute, when present, is attached to warnings, and ``str()``
of the declaration is quoted in the empty-reference warning.
"""

from __future__ import annotations

import logging
from typing import Any, Iterable, Optional

from .config import PLACEHOLDER_TEMPLATE
from .extract import (
    UrlFilter,
    check_placeholder_template,
    collect_url_groups,
    get_urls_from_value,
    rewrite_tree,
)
from .result import ImportRequest, ProcessResult, ReplaceDirective
from .value import ValueParseError

log = logging.getLogger("css-url-parser")


class UrlParser:
    """
    Rewrites ``url()`` / ``image-set()`` references to placeholders.

    Parameters
    ----------
    filter               : Optional ``(url) -> bool``; references it rejects
                           are left alone without a warning.
    placeholder_template : ``str.format`` template with an ``{index}`` field.
    strict               : Treat unterminated strings / functions / comments
                           in a value as errors for that declaration.
    """

    def __init__(
        self,
        filter: Optional[UrlFilter] = None,
        placeholder_template: str = PLACEHOLDER_TEMPLATE,
        strict: bool = False,
    ) -> None:
        check_placeholder_template(placeholder_template)
        self.filter = filter
        self.placeholder_template = placeholder_template
        self.strict = strict

    def process(
        self,
        declarations: Iterable[Any],
        result: Optional[ProcessResult] = None,
    ) -> ProcessResult:
        if result is None:
            result = ProcessResult()

        traversed = self._walk_declarations(declarations, result)

        references = [ref for _, _, urls in traversed for ref in urls]
        groups, replacers = collect_url_groups(references, self.placeholder_template)

        for group in groups:
            result.messages.append(ImportRequest(
                index=group.index,
                url=group.url,
                hash=group.hash,
                quoted_form=group.quoted_form,
                placeholder=group.placeholder,
            ))
            result.messages.append(ReplaceDirective(group.placeholder))

        for decl, tree, _ in traversed:
            decl.value = rewrite_tree(tree, replacers)
            result.declarations.append(decl)

        log.debug(
            "%d declaration(s) rewritten, %d unique reference(s), %d warning(s)",
            len(traversed), len(groups), len(result.warnings),
        )
        return result

    def _walk_declarations(self, declarations: Iterable[Any], result: ProcessResult) -> list:
        items = []
        for decl in declarations:
            try:
                item = get_urls_from_value(
                    decl.value, result, self.filter, decl, strict=self.strict
                )
            except ValueParseError as exc:
                result.error(f"Cannot parse value of '{decl}': {exc}", decl)
                continue

            if item is None:
                continue
            tree, urls = item
            if not urls:
                continue
            log.debug("  %d reference(s) in %s", len(urls), decl)
            items.append((decl, tree, urls))
        return items


def process_declarations(
    declarations: Iterable[Any],
    filter: Optional[UrlFilter] = None,
    placeholder_template: str = PLACEHOLDER_TEMPLATE,
    strict: bool = False,
) -> ProcessResult:
    """Shortcut for ``UrlParser(...).process(declarations)``."""
    parser = UrlParser(filter=filter, placeholder_template=placeholder_template, strict=strict)
    return parser.process(declarations)
