"""
css_url_parser
==============
Extracts ``url()`` and ``image-set()`` references from CSS property values,
replaces each with a stable placeholder and reports them as import records
so a later stage can resolve them.

Package structure
-----------------
css_url_parser/
├── __init__.py       – package init and public API
├── config.py         – configuration constants
├── logging_setup.py  – colorlog handler for the package logger
├── result.py         – ImportRequest / ReplaceDirective records, ProcessResult
├── processor.py      – UrlParser: the extract → dedupe → rewrite run
├── filters.py        – inclusion predicates (is_url_request, build_filter)
├── resolver.py       – placeholder → final URL substitution
├── session.py        – requests.Session factory for URL inputs
├── cli.py            – argparse CLI (``python -m css_url_parser``)
├── value/            – value tree model and tokenizer
├── extract/          – reference extraction, grouping, rewriting
└── sources/          – declarations from CSS (tinycss2) and HTML (bs4)

Quick start
-----------
    from css_url_parser import Stylesheet, UrlParser, is_url_request

    sheet = Stylesheet.parse("a { background: url(img/bg.png) }")
    result = UrlParser(filter=is_url_request).process(sheet.declarations)
    sheet.serialize()   # 'a { background: url(___CSS_URL_IMPORT_0___) }'
    result.imports()    # [ImportRequest(index=0, url='img/bg.png', ...)]
"""

from .processor import UrlParser, process_declarations
from .result import ImportRequest, ProcessResult, ReplaceDirective, UrlWarning
from .filters import build_filter, is_url_request
from .resolver import render_url, resolve_placeholders
from .sources import Declaration, HtmlDocument, Stylesheet
from .value import ValueParseError, parse_value

__all__ = [
    "UrlParser",
    "process_declarations",
    "ImportRequest",
    "ReplaceDirective",
    "ProcessResult",
    "UrlWarning",
    "build_filter",
    "is_url_request",
    "render_url",
    "resolve_placeholders",
    "Declaration",
    "HtmlDocument",
    "Stylesheet",
    "ValueParseError",
    "parse_value",
]
