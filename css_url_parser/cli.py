"""
Command-line interface for the CSS url() parser.

Each INPUT (a .css / .html file or an http(s) URL) is processed as an
independent run: references are replaced by placeholders, or by final URLs
when --public-path is given, and the records describing them can be saved
as JSON.
"""

from __future__ import annotations

import argparse
import json
import logging
import sys
import urllib.parse
from pathlib import Path
from typing import Optional

import requests

try:
    from tqdm import tqdm as _tqdm
    _TQDM_AVAILABLE = True
except ImportError:
    _TQDM_AVAILABLE = False

from .config import (
    DEFAULT_OUTPUT,
    DEFAULT_PUBLIC_PATH,
    HTML_SUFFIXES,
    PLACEHOLDER_TEMPLATE,
)
from .filters import build_filter
from .logging_setup import setup_logging
from .processor import UrlParser
from .resolver import public_path_resolver, resolve_placeholders
from .session import build_session, fetch_text, is_remote
from .sources import HtmlDocument, Stylesheet

log = logging.getLogger("css-url-parser")

_HTML_TYPES = ("text/html", "application/xhtml+xml")


def parse_args(argv: Optional[list[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog="css-url-parser",
        description="Replace url() / image-set() references in CSS with "
                    "placeholders and report them as import records.",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=(
            "The public path can also be provided via the "
            "CSS_URL_PARSER_PUBLIC_PATH env var."
        ),
    )
    parser.add_argument(
        "inputs", nargs="+", metavar="INPUT",
        help="CSS or HTML file, or an http(s):// URL",
    )
    parser.add_argument(
        "--output", default=DEFAULT_OUTPUT,
        help="Directory for rewritten files; '-' writes to stdout (default)",
    )
    parser.add_argument(
        "--messages", default=None, metavar="FILE",
        help="Write the import/replacer records of every input as JSON to FILE",
    )
    parser.add_argument(
        "--all", dest="all_urls", action="store_true", default=False,
        help="Also extract absolute, data: and protocol-relative URLs",
    )
    parser.add_argument(
        "--exclude", action="append", default=[], metavar="REGEX",
        help="Leave URLs matching REGEX untouched (repeatable)",
    )
    parser.add_argument(
        "--placeholder", default=PLACEHOLDER_TEMPLATE, metavar="TEMPLATE",
        help=f"Placeholder template with an {{index}} field (default: {PLACEHOLDER_TEMPLATE})",
    )
    parser.add_argument(
        "--public-path", default=DEFAULT_PUBLIC_PATH, metavar="PREFIX",
        help="Resolve placeholders by joining each URL onto PREFIX",
    )
    parser.add_argument(
        "--strict", action="store_true", default=False,
        help="Report unterminated strings/functions in values as errors",
    )
    parser.add_argument(
        "--no-verify-ssl", dest="verify_ssl", action="store_false", default=True,
        help="Disable TLS certificate verification for URL inputs",
    )
    parser.add_argument("--quiet", action="store_true", help="Only log warnings and errors")
    parser.add_argument("--debug", action="store_true", help="Enable verbose debug logging")
    return parser.parse_args(argv)


def _load(source: str, session) -> tuple[str, bool]:
    """Return ``(text, is_html)`` for a file path or URL."""
    if is_remote(source):
        text, content_type = fetch_text(source, session)
        path = urllib.parse.urlparse(source).path
        is_html = content_type in _HTML_TYPES or Path(path).suffix.lower() in HTML_SUFFIXES
        return text, is_html
    path = Path(source)
    return path.read_text(encoding="utf-8"), path.suffix.lower() in HTML_SUFFIXES


def _output_name(source: str, is_html: bool) -> str:
    if is_remote(source):
        name = Path(urllib.parse.urlparse(source).path).name
        return name or ("index.html" if is_html else "index.css")
    return Path(source).name


def _process_one(source: str, args: argparse.Namespace, url_parser: UrlParser, session) -> dict:
    text, is_html = _load(source, session)
    document = HtmlDocument.parse(text) if is_html else Stylesheet.parse(text)
    result = url_parser.process(document.declarations)

    output = document.serialize()
    if args.public_path:
        output = resolve_placeholders(output, result.messages, public_path_resolver(args.public_path))

    if args.output == "-":
        sys.stdout.write(output)
    else:
        out_dir = Path(args.output)
        out_dir.mkdir(parents=True, exist_ok=True)
        out_path = out_dir / _output_name(source, is_html)
        out_path.write_text(output, encoding="utf-8")
        log.debug("Wrote %s", out_path)

    log.info(
        "%s: %d reference(s), %d declaration(s) rewritten, %d warning(s)",
        source, len(result.imports()), len(result.declarations), len(result.warnings),
    )
    return {
        "input": source,
        "messages": result.to_dicts(),
        "warnings": [str(w) for w in result.warnings],
    }


def main(argv: Optional[list[str]] = None) -> int:
    """
    Main entry point for the CLI.  Returns the process exit status:
    0 when every input was processed, 1 if any could not be read.
    """
    args = parse_args(argv)
    setup_logging(debug=args.debug, quiet=args.quiet)

    url_filter = None if args.all_urls and not args.exclude else build_filter(
        exclude=args.exclude, allow_absolute=args.all_urls,
    )
    try:
        url_parser = UrlParser(
            filter=url_filter, placeholder_template=args.placeholder, strict=args.strict,
        )
    except ValueError as exc:
        log.error("%s", exc)
        return 2

    session = None
    if any(is_remote(s) for s in args.inputs):
        session = build_session(verify_ssl=args.verify_ssl)

    inputs = args.inputs
    if _TQDM_AVAILABLE and len(inputs) > 1 and args.output != "-":
        inputs = _tqdm(inputs, desc="Parsing", unit="file", dynamic_ncols=True)

    reports = []
    failed = 0
    for source in inputs:
        try:
            reports.append(_process_one(source, args, url_parser, session))
        except (OSError, UnicodeDecodeError, requests.RequestException) as exc:
            log.error("Could not process %s – %s", source, exc)
            failed += 1

    if args.messages:
        Path(args.messages).write_text(json.dumps(reports, indent=2), encoding="utf-8")
        log.debug("Records written to %s", args.messages)

    return 1 if failed else 0


if __name__ == "__main__":
    sys.exit(main())
