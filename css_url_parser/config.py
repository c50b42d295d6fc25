"""Configuration constants for the CSS url() parser."""

import os
import re

PLUGIN_NAME = "css-url-parser"

# Placeholder inserted in place of every extracted reference.
# Can be overridden via the CSS_URL_PARSER_PLACEHOLDER env var.
PLACEHOLDER_TEMPLATE = os.environ.get(
    "CSS_URL_PARSER_PLACEHOLDER", "___CSS_URL_IMPORT_{index}___"
)

# Prefix joined onto every URL by the CLI resolver (--public-path)
DEFAULT_PUBLIC_PATH = os.environ.get("CSS_URL_PARSER_PUBLIC_PATH", "")
DEFAULT_OUTPUT = "-"

REQUEST_TIMEOUT = 15    # seconds per HTTP request

# Quick check run against the raw declaration value before building a tree
NEEDS_PARSE_RE = re.compile(r"(?:url|(?:-[a-z]+-)?image-set)\(", re.IGNORECASE)

# Function names recognised while walking a value tree.  Any name containing
# "url" (url, -moz-url, my-url) is treated as a url() function.
URL_FUNC_RE = re.compile(r"url", re.IGNORECASE)
IMAGE_SET_FUNC_RE = re.compile(r"^(?:-[a-z]+-)?image-set$", re.IGNORECASE)

# Backslash-escaped line continuation inside a url() argument
LINE_CONTINUATION_RE = re.compile(r"\\(?:\r\n|[\r\n\f])")

# Inputs with these suffixes are read as HTML, everything else as CSS
HTML_SUFFIXES = frozenset([".html", ".htm", ".xhtml"])

# At the top level of a stylesheet only rules and at-rules are allowed;
# these at-rules carry declarations directly inside their block.
DECLARATION_AT_RULES = frozenset([
    "font-face",
    "page",
    "counter-style",
    "property",
    "viewport",
    "font-palette-values",
])
