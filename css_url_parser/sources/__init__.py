"""
css_url_parser.sources
======================
Declaration sources: where the declarations handed to the processor come
from, and how rewritten values are written back.

    stylesheet.py – CSS text via tinycss2
    html.py       – <style> blocks and style="" attributes via BeautifulSoup
"""

from .stylesheet import Declaration, DeclarationBlock, Stylesheet, parse_declarations
from .html import HtmlDocument

__all__ = [
    "Declaration",
    "DeclarationBlock",
    "HtmlDocument",
    "Stylesheet",
    "parse_declarations",
]
