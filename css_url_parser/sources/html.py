"""
css_url_parser.sources.html
===========================
Declaration source for HTML documents, using BeautifulSoup.

Handles:
* Inline ``<style>`` blocks (parsed as full stylesheets)
* ``style="…"`` attributes on any element (parsed as declaration lists)

Declarations are returned in document order; :meth:`HtmlDocument.serialize`
writes rewritten CSS back into the soup and renders it.
"""

from __future__ import annotations

import logging

from bs4 import BeautifulSoup
from bs4.element import Stylesheet as StyleString

from .stylesheet import DeclarationBlock, Declaration, Stylesheet

log = logging.getLogger("css-url-parser")

try:
    import lxml  # noqa: F401 – used as BeautifulSoup parser backend
    _BS4_PARSER = "lxml"
except ImportError:
    _BS4_PARSER = "html.parser"


class HtmlDocument:
    def __init__(self, soup: BeautifulSoup) -> None:
        self.soup = soup
        # (tag, stylesheet) for <style>, (tag, block) for style="" – in order
        self._styles: list = []
        self._attributes: list = []
        self.declarations: list[Declaration] = []

        for el in soup.find_all(lambda tag: tag.name == "style" or tag.has_attr("style")):
            if el.has_attr("style"):
                block = DeclarationBlock.parse(el["style"])
                self._attributes.append((el, block))
                self.declarations.extend(block.declarations)
            if el.name == "style":
                sheet = Stylesheet.parse(el.string or "")
                self._styles.append((el, sheet))
                self.declarations.extend(sheet.declarations)

        log.debug(
            "HTML parsed: %d <style> block(s), %d style attribute(s), %d declaration(s)",
            len(self._styles), len(self._attributes), len(self.declarations),
        )

    @classmethod
    def parse(cls, html: str) -> "HtmlDocument":
        return cls(BeautifulSoup(html, _BS4_PARSER))

    def serialize(self) -> str:
        for el, block in self._attributes:
            el["style"] = block.serialize()
        for el, sheet in self._styles:
            el.string = StyleString(sheet.serialize())
        return str(self.soup)

    __str__ = serialize
