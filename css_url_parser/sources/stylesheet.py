"""
css_url_parser.sources.stylesheet
=================================
Declaration source for CSS text, built on tinycss2.

tinycss2 is only used to find where things are: its tokens carry line and
column positions, which are turned into offsets into the source text.  Each
``{}`` block is split on top-level ``;`` and every piece that parses as a
declaration becomes a :class:`Declaration` whose ``value`` is the exact
source slice.  :meth:`DeclarationBlock.serialize` copies the source and
splices in the current value of every declaration, so text outside
rewritten values is returned byte for byte.

The tokenizer reports positions on a copy with normalised line endings;
those positions are mapped back so the original text, ``\\r\\n`` included,
is what gets sliced and re-emitted.
"""

from __future__ import annotations

import logging
from typing import Optional

import tinycss2

from ..config import DECLARATION_AT_RULES

log = logging.getLogger("css-url-parser")


class Declaration:
    """A single ``name: value`` pair with a mutable value."""

    def __init__(
        self,
        name: str,
        value: str,
        important: bool = False,
        line: Optional[int] = None,
        column: Optional[int] = None,
        between: str = ": ",
    ) -> None:
        self.name = name
        self.value = value
        self.important = important
        self.line = line
        self.column = column
        self.between = between

    @property
    def source(self) -> Optional[tuple[int, int]]:
        if self.line is None:
            return None
        return (self.line, self.column)

    def __str__(self) -> str:
        return f"{self.name}{self.between}{self.value}" + (" !important" if self.important else "")

    def __repr__(self) -> str:
        return f"<Declaration {self}>"


def normalise_newlines(css: str) -> tuple[str, list[int]]:
    """
    Normalise *css* the way the tinycss2 tokenizer does before it counts
    lines: ``\\r\\n``, ``\\r`` and ``\\f`` become ``\\n`` and NUL becomes
    U+FFFD.

    Returns:
        ``(text, offsets)`` where ``offsets[i]`` is the position in *css* of
        ``text[i]``; ``offsets[len(text)]`` is ``len(css)``.
    """
    out: list[str] = []
    offsets: list[int] = []
    i = 0
    while i < len(css):
        ch = css[i]
        offsets.append(i)
        if ch == "\r" and css.startswith("\r\n", i):
            out.append("\n")
            i += 2
            continue
        if ch in "\r\f":
            out.append("\n")
        elif ch == "\0":
            out.append("\uFFFD")
        else:
            out.append(ch)
        i += 1
    offsets.append(len(css))
    return "".join(out), offsets


def _strip_whitespace(tokens: list) -> list:
    start, end = 0, len(tokens)
    while start < end and tokens[start].type == "whitespace":
        start += 1
    while end > start and tokens[end - 1].type == "whitespace":
        end -= 1
    return tokens[start:end]


def _index_of(tokens: list, token: object) -> int:
    for i, t in enumerate(tokens):
        if t is token:
            return i
    raise ValueError("token not found in segment")


def _first_significant(tokens: list):
    for token in tokens:
        if token.type not in ("whitespace", "comment"):
            return token
    return None


class DeclarationBlock:
    """
    A parsed run of CSS text: a declaration list (``style`` attribute) or,
    with *allow_declarations* false, a list of rules (a stylesheet).

    Rules' ``{}`` blocks are scanned recursively.  Inside ``@media``-style
    at-rules only nested rules are expected; inside style rules and
    ``@font-face``-style at-rules declarations are collected.
    """

    def __init__(self, text: str, allow_declarations: bool = True) -> None:
        self.text = text
        self.declarations: list[Declaration] = []
        # (start, end, declaration) – value span in self.text
        self._slots: list[tuple[int, int, Declaration]] = []

        # token positions refer to the normalised copy; _source_offsets maps
        # them back into self.text
        self._normalised, self._source_offsets = normalise_newlines(text)
        self._line_starts = [0]
        for i, ch in enumerate(self._normalised):
            if ch == "\n":
                self._line_starts.append(i + 1)

        tokens = tinycss2.parse_component_value_list(self._normalised, skip_comments=False)
        self._scan(tokens, len(self._normalised), allow_declarations)

    @classmethod
    def parse(cls, text: str) -> "DeclarationBlock":
        """Parse a bare declaration list such as ``color: red; background: url(a.png)``."""
        return cls(text, allow_declarations=True)

    def _offset(self, token) -> int:
        return self._line_starts[token.source_line - 1] + token.source_column - 1

    def _scan(self, tokens: list, end: int, allow_declarations: bool) -> None:
        offsets = [self._offset(t) for t in tokens]
        ends = offsets[1:] + [end]

        segment: list[int] = []
        for i, token in enumerate(tokens):
            if token == ";":
                self._add_segment(tokens, segment, ends, offsets, allow_declarations)
                segment = []
            elif token.type == "{} block":
                segment.append(i)
                self._add_segment(tokens, segment, ends, offsets, allow_declarations)
                segment = []
            else:
                segment.append(i)
        self._add_segment(tokens, segment, ends, offsets, allow_declarations)

    def _add_segment(
        self,
        tokens: list,
        segment: list[int],
        ends: list[int],
        offsets: list[int],
        allow_declarations: bool,
    ) -> None:
        if not segment:
            return
        seg_tokens = [tokens[i] for i in segment]
        if allow_declarations and self._add_declaration(seg_tokens, segment, ends, offsets):
            return

        first = _first_significant(seg_tokens)
        if first is not None and first.type == "at-keyword":
            nested_allow = allow_declarations or first.lower_value in DECLARATION_AT_RULES
        else:
            nested_allow = True

        for i in segment:
            token = tokens[i]
            if token.type != "{} block":
                continue
            block_end = ends[i]
            # the closing brace is missing when the block runs to end of input
            if block_end - 1 > offsets[i] and self._normalised[block_end - 1] == "}":
                block_end -= 1
            self._scan(token.content, block_end, nested_allow)

    def _add_declaration(
        self,
        seg_tokens: list,
        segment: list[int],
        ends: list[int],
        offsets: list[int],
    ) -> bool:
        first = _first_significant(seg_tokens)
        if first is None or first.type != "ident":
            return False
        parsed = tinycss2.parse_one_declaration(seg_tokens)
        if parsed.type != "declaration":
            return False
        value_tokens = _strip_whitespace(list(parsed.value))
        if not value_tokens:
            return False

        to_source = self._source_offsets
        name_end = to_source[ends[segment[_index_of(seg_tokens, first)]]]
        start = to_source[offsets[segment[_index_of(seg_tokens, value_tokens[0])]]]
        end = to_source[ends[segment[_index_of(seg_tokens, value_tokens[-1])]]]

        decl = Declaration(
            name=parsed.name,
            value=self.text[start:end],
            important=parsed.important,
            line=parsed.source_line,
            column=parsed.source_column,
            between=self.text[name_end:start],
        )
        self.declarations.append(decl)
        self._slots.append((start, end, decl))
        return True

    def serialize(self) -> str:
        out: list[str] = []
        pos = 0
        for start, end, decl in sorted(self._slots, key=lambda slot: slot[0]):
            out.append(self.text[pos:start])
            out.append(decl.value)
            pos = end
        out.append(self.text[pos:])
        return "".join(out)

    __str__ = serialize


class Stylesheet(DeclarationBlock):
    """A whole stylesheet; top-level text is rules only."""

    def __init__(self, css: str) -> None:
        super().__init__(css, allow_declarations=False)

    @classmethod
    def parse(cls, css: str) -> "Stylesheet":
        sheet = cls(css)
        log.debug("Stylesheet parsed: %d declaration(s)", len(sheet.declarations))
        return sheet


def parse_declarations(text: str) -> DeclarationBlock:
    return DeclarationBlock.parse(text)
