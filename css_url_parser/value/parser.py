"""
css_url_parser.value.parser
===========================
Tokenizer turning a CSS property value string into a :class:`ValueTree`.

The tokenizer is lenient by default: an unterminated string, comment or
function is flagged ``unclosed`` and still serializes back to the exact
input.  ``strict=True`` raises :class:`ValueParseError` instead.
"""

from __future__ import annotations

from .nodes import (
    COMMENT,
    DIV,
    FUNCTION,
    SPACE,
    STRING,
    WORD,
    ValueNode,
    ValueTree,
)

_WHITESPACE = " \t\n\r\f"
_QUOTES = "'\""
_DIVIDERS = ",/"

# Characters that end a bare word.  ")" is added only inside a function so
# a stray closing paren at the top level stays part of the text.
_WORD_STOP = frozenset(_WHITESPACE + _QUOTES + _DIVIDERS + "(")
_WORD_STOP_IN_FUNCTION = _WORD_STOP | {")"}


class ValueParseError(ValueError):
    """Raised by the strict tokenizer for malformed value text."""

    def __init__(self, message: str, position: int) -> None:
        super().__init__(f"{message} at position {position}")
        self.position = position


def _attach_whitespace(nodes: list[ValueNode]) -> list[ValueNode]:
    """Fold space nodes around a divider into its ``before`` / ``after``."""
    out: list[ValueNode] = []
    i = 0
    while i < len(nodes):
        node = nodes[i]
        if node.kind == DIV:
            if out and out[-1].kind == SPACE:
                node.before = out.pop().value
            if i + 1 < len(nodes) and nodes[i + 1].kind == SPACE:
                node.after = nodes[i + 1].value
                i += 1
        out.append(node)
        i += 1
    return out


class _Parser:
    def __init__(self, text: str, strict: bool) -> None:
        self.text = text
        self.pos = 0
        self.strict = strict

    def _unclosed(self, what: str, start: int) -> None:
        if self.strict:
            raise ValueParseError(f"Unclosed {what}", start)

    def parse_nodes(self, in_function: bool) -> tuple[list[ValueNode], bool]:
        """
        Read sibling nodes until end of input or, inside a function, the
        closing parenthesis (left unconsumed).  The second item of the
        returned pair tells whether that parenthesis was found.
        """
        text = self.text
        nodes: list[ValueNode] = []
        while self.pos < len(text):
            ch = text[self.pos]
            if ch in _WHITESPACE:
                nodes.append(self._read_space())
            elif ch in _QUOTES:
                nodes.append(self._read_string(ch))
            elif text.startswith("/*", self.pos):
                nodes.append(self._read_comment())
            elif ch in _DIVIDERS:
                nodes.append(ValueNode(DIV, ch, source_index=self.pos))
                self.pos += 1
            elif ch == "(":
                nodes.append(self._read_function("", self.pos))
            elif ch == ")" and in_function:
                return _attach_whitespace(nodes), True
            else:
                nodes.append(self._read_word_or_function(in_function))
        return _attach_whitespace(nodes), False

    def _read_space(self) -> ValueNode:
        start = self.pos
        text = self.text
        while self.pos < len(text) and text[self.pos] in _WHITESPACE:
            self.pos += 1
        return ValueNode(SPACE, text[start:self.pos], source_index=start)

    def _read_string(self, quote: str) -> ValueNode:
        text = self.text
        start = self.pos
        k = start + 1
        while k < len(text):
            c = text[k]
            if c == "\\":
                k += 2
                continue
            if c == quote:
                break
            k += 1
        if k >= len(text):
            self._unclosed("string", start)
            self.pos = len(text)
            return ValueNode(
                STRING, text[start + 1:], source_index=start, quote=quote, unclosed=True
            )
        self.pos = k + 1
        return ValueNode(STRING, text[start + 1:k], source_index=start, quote=quote)

    def _read_comment(self) -> ValueNode:
        text = self.text
        start = self.pos
        end = text.find("*/", start + 2)
        if end == -1:
            self._unclosed("comment", start)
            self.pos = len(text)
            return ValueNode(COMMENT, text[start + 2:], source_index=start, unclosed=True)
        self.pos = end + 2
        return ValueNode(COMMENT, text[start + 2:end], source_index=start)

    def _read_word_or_function(self, in_function: bool) -> ValueNode:
        text = self.text
        stop = _WORD_STOP_IN_FUNCTION if in_function else _WORD_STOP
        start = self.pos
        k = start
        while k < len(text):
            c = text[k]
            if c == "\\":
                k += 2
                continue
            if c in stop:
                break
            k += 1
        k = min(k, len(text))
        self.pos = k
        word = text[start:k]
        if k < len(text) and text[k] == "(":
            return self._read_function(word, start)
        return ValueNode(WORD, word, source_index=start)

    def _read_function(self, name: str, start: int) -> ValueNode:
        # self.pos is on the opening parenthesis
        self.pos += 1
        node = ValueNode(FUNCTION, name, source_index=start)
        if name.lower() == "url" and not self._quoted_argument_follows():
            self._read_unquoted_url(node)
            return node

        children, closed = self.parse_nodes(in_function=True)
        if closed:
            self.pos += 1
        else:
            self._unclosed("function", start)
            node.unclosed = True
        if children and children[0].kind == SPACE:
            node.before = children.pop(0).value
        if children and children[-1].kind == SPACE:
            node.after = children.pop().value
        node.nodes = children
        return node

    def _quoted_argument_follows(self) -> bool:
        text = self.text
        k = self.pos
        while k < len(text) and text[k] in _WHITESPACE:
            k += 1
        return k < len(text) and text[k] in _QUOTES

    def _read_unquoted_url(self, node: ValueNode) -> None:
        """``url(`` without a quote: everything up to ``)`` is one word."""
        text = self.text
        begin = self.pos
        k = begin
        while k < len(text):
            c = text[k]
            if c == "\\":
                k += 2
                continue
            if c == ")":
                break
            k += 1
        if k >= len(text):
            self._unclosed("url()", node.source_index)
            node.unclosed = True
            k = len(text)
            self.pos = k
        else:
            self.pos = k + 1

        content = text[begin:k]
        stripped = content.lstrip(_WHITESPACE)
        node.before = content[:len(content) - len(stripped)]
        inner = stripped.rstrip(_WHITESPACE)
        # keep an escaped trailing space ("a\ ") inside the word
        if inner.endswith("\\") and len(inner) < len(stripped):
            inner = stripped[:len(inner) + 1]
        node.after = stripped[len(inner):]
        if inner:
            node.nodes = [ValueNode(WORD, inner, source_index=begin + len(node.before))]


def parse_value(text: str, strict: bool = False) -> ValueTree:
    """Parse *text* (one declaration value) into a :class:`ValueTree`."""
    parser = _Parser(text, strict)
    nodes, _ = parser.parse_nodes(in_function=False)
    return ValueTree(nodes, text)
