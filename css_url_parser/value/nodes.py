"""
css_url_parser.value.nodes
==========================
Node and tree types for a single parsed CSS property value.

Every node is a :class:`ValueNode`; its ``kind`` field says which of the
variants below it is and therefore which of the other fields are meaningful.

========== ================================================================
kind       fields used
========== ================================================================
word       ``value`` – bare text (``no-repeat``, ``10px``, ``#fff``)
string     ``value`` – raw text between the quotes, ``quote``, ``unclosed``
div        ``value`` – ``,`` or ``/``; ``before`` / ``after`` whitespace
space      ``value`` – run of whitespace
comment    ``value`` – text between ``/*`` and ``*/``, ``unclosed``
function   ``value`` – name (may be empty for a bare ``( … )`` group),
           ``nodes`` – arguments, ``before`` / ``after`` whitespace inside
           the parentheses, ``unclosed``
========== ================================================================

Nodes compare and hash by identity, so they can key a dict of
node → placeholder without two equal-looking ``url()`` arguments colliding.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Callable, Iterable, Optional, Union

WORD = "word"
STRING = "string"
DIV = "div"
SPACE = "space"
COMMENT = "comment"
FUNCTION = "function"

NODE_KINDS = frozenset([WORD, STRING, DIV, SPACE, COMMENT, FUNCTION])


@dataclass(eq=False)
class ValueNode:
    kind: str
    value: str = ""
    source_index: int = 0
    quote: str = ""
    before: str = ""
    after: str = ""
    unclosed: bool = False
    nodes: list[ValueNode] = field(default_factory=list)

    def __post_init__(self) -> None:
        if self.kind not in NODE_KINDS:
            raise ValueError(f"Unknown value node kind: {self.kind!r}")

    def __str__(self) -> str:
        return stringify(self)


# A callback returning False stops the walk from entering that node's children
WalkCallback = Callable[[ValueNode], Optional[bool]]


def _stringify_node(node: ValueNode) -> str:
    kind = node.kind
    if kind == WORD or kind == SPACE:
        return node.value
    if kind == STRING:
        return node.quote + node.value + ("" if node.unclosed else node.quote)
    if kind == DIV:
        return node.before + node.value + node.after
    if kind == COMMENT:
        return "/*" + node.value + ("" if node.unclosed else "*/")
    if kind == FUNCTION:
        return (
            node.value + "(" + node.before + stringify(node.nodes) + node.after
            + ("" if node.unclosed else ")")
        )
    raise ValueError(f"Cannot serialize value node of kind {kind!r}")


def stringify(nodes: Union[ValueNode, Iterable[ValueNode]]) -> str:
    """Serialize one node or a sequence of nodes back to CSS text."""
    if isinstance(nodes, ValueNode):
        return _stringify_node(nodes)
    return "".join(_stringify_node(n) for n in nodes)


def walk(nodes: Iterable[ValueNode], callback: WalkCallback) -> None:
    """Depth-first, pre-order walk over *nodes* and their descendants."""
    for node in nodes:
        descend = callback(node)
        if descend is False:
            continue
        if node.kind == FUNCTION and node.nodes:
            walk(node.nodes, callback)


class ValueTree:
    """Parsed form of one declaration value."""

    def __init__(self, nodes: list[ValueNode], source: str = "") -> None:
        self.nodes = nodes
        self.source = source

    def walk(self, callback: WalkCallback) -> None:
        walk(self.nodes, callback)

    def to_string(self) -> str:
        return stringify(self.nodes)

    __str__ = to_string

    def __repr__(self) -> str:
        return f"ValueTree({self.to_string()!r})"
