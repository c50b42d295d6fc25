"""
css_url_parser.value
====================
Value tree model and tokenizer for single CSS property values.

Public API
----------
    from css_url_parser.value import parse_value, stringify, ValueNode, ValueTree
"""

from .nodes import (
    COMMENT,
    DIV,
    FUNCTION,
    SPACE,
    STRING,
    WORD,
    ValueNode,
    ValueTree,
    stringify,
    walk,
)
from .parser import ValueParseError, parse_value

__all__ = [
    "COMMENT",
    "DIV",
    "FUNCTION",
    "SPACE",
    "STRING",
    "WORD",
    "ValueNode",
    "ValueTree",
    "ValueParseError",
    "parse_value",
    "stringify",
    "walk",
]
