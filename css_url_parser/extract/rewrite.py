"""Second pass: swap matched nodes for their placeholder and re-serialize."""

from __future__ import annotations

from typing import Mapping, Optional

from ..value import WORD, ValueNode, ValueTree
from .core import walk_urls


def rewrite_tree(tree: ValueTree, replacers: Mapping[ValueNode, str]) -> str:
    """
    Replace, in place, every node of *tree* found in *replacers* with a bare
    word holding its placeholder, and return the new value text.
    """

    def on_url(node: Optional[ValueNode], raw: str, quoted_form: bool) -> None:
        if node is None:
            return
        name = replacers.get(node)
        if not name:
            return
        node.kind = WORD
        node.value = name
        node.quote = ""
        node.unclosed = False

    walk_urls(tree, on_url)
    return tree.to_string()
