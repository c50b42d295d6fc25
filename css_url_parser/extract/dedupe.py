"""Groups references by identity and assigns placeholder names."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterable

from ..config import PLACEHOLDER_TEMPLATE
from ..value import ValueNode
from .core import UrlReference


@dataclass(eq=False)
class UrlGroup:
    index: int
    url: str
    hash: str
    quoted_form: bool
    placeholder: str
    nodes: list[ValueNode] = field(default_factory=list)


def placeholder_name(index: int, template: str = PLACEHOLDER_TEMPLATE) -> str:
    return template.format(index=index)


def check_placeholder_template(template: str) -> None:
    """
    Raise ``ValueError`` unless *template* formats cleanly and gives distinct
    names for distinct indices.

    Args:
        template: ``str.format`` template with an ``{index}`` field
    """
    try:
        first = placeholder_name(0, template)
        second = placeholder_name(1, template)
    except (KeyError, IndexError, AttributeError, TypeError, ValueError) as exc:
        raise ValueError(f"Invalid placeholder template {template!r}: {exc!r}") from exc
    if first == second:
        raise ValueError(
            f"Placeholder template must contain an '{{index}}' field: {template!r}"
        )


def collect_url_groups(
    references: Iterable[UrlReference],
    template: str = PLACEHOLDER_TEMPLATE,
) -> tuple[list[UrlGroup], dict[ValueNode, str]]:
    """
    Deduplicate *references* on ``(url, hash, quoted_form)``.

    Groups are indexed in first-seen order.  The second return value maps
    every grouped node (by identity) to its group's placeholder.
    """
    groups: list[UrlGroup] = []
    by_key: dict[tuple[str, str, bool], UrlGroup] = {}
    replacers: dict[ValueNode, str] = {}

    for ref in references:
        group = by_key.get(ref.key)
        if group is None:
            index = len(groups)
            group = UrlGroup(
                index=index,
                url=ref.url,
                hash=ref.hash,
                quoted_form=ref.quoted_form,
                placeholder=placeholder_name(index, template),
            )
            by_key[ref.key] = group
            groups.append(group)
        group.nodes.append(ref.node)
        replacers[ref.node] = group.placeholder

    return groups, replacers
