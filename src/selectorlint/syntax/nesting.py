"""Nested selector resolution.

Expands a selector written inside other rules into the selectors it matches
once every ancestor rule is applied::

    .a, .b { & > .c { } }   ->   [".a > .c", ".b > .c"]
    .a { .b { } }           ->   [".a .b"]
"""

from __future__ import annotations

from selectorlint.model.stylesheet import AtRule, Container, Node, Rule, comma_list


def _parent_selectors(parent: Container) -> list[str] | None:
    """Selectors contributed by *parent*, or None when it is transparent."""
    if isinstance(parent, Rule):
        return parent.selectors
    if isinstance(parent, AtRule) and parent.name == "nest":
        return comma_list(parent.params)
    return None


def resolve_nested_selector(selector: str, node: Node) -> list[str]:
    """Resolve *selector*, owned by *node*, against the node's ancestors.

    At-rules other than ``@nest`` (``@media``, ``@supports``) are
    transparent.  ``&`` is replaced by each resolved parent selector;
    without ``&`` the parent is joined with a descendant combinator.
    The result is ordered by parent selector, in source order.
    """
    parent = node.parent
    if parent is None or parent.type == "root":
        return [selector]

    parent_selectors = _parent_selectors(parent)
    if parent_selectors is None:
        return resolve_nested_selector(selector, parent)

    resolved: list[str] = []
    for parent_selector in parent_selectors:
        if "&" in selector:
            for resolved_parent in resolve_nested_selector(parent_selector, parent):
                resolved.append(selector.replace("&", resolved_parent))
        else:
            combined = f"{parent_selector} {selector}"
            resolved.extend(resolve_nested_selector(combined, parent))
    return resolved
