"""Stylesheet model: the rule/declaration tree produced by the stylesheet parser."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterator


@dataclass(frozen=True)
class Position:
    """A 1-based line/column location plus the 0-based source offset."""

    line: int = 1
    column: int = 1
    offset: int = 0

    def advance(self, text: str) -> Position:
        """Return the position reached after consuming *text*."""
        newlines = text.count("\n")
        if newlines:
            column = len(text) - text.rfind("\n")
        else:
            column = self.column + len(text)
        return Position(self.line + newlines, column, self.offset + len(text))


def comma_list(text: str) -> list[str]:
    """Split *text* on commas that are not nested in brackets, parens or strings."""
    parts: list[str] = []
    current: list[str] = []
    depth = 0
    quote = ""
    escaped = False
    for ch in text:
        if escaped:
            escaped = False
        elif ch == "\\":
            escaped = True
        elif quote:
            if ch == quote:
                quote = ""
        elif ch in "\"'":
            quote = ch
        elif ch in "([{":
            depth += 1
        elif ch in ")]}":
            depth = max(depth - 1, 0)
        elif ch == "," and depth == 0:
            parts.append("".join(current).strip())
            current = []
            continue
        current.append(ch)
    parts.append("".join(current).strip())
    return [p for p in parts if p]


@dataclass(eq=False)
class Node:
    """Base class for stylesheet nodes.  ``parent`` is set by the container."""

    position: Position = field(default_factory=Position)
    parent: Container | None = field(default=None, repr=False)

    type = "node"


@dataclass(eq=False)
class Container(Node):
    nodes: list[Node] = field(default_factory=list)

    def append(self, node: Node) -> Node:
        node.parent = self
        self.nodes.append(node)
        return node

    def walk(self) -> Iterator[Node]:
        """Yield every descendant depth-first, in source order."""
        for node in self.nodes:
            yield node
            if isinstance(node, Container):
                yield from node.walk()

    def walk_rules(self) -> Iterator[Rule]:
        for node in self.walk():
            if isinstance(node, Rule):
                yield node


@dataclass(eq=False)
class Root(Container):
    """The top of a parsed stylesheet."""

    source: str = ""
    source_name: str | None = None

    type = "root"


@dataclass(eq=False)
class Rule(Container):
    """A selector with a block of declarations and nested statements.

    ``mixin`` marks a Less mixin call (``.mixin();``), which has no block.
    """

    selector: str = ""
    mixin: bool = False

    type = "rule"

    @property
    def selectors(self) -> list[str]:
        return comma_list(self.selector)

    def position_of(self, word: str | None) -> Position:
        """Locate *word* inside the selector; fall back to the rule's start.

        Anchors on the first occurrence, so a fragment repeated inside the
        selector (``b c d, a:not(b c d)``) always points at the first one.
        """
        if word:
            index = self.selector.find(word)
            if index >= 0:
                return self.position.advance(self.selector[:index])
        return self.position


@dataclass(eq=False)
class AtRule(Container):
    """``@name params { ... }`` or a block-less ``@name params;``."""

    name: str = ""
    params: str = ""
    has_block: bool = True

    type = "atrule"


@dataclass(eq=False)
class Declaration(Node):
    prop: str = ""
    value: str = ""
    important: bool = False

    type = "decl"


@dataclass(eq=False)
class Comment(Node):
    text: str = ""

    type = "comment"
