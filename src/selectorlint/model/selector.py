"""Selector model: the immutable node tree produced by the selector parser."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Iterator


class NodeKind(Enum):
    """Discriminator for :class:`SelectorNode`."""

    ROOT = "root"
    SELECTOR = "selector"
    COMBINATOR = "combinator"
    PSEUDO = "pseudo"
    TAG = "tag"
    CLASS = "class"
    ID = "id"
    ATTRIBUTE = "attribute"
    UNIVERSAL = "universal"
    NESTING = "nesting"
    COMMENT = "comment"
    STRING = "string"



@dataclass(frozen=True)
class SelectorNode:
    """One node of a parsed selector.

    ``value`` holds the kind-specific payload: the tag or class name, the
    combinator symbol (``" "`` for a descendant combinator), the pseudo name
    including its colons (``":not"``), and so on.  ``text`` is the exact
    source slice the node was parsed from, which is what diagnostics quote.

    Functional pseudo-classes taking a selector list keep their arguments as
    ``selector`` children; any other functional pseudo keeps its raw
    argument in ``argument``.
    """

    kind: NodeKind
    value: str
    text: str
    start: int = 0
    children: tuple[SelectorNode, ...] = ()
    argument: str | None = None

    @property
    def end(self) -> int:
        return self.start + len(self.text)

    def __str__(self) -> str:
        return self.text

    def walk(self) -> Iterator[SelectorNode]:
        """Yield every descendant depth-first, in source order."""
        for child in self.children:
            yield child
            yield from child.walk()
