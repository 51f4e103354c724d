"""Lark Transformer that converts a selector parse tree into SelectorNode trees."""

from __future__ import annotations

import functools
import re
from pathlib import Path

from lark import Lark, Token, Transformer, v_args
from lark.exceptions import LarkError

from selectorlint.model.selector import NodeKind, SelectorNode
from selectorlint.parser.errors import SelectorParseError

__all__ = ["parse_selector"]

GRAMMAR_PATH = Path(__file__).parent / "selector.lark"

_PSEUDO_NAME_RE = re.compile(r"::?[^(\s]+")

_TOKEN_KINDS: dict[str, NodeKind] = {
    "TAG": NodeKind.TAG,
    "UNIVERSAL": NodeKind.UNIVERSAL,
    "HASH": NodeKind.ID,
    "CLASS": NodeKind.CLASS,
    "ATTRIBUTE": NodeKind.ATTRIBUTE,
    "NESTING": NodeKind.NESTING,
    "COMMENT": NodeKind.COMMENT,
    "PSEUDO": NodeKind.PSEUDO,
}


def _token_value(kind: NodeKind, raw: str) -> str:
    """Strip the sigils from a simple selector token."""
    if kind in (NodeKind.ID, NodeKind.CLASS):
        return raw[1:]
    if kind is NodeKind.ATTRIBUTE:
        return raw[1:-1].strip()
    if kind is NodeKind.COMMENT:
        return raw[2:-2].strip()
    return raw


def _is_quoted(text: str) -> bool:
    return len(text) >= 2 and text[0] == text[-1] and text[0] in "\"'"


class SelectorTransformer(Transformer):  # type: ignore[type-arg]
    """Transform a Lark parse tree into a ``root`` :class:`SelectorNode`.

    The transformer needs the original source to render each node's text.
    """

    def __init__(self, source: str) -> None:
        super().__init__()
        self.source = source

    # ---- helpers ----

    def _leaf(self, token: Token) -> SelectorNode:
        kind = _TOKEN_KINDS[token.type]
        raw = str(token)
        return SelectorNode(
            kind=kind,
            value=_token_value(kind, raw),
            text=raw,
            start=token.start_pos,
        )

    def _combinator(self, token: Token) -> SelectorNode:
        raw = str(token)
        symbol = raw.strip() or " "
        return SelectorNode(
            kind=NodeKind.COMBINATOR,
            value=symbol,
            text=raw,
            start=token.start_pos,
        )

    def _slice(self, start: int, end: int) -> tuple[str, int]:
        """Return the stripped source slice and its adjusted start offset."""
        raw = self.source[start:end]
        stripped = raw.strip()
        return stripped, start + (len(raw) - len(raw.lstrip()))

    # ---- structural ----

    def combinator(self, items: list[Token]) -> SelectorNode:
        return self._combinator(items[0])

    def compound(self, items: list[object]) -> list[SelectorNode]:
        nodes: list[SelectorNode] = []
        for item in items:
            if isinstance(item, Token):
                nodes.append(self._leaf(item))
            else:
                nodes.append(item)  # type: ignore[arg-type]
        return nodes

    @v_args(meta=True)
    def complex_selector(self, meta, items: list[object]) -> SelectorNode:
        parts: list[list[SelectorNode] | SelectorNode] = []
        for item in items:
            if isinstance(item, Token):
                # Leading combinator of a relative selector: "> a".
                parts.append(self._combinator(item))
            else:
                parts.append(item)  # type: ignore[arg-type]
        children: list[SelectorNode] = []
        for part in _fold_comment_compounds(parts):
            if isinstance(part, list):
                children.extend(part)
            else:
                children.append(part)
        text, start = self._slice(meta.start_pos, meta.end_pos)
        return SelectorNode(
            kind=NodeKind.SELECTOR,
            value=text,
            text=text,
            start=start,
            children=tuple(children),
        )

    def selector_list(self, items: list[SelectorNode]) -> list[SelectorNode]:
        return list(items)

    def selector_pseudo(self, items: list[object]) -> SelectorNode:
        opener, selectors, closer = items
        assert isinstance(opener, Token) and isinstance(closer, Token)
        name = _PSEUDO_NAME_RE.match(str(opener)).group(0)  # type: ignore[union-attr]
        text = self.source[opener.start_pos : closer.end_pos]
        return SelectorNode(
            kind=NodeKind.PSEUDO,
            value=name,
            text=text,
            start=opener.start_pos,
            children=tuple(selectors),  # type: ignore[arg-type]
        )

    def function_pseudo(self, items: list[Token]) -> SelectorNode:
        opener, closer = items[0], items[-1]
        name = _PSEUDO_NAME_RE.match(str(opener)).group(0)  # type: ignore[union-attr]
        argument = ""
        children: tuple[SelectorNode, ...] = ()
        if len(items) == 3:
            token = items[1]
            argument = str(token).strip()
            if _is_quoted(argument):
                children = (
                    SelectorNode(
                        kind=NodeKind.STRING,
                        value=argument[1:-1],
                        text=argument,
                        start=token.start_pos,
                    ),
                )
        return SelectorNode(
            kind=NodeKind.PSEUDO,
            value=name,
            text=self.source[opener.start_pos : closer.end_pos],
            start=opener.start_pos,
            children=children,
            argument=argument,
        )

    def start(self, items: list[list[SelectorNode]]) -> SelectorNode:
        return SelectorNode(
            kind=NodeKind.ROOT,
            value="",
            text=self.source,
            start=0,
            children=tuple(items[0]),
        )


def _fold_comment_compounds(
    parts: list[list[SelectorNode] | SelectorNode],
) -> list[list[SelectorNode] | SelectorNode]:
    """Merge compounds made only of comments into their neighbours.

    ``a /* x */ b`` lexes as ``a``, descendant, comment, descendant, ``b``;
    the comment must not add a compound, so one of its adjacent combinators
    is dropped (a descendant one when there is a choice).
    """
    result = list(parts)
    index = 0
    while index < len(result):
        part = result[index]
        only_comments = isinstance(part, list) and all(
            n.kind is NodeKind.COMMENT for n in part
        )
        if not only_comments or len(result) == 1:
            index += 1
            continue
        before = result[index - 1] if index > 0 else None
        after = result[index + 1] if index + 1 < len(result) else None
        candidates = [
            (pos, c)
            for pos, c in ((index - 1, before), (index + 1, after))
            if isinstance(c, SelectorNode)
        ]
        if not candidates:
            index += 1
            continue
        descendants = [(pos, c) for pos, c in candidates if c.value == " "]
        drop = (descendants or candidates)[-1][0]
        del result[drop]
        if drop < index:
            index -= 1
        index += 1
    return result


@functools.lru_cache(maxsize=1)
def _parser() -> Lark:
    return Lark(
        GRAMMAR_PATH.read_text(encoding="utf-8"),
        parser="lalr",
        start="start",
        propagate_positions=True,
    )


def _summarize(error: LarkError) -> str:
    """First line of a lark error, without its list of expected terminals."""
    lines = str(error).strip().splitlines()
    first = lines[0] if lines else type(error).__name__
    return first.partition(" Expected one of")[0].strip()


def parse_selector(selector: str) -> SelectorNode:
    """Parse a selector list into a ``root`` :class:`SelectorNode`.

    Every comma-separated alternative becomes a ``selector`` child of the
    root.  Raises :class:`SelectorParseError` when the text is not a
    selector.
    """
    source = selector.strip()
    if not source:
        raise SelectorParseError("Empty selector", source, offset=0)
    try:
        tree = _parser().parse(source)
    except LarkError as e:
        offset = getattr(e, "pos_in_stream", None)
        if offset is not None and offset < 0:
            offset = len(source)
        raise SelectorParseError(
            f"Cannot parse selector {source!r}: {_summarize(e)}", source, offset=offset
        ) from e
    return SelectorTransformer(source).transform(tree)
