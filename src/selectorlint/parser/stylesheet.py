"""Hand-written parser for CSS stylesheets, including nested rules.

Produces a :class:`~selectorlint.model.stylesheet.Root` tree::

    .btn { color: red; &:hover { color: blue; } }
    @media (min-width: 10px) { a > b { top: 0 } }

Only the statement structure is parsed: selectors, at-rule params and
declaration values are kept as text.
"""

from __future__ import annotations

import bisect
import logging

from selectorlint.model.stylesheet import (
    AtRule,
    Comment,
    Container,
    Declaration,
    Position,
    Root,
    Rule,
)
from selectorlint.parser.errors import StylesheetParseError

__all__ = ["parse_stylesheet"]

logger = logging.getLogger(__name__)

_WHITESPACE = " \t\r\n\f"


class _Scanner:
    """Cursor over the stylesheet source with offset -> line/column lookup."""

    def __init__(self, source: str) -> None:
        self.source = source
        self.pos = 0
        self._line_starts = [0]
        for index, ch in enumerate(source):
            if ch == "\n":
                self._line_starts.append(index + 1)

    def position(self, offset: int) -> Position:
        line = bisect.bisect_right(self._line_starts, offset)
        column = offset - self._line_starts[line - 1] + 1
        return Position(line=line, column=column, offset=offset)

    def error(self, message: str, offset: int) -> StylesheetParseError:
        pos = self.position(offset)
        return StylesheetParseError(
            f"{message} at line {pos.line}, column {pos.column}",
            line=pos.line,
            column=pos.column,
        )

    def at_end(self) -> bool:
        return self.pos >= len(self.source)

    def skip_whitespace(self) -> None:
        while self.pos < len(self.source) and self.source[self.pos] in _WHITESPACE:
            self.pos += 1

    def startswith(self, text: str) -> bool:
        return self.source.startswith(text, self.pos)

    def skip_comment(self, offset: int) -> int:
        """Return the offset just past the comment starting at *offset*."""
        end = self.source.find("*/", offset + 2)
        if end < 0:
            raise self.error("Unclosed comment", offset)
        return end + 2

    def skip_string(self, offset: int) -> int:
        """Return the offset just past the quoted string starting at *offset*."""
        quote = self.source[offset]
        index = offset + 1
        while index < len(self.source):
            ch = self.source[index]
            if ch == "\\":
                index += 2
                continue
            if ch == quote:
                return index + 1
            if ch == "\n":
                break
            index += 1
        raise self.error("Unclosed string", offset)

    def skip_interpolation(self, offset: int) -> int:
        """Skip a ``#{...}`` / ``@{...}`` interpolation, honouring nested braces."""
        depth = 0
        index = offset + 1
        while index < len(self.source):
            ch = self.source[index]
            if ch in "\"'":
                index = self.skip_string(index)
                continue
            if ch == "{":
                depth += 1
            elif ch == "}":
                depth -= 1
                if depth == 0:
                    return index + 1
            index += 1
        raise self.error("Unclosed interpolation", offset)

    def read_prelude(self) -> tuple[str, str]:
        """Read up to the next top-level ``{``, ``;`` or ``}``.

        Returns the prelude text and the terminator (``""`` at end of input).
        The terminator itself is not consumed.
        """
        start = self.pos
        index = self.pos
        depth = 0
        source = self.source
        while index < len(source):
            ch = source[index]
            if ch == "\\":
                index += 2
                continue
            if ch in "\"'":
                index = self.skip_string(index)
                continue
            if source.startswith("/*", index):
                index = self.skip_comment(index)
                continue
            if ch in "#@" and source.startswith("{", index + 1):
                index = self.skip_interpolation(index)
                continue
            if ch in "([":
                depth += 1
            elif ch in ")]":
                depth = max(depth - 1, 0)
            elif depth == 0 and ch in "{;}":
                self.pos = index
                return source[start:index], ch
            index += 1
        self.pos = index
        return source[start:index], ""


def _split_declaration(text: str) -> tuple[str, str] | None:
    """Split ``prop: value`` at the first top-level colon."""
    depth = 0
    for index, ch in enumerate(text):
        if ch in "([":
            depth += 1
        elif ch in ")]":
            depth -= 1
        elif ch == ":" and depth == 0:
            return text[:index].strip(), text[index + 1 :].strip()
    return None


def _build_statement(text: str, position: Position) -> Declaration | AtRule | Rule:
    """Build a node for a block-less statement."""
    if text.startswith("@"):
        name, _, params = text[1:].partition(" ")
        return AtRule(position=position, name=name.strip(), params=params.strip(), has_block=False)
    pair = _split_declaration(text)
    if pair is None and text[:1] in ".#":
        # Less mixin call: .mixin(); or #namespace.mixin();
        return Rule(position=position, selector=text, mixin=True)
    prop, value = pair if pair is not None else (text, "")
    important = False
    if value.lower().replace(" ", "").endswith("!important"):
        important = True
        value = value[: value.rfind("!")].rstrip()
    return Declaration(position=position, prop=prop, value=value, important=important)


def _parse_block(scanner: _Scanner, container: Container, opened_at: int | None) -> None:
    """Parse statements into *container* until its closing brace (or EOF for the root)."""
    while True:
        scanner.skip_whitespace()
        if scanner.at_end():
            if opened_at is not None:
                raise scanner.error("Unclosed block", opened_at)
            return
        if scanner.startswith("}"):
            if opened_at is None:
                raise scanner.error("Unexpected }", scanner.pos)
            scanner.pos += 1
            return
        if scanner.startswith("/*"):
            start = scanner.pos
            scanner.pos = scanner.skip_comment(start)
            text = scanner.source[start + 2 : scanner.pos - 2].strip()
            container.append(Comment(position=scanner.position(start), text=text))
            continue
        if scanner.startswith(";"):
            scanner.pos += 1
            continue

        start = scanner.pos
        prelude, terminator = scanner.read_prelude()
        text = prelude.strip()
        position = scanner.position(start)

        if terminator == "{":
            block_start = scanner.pos
            scanner.pos += 1
            node: Container
            if text.startswith("@"):
                name, _, params = text[1:].partition(" ")
                node = AtRule(position=position, name=name.strip(), params=params.strip())
            else:
                if not text:
                    raise scanner.error("Missing selector", block_start)
                node = Rule(position=position, selector=text)
            container.append(node)
            _parse_block(scanner, node, block_start)
            continue

        if terminator == ";":
            scanner.pos += 1
        if text:
            container.append(_build_statement(text, position))


def parse_stylesheet(source: str, source_name: str | None = None) -> Root:
    """Parse stylesheet *source* into a :class:`Root` tree.

    Raises :class:`StylesheetParseError` on unbalanced braces or unterminated
    comments, strings and interpolations.
    """
    scanner = _Scanner(source)
    root = Root(source=source, source_name=source_name)
    _parse_block(scanner, root, None)
    logger.debug(
        "Parsed stylesheet %s: %d top-level node(s)",
        source_name or "<input>",
        len(root.nodes),
    )
    return root
