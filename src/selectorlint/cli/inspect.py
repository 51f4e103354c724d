"""CLI command: selectorlint inspect -- display a selector's parsed structure."""

from __future__ import annotations

import sys

import click

from selectorlint.model.selector import NodeKind, SelectorNode
from selectorlint.parser import SelectorParseError, parse_selector
from selectorlint.rules.compound_selectors import check_selector, count_compounds


def _describe(node: SelectorNode, depth: int) -> None:
    parts = [f"{'  ' * depth}{node.kind.value}"]
    if node.kind is NodeKind.COMBINATOR:
        parts.append(repr(node.value))
    elif node.kind is not NodeKind.ROOT:
        parts.append(node.text)
    if node.kind is NodeKind.SELECTOR:
        parts.append(f"compounds={count_compounds(node)}")
    if node.argument:
        parts.append(f"argument={node.argument!r}")
    click.echo("  ".join(parts))
    for child in node.children:
        _describe(child, depth + 1)


@click.command()
@click.argument("selector")
@click.option("--max", "max_value", type=int, default=None, help="Report selectors above this count")
def inspect(selector: str, max_value: int | None) -> None:
    """Parse SELECTOR and display its node tree with compound counts."""
    try:
        root = parse_selector(selector)
    except SelectorParseError as exc:
        click.echo(f"Parse error: {exc}", err=True)
        sys.exit(1)

    _describe(root, 0)

    if max_value is None:
        return
    if max_value <= 0:
        click.echo("--max must be greater than 0", err=True)
        sys.exit(1)

    violations = check_selector(root, max_value)
    click.echo()
    if not violations:
        click.echo(f"OK: no selector has more than {max_value} compound selectors")
        return
    for violation in violations:
        click.echo(violation.message)
    sys.exit(1)
