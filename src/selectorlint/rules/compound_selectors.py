"""selector-max-compound-selectors: limit the number of compound selectors.

A compound selector is a run of simple selectors with no combinator between
them, so ``div.a > p:hover span`` has three.  Nested rules are measured in
their fully resolved form, and every selector inside a ``:not()`` argument
is measured on its own.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Callable

from selectorlint.model.result import LintResult
from selectorlint.model.selector import NodeKind, SelectorNode
from selectorlint.model.stylesheet import AtRule, Root, Rule
from selectorlint.parser.errors import SelectorParseError
from selectorlint.parser.selector import parse_selector
from selectorlint.rules.options import is_positive_number, validate_options
from selectorlint.syntax.nesting import resolve_nested_selector
from selectorlint.syntax.standard import (
    is_standard_syntax_rule,
    is_standard_syntax_selector,
)

__all__ = [
    "RULE_NAME",
    "PARSE_ERROR_RULE",
    "Violation",
    "check_selector",
    "count_compounds",
    "expected_message",
    "max_compound_selectors",
    "resolve_rule_selectors",
]

logger = logging.getLogger(__name__)

RULE_NAME = "selector-max-compound-selectors"
PARSE_ERROR_RULE = "selector-parse-error"

Checker = Callable[[Root, LintResult], None]
SelectorParser = Callable[[str], SelectorNode]
NestingResolver = Callable[[str, Rule], list[str]]


def expected_message(selector: str, max_value: float) -> str:
    if isinstance(max_value, float) and max_value.is_integer():
        max_value = int(max_value)
    return f'Expected "{selector}" to have no more than {max_value} compound selectors'


@dataclass(frozen=True)
class Violation:
    """A selector whose compound count exceeds the configured maximum."""

    node: SelectorNode
    count: int
    max: float

    @property
    def fragment(self) -> str:
        return str(self.node)

    @property
    def message(self) -> str:
        return expected_message(self.fragment, self.max)


# ---------------------------------------------------------------------------
# Compound counting
# ---------------------------------------------------------------------------


def _is_negation(node: SelectorNode) -> bool:
    return node.kind is NodeKind.PSEUDO and node.value.lower() == ":not"


def count_compounds(node: SelectorNode) -> int:
    """Compound count of *node* alone: one plus its combinator children."""
    return 1 + sum(1 for child in node.children if child.kind is NodeKind.COMBINATOR)


def _check(node: SelectorNode, max_value: float, violations: list[Violation]) -> None:
    count = 1
    for child in node.children:
        # Only descend into real selectors and :not() arguments.
        if child.kind is NodeKind.SELECTOR or _is_negation(child):
            _check(child, max_value, violations)
        # Compounds are separated by combinators.
        if child.kind is NodeKind.COMBINATOR:
            count += 1

    if node.kind not in (NodeKind.ROOT, NodeKind.PSEUDO) and count > max_value:
        violations.append(Violation(node=node, count=count, max=max_value))


def check_selector(node: SelectorNode, max_value: float) -> list[Violation]:
    """Return every violation found in the parsed selector *node*.

    Inner selectors are reported before the selector containing them.
    """
    violations: list[Violation] = []
    _check(node, max_value, violations)
    return violations


# ---------------------------------------------------------------------------
# Selector resolution
# ---------------------------------------------------------------------------


def _is_keyframe_selector(rule: Rule) -> bool:
    parent = rule.parent
    return isinstance(parent, AtRule) and parent.name.lower().endswith("keyframes")


def resolve_rule_selectors(
    rule: Rule,
    resolve: NestingResolver = resolve_nested_selector,
    is_standard_rule: Callable[[Rule], bool] = is_standard_syntax_rule,
    is_standard_selector: Callable[[str], bool] = is_standard_syntax_selector,
) -> list[str]:
    """Return the fully resolved selectors *rule* should be measured by.

    Returns an empty list for non-standard rules and selectors, keyframe
    blocks, and rules that contain nested rules or at-rules: those are
    measured when the walk reaches their leaf rules.
    """
    if not is_standard_rule(rule):
        return []
    if not is_standard_selector(rule.selector):
        return []
    if _is_keyframe_selector(rule):
        return []
    if any(node.type in ("rule", "atrule") for node in rule.nodes):
        return []

    resolved: list[str] = []
    for selector in rule.selectors:
        resolved.extend(resolve(selector, rule))
    return resolved


# ---------------------------------------------------------------------------
# Rule entry point
# ---------------------------------------------------------------------------


def max_compound_selectors(
    max_value: object,
    *,
    parse: SelectorParser = parse_selector,
    resolve: NestingResolver = resolve_nested_selector,
    strict: bool = False,
) -> Checker:
    """Build the checker for ``selector-max-compound-selectors``.

    A selector that fails to parse is reported as a ``selector-parse-error``
    diagnostic on its rule and the walk moves on to the next rule; with
    *strict* the :class:`SelectorParseError` propagates instead.
    """

    def checker(root: Root, result: LintResult) -> None:
        if not validate_options(result, RULE_NAME, max_value, [is_positive_number]):
            return
        limit: float = max_value  # type: ignore[assignment]

        for rule in root.walk_rules():
            selectors = resolve_rule_selectors(rule, resolve=resolve)
            if not selectors:
                logger.debug("Skipping rule %r at line %d", rule.selector, rule.position.line)
                continue
            try:
                for selector in selectors:
                    for violation in check_selector(parse(selector), limit):
                        result.report(
                            RULE_NAME,
                            violation.message,
                            node=rule,
                            word=violation.fragment,
                        )
            except SelectorParseError as exc:
                if strict:
                    raise
                result.report(PARSE_ERROR_RULE, str(exc), node=rule)

    return checker
