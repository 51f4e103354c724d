"""Lint rule registry.

Each rule is a factory taking the rule's primary option (plus keyword
options) and returning a checker ``(root, result) -> None`` that reports
through the :class:`~selectorlint.model.result.LintResult`.
"""

from __future__ import annotations

from typing import Callable

from selectorlint.rules import compound_selectors
from selectorlint.rules.compound_selectors import Checker, max_compound_selectors

RuleFactory = Callable[..., Checker]

RULES: dict[str, RuleFactory] = {
    compound_selectors.RULE_NAME: max_compound_selectors,
}

__all__ = ["RULES", "RuleFactory", "Checker", "max_compound_selectors"]
