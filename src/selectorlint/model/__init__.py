"""selectorlint model layer -- public type re-exports."""

from selectorlint.model.diagnostic import Diagnostic, Severity
from selectorlint.model.result import LintResult
from selectorlint.model.selector import NodeKind, SelectorNode
from selectorlint.model.stylesheet import (
    AtRule,
    Comment,
    Container,
    Declaration,
    Node,
    Position,
    Root,
    Rule,
    comma_list,
)

__all__ = [
    # diagnostic
    "Severity",
    "Diagnostic",
    # result
    "LintResult",
    # selector
    "NodeKind",
    "SelectorNode",
    # stylesheet
    "Position",
    "Node",
    "Container",
    "Root",
    "Rule",
    "AtRule",
    "Declaration",
    "Comment",
    "comma_list",
]
