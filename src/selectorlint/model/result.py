"""Lint result: the diagnostic sink handed to every rule of a lint run."""

from __future__ import annotations

from dataclasses import dataclass, field

from selectorlint.model.diagnostic import Diagnostic, Severity
from selectorlint.model.stylesheet import Node, Rule


@dataclass
class LintResult:
    """Diagnostics collected while linting one stylesheet.

    ``rule_severities`` maps rule names to the severity their violations are
    reported with; rules missing from the map report errors.
    """

    source_name: str | None = None
    diagnostics: list[Diagnostic] = field(default_factory=list)
    rule_severities: dict[str, Severity] = field(default_factory=dict)
    invalid_options: bool = False

    @property
    def errors(self) -> list[Diagnostic]:
        return [d for d in self.diagnostics if d.is_error]

    @property
    def warnings(self) -> list[Diagnostic]:
        return [d for d in self.diagnostics if d.is_warning]

    def report(
        self,
        rule_name: str,
        message: str,
        node: Node | None = None,
        word: str | None = None,
        severity: Severity | None = None,
    ) -> Diagnostic:
        """Record a diagnostic against *node*, pointing at *word* when it can be found."""
        line = column = None
        if node is not None:
            position = node.position_of(word) if isinstance(node, Rule) else node.position
            line, column = position.line, position.column
        diagnostic = Diagnostic(
            rule=rule_name,
            severity=severity or self.rule_severities.get(rule_name, Severity.ERROR),
            message=message,
            line=line,
            column=column,
            word=word,
        )
        self.diagnostics.append(diagnostic)
        return diagnostic

    def invalid_option(self, rule_name: str, message: str) -> Diagnostic:
        """Record a configuration problem; the rule performs no analysis."""
        self.invalid_options = True
        return self.report(rule_name, message, severity=Severity.ERROR)

    def to_dict(self) -> dict[str, object]:
        return {
            "source": self.source_name,
            "errored": bool(self.errors),
            "invalid_options": self.invalid_options,
            "diagnostics": [d.to_dict() for d in self.diagnostics],
        }
