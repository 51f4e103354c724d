"""Lint runner: parses a stylesheet and runs every configured rule over it."""

from __future__ import annotations

import logging

from selectorlint.config import LintConfig
from selectorlint.model.diagnostic import Diagnostic
from selectorlint.model.result import LintResult
from selectorlint.model.stylesheet import Root
from selectorlint.parser.stylesheet import parse_stylesheet
from selectorlint.rules import RULES

logger = logging.getLogger(__name__)


class LintError(Exception):
    """Raised when linting produces ERROR-severity diagnostics."""

    def __init__(self, diagnostics: list[Diagnostic]) -> None:
        self.diagnostics = diagnostics
        messages = [str(d) for d in diagnostics if d.is_error]
        super().__init__(
            f"Lint failed with {len(messages)} error(s): " + "; ".join(messages)
        )


def lint_root(root: Root, config: LintConfig) -> LintResult:
    """Run every rule in *config* against an already parsed stylesheet."""
    result = LintResult(source_name=root.source_name)
    for name, setting in config.rules.items():
        result.rule_severities[name] = setting.severity
    for name, setting in config.rules.items():
        checker = RULES[name](setting.primary, strict=config.strict)
        checker(root, result)
    logger.info(
        "Linted %s: %d error(s), %d warning(s)",
        root.source_name or "<input>",
        len(result.errors),
        len(result.warnings),
    )
    return result


def lint(source: str, config: LintConfig, source_name: str | None = None) -> LintResult:
    """Parse *source* and lint it.

    Raises :class:`~selectorlint.parser.errors.StylesheetParseError` when
    the stylesheet itself cannot be parsed.
    """
    root = parse_stylesheet(source, source_name=source_name)
    return lint_root(root, config)


def lint_or_raise(
    source: str, config: LintConfig, source_name: str | None = None
) -> LintResult:
    """Run :func:`lint`; raises :class:`LintError` if any ERROR diagnostics exist.

    Returns the result (holding only warnings) when no errors are found.
    """
    result = lint(source, config, source_name=source_name)
    errors = result.errors
    if errors:
        raise LintError(errors)
    return result
