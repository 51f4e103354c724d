from selectorlint.linter.runner import LintError, lint, lint_or_raise, lint_root

__all__ = ["LintError", "lint", "lint_or_raise", "lint_root"]
