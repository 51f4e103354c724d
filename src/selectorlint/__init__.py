"""selectorlint - a stylesheet linter limiting selector complexity."""

__version__ = "0.1.0"

from selectorlint.config import ConfigError, LintConfig, load_config  # noqa: E402
from selectorlint.linter import LintError, lint, lint_or_raise  # noqa: E402
from selectorlint.model import Diagnostic, LintResult, Severity  # noqa: E402

__all__ = [
    "__version__",
    "ConfigError",
    "Diagnostic",
    "LintConfig",
    "LintError",
    "LintResult",
    "Severity",
    "lint",
    "lint_or_raise",
    "load_config",
]
