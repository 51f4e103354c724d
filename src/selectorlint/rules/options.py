"""Option validation shared by lint rules."""

from __future__ import annotations

from typing import Any, Callable, Iterable

from selectorlint.model.result import LintResult


def _format_value(value: Any) -> str:
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, (list, dict)):
        return repr(value)
    return str(value)


def is_positive_number(value: Any) -> bool:
    """True for ints and floats above zero.  Booleans are not numbers here."""
    return (
        isinstance(value, (int, float))
        and not isinstance(value, bool)
        and value > 0
    )


def validate_options(
    result: LintResult,
    rule_name: str,
    actual: Any,
    possible: Iterable[Callable[[Any], bool] | Any],
) -> bool:
    """Check *actual* against *possible* predicates or literal values.

    Records a single diagnostic on *result* and returns False when the
    option is missing or matches none of the possibilities.
    """
    if actual is None:
        result.invalid_option(rule_name, f'Expected option value for rule "{rule_name}"')
        return False

    for candidate in possible:
        if callable(candidate):
            if candidate(actual):
                return True
        elif candidate == actual and type(candidate) is type(actual):
            return True

    result.invalid_option(
        rule_name,
        f'Invalid option value "{_format_value(actual)}" for rule "{rule_name}"',
    )
    return False
