from selectorlint.syntax.nesting import resolve_nested_selector
from selectorlint.syntax.standard import (
    has_interpolation,
    is_standard_syntax_rule,
    is_standard_syntax_selector,
)

__all__ = [
    "has_interpolation",
    "is_standard_syntax_rule",
    "is_standard_syntax_selector",
    "resolve_nested_selector",
]
