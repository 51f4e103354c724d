"""Standard-syntax predicates.

Rules and selectors written with preprocessor extensions (SCSS, Less,
postcss-simple-vars, templates) cannot be parsed as plain CSS selectors, so
lint rules skip them silently.
"""

from __future__ import annotations

import re

from selectorlint.model.stylesheet import Rule

# Interpolation forms: Less @{var}, postcss-simple-vars $(var),
# SCSS #{$var} and template {{ var }} / {var}.
_LESS_INTERPOLATION_RE = re.compile(r"@\{.+?\}")
_PSV_INTERPOLATION_RE = re.compile(r"\$\(.+?\)")
_SCSS_INTERPOLATION_RE = re.compile(r"#\{.+?\}")
_TPL_INTERPOLATION_RE = re.compile(r"\{.+?\}")

_LESS_EXTEND_RE = re.compile(r":extend(\(.*?\))?")
# Less mixin with resolved nested selectors: .foo().bar or .foo(@a, @b).bar
_LESS_MIXIN_NESTED_RE = re.compile(r"\.[\w-]+\(.*\).+")
_LESS_MIXIN_DEFINITION_RE = re.compile(r"[.#][\w-]+\(.*\)\s*(when\b.*)?$", re.DOTALL)


def has_interpolation(text: str) -> bool:
    return bool(
        _LESS_INTERPOLATION_RE.search(text)
        or _PSV_INTERPOLATION_RE.search(text)
        or _SCSS_INTERPOLATION_RE.search(text)
        or _TPL_INTERPOLATION_RE.search(text)
    )


def is_standard_syntax_rule(rule: Rule) -> bool:
    """Return False for rules produced by preprocessor constructs."""
    selector = rule.selector
    # Custom property set (--set: {}) or Less detached ruleset (@detached: {})
    if selector.endswith(":"):
        return False
    # Called Less mixin: a { .mixin(); }
    if rule.mixin:
        return False
    # Less mixin definition: .mixin() { }, .mixin(@a) when (iscolor(@a)) { }
    if selector.endswith(")") and ":" not in selector:
        return False
    # Less mixin definition with default arguments: .bordered(@w: 2px) { }
    if _LESS_MIXIN_DEFINITION_RE.match(selector):
        return False
    return True


def is_standard_syntax_selector(selector: str) -> bool:
    """Return False for selectors containing extension syntax."""
    if has_interpolation(selector):
        return False
    # SCSS placeholder selector
    if selector.startswith("%"):
        return False
    if _LESS_EXTEND_RE.search(selector):
        return False
    if _LESS_MIXIN_NESTED_RE.search(selector):
        return False
    # ERB template tags
    if "<%" in selector or "%>" in selector:
        return False
    return True
