"""Tests for the selector-max-compound-selectors rule."""

import pytest

from selectorlint.model.diagnostic import Severity
from selectorlint.model.result import LintResult
from selectorlint.model.selector import NodeKind, SelectorNode
from selectorlint.parser import SelectorParseError, parse_selector, parse_stylesheet
from selectorlint.rules.compound_selectors import (
    PARSE_ERROR_RULE,
    RULE_NAME,
    check_selector,
    count_compounds,
    expected_message,
    max_compound_selectors,
    resolve_rule_selectors,
)


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def _node(kind: NodeKind, text: str, *children: SelectorNode, value: str | None = None) -> SelectorNode:
    return SelectorNode(
        kind=kind,
        value=text if value is None else value,
        text=text,
        children=tuple(children),
    )


def _tag(name: str) -> SelectorNode:
    return _node(NodeKind.TAG, name)


def _comb(symbol: str = " ") -> SelectorNode:
    return _node(NodeKind.COMBINATOR, symbol)


def _run(css: str, max_value, **kwargs) -> LintResult:
    root = parse_stylesheet(css)
    result = LintResult()
    max_compound_selectors(max_value, **kwargs)(root, result)
    return result


def _messages(result: LintResult) -> list[str]:
    return [d.message for d in result.diagnostics]


# ---------------------------------------------------------------------------
# Counting over hand-built trees
# ---------------------------------------------------------------------------


class TestCheckSelectorTrees:
    def test_single_compound_counts_one(self):
        sel = _node(NodeKind.SELECTOR, "a.b#c", _tag("a"), _node(NodeKind.CLASS, ".b"), _node(NodeKind.ID, "#c"))
        assert count_compounds(sel) == 1
        assert check_selector(_node(NodeKind.ROOT, "a.b#c", sel), 1) == []

    def test_combinators_add_compounds(self):
        sel = _node(NodeKind.SELECTOR, "a > b c", _tag("a"), _comb(">"), _tag("b"), _comb(), _tag("c"))
        root = _node(NodeKind.ROOT, "a > b c", sel)
        violations = check_selector(root, 2)
        assert len(violations) == 1
        assert violations[0].node is sel
        assert violations[0].count == 3

    def test_root_is_never_reported(self):
        # Combinators directly under a root never trigger a report on the root.
        root = _node(NodeKind.ROOT, "a b c", _tag("a"), _comb(), _tag("b"), _comb(), _tag("c"))
        assert check_selector(root, 1) == []

    def test_negation_arguments_checked_independently(self):
        inner = _node(NodeKind.SELECTOR, "b c d", _tag("b"), _comb(), _tag("c"), _comb(), _tag("d"))
        neg = _node(NodeKind.PSEUDO, ":not(b c d)", inner, value=":not")
        outer = _node(NodeKind.SELECTOR, "a:not(b c d)", _tag("a"), neg)
        violations = check_selector(_node(NodeKind.ROOT, "a:not(b c d)", outer), 2)
        assert [v.node for v in violations] == [inner]

    def test_other_pseudo_arguments_are_opaque(self):
        inner = _node(NodeKind.SELECTOR, "b c d", _tag("b"), _comb(), _tag("c"), _comb(), _tag("d"))
        has = _node(NodeKind.PSEUDO, ":has(b c d)", inner, value=":has")
        outer = _node(NodeKind.SELECTOR, "a:has(b c d)", _tag("a"), has)
        assert check_selector(_node(NodeKind.ROOT, "a:has(b c d)", outer), 1) == []

    def test_comments_do_not_count(self):
        sel = _node(NodeKind.SELECTOR, "a/**/b", _tag("a"), _node(NodeKind.COMMENT, "/**/"), _tag("b"))
        assert count_compounds(sel) == 1

    def test_inner_reported_before_outer(self):
        inner = _node(NodeKind.SELECTOR, "b c", _tag("b"), _comb(), _tag("c"))
        neg = _node(NodeKind.PSEUDO, ":not(b c)", inner, value=":not")
        outer = _node(NodeKind.SELECTOR, "x y:not(b c)", _tag("x"), _comb(), _tag("y"), neg)
        violations = check_selector(_node(NodeKind.ROOT, "", outer), 1)
        assert [v.node for v in violations] == [inner, outer]


# ---------------------------------------------------------------------------
# Counting over parsed selectors
# ---------------------------------------------------------------------------


class TestCheckParsedSelectors:
    @pytest.mark.parametrize("k", [1, 2, 3, 4, 5, 8])
    def test_k_compounds_count_k(self, k):
        selector = " > ".join(["a.x"] * k)
        sel = parse_selector(selector).children[0]
        assert count_compounds(sel) == k

    @pytest.mark.parametrize(
        "selector,count",
        [
            ("a", 1),
            ("div.foo#bar:hover", 1),
            ("a b", 2),
            ("a > b + c ~ d", 4),
            ("a >>> b", 2),
            ("> a", 2),
            ("a /* note */ b", 2),
        ],
    )
    @pytest.mark.parametrize("max_value", [1, 2, 3, 4])
    def test_violation_iff_count_exceeds_max(self, selector, count, max_value):
        violations = check_selector(parse_selector(selector), max_value)
        if count > max_value:
            assert len(violations) == 1
            assert violations[0].count == count
        else:
            assert violations == []

    def test_negation_example(self):
        violations = check_selector(parse_selector("a:not(.b > .c)"), 1)
        assert len(violations) == 1
        assert violations[0].fragment == ".b > .c"
        assert violations[0].count == 2

    def test_negation_selector_list(self):
        violations = check_selector(parse_selector("a:not(b c, d, e f g)"), 1)
        assert [v.fragment for v in violations] == ["b c", "e f g"]

    def test_uppercase_negation_is_recursed(self):
        violations = check_selector(parse_selector("a:NOT(b c)"), 1)
        assert [v.fragment for v in violations] == ["b c"]

    def test_nth_child_plus_is_not_a_combinator(self):
        assert check_selector(parse_selector("li:nth-child(2n + 1)"), 1) == []


# ---------------------------------------------------------------------------
# Selector resolution
# ---------------------------------------------------------------------------


class TestResolveRuleSelectors:
    def test_plain_rule(self):
        root = parse_stylesheet("a, b > c { color: red; }")
        assert resolve_rule_selectors(root.nodes[0]) == ["a", "b > c"]

    def test_nested_rule_resolved(self):
        root = parse_stylesheet(".btn { color: red; &:hover { color: blue; } }")
        outer = root.nodes[0]
        inner = outer.nodes[1]
        assert resolve_rule_selectors(outer) == []
        assert resolve_rule_selectors(inner) == [".btn:hover"]

    def test_rule_with_at_rule_child_skipped(self):
        root = parse_stylesheet("a b c { @media print { color: red; } }")
        assert resolve_rule_selectors(root.nodes[0]) == []

    def test_non_standard_selector_skipped(self):
        root = parse_stylesheet(".a-#{$b} c d { color: red; }")
        assert resolve_rule_selectors(root.nodes[0]) == []

    def test_keyframe_selectors_skipped(self):
        root = parse_stylesheet("@keyframes spin { from { top: 0 } 50% { top: 1px } }")
        rules = list(root.walk_rules())
        assert [resolve_rule_selectors(r) for r in rules] == [[], []]

    def test_injected_resolver(self):
        root = parse_stylesheet("a { color: red; }")
        calls = []

        def fake_resolve(selector, rule):
            calls.append(selector)
            return [selector, selector + " x"]

        assert resolve_rule_selectors(root.nodes[0], resolve=fake_resolve) == ["a", "a x"]
        assert calls == ["a"]


# ---------------------------------------------------------------------------
# Rule entry point
# ---------------------------------------------------------------------------


class TestMaxCompoundSelectorsRule:
    def test_single_compound_ok(self):
        assert _run("a { color: red; }", 2).diagnostics == []

    def test_three_compounds_reported(self):
        result = _run("a > b c { color: red; }", 2)
        assert _messages(result) == [
            'Expected "a > b c" to have no more than 2 compound selectors'
        ]
        diag = result.diagnostics[0]
        assert diag.rule == RULE_NAME
        assert diag.severity is Severity.ERROR
        assert diag.word == "a > b c"
        assert (diag.line, diag.column) == (1, 1)

    def test_negation_inner_reported(self):
        result = _run("a:not(b c d) { color: red; }", 2)
        assert _messages(result) == [
            'Expected "b c d" to have no more than 2 compound selectors'
        ]
        assert result.diagnostics[0].column == 7

    def test_max_one(self):
        result = _run("a b { color: red; }", 1)
        assert _messages(result) == [
            'Expected "a b" to have no more than 1 compound selectors'
        ]

    def test_each_comma_branch_checked(self):
        result = _run("a, b c d, e f { color: red; }", 2)
        assert [d.word for d in result.diagnostics] == ["b c d"]

    def test_nested_measured_resolved(self):
        css = ".a { .b { .c { color: red; } } }"
        result = _run(css, 2)
        assert _messages(result) == [
            'Expected ".a .b .c" to have no more than 2 compound selectors'
        ]
        # The resolved fragment is not in the written selector: point at the rule.
        diag = result.diagnostics[0]
        assert (diag.line, diag.column) == (1, 11)

    def test_nested_ampersand_hover_not_reported(self):
        assert _run(".btn { color: red; &:hover { color: blue; } }", 1).diagnostics == []

    def test_nested_in_media_resolved_through_at_rule(self):
        css = ".a { color: red; }\n@media print { .a .b .c { color: red; } }"
        result = _run(css, 2)
        assert [d.line for d in result.diagnostics] == [2]

    @pytest.mark.parametrize("bad", [0, -1, "x", True, None, [2]])
    def test_invalid_option(self, bad):
        result = _run("a b c d e { color: red; }", bad)
        assert len(result.diagnostics) == 1
        assert result.invalid_options is True
        assert RULE_NAME in result.diagnostics[0].message

    def test_invalid_option_message(self):
        result = _run("a { }", "x")
        assert _messages(result) == [
            'Invalid option value "x" for rule "selector-max-compound-selectors"'
        ]

    def test_missing_option_message(self):
        result = _run("a { }", None)
        assert _messages(result) == [
            'Expected option value for rule "selector-max-compound-selectors"'
        ]

    def test_float_max_accepted(self):
        result = _run("a b c { }", 2.0)
        assert _messages(result) == [
            'Expected "a b c" to have no more than 2 compound selectors'
        ]

    def test_parse_error_isolated_per_rule(self):
        result = _run("a > { color: red; }\nb c d { color: red; }", 2)
        rules = [d.rule for d in result.diagnostics]
        assert rules == [PARSE_ERROR_RULE, RULE_NAME]
        assert result.diagnostics[0].line == 1

    @pytest.mark.parametrize(
        "css",
        [
            ".mixin() { color: red; }",
            ".bordered(@w: 2px) { border: @w solid; }",
            ".mixin(@a) when (iscolor(@a)) { color: @a; }",
        ],
    )
    def test_less_mixin_definition_skipped_silently(self, css):
        assert _run(css, 1).diagnostics == []

    def test_repeated_fragment_anchors_on_first_occurrence(self):
        result = _run("b c d, a:not(b c d) { }", 2)
        assert [d.word for d in result.diagnostics] == ["b c d", "b c d"]
        assert [(d.line, d.column) for d in result.diagnostics] == [(1, 1), (1, 1)]

    def test_parse_error_strict_propagates(self):
        with pytest.raises(SelectorParseError):
            _run("a > { color: red; }", 2, strict=True)

    def test_injected_parser(self):
        seen = []

        def fake_parse(selector):
            seen.append(selector)
            return parse_selector(selector)

        _run("a, b { }", 2, parse=fake_parse)
        assert seen == ["a", "b"]

    def test_idempotent(self):
        root = parse_stylesheet("a b c, d:not(e f g) { } .x { .y .z { } }")
        checker = max_compound_selectors(2)
        first, second = LintResult(), LintResult()
        checker(root, first)
        checker(root, second)
        assert first.diagnostics == second.diagnostics
        assert len(first.diagnostics) == 3

    def test_rule_severity_from_result(self):
        root = parse_stylesheet("a b c { }")
        result = LintResult(rule_severities={RULE_NAME: Severity.WARNING})
        max_compound_selectors(1)(root, result)
        assert result.diagnostics[0].severity is Severity.WARNING


def test_expected_message_formats_integral_floats():
    assert expected_message("a b", 3.0) == 'Expected "a b" to have no more than 3 compound selectors'
    assert expected_message("a b", 1.5) == 'Expected "a b" to have no more than 1.5 compound selectors'
