"""Tests for the comment directive scanner."""

import pytest

from declint.directives import ANCHOR, TRANSITIONS, Directive, ScanState, scan_directives


def test_suppress_with_rule_ids():
    assert scan_directives("declint:suppress(a,b)") == [Directive("suppress", "a,b")]


def test_suppress_without_arguments():
    assert scan_directives("declint:suppress") == [Directive("suppress", None)]


def test_empty_parentheses_give_empty_argument():
    assert scan_directives("declint:suppress()") == [Directive("suppress", "")]


def test_no_anchor_yields_nothing():
    assert scan_directives("// plain comment: suppress(a)") == []
    assert scan_directives("") == []


def test_text_before_anchor_is_ignored():
    """Comment markers and prose before the anchor do not matter."""
    directives = scan_directives("/* see below (x): declint:rule_configure(NCSS=5) */")
    assert directives == [Directive("rule_configure", "NCSS=5")]


def test_spaces_are_stripped():
    directives = scan_directives("//   declint : suppress ( high_ncss , other )")
    assert directives == [Directive("suppress", "high_ncss,other")]


def test_repeated_anchor_starts_second_directive():
    directives = scan_directives("// declint:suppress(a) declint:rule_configure(NCSS=10)")
    assert directives == [
        Directive("suppress", "a"),
        Directive("rule_configure", "NCSS=10"),
    ]


def test_colon_after_closed_directive_without_anchor_is_inert():
    """After a closed directive, `text:` is not a new directive unless anchored."""
    directives = scan_directives("// declint:suppress(a) note:suppress(b)")
    assert directives == [Directive("suppress", "a")]


def test_colon_directly_after_close_starts_new_keyword():
    directives = scan_directives("declint:suppress(a):rule_configure(k=v)")
    assert directives == [Directive("suppress", "a"), Directive("rule_configure", "k=v")]


def test_keyword_only_directives_chain_with_colons():
    directives = scan_directives("declint:suppress:other")
    assert directives == [Directive("suppress"), Directive("other")]


def test_empty_keyword_between_colons_is_dropped():
    assert scan_directives("declint::suppress") == [Directive("suppress")]


def test_argument_keeps_colons_and_open_parens():
    assert scan_directives("declint:rule_configure(a=b:c(d)") == [Directive("rule_configure", "a=b:c(d")]


def test_unterminated_argument_is_dropped():
    assert scan_directives("declint:suppress(a,b") == []


def test_unterminated_argument_keeps_earlier_directives():
    directives = scan_directives("declint:suppress(a) declint:rule_configure(NCSS=3")
    assert directives == [Directive("suppress", "a")]


def test_stray_close_paren_is_ignored():
    assert scan_directives("declint:suppress)") == [Directive("suppress")]


def test_only_first_anchor_position_matters():
    """Text before the first anchor is ignored even if it looks like a directive."""
    directives = scan_directives("suppress(x) declint:suppress(y)")
    assert directives == [Directive("suppress", "y")]


def test_anchor_without_colon_yields_nothing():
    assert scan_directives("declint suppress") == []


@pytest.mark.parametrize(
    "text",
    [
        "declint:suppress(a,b",
        "declint:(((",
        "declint:)))",
        "declint:suppress(a)(b)",
        ":::" + ANCHOR + ":::",
    ],
)
def test_malformed_input_never_raises(text):
    assert isinstance(scan_directives(text), list)


def test_every_table_action_exists():
    for state, _ in TRANSITIONS:
        assert isinstance(state, ScanState)
    for action in TRANSITIONS.values():
        assert action in {"start_keyword", "emit_bare", "open_argument", "close_argument", "tail_colon", "skip"}
