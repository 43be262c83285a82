"""Tests for the tree-sitter C frontend."""

import logging

import pytest

from declint.declarations import DeclarationKind, MalformedTreeError, StatementKind
from declint.frontend import build_source_file, create_parser, parse_bytes
from declint.metrics import ncss


def _build(source: bytes, identifier: str = "t.c"):
    tree = parse_bytes(source, parser=create_parser())
    return build_source_file(identifier, source, tree)


def test_parse_bytes_success(caplog):
    with caplog.at_level(logging.DEBUG):
        tree = parse_bytes(b"int main(void) { return 0; }")
    assert tree.root_node.type == "translation_unit"
    assert not tree.root_node.has_error
    assert "Parse succeeded" in caplog.text


def test_parse_bytes_invalid_c_logs_debug(caplog):
    with caplog.at_level(logging.DEBUG):
        tree = parse_bytes(b"int main( { broken")
    assert tree.root_node.has_error
    assert "Parse completed with errors" in caplog.text
    assert [r for r in caplog.records if r.levelno >= logging.WARNING] == []


def test_functions_become_declarations():
    source_file = _build(b"int add(int a, int b) { return a + b; }\nchar *name(void) { return 0; }\n")
    assert [d.name for d in source_file.declarations] == ["add", "name"]
    assert all(d.kind is DeclarationKind.FUNCTION for d in source_file.declarations)
    assert source_file.identifier == "t.c"


def test_prototypes_are_not_declarations():
    source_file = _build(b"int add(int a, int b);\nint x;\n")
    assert source_file.declarations == []


def test_function_source_range_is_one_based():
    source_file = _build(b"\n\nint main(void) {\n  return 0;\n}\n")
    location = source_file.declarations[0].source_range
    assert location.start.line == 3
    assert location.start.column == 1
    assert location.end.line == 5
    assert location.start.identifier == "t.c"


def test_statements_are_projected():
    source = b"""int f(void) {
    int x = 1;
    x++;
    if (x) {
        x = 2;
    }
    return x;
}
"""
    body = _build(source).declarations[0].body
    assert [s.kind for s in body] == [
        StatementKind.DECLARATION,
        StatementKind.EXPRESSION,
        StatementKind.IF,
        StatementKind.RETURN,
    ]
    consequence = body[2].children[0]
    assert consequence.kind is StatementKind.BLOCK
    assert [s.kind for s in consequence.children] == [StatementKind.EXPRESSION]
    assert ncss(_build(source).declarations[0]) == 5


def test_comments_and_empty_statements_do_not_count():
    source = b"""int f(void) {
    // a note
    ;
    return 0;
}
"""
    declaration = _build(source).declarations[0]
    assert [s.kind for s in declaration.body] == [StatementKind.COMMENT, StatementKind.EMPTY, StatementKind.RETURN]
    assert ncss(declaration) == 1


def test_loop_counts_body_not_header():
    source = b"int f(void) { int x = 0; for (int i = 0; i < 3; i++) { x++; } return x; }"
    assert ncss(_build(source).declarations[0]) == 4


def test_switch_cases_are_counted():
    source = b"""int f(int v) {
    switch (v) {
    case 1:
        return 1;
    default:
        break;
    }
    return 0;
}
"""
    # switch, case 1, return 1, default, break, return 0
    assert ncss(_build(source).declarations[0]) == 6


def test_comments_are_collected_with_lines():
    source = b"""// declint:suppress
int f(void) {
    /* inside */
    return 0;
}
int g(void) { return 1; } // declint:suppress(high_ncss)
"""
    comments = _build(source).comment_lines()
    assert comments == [
        (1, "// declint:suppress"),
        (3, "/* inside */"),
        (6, "// declint:suppress(high_ncss)"),
    ]


def test_functions_inside_preprocessor_blocks():
    source = b"#ifdef DEBUG\nvoid trace(void) { }\n#endif\n"
    assert [d.name for d in _build(source).declarations] == ["trace"]


class _FakeNode:
    def __init__(self, type_, children=()):
        self.type = type_
        self.children = list(children)
        self.start_point = (0, 0)

    def child_by_field_name(self, name):
        return None


class _FakeTree:
    def __init__(self, root):
        self.root_node = root


def test_function_without_body_is_malformed():
    tree = _FakeTree(_FakeNode("translation_unit", [_FakeNode("function_definition")]))
    with pytest.raises(MalformedTreeError):
        build_source_file("t.c", b"", tree)
