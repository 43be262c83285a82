# Tree-sitter C frontend: parse C source and project the tree onto the
# declaration model (functions, their statements, and every comment).

from __future__ import annotations

import logging
from typing import Iterator, Optional

import tree_sitter
from pydantic import ValidationError
from tree_sitter import Language
from tree_sitter import Node as TSNode
from tree_sitter_c import language as _c_language_capsule

from declint.declarations import (
    Comment,
    Declaration,
    DeclarationKind,
    MalformedTreeError,
    SourceFile,
    Statement,
    StatementKind,
)
from declint.findings.models import SourceRange

logger = logging.getLogger(__name__)

_C_LANGUAGE = Language(_c_language_capsule())

STATEMENT_KINDS: dict[str, StatementKind] = {
    "expression_statement": StatementKind.EXPRESSION,
    "declaration": StatementKind.DECLARATION,
    "type_definition": StatementKind.DECLARATION,
    "return_statement": StatementKind.RETURN,
    "if_statement": StatementKind.IF,
    "else_clause": StatementKind.ELSE,
    "for_statement": StatementKind.LOOP,
    "while_statement": StatementKind.LOOP,
    "do_statement": StatementKind.LOOP,
    "switch_statement": StatementKind.SWITCH,
    "case_statement": StatementKind.CASE,
    "break_statement": StatementKind.JUMP,
    "continue_statement": StatementKind.JUMP,
    "goto_statement": StatementKind.JUMP,
    "labeled_statement": StatementKind.LABEL,
    "compound_statement": StatementKind.BLOCK,
    "comment": StatementKind.COMMENT,
}

# Where nested statements live. Conditions and for-initializers are not statements.
_BODY_FIELDS: dict[str, tuple[str, ...]] = {
    "if_statement": ("consequence", "alternative"),
    "for_statement": ("body",),
    "while_statement": ("body",),
    "do_statement": ("body",),
    "switch_statement": ("body",),
}
_CONTAINERS = frozenset({"compound_statement", "else_clause", "case_statement", "labeled_statement"})


def create_parser() -> tree_sitter.Parser:
    return tree_sitter.Parser(_C_LANGUAGE)


def parse_bytes(
    source: bytes,
    parser: Optional[tree_sitter.Parser] = None,
) -> tree_sitter.Tree:
    """
    Parse C source bytes into a tree-sitter tree.

    Syntax errors do not fail the parse; the tree then contains ERROR nodes.
    """
    if parser is None:
        parser = create_parser()
    tree = parser.parse(source)
    if tree.root_node.has_error:
        logger.debug("Parse completed with errors: root=%s", tree.root_node.type)
    else:
        logger.debug("Parse succeeded: root=%s", tree.root_node.type)
    return tree


def _text(source: bytes, node: TSNode) -> str:
    return source[node.start_byte : node.end_byte].decode("utf-8", errors="replace")


def _range(identifier: str, node: TSNode) -> SourceRange:
    # tree-sitter points are 0-based (row, column)
    start_row, start_col = node.start_point
    end_row, end_col = node.end_point
    return SourceRange.between(identifier, start_row + 1, start_col + 1, end_row + 1, end_col + 1)


def _walk(node: TSNode, skip: frozenset[str] = frozenset()) -> Iterator[TSNode]:
    """Yield node and its descendants in document order, not entering types in skip."""
    yield node
    if node.type in skip:
        return
    for child in node.children:
        yield from _walk(child, skip)


def _statement_kind(node: TSNode) -> Optional[StatementKind]:
    kind = STATEMENT_KINDS.get(node.type)
    if kind is StatementKind.EXPRESSION and node.named_child_count == 0:
        return StatementKind.EMPTY
    return kind


def _nested_nodes(node: TSNode) -> list[TSNode]:
    fields = _BODY_FIELDS.get(node.type)
    if fields is not None:
        return [child for child in (node.child_by_field_name(f) for f in fields) if child is not None]
    if node.type in _CONTAINERS:
        return list(node.named_children)
    return []


def _statements(identifier: str, nodes: list[TSNode]) -> list[Statement]:
    statements: list[Statement] = []
    for node in nodes:
        kind = _statement_kind(node)
        if kind is None:
            logger.debug("Skipping non-statement node %s at %s", node.type, node.start_point)
            continue
        statements.append(
            Statement(
                kind=kind,
                source_range=_range(identifier, node),
                children=_statements(identifier, _nested_nodes(node)),
            )
        )
    return statements


def _function_name(source: bytes, node: TSNode) -> str:
    """Name of a function_definition: the identifier inside its (possibly pointer) declarator."""
    declarator = node.child_by_field_name("declarator")
    while declarator is not None and declarator.type != "identifier":
        inner = declarator.child_by_field_name("declarator")
        if inner is None:
            break
        declarator = inner
    if declarator is None:
        raise MalformedTreeError(f"function definition without declarator at {node.start_point}")
    return _text(source, declarator)


def _function(identifier: str, source: bytes, node: TSNode) -> Declaration:
    body = node.child_by_field_name("body")
    if body is None:
        raise MalformedTreeError(f"function definition without body at {node.start_point}")
    return Declaration(
        kind=DeclarationKind.FUNCTION,
        name=_function_name(source, node),
        source_range=_range(identifier, node),
        body=_statements(identifier, list(body.named_children)),
    )


def build_source_file(identifier: str, source: bytes, tree: tree_sitter.Tree) -> SourceFile:
    """
    Project a parsed C file onto a SourceFile.

    Every function_definition becomes a FUNCTION declaration (also inside
    preprocessor conditionals); every comment of the file is kept with its
    1-based start line.

    Raises:
        MalformedTreeError: if a function definition lacks its declarator or body.
    """
    try:
        declarations = [
            _function(identifier, source, node)
            for node in _walk(tree.root_node, skip=frozenset({"function_definition"}))
            if node.type == "function_definition"
        ]
        comments = [
            Comment(line=node.start_point[0] + 1, text=_text(source, node))
            for node in _walk(tree.root_node)
            if node.type == "comment"
        ]
        source_file = SourceFile(identifier=identifier, declarations=declarations, comments=comments)
    except ValidationError as exc:
        raise MalformedTreeError(f"invalid declaration tree for {identifier}: {exc}") from exc

    logger.debug(
        "Built %s: %d declaration(s), %d comment(s)",
        identifier,
        len(declarations),
        len(comments),
    )
    return source_file
