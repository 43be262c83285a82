# Code metrics over declaration bodies. NCSS: Non-Commenting Source Statements.

from __future__ import annotations

from typing import Iterable

from declint.declarations import Declaration, Statement, StatementKind

# Braces, stray semicolons and comments are not statements of their own;
# what they contain still counts.
NON_COUNTING = frozenset({StatementKind.BLOCK, StatementKind.EMPTY, StatementKind.COMMENT})


def statement_ncss(statement: Statement) -> int:
    """NCSS of one statement including everything nested in it."""
    own = 0 if statement.kind in NON_COUNTING else 1
    return own + body_ncss(statement.children)


def body_ncss(statements: Iterable[Statement]) -> int:
    return sum(statement_ncss(s) for s in statements)


def ncss(declaration: Declaration) -> int:
    """
    NCSS of a declaration's body. A declaration without a body counts 0.

    Not cached: linear in the body size and asked once per rule per declaration.
    """
    if declaration.body is None:
        return 0
    return body_ncss(declaration.body)
