# Language-neutral declaration tree handed to rules: source files, declarations,
# statements and comments. The parser frontend builds these; rules only read them.

from __future__ import annotations

from enum import Enum
from typing import Iterator, Optional

from pydantic import BaseModel, Field

from declint.findings.models import SourceRange


class MalformedTreeError(Exception):
    """Raised when the syntax tree from the parser layer lacks a required structural field."""


class DeclarationKind(str, Enum):
    FUNCTION = "function"
    INITIALIZER = "initializer"
    DEINITIALIZER = "deinitializer"
    SUBSCRIPT = "subscript"
    TYPE = "type"
    VARIABLE = "variable"
    OTHER = "other"


class StatementKind(str, Enum):
    EXPRESSION = "expression"
    DECLARATION = "declaration"
    RETURN = "return"
    IF = "if"
    ELSE = "else"
    LOOP = "loop"
    SWITCH = "switch"
    CASE = "case"
    JUMP = "jump"
    LABEL = "label"
    BLOCK = "block"
    EMPTY = "empty"
    COMMENT = "comment"
    OTHER = "other"


class Comment(BaseModel):
    """Raw comment text and the 1-based line it starts on."""

    line: int
    text: str

    model_config = {"frozen": True}


class Statement(BaseModel):
    kind: StatementKind
    source_range: SourceRange
    children: list["Statement"] = Field(default_factory=list)

    def walk(self) -> Iterator["Statement"]:
        """Yield this statement and every nested statement in document order."""
        yield self
        for child in self.children:
            yield from child.walk()


class Declaration(BaseModel):
    """
    One declaration of a source file.

    body is None for declarations without an executable body (prototypes,
    variables). members holds nested declarations, e.g. methods of a type.
    """

    kind: DeclarationKind
    name: str = ""
    source_range: SourceRange
    body: Optional[list[Statement]] = None
    members: list["Declaration"] = Field(default_factory=list)


class SourceFile(BaseModel):
    """
    The top-level declaration of one file.

    identifier is the canonical file identifier (usually the resolved path)
    used for issue locations and for keying per-file settings. comments are
    all comments of the file as (line, text).
    """

    identifier: str
    declarations: list[Declaration] = Field(default_factory=list)
    comments: list[Comment] = Field(default_factory=list)

    def comment_lines(self) -> list[tuple[int, str]]:
        return [(c.line, c.text) for c in self.comments]


Statement.model_rebuild()
Declaration.model_rebuild()
