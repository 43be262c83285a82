# Comment directive scanner: turns the free text of one comment into an ordered
# list of (keyword, argument) directives such as `declint:suppress(high_ncss)`.

from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Optional

logger = logging.getLogger(__name__)

ANCHOR = "declint"


@dataclass(frozen=True)
class Directive:
    """One directive found in a comment. argument is None when no parentheses were given."""

    keyword: str
    argument: Optional[str] = None


class ScanState(Enum):
    HEAD = "head"
    KEYWORD = "keyword"
    ARGUMENT = "argument"
    TAIL = "tail"


class _Char(Enum):
    COLON = ":"
    OPEN = "("
    CLOSE = ")"
    SPACE = " "
    OTHER = ""


def _classify(c: str) -> _Char:
    if c == ":":
        return _Char.COLON
    if c == "(":
        return _Char.OPEN
    if c == ")":
        return _Char.CLOSE
    if c == " ":
        return _Char.SPACE
    return _Char.OTHER


class _Scanner:
    """
    Mutable scan state plus the actions named in TRANSITIONS.

    buffer holds the text accumulated since the last reset; keyword holds the
    keyword captured when an argument list opened.
    """

    def __init__(self) -> None:
        self.state = ScanState.HEAD
        self.buffer = ""
        self.keyword = ""
        self.directives: list[Directive] = []

    def reset(self) -> None:
        self.buffer = ""
        self.keyword = ""

    def append(self, c: str) -> None:
        self.buffer += c

    def skip(self, c: str) -> None:
        return None

    def start_keyword(self, c: str) -> None:
        self.reset()
        self.state = ScanState.KEYWORD

    def emit_bare(self, c: str) -> None:
        if self.buffer:
            self.directives.append(Directive(self.buffer))
        self.reset()

    def open_argument(self, c: str) -> None:
        self.keyword = self.buffer
        self.buffer = ""
        self.state = ScanState.ARGUMENT

    def close_argument(self, c: str) -> None:
        self.directives.append(Directive(self.keyword, self.buffer))
        self.reset()
        self.state = ScanState.TAIL

    def tail_colon(self, c: str) -> None:
        # A second directive needs its own anchor, e.g. `declint:a(x) declint:b`.
        if self.buffer == "" or self.buffer.endswith(ANCHOR):
            self.start_keyword(c)
        else:
            self.append(c)

    def finish(self) -> list[Directive]:
        if self.state is ScanState.KEYWORD and self.buffer:
            self.directives.append(Directive(self.buffer))
        return self.directives


# (state, character class) -> action name; anything missing appends the character.
TRANSITIONS: dict[tuple[ScanState, _Char], str] = {
    (ScanState.HEAD, _Char.COLON): "start_keyword",
    (ScanState.KEYWORD, _Char.COLON): "emit_bare",
    (ScanState.KEYWORD, _Char.OPEN): "open_argument",
    (ScanState.ARGUMENT, _Char.CLOSE): "close_argument",
    (ScanState.TAIL, _Char.COLON): "tail_colon",
    # a stray ')' outside an argument list is dropped
    (ScanState.HEAD, _Char.CLOSE): "skip",
    (ScanState.KEYWORD, _Char.CLOSE): "skip",
    (ScanState.TAIL, _Char.CLOSE): "skip",
    (ScanState.HEAD, _Char.SPACE): "skip",
    (ScanState.KEYWORD, _Char.SPACE): "skip",
    (ScanState.ARGUMENT, _Char.SPACE): "skip",
    (ScanState.TAIL, _Char.SPACE): "skip",
}


def scan_directives(text: str) -> list[Directive]:
    """
    Extract the directives of one comment.

    Everything before the first `declint` anchor is ignored; a comment without
    the anchor yields no directives. Malformed input (e.g. an argument list
    that is never closed) loses only the unterminated fragment; this function
    never raises.

    Examples:
        >>> scan_directives("// declint:suppress(a,b)")
        [Directive(keyword='suppress', argument='a,b')]
        >>> scan_directives("// declint:suppress")
        [Directive(keyword='suppress', argument=None)]
    """
    index = text.find(ANCHOR)
    if index < 0:
        return []

    scanner = _Scanner()
    for c in text[index + len(ANCHOR):]:
        action = TRANSITIONS.get((scanner.state, _classify(c)), "append")
        getattr(scanner, action)(c)

    directives = scanner.finish()
    if scanner.state is ScanState.ARGUMENT:
        logger.debug("Dropping unterminated directive argument in comment: %r", text)
    return directives
