# Per-file analysis context: the SourceFile rules run on, plus whether the
# parser recovered from syntax errors. Handles unreadable files.

import logging
from pathlib import Path
from typing import Optional

from tree_sitter import Parser

from declint.declarations import SourceFile
from declint.frontend import build_source_file, create_parser, parse_bytes

logger = logging.getLogger(__name__)


class FileContext:
    """Per-file state of a lint run."""

    def __init__(self, source_file: SourceFile, *, has_parse_errors: bool = False) -> None:
        self.source_file = source_file
        self.has_parse_errors = has_parse_errors

    @property
    def identifier(self) -> str:
        return self.source_file.identifier


def create_context(
    path: Path,
    parser: Optional[Parser] = None,
) -> Optional[FileContext]:
    """
    Read a C file, parse it, and build its FileContext.

    - Unreadable file (permission, missing): returns None and logs an error.
    - Syntax errors: still returns a context with has_parse_errors=True.
    - A function definition missing its body or declarator raises
      MalformedTreeError; that is a parser fault and is not handled here.

    The file identifier is str(path); pass resolved paths for stable identifiers.
    """
    if parser is None:
        parser = create_parser()

    try:
        source = path.read_bytes()
    except OSError as e:
        logger.error("Failed to read file %s: %s", path, e)
        return None

    tree = parse_bytes(source, parser=parser)
    has_errors = tree.root_node.has_error
    source_file = build_source_file(str(path), source, tree)
    logger.info(
        "Parsed %s: %d declaration(s), %d comment(s)%s",
        path,
        len(source_file.declarations),
        len(source_file.comments),
        " (with parse errors)" if has_errors else "",
    )
    return FileContext(source_file, has_parse_errors=has_errors)
