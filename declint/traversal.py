"""
File system traversal: turn command-line targets into the list of C files to lint.

Directories are walked recursively, skipping build output, dependency and VCS
directories. Results are sorted so runs are reproducible.

Typical usage:
    from pathlib import Path
    from declint.traversal import collect_targets

    files = collect_targets([Path("src"), Path("main.c")], include_headers=True)
"""

import logging
from pathlib import Path
from typing import Iterable, Optional, Set

logger = logging.getLogger(__name__)

DEFAULT_IGNORE_DIRS: Set[str] = {
    # build output
    "build",
    "Build",
    "dist",
    "out",
    "bin",
    "obj",
    # dependencies
    "node_modules",
    "vendor",
    "third_party",
    "external",
    "deps",
    # version control
    ".git",
    ".svn",
    ".hg",
    # tooling
    ".vscode",
    ".idea",
    "venv",
    ".venv",
    "__pycache__",
    ".cache",
}

C_SUFFIX = ".c"
HEADER_SUFFIX = ".h"


def is_source_file(path: Path, include_headers: bool = False) -> bool:
    """
    True for .c files, and for .h files when include_headers is set.

    Examples:
        >>> is_source_file(Path("main.c"))
        True
        >>> is_source_file(Path("api.h"))
        False
        >>> is_source_file(Path("api.h"), include_headers=True)
        True
    """
    suffix = path.suffix.lower()
    return suffix == C_SUFFIX or (include_headers and suffix == HEADER_SUFFIX)


def find_source_files(
    root: Path,
    include_headers: bool = False,
    ignore_dirs: Optional[Set[str]] = None,
) -> list[Path]:
    """
    Recursively collect C files under root, sorted, as resolved paths.

    Symlinks are not followed. Unreadable subdirectories are logged and
    skipped.

    Raises:
        FileNotFoundError: root does not exist.
        NotADirectoryError: root is not a directory.
    """
    if ignore_dirs is None:
        ignore_dirs = DEFAULT_IGNORE_DIRS

    root = root.resolve()
    if not root.exists():
        raise FileNotFoundError(f"Root directory does not exist: {root}")
    if not root.is_dir():
        raise NotADirectoryError(f"Root path is not a directory: {root}")

    collected: list[Path] = []
    pending = [root]
    while pending:
        current = pending.pop()
        try:
            entries = list(current.iterdir())
        except OSError as e:
            logger.warning("Cannot read directory %s: %s", current, e)
            continue
        for entry in entries:
            if entry.is_symlink():
                logger.debug("Skipping symlink: %s", entry)
            elif entry.is_dir():
                if entry.name in ignore_dirs:
                    logger.debug("Ignoring directory: %s", entry)
                else:
                    pending.append(entry)
            elif entry.is_file() and is_source_file(entry, include_headers=include_headers):
                collected.append(entry)

    collected.sort()
    logger.info("Found %d source file(s) in %s", len(collected), root)
    return collected


def collect_targets(
    targets: Iterable[Path],
    include_headers: bool = False,
    ignore_dirs: Optional[Set[str]] = None,
) -> list[Path]:
    """
    Expand files and directories into a de-duplicated list of source files.

    Explicit files are taken as given (resolved) whatever their suffix;
    directories contribute the C files found below them.
    """
    seen: set[Path] = set()
    files: list[Path] = []
    for target in targets:
        if target.is_dir():
            found = find_source_files(target, include_headers=include_headers, ignore_dirs=ignore_dirs)
            if not found:
                logger.warning("No C files found under %s", target)
        elif target.is_file():
            found = [target.resolve()]
        else:
            raise FileNotFoundError(f"Target path is neither a file nor a directory: {target}")
        for path in found:
            if path not in seen:
                seen.add(path)
                files.append(path)
    return files
