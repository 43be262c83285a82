# Lint engine: runs the configured rules over source files with one shared
# settings cache per run.

from __future__ import annotations

import logging
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional, Sequence

from declint.config import Config, get_default_config
from declint.context import create_context
from declint.declarations import SourceFile
from declint.findings.models import Issue
from declint.settings import SettingsCache

logger = logging.getLogger(__name__)


@dataclass
class LintResult:
    """Issues of one run, in file order then rule order, plus how many files were inspected."""

    issues: list[Issue] = field(default_factory=list)
    number_of_files: int = 0
    # Identifiers of files the parser only partially understood
    files_with_parse_errors: list[str] = field(default_factory=list)


def lint_source_file(source_file: SourceFile, config: Config, cache: SettingsCache) -> list[Issue]:
    """Run every rule of config on one file."""
    issues: list[Issue] = []
    for rule in config.rules:
        issues.extend(rule.run(source_file, config, cache))
    return issues


def lint_source_files(
    source_files: Sequence[SourceFile],
    config: Optional[Config] = None,
    cache: Optional[SettingsCache] = None,
    workers: int = 1,
) -> LintResult:
    """
    Lint already-built source files.

    With workers > 1 files are checked on a thread pool sharing one cache;
    the issue order is the same as for a sequential run.
    """
    if config is None:
        config = get_default_config()
    if cache is None:
        cache = SettingsCache()

    if workers > 1:
        with ThreadPoolExecutor(max_workers=workers) as pool:
            per_file = list(pool.map(lambda sf: lint_source_file(sf, config, cache), source_files))
    else:
        per_file = [lint_source_file(sf, config, cache) for sf in source_files]

    result = LintResult(number_of_files=len(source_files))
    for issues in per_file:
        result.issues.extend(issues)
    logger.info("Linted %d file(s): %d issue(s)", result.number_of_files, len(result.issues))
    return result


def lint_paths(
    paths: Sequence[Path],
    config: Optional[Config] = None,
    cache: Optional[SettingsCache] = None,
    workers: int = 1,
) -> LintResult:
    """
    Parse and lint C files. Unreadable files are skipped and not counted.
    Files with syntax errors are still linted and listed in
    LintResult.files_with_parse_errors.

    Each file gets its own parser, so files can be parsed on worker threads.
    MalformedTreeError from the frontend propagates to the caller.
    """
    if workers > 1:
        with ThreadPoolExecutor(max_workers=workers) as pool:
            contexts = list(pool.map(create_context, paths))
    else:
        contexts = [create_context(path) for path in paths]

    contexts = [ctx for ctx in contexts if ctx is not None]
    result = lint_source_files(
        [ctx.source_file for ctx in contexts], config=config, cache=cache, workers=workers
    )
    result.files_with_parse_errors = [ctx.identifier for ctx in contexts if ctx.has_parse_errors]
    return result
