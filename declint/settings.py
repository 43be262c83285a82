# Per-file comment-based settings: suppressions and rule configurations extracted
# from `declint:` directives, memoized per file identifier for one lint run.

from __future__ import annotations

import logging
import threading
from dataclasses import dataclass, field
from typing import Iterable

from declint.declarations import SourceFile
from declint.directives import scan_directives

logger = logging.getLogger(__name__)

SUPPRESS = "suppress"
RULE_CONFIGURE = "rule_configure"


@dataclass
class FileSettings:
    """
    Comment-based settings of one file, keyed by comment line.

    suppressions maps a line to the rule ids suppressed there; an empty set
    suppresses every rule on that line. configurations maps a line to the
    key/value pairs given by rule_configure directives on that line.
    """

    suppressions: dict[int, set[str]] = field(default_factory=dict)
    configurations: dict[int, dict[str, str]] = field(default_factory=dict)

    def is_suppressed(self, line: int, rule_id: str) -> bool:
        suppressed = self.suppressions.get(line)
        if suppressed is None:
            return False
        return not suppressed or rule_id in suppressed

    def configuration_at(self, line: int) -> dict[str, str]:
        return self.configurations.get(line, {})


def extract_settings(comments: Iterable[tuple[int, str]]) -> FileSettings:
    """Build FileSettings from (line, comment text) pairs."""
    settings = FileSettings()
    suppress_all: set[int] = set()

    for line, text in comments:
        for directive in scan_directives(text):
            if directive.keyword == SUPPRESS:
                ids = settings.suppressions.setdefault(line, set())
                if not directive.argument:
                    suppress_all.add(line)
                else:
                    ids.update(directive.argument.split(","))
            elif directive.keyword == RULE_CONFIGURE:
                config = settings.configurations.setdefault(line, {})
                if directive.argument:
                    config.update(_parse_key_values(directive.argument))
            else:
                logger.debug("Ignoring unknown directive %r on line %d", directive.keyword, line)

    for line in suppress_all:
        settings.suppressions[line] = set()
    return settings


def _parse_key_values(argument: str) -> dict[str, str]:
    pairs: dict[str, str] = {}
    for token in argument.split(","):
        parts = token.split("=")
        if len(parts) != 2:
            continue
        pairs[parts[0]] = parts[1]
    return pairs


class SettingsCache:
    """
    Memoizes FileSettings by file identifier for the lifetime of the cache.

    Construct one per lint run and pass it to every rule. The first query for
    an identifier scans the file's comments; later queries return the same
    FileSettings object even if the comments changed in between, until
    invalidate() or clear() is called. Safe to share between threads: one
    thread computes a given identifier while others asking for it wait;
    different identifiers are computed independently.
    """

    def __init__(self) -> None:
        self._entries: dict[str, FileSettings] = {}
        self._locks: dict[str, threading.Lock] = {}
        self._guard = threading.Lock()

    def settings_for(self, source_file: SourceFile) -> FileSettings:
        identifier = source_file.identifier
        cached = self._entries.get(identifier)
        if cached is not None:
            return cached

        with self._lock_for(identifier):
            cached = self._entries.get(identifier)
            if cached is not None:
                return cached
            settings = extract_settings(source_file.comment_lines())
            logger.debug(
                "Extracted settings for %s: %d suppression line(s), %d configuration line(s)",
                identifier,
                len(settings.suppressions),
                len(settings.configurations),
            )
            self._entries[identifier] = settings
            return settings

    def invalidate(self, identifier: str) -> None:
        # Waits for an in-flight computation of identifier before dropping it
        with self._lock_for(identifier):
            self._entries.pop(identifier, None)

    def clear(self) -> None:
        with self._guard:
            identifiers = list(self._locks)
        for identifier in identifiers:
            self.invalidate(identifier)

    def _lock_for(self, identifier: str) -> threading.Lock:
        with self._guard:
            lock = self._locks.get(identifier)
            if lock is None:
                lock = threading.Lock()
                self._locks[identifier] = lock
            return lock

    def __contains__(self, identifier: object) -> bool:
        return identifier in self._entries

    def __len__(self) -> int:
        return len(self._entries)
