# Per-run aggregation of issues: files with issues and counts per severity.

from __future__ import annotations

from typing import Sequence

from declint.findings.models import Issue, Severity


class IssueSummary:
    """
    Read-only view over the issues of one lint run.

    The issue sequence is kept as given; nothing here sorts or filters it.
    Counts are computed once at construction.
    """

    def __init__(self, issues: Sequence[Issue]) -> None:
        self.issues = issues
        self._by_file: dict[str, list[Issue]] = {}
        self._by_severity: dict[Severity, int] = {s: 0 for s in Severity.ordered()}
        for issue in issues:
            self._by_file.setdefault(issue.file, []).append(issue)
            self._by_severity[issue.severity] += 1

    @property
    def number_of_issues(self) -> int:
        return len(self.issues)

    @property
    def number_of_files(self) -> int:
        """Number of distinct files (start identifiers) that have at least one issue."""
        return len(self._by_file)

    def number_of(self, severity: Severity) -> int:
        return self._by_severity[severity]

    def severity_counts(self) -> list[tuple[Severity, int]]:
        """(severity, count) pairs in the fixed order critical, major, minor, cosmetic."""
        return [(s, self._by_severity[s]) for s in Severity.ordered()]

    def issues_by_file(self) -> dict[str, list[Issue]]:
        """Issues grouped by file, files in first-seen order."""
        return {path: list(items) for path, items in self._by_file.items()}

    def __repr__(self) -> str:
        counts = ", ".join(f"{s.value}={n}" for s, n in self.severity_counts())
        return f"IssueSummary(files={self.number_of_files}, {counts})"
