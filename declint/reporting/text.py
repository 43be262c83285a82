# Plain text output: one grep-friendly line per issue plus a fixed summary block.

from __future__ import annotations

import os
from typing import Sequence

from declint.findings.models import Issue
from declint.findings.summary import IssueSummary
from declint.reporting.base import Reporter
from declint.version import __version__


def relative_to_cwd(identifier: str) -> str:
    """Strip the current working directory from the front of identifier, if it is there."""
    cwd = os.getcwd()
    if identifier.startswith(cwd + os.sep):
        return identifier[len(cwd) + len(os.sep):]
    return identifier


class TextReporter(Reporter):
    """
    Line format: `file:startLine:startCol-endLine:endCol: severity: rule_id[: description]`.

    The output is byte-for-byte stable; downstream tooling parses it.
    """

    @property
    def header(self) -> str:
        return f"declint v{__version__} Report"

    def format_issue(self, issue: Issue) -> str:
        start = issue.location.start
        end = issue.location.end
        line = (
            f"{relative_to_cwd(start.identifier)}:{start.line}:{start.column}"
            f"-{end.line}:{end.column}: {issue.severity.value}: {issue.rule_identifier}"
        )
        if issue.description:
            line += f": {issue.description}"
        return line

    def handle_issues(self, issues: Sequence[Issue]) -> str:
        return self.separator.join(self.format_issue(issue) for issue in issues)

    def handle_summary(self, number_of_total_files: int, issue_summary: IssueSummary) -> str:
        if issue_summary.number_of_issues == 0:
            return f"Good job! Inspected {number_of_total_files} files, found no issue."

        files_with_issues = issue_summary.number_of_files
        noun = "file" if files_with_issues == 1 else "files"
        lines = [
            "Summary:",
            f"Within a total number of {number_of_total_files} files, "
            f"{files_with_issues} {noun} have issues.",
        ]
        for severity, count in issue_summary.severity_counts():
            lines.append(f"Number of {severity.value} issues: {count}")
        return "\n".join(lines)
