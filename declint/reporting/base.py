# Reporter interface: turns the issues and summary of a run into text.

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Sequence

from declint.findings.models import Issue
from declint.findings.summary import IssueSummary


class Reporter(ABC):
    """
    Formats the result of a lint run. Reporters are pure: the same issues and
    summary always produce the same text.
    """

    @property
    @abstractmethod
    def header(self) -> str:
        ...

    @property
    def footer(self) -> str:
        return ""

    @property
    def separator(self) -> str:
        return "\n"

    @abstractmethod
    def handle_issues(self, issues: Sequence[Issue]) -> str:
        """Format every issue; an empty sequence gives an empty string."""
        ...

    @abstractmethod
    def handle_summary(self, number_of_total_files: int, issue_summary: IssueSummary) -> str:
        """Format the run summary for number_of_total_files inspected files."""
        ...


def render_report(reporter: Reporter, issues: Sequence[Issue], number_of_total_files: int) -> str:
    """Header, issues, summary and footer joined by the reporter's separator, skipping empty parts."""
    parts = [
        reporter.header,
        reporter.handle_issues(issues),
        reporter.handle_summary(number_of_total_files, IssueSummary(issues)),
        reporter.footer,
    ]
    return reporter.separator.join(p for p in parts if p)
