"""Tests for the Rich console reporter."""

import pytest
from rich.console import Console

from declint.findings.models import Category, Issue, Severity, SourceRange
from declint.findings.summary import IssueSummary
from declint.reporting.console import ConsoleReporter


@pytest.fixture
def reporter():
    return ConsoleReporter(Console(color_system=None, width=120, force_terminal=False))


def _issue(path: str, line: int, severity: Severity = Severity.MAJOR) -> Issue:
    return Issue(
        rule_identifier="high_ncss",
        description=f"Method of 40 NCSS exceeds limit of 30 (line {line})",
        category=Category.READABILITY,
        severity=severity,
        location=SourceRange.between(path, line, 1, line + 40, 2),
    )


def test_header_mentions_report(reporter):
    assert " Report" in reporter.header
    assert reporter.header.startswith("declint v")


def test_no_issues_renders_empty(reporter):
    assert reporter.handle_issues([]) == ""


def test_issues_grouped_by_file(reporter):
    text = reporter.handle_issues([_issue("b.c", 7), _issue("a.c", 3), _issue("b.c", 50, Severity.MINOR)])
    assert text.index("b.c") < text.index("a.c")
    assert "[high_ncss]" in text
    assert "MAJOR" in text and "MINOR" in text
    assert "7:1-47:2" in text
    assert "(line 50)" in text


def test_summary_without_issues(reporter):
    text = reporter.handle_summary(4, IssueSummary([]))
    assert "Good job! Inspected 4 files, found no issue." in text


def test_summary_with_issues(reporter):
    text = reporter.handle_summary(5, IssueSummary([_issue("a.c", 1), _issue("b.c", 2, Severity.CRITICAL)]))
    assert "2 of 5 files with issues" in text
    assert "1 critical" in text
    assert "1 major" in text
    assert "0 cosmetic" in text


def test_footer_and_separator(reporter):
    assert reporter.footer == ""
    assert reporter.separator == "\n"
