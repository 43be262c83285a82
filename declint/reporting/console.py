# Rich console output: issues grouped per file in tables, coloured by severity.

from __future__ import annotations

from typing import Optional, Sequence

from rich import box
from rich.console import Console, RenderableType
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from declint.findings.models import Issue, Severity
from declint.findings.summary import IssueSummary
from declint.reporting.base import Reporter
from declint.reporting.text import relative_to_cwd
from declint.version import __version__

# Severity → Rich style
SEVERITY_STYLE = {
    Severity.CRITICAL: "bold red",
    Severity.MAJOR: "bold yellow",
    Severity.MINOR: "bold blue",
    Severity.COSMETIC: "bold dim",
}


def _severity_style(severity: Severity) -> str:
    return SEVERITY_STYLE.get(severity, "bold white")


class ConsoleReporter(Reporter):
    """
    Terminal report built with Rich: one table per file, a summary panel.

    Every part is rendered through the given console and captured, so the
    result is a plain string like any other reporter's. Pass a console with
    color_system=None for output without escape codes.
    """

    def __init__(self, console: Optional[Console] = None) -> None:
        self.console = console if console is not None else Console()

    def _render(self, *renderables: RenderableType) -> str:
        with self.console.capture() as capture:
            for renderable in renderables:
                self.console.print(renderable)
        return capture.get().rstrip("\n")

    @property
    def header(self) -> str:
        return self._render(Text(f"declint v{__version__} Report", style="bold"))

    def handle_issues(self, issues: Sequence[Issue]) -> str:
        if not issues:
            return ""

        # Files in first-seen order, issues as the rules produced them
        by_file = IssueSummary(issues).issues_by_file()
        renderables: list[RenderableType] = []
        for path, file_issues in by_file.items():
            table = Table(
                title=Text(relative_to_cwd(path)),
                title_style="bold cyan",
                title_justify="left",
                show_header=True,
                header_style="bold magenta",
                box=box.SIMPLE,
                padding=(0, 1),
                expand=False,
            )
            table.add_column("Range", style="dim")
            table.add_column("Severity", width=10)
            table.add_column("Rule", width=22)
            table.add_column("Message", style="white")

            for issue in file_issues:
                start = issue.location.start
                end = issue.location.end
                table.add_row(
                    f"{start.line}:{start.column}-{end.line}:{end.column}",
                    Text(issue.severity.value.upper(), style=_severity_style(issue.severity)),
                    Text(f"[{issue.rule_identifier}]", style="dim"),
                    Text(issue.description),
                )
            renderables.append(table)
        return self._render(*renderables)

    def handle_summary(self, number_of_total_files: int, issue_summary: IssueSummary) -> str:
        if issue_summary.number_of_issues == 0:
            return self._render(
                Panel(
                    f"[green]Good job! Inspected {number_of_total_files} files, found no issue.[/green]",
                    title="Summary",
                    border_style="green",
                    box=box.ROUNDED,
                )
            )

        noun = "file" if number_of_total_files == 1 else "files"
        parts = [f"[bold]{issue_summary.number_of_files} of {number_of_total_files} {noun} with issues[/bold]"]
        for severity, count in issue_summary.severity_counts():
            parts.append(f"[{_severity_style(severity)}]{count} {severity.value}[/]")
        return self._render(
            Panel(
                " | ".join(parts),
                title="Summary",
                border_style="yellow",
                box=box.ROUNDED,
            )
        )
