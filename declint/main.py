from __future__ import annotations

"""
Typer CLI entry point and orchestration of a lint run.

- Accepts files and directories
- Collects .c files (traversal.collect_targets)
- Runs the registered rules with one settings cache for the run
- Prints the report with the selected reporter

Exit codes: 0 no issues, 1 issues found, 2 the parser produced a malformed tree.
"""

import logging
from enum import Enum
from pathlib import Path
from typing import List, Optional

import typer

from declint.config import (
    Config,
    UnknownRuleError,
    get_default_config,
    get_enabled_rules,
    parse_config_overrides,
)
from declint.declarations import MalformedTreeError
from declint.engine import lint_paths
from declint.reporting.base import Reporter, render_report
from declint.reporting.console import ConsoleReporter
from declint.reporting.text import TextReporter
from declint.settings import SettingsCache
from declint.traversal import collect_targets

logger = logging.getLogger(__name__)

app = typer.Typer(help="declint - rule-based linter for C declarations with comment directives.")

EXIT_ISSUES = 1
EXIT_MALFORMED_TREE = 2


class OutputFormat(str, Enum):
    text = "text"
    console = "console"


def _make_reporter(output_format: OutputFormat) -> Reporter:
    if output_format is OutputFormat.console:
        return ConsoleReporter()
    return TextReporter()


@app.command()
def analyze(
    targets: List[Path] = typer.Argument(
        ...,
        exists=True,
        readable=True,
        resolve_path=True,
        help="C files or directories to lint.",
    ),
    output_format: OutputFormat = typer.Option(
        OutputFormat.text, "--format", "-f", help="Report format."
    ),
    settings: Optional[List[str]] = typer.Option(
        None, "--config", "-c", help="Run-wide rule setting as KEY=VALUE, e.g. NCSS=20. Repeatable."
    ),
    rule_ids: Optional[List[str]] = typer.Option(
        None, "--rule", "-r", help="Only run the rule with this identifier. Repeatable."
    ),
    include_headers: bool = typer.Option(False, "--include-headers", help="Also lint .h files."),
    workers: int = typer.Option(1, "--workers", "-j", min=1, help="Files linted in parallel."),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Log progress to stderr."),
) -> None:
    """Lint C files and print a report."""
    logging.basicConfig(level=logging.DEBUG if verbose else logging.WARNING)

    try:
        overrides = parse_config_overrides(settings or [])
    except ValueError as exc:
        raise typer.BadParameter(str(exc), param_hint="--config")

    config = get_default_config(overrides)
    try:
        rules = list(get_enabled_rules(config, only=rule_ids))
    except UnknownRuleError as exc:
        raise typer.BadParameter(str(exc), param_hint="--rule")
    config = Config(rules=rules, configurations=config.configurations)

    files = collect_targets(targets, include_headers=include_headers)
    logger.info("Linting %d file(s) with rule(s): %s", len(files), ", ".join(r.id for r in rules))
    try:
        result = lint_paths(files, config=config, cache=SettingsCache(), workers=workers)
    except MalformedTreeError as exc:
        typer.echo(f"error: malformed syntax tree: {exc}", err=True)
        raise typer.Exit(code=EXIT_MALFORMED_TREE)

    typer.echo(render_report(_make_reporter(output_format), result.issues, result.number_of_files))
    for identifier in result.files_with_parse_errors:
        typer.echo(f"warning: {identifier}: syntax errors, declarations may be incomplete", err=True)
    if result.issues:
        raise typer.Exit(code=EXIT_ISSUES)


@app.command("rules")
def list_rules() -> None:
    """List the registered rules."""
    for rule in get_default_config().rules:
        typer.echo(f"{rule.id}: {rule.name} ({rule.severity.value}, {rule.category.value})")


def main() -> None:
    """Entry point for the `declint` script and `python -m declint.main`."""
    app()


if __name__ == "__main__":
    main()
