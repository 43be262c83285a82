# Rule interface (abstract base class): identity, severity, category, configuration
# lookup and suppression-aware issue emission. Concrete rules subclass Rule and
# override the visit_* methods for the declaration kinds they care about.

from __future__ import annotations

import logging
from abc import ABC
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any, Mapping, Optional, TypeVar

from declint.declarations import Declaration, DeclarationKind, SourceFile
from declint.findings.models import Category, Correction, Issue, Severity, SourceRange
from declint.settings import FileSettings, SettingsCache

if TYPE_CHECKING:
    from declint.config import Config

logger = logging.getLogger(__name__)

T = TypeVar("T")

_MISSING = object()


@dataclass
class RuleContext:
    """
    Per-file, per-rule state of one run: the file being checked, its comment
    settings, the run-wide configuration and the issues emitted so far.

    current is the declaration being visited; per-line configuration is
    looked up at its start line.
    """

    source_file: SourceFile
    settings: FileSettings
    configurations: Mapping[str, Any] = field(default_factory=dict)
    issues: list[Issue] = field(default_factory=list)
    current: Optional[Declaration] = None


class Rule(ABC):
    """
    Abstract base class for all lint rules.

    Subclasses must define:
    - id: str - unique rule identifier (e.g. "high_ncss")
    - name: str - human-readable rule name
    - severity: Severity and category: Category

    The engine calls run() once per file. run() walks the file's declarations
    and calls the visit_* method matching each declaration's kind; a visit
    returns True to continue into the declaration's members, False to skip them.
    """

    id: str
    name: str
    severity: Severity
    category: Category
    description: str = ""

    # Declaration kind -> visit method; kinds not listed are descended into.
    VISITORS: dict[DeclarationKind, str] = {
        DeclarationKind.FUNCTION: "visit_function",
        DeclarationKind.INITIALIZER: "visit_initializer",
        DeclarationKind.DEINITIALIZER: "visit_deinitializer",
        DeclarationKind.SUBSCRIPT: "visit_subscript",
        DeclarationKind.TYPE: "visit_type",
    }

    def run(
        self,
        source_file: SourceFile,
        config: Optional["Config"] = None,
        cache: Optional[SettingsCache] = None,
    ) -> list[Issue]:
        """
        Check one file and return the issues found, in visiting order.

        Args:
            source_file: Declarations and comments of the file.
            config: Run configuration; its configurations map supplies run-wide
                    rule settings. None means no run-wide settings.
            cache: Settings cache of the current run. None builds a private one,
                   which is fine for a single call but rescans on every call.

        Returns:
            List of Issue objects; empty if nothing was found.
        """
        if cache is None:
            cache = SettingsCache()
        context = RuleContext(
            source_file=source_file,
            settings=cache.settings_for(source_file),
            configurations=config.configurations if config is not None else {},
        )
        for declaration in source_file.declarations:
            self._visit(declaration, context)
        logger.debug("Rule %s found %d issue(s) in %s", self.id, len(context.issues), source_file.identifier)
        return context.issues

    def _visit(self, declaration: Declaration, context: RuleContext) -> None:
        method = self.VISITORS.get(declaration.kind)
        descend = True
        if method is not None:
            context.current = declaration
            descend = getattr(self, method)(declaration, context)
        if descend:
            for member in declaration.members:
                self._visit(member, context)

    def visit_function(self, declaration: Declaration, context: RuleContext) -> bool:
        return True

    def visit_initializer(self, declaration: Declaration, context: RuleContext) -> bool:
        return True

    def visit_deinitializer(self, declaration: Declaration, context: RuleContext) -> bool:
        return True

    def visit_subscript(self, declaration: Declaration, context: RuleContext) -> bool:
        return True

    def visit_type(self, declaration: Declaration, context: RuleContext) -> bool:
        return True

    def get_configuration(self, context: RuleContext, key: str, default: T) -> T:
        """
        Resolve a rule setting.

        A rule_configure directive on the current declaration's line wins,
        then the run-wide configuration, then default. Values are converted
        to the type of default; a value that does not convert is ignored.
        """
        candidates = []
        if context.current is not None:
            line = context.current.source_range.start.line
            candidates.append(context.settings.configuration_at(line).get(key, _MISSING))
        candidates.append(context.configurations.get(key, _MISSING))

        for raw in candidates:
            if raw is _MISSING:
                continue
            value = _convert(raw, default)
            if value is not _MISSING:
                return value
            logger.debug("Ignoring unusable value %r for %s in rule %s", raw, key, self.id)
        return default

    def emit_issue(
        self,
        context: RuleContext,
        source_range: SourceRange,
        description: str = "",
        correction: Optional[Correction] = None,
    ) -> None:
        """Record an issue unless its start line suppresses this rule."""
        line = source_range.start.line
        if context.settings.is_suppressed(line, self.id):
            logger.debug("Suppressed %s at %s:%d", self.id, source_range.start.identifier, line)
            return
        context.issues.append(
            Issue(
                rule_identifier=self.id,
                description=description,
                category=self.category,
                severity=self.severity,
                location=source_range,
                correction=correction,
            )
        )


def _convert(raw: Any, default: Any) -> Any:
    """Convert raw to the type of default, or return _MISSING."""
    if isinstance(default, bool):
        if isinstance(raw, bool):
            return raw
        text = str(raw).strip().lower()
        if text in ("true", "yes", "1"):
            return True
        if text in ("false", "no", "0"):
            return False
        return _MISSING
    if isinstance(default, (int, float)):
        if isinstance(raw, bool):
            return _MISSING
        try:
            return type(default)(raw)
        except (TypeError, ValueError):
            return _MISSING
    if isinstance(default, str):
        return str(raw)
    return raw
