# High NCSS detection: flags functions whose body has too many statements.

from __future__ import annotations

from declint.declarations import Declaration
from declint.findings.models import Category, Severity
from declint.metrics import ncss
from declint.rules.base import Rule, RuleContext


class NCSSRule(Rule):
    """
    Flags method-like declarations whose NCSS exceeds a threshold.

    The threshold is read from the `NCSS` setting (default 30), so
    `declint:rule_configure(NCSS=50)` on a function's first line raises it
    for that function only.
    """

    THRESHOLD_KEY = "NCSS"
    DEFAULT_THRESHOLD = 30

    id = "high_ncss"
    name = "High Non-Commenting Source Statements"
    severity = Severity.MAJOR
    category = Category.READABILITY
    description = (
        "Counts the statements of a method body, ignoring braces, empty "
        "statements and comments. Long methods are harder to read and test."
    )

    def _check(self, declaration: Declaration, context: RuleContext) -> bool:
        value = ncss(declaration)
        threshold = self.get_configuration(context, self.THRESHOLD_KEY, self.DEFAULT_THRESHOLD)
        if value > threshold:
            self.emit_issue(
                context,
                declaration.source_range,
                f"Method of {value} NCSS exceeds limit of {threshold}",
            )
        return True

    def visit_function(self, declaration: Declaration, context: RuleContext) -> bool:
        return self._check(declaration, context)

    def visit_initializer(self, declaration: Declaration, context: RuleContext) -> bool:
        return self._check(declaration, context)

    def visit_deinitializer(self, declaration: Declaration, context: RuleContext) -> bool:
        return self._check(declaration, context)

    def visit_subscript(self, declaration: Declaration, context: RuleContext) -> bool:
        return self._check(declaration, context)
