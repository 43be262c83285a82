from __future__ import annotations

"""
Lint configuration: the rule registry and run-wide rule settings.

Rules are registered explicitly in BUILTIN_RULES; adding a rule means writing
the class and listing it here. Run-wide settings (e.g. NCSS=20) apply to every
file of a run unless a rule_configure comment overrides them for one line.
"""

from dataclasses import dataclass, field
from typing import Iterable, List, Optional, Sequence

from declint.rules.base import Rule
from declint.rules.ncss import NCSSRule

BUILTIN_RULES: tuple[type[Rule], ...] = (NCSSRule,)


class DuplicateRuleError(ValueError):
    """Two registered rules share an identifier."""


class UnknownRuleError(ValueError):
    """A rule identifier was requested that no registered rule has."""


@dataclass
class Config:
    """
    Lint configuration.

    rules are the rule instances to run, in order; identifiers must be unique.
    configurations are run-wide rule settings as raw key/value pairs.
    """

    rules: Sequence[Rule] = field(default_factory=list)
    configurations: dict[str, str] = field(default_factory=dict)

    def __post_init__(self) -> None:
        seen: set[str] = set()
        for rule in self.rules:
            if rule.id in seen:
                raise DuplicateRuleError(f"Duplicate rule identifier: {rule.id}")
            seen.add(rule.id)

    def rule(self, rule_id: str) -> Rule:
        for rule in self.rules:
            if rule.id == rule_id:
                return rule
        raise UnknownRuleError(f"Unknown rule: {rule_id}")


def get_default_config(configurations: Optional[dict[str, str]] = None) -> Config:
    """Return a configuration running every built-in rule."""
    rules: List[Rule] = [rule_class() for rule_class in BUILTIN_RULES]
    return Config(rules=rules, configurations=dict(configurations or {}))


def get_enabled_rules(
    config: Config | None = None,
    only: Optional[Sequence[str]] = None,
) -> Sequence[Rule]:
    """
    Return the rules of config (or the default config), optionally narrowed to
    the given identifiers. Unknown identifiers raise UnknownRuleError.
    """
    if config is None:
        config = get_default_config()
    if not only:
        return config.rules
    return [config.rule(rule_id) for rule_id in only]


def parse_config_overrides(items: Iterable[str]) -> dict[str, str]:
    """
    Parse KEY=VALUE strings (e.g. from the command line) into a settings map.

    Raises ValueError for an item without exactly one '=' or with an empty key.
    """
    overrides: dict[str, str] = {}
    for item in items:
        parts = item.split("=")
        if len(parts) != 2 or not parts[0].strip():
            raise ValueError(f"Expected KEY=VALUE, got: {item!r}")
        overrides[parts[0].strip()] = parts[1].strip()
    return overrides
