"""
Rule catalog: the configured check definitions, keyed by rule id.
"""

import re
from collections.abc import Iterable, Iterator, Mapping
from dataclasses import dataclass
from types import MappingProxyType
from typing import Optional

LEVELS = ("error", "warning", "note")
_FORMAT_TOKEN = re.compile(r"%%|%s")


@dataclass(frozen=True)
class Rule:
    """A single check definition from the catalog."""
    id: str                 # e.g. "action_ref"
    message: str            # template, may contain one "%s"
    detail: str             # static explanation
    description: str = ""
    enabled: bool = True
    level: str = "warning"  # error, warning or note

    def format_message(self, value: Optional[str] = None) -> str:
        """Substitute value into the first "%s" and turn "%%" into "%".

        Without a value the message is returned untouched.
        """
        if value is None:
            return self.message

        substituted = False

        def _replace(match: "re.Match[str]") -> str:
            nonlocal substituted
            if match.group() == "%%":
                return "%"
            if substituted:
                return match.group()
            substituted = True
            return value

        return _FORMAT_TOKEN.sub(_replace, self.message)


class RuleCatalog(Mapping):
    """Immutable, ordered mapping of rule id to Rule.

    When the same id appears more than once, the first definition wins.
    """

    def __init__(self, rules: Iterable[Rule] = ()):
        by_id: dict[str, Rule] = {}
        for rule in rules:
            by_id.setdefault(rule.id, rule)
        self._rules = MappingProxyType(by_id)

    def __getitem__(self, rule_id: str) -> Rule:
        return self._rules[rule_id]

    def __iter__(self) -> Iterator[str]:
        return iter(self._rules)

    def __len__(self) -> int:
        return len(self._rules)

    def __repr__(self) -> str:
        return f"RuleCatalog({list(self._rules)})"

    def lookup(self, rule_id: str) -> Optional[Rule]:
        """Return the rule if it exists and is enabled, else None."""
        rule = self._rules.get(rule_id)
        if rule is None or not rule.enabled:
            return None
        return rule

    @property
    def enabled_ids(self) -> list[str]:
        return [rule_id for rule_id, rule in self._rules.items() if rule.enabled]
