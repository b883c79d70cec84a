"""Key-name redaction rules."""

from typing import Iterable, List, Optional, Tuple, Union

from stringview.codes import DEFAULT_REPLACEMENT
from stringview.contracts import RedactionRule


class RedactionRuleSet:
    """Ordered key-name -> replacement lookup.

    Entries are bare key names (replaced with DEFAULT_REPLACEMENT) or
    RedactionRule instances with a custom message. When several entries
    target the same key the first one listed wins.
    """

    def __init__(self, entries: Iterable[Union[str, RedactionRule]] = ()):
        rules = []
        for entry in entries:
            if isinstance(entry, RedactionRule):
                rules.append((entry.key, entry.replacement))
            else:
                rules.append((entry, DEFAULT_REPLACEMENT))
        self._rules: Tuple[Tuple[str, str], ...] = tuple(rules)

    def resolve(self, key_name: str) -> Optional[str]:
        """Return the replacement text for key_name, or None when no rule matches."""
        for name, replacement in self._rules:
            if name == key_name:
                return replacement
        return None

    def without(self, key_name: str) -> "RedactionRuleSet":
        """Copy of this rule set with every rule for key_name dropped."""
        kept = RedactionRuleSet()
        kept._rules = tuple(rule for rule in self._rules if rule[0] != key_name)
        return kept

    @property
    def keys(self) -> Tuple[str, ...]:
        return tuple(name for name, _ in self._rules)

    def as_rules(self) -> List[RedactionRule]:
        """Explicit rule list, suitable for StringifyOptions.redaction_rules."""
        return [RedactionRule(key=name, replacement=text) for name, text in self._rules]

    def __len__(self) -> int:
        return len(self._rules)

    def __bool__(self) -> bool:
        return bool(self._rules)

    def __repr__(self) -> str:
        return f"RedactionRuleSet({list(self._rules)!r})"
