"""Path-based rules deciding whether a request needs authentication."""

from __future__ import annotations

import re
from collections.abc import Iterable, Sequence
from dataclasses import dataclass, field


@dataclass(frozen=True)
class StringMatch:
    """Matches a string by exactly one of exact, prefix, suffix or regex."""

    exact: str | None = None
    prefix: str | None = None
    suffix: str | None = None
    regex: str | None = None

    def __post_init__(self) -> None:
        chosen = [v for v in (self.exact, self.prefix, self.suffix, self.regex) if v is not None]
        if len(chosen) > 1:
            raise ValueError("a StringMatch takes only one of exact, prefix, suffix, regex")


@dataclass(frozen=True)
class TriggerRule:
    """Paths to exclude from, and optionally restrict, authentication."""

    excluded_paths: Sequence[StringMatch] = field(default_factory=tuple)
    included_paths: Sequence[StringMatch] = field(default_factory=tuple)


def match_string(text: str, match: StringMatch) -> bool:
    """Whether text satisfies match; an empty match matches nothing."""
    if match.exact is not None:
        return text == match.exact
    if match.prefix is not None:
        return text.startswith(match.prefix)
    if match.suffix is not None:
        return text.endswith(match.suffix)
    if match.regex is not None:
        return re.fullmatch(match.regex, text) is not None
    return False


def _rule_matches(path: str, rule: TriggerRule) -> bool:
    if any(match_string(path, excluded) for excluded in rule.excluded_paths):
        return False
    if rule.included_paths:
        return any(match_string(path, included) for included in rule.included_paths)
    return True


def trigger_rule_matches_path(path: str, rules: Iterable[TriggerRule]) -> bool:
    """Whether any rule triggers on path; true when path or rules are empty."""
    rules = list(rules)
    if not path or not rules:
        return True
    return any(_rule_matches(path, rule) for rule in rules)