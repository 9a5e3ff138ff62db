"""Events produced by matching configuration changes against rules."""

from __future__ import annotations

from collections.abc import Callable, Iterable
from dataclasses import dataclass, field
from typing import Any

from kubitect.rules import ActionType, ChangeType, Rule, rule_type_name


@dataclass
class Change:
    """A single detected configuration change."""

    path: str
    type: ChangeType
    value_before: Any = None
    value_after: Any = None


@dataclass
class Event:
    """A detected change together with the rule it matched."""

    rule: Rule
    change: Change
    matched_change_paths: list[str] = field(default_factory=list)

    def __str__(self) -> str:
        return (
            f"({rule_type_name(self.rule.type)}) Change: "
            f"[Type: {self.change.type.value}, Path: {self.change.path}]"
        )


class Events(list):
    """A list of events with filtering helpers."""

    def filter(self, predicate: Callable[[Event], bool]) -> Events:
        return Events(e for e in self if predicate(e))

    def filter_by_rule_type(self, rule_type: int) -> Events:
        return self.filter(lambda e: e.rule.type == rule_type)

    def filter_by_action(self, action: ActionType) -> Events:
        return self.filter(lambda e: e.rule.action_type == action)


def is_better_match(first: Rule, second: Rule) -> bool:
    """Whether ``first`` is more specific than ``second``.

    Longer paths win, then paths with fewer wildcards, then higher priority.
    """
    if len(first.match_path) != len(second.match_path):
        return len(first.match_path) > len(second.match_path)
    if first.match_path.wildcard_count != second.match_path.wildcard_count:
        return first.match_path.wildcard_count < second.match_path.wildcard_count
    return first.type > second.type


def match_rule(rules: Iterable[Rule], change_type: ChangeType, change_path: str) -> Rule | None:
    """Best rule matching the change, or None if no rule applies."""
    best: Rule | None = None
    for rule in rules:
        if rule.match_change_type not in (change_type, ChangeType.ANY):
            continue
        if rule.match_path.matches(change_path):
            if best is None or is_better_match(rule, best):
                best = rule
    return best


def generate_events(
    changes: Iterable[Change],
    rules: Iterable[Rule],
    lookup: Callable[[str], Change | None] | None = None,
) -> Events:
    """Match leaf changes against rules and return the resulting events.

    ``lookup`` resolves the change of an ancestor path; it is used for rules
    whose path contains an anchor. Rules are validated first.
    """
    rules = list(rules)
    for rule in rules:
        rule.validate()

    events = Events()
    for change in changes:
        if change.type is ChangeType.NONE:
            continue
        rule = match_rule(rules, change.type, change.path)
        if rule is not None:
            _add_event(events, change, rule, lookup)
    return events


def _add_event(
    events: Events,
    change: Change,
    rule: Rule,
    lookup: Callable[[str], Change | None] | None,
) -> None:
    target = change
    anchored = rule.match_path.is_anchor_path

    if anchored and lookup is not None:
        anchor_change = lookup(rule.match_path.find_anchor_path(change.path))
        if anchor_change is not None:
            target = anchor_change

    if anchored:
        for existing in events:
            if (
                existing.rule.type == rule.type
                and existing.change.type == target.type
                and existing.rule.match_path.path == rule.match_path.path
            ):
                existing.matched_change_paths.append(change.path)
                return

    events.append(Event(rule=rule, change=target, matched_change_paths=[change.path]))