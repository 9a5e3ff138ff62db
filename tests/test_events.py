import pytest

from kubitect.events import (
    Change,
    Event,
    Events,
    generate_events,
    is_better_match,
    match_rule,
)
from kubitect.rules import ActionType, ChangeType, Rule, RuleType, RuleValidationError

MODIFY_AB = [Change("a.b", ChangeType.MODIFY, "Yes", "No")]


def test_event_single_rule():
    r = Rule(match_path="A")
    events = generate_events([Change("A", ChangeType.MODIFY, "Yes", "No")], [r])
    assert len(events) == 1
    assert events[0].rule == r


def test_event_empty_comparison():
    assert generate_events([], []) == []


def test_event_no_diff():
    r = Rule(match_path="*")
    assert generate_events([Change("a", ChangeType.NONE)], [r]) == []


def test_precedence_by_path_length():
    r1 = Rule(type=RuleType.ERROR, match_path="a")
    r2 = Rule(type=RuleType.ALLOW, match_path="a.b")
    events = generate_events(MODIFY_AB, [r1, r2])
    assert len(events) == 1
    assert events[0].rule == r2


def test_precedence_by_path_length_multi_path_rules():
    r1 = Rule(type=RuleType.ERROR, match_path="a")
    r2 = Rule(type=RuleType.ALLOW, match_path="a.b")
    r3 = Rule(type=RuleType.ALLOW, match_path="@")
    r4 = Rule(type=RuleType.ERROR, match_path="*")
    r5 = Rule(type=RuleType.ALLOW, match_path="invalid")
    events = generate_events(MODIFY_AB, [r1, r2, r3, r4, r5])
    assert len(events) == 1
    assert events[0].rule == r2
    assert events[0].change.path == "a.b"


def test_precedence_by_wildcard_count():
    r1 = Rule(type=RuleType.ERROR, match_path="*.*")
    r2 = Rule(type=RuleType.WARN, match_path="a.*")
    r3 = Rule(type=RuleType.ALLOW, match_path="a.b")
    events = generate_events(MODIFY_AB, [r1, r2, r3])
    assert len(events) == 1
    assert events[0].rule == r3


def test_precedence_by_priority():
    r1 = Rule(type=RuleType.ALLOW, match_path="a.b")
    r2 = Rule(type=RuleType.WARN, match_path="a.b")
    r3 = Rule(type=RuleType.ERROR, match_path="a.b")
    events = generate_events(MODIFY_AB, [r1, r2, r3])
    assert len(events) == 1
    assert events[0].rule == r3


def test_precedence_by_custom_priority():
    r1 = Rule(type=10, match_path="a.b")
    r2 = Rule(type=50, match_path="a.b")
    r3 = Rule(type=30, match_path="a.b")
    events = generate_events(MODIFY_AB, [r1, r2, r3])
    assert len(events) == 1
    assert events[0].rule == r2


def test_rule_path_wildcard():
    leaf = Change("A.a", ChangeType.MODIFY, "Yes", "No")
    parent = Change("A", ChangeType.MODIFY)
    lookup = {"A": parent, "A.a": leaf}.get

    events = generate_events([leaf], [Rule(match_path="*")], lookup)
    assert len(events) == 1
    assert events[0].change.path == "A.a"
    assert events[0].matched_change_paths == ["A.a"]

    events = generate_events([leaf], [Rule(match_path="@")], lookup)
    assert len(events) == 1
    assert events[0].change.path == "A"
    assert events[0].matched_change_paths == ["A.a"]


def test_anchor_without_lookup_uses_leaf():
    leaf = Change("A.a", ChangeType.MODIFY)
    events = generate_events([leaf], [Rule(match_path="@")])
    assert events[0].change is leaf


def test_anchor_groups_matching_changes():
    changes = [Change("A.a", ChangeType.MODIFY), Change("A.b", ChangeType.MODIFY)]
    parent = Change("A", ChangeType.MODIFY)
    events = generate_events(changes, [Rule(match_path="@")], {"A": parent}.get)
    assert len(events) == 1
    assert events[0].matched_change_paths == ["A.a", "A.b"]


def test_rule_path_option():
    changes = [
        Change("A.a", ChangeType.DELETE, "Yes", None),
        Change("A.b", ChangeType.CREATE, None, "No"),
        Change("B.c", ChangeType.CREATE, None, ""),
    ]
    events = generate_events(changes, [Rule(match_path="A.{a, b}")])
    assert len(events) == 2


def test_match_everything_rule():
    changes = [
        Change("a.b", ChangeType.MODIFY, "Yes", "No"),
        Change("a.c", ChangeType.DELETE, "Old", None),
        Change("a.d", ChangeType.CREATE, None, "New"),
    ]
    r1 = Rule(match_path="x.x")
    r2 = Rule(match_path="*")
    r3 = Rule(match_path="x.x")
    events = generate_events(changes, [r1, r2, r3])
    assert len(events) == 3
    assert all(e.rule is r2 for e in events)


def test_change_type_filters_rules():
    rule = Rule(match_path="a", match_change_type=ChangeType.CREATE)
    assert match_rule([rule], ChangeType.MODIFY, "a.b") is None
    assert match_rule([rule], ChangeType.CREATE, "a.b") is rule


def test_invalid_rule_raises():
    with pytest.raises(RuleValidationError, match="Path must not be empty"):
        generate_events(MODIFY_AB, [Rule(match_path="")])


def test_is_better_match():
    longer = Rule(match_path="a.b")
    shorter = Rule(match_path="a")
    assert is_better_match(longer, shorter) is True
    assert is_better_match(shorter, longer) is False
    assert is_better_match(Rule(match_path="a.b"), Rule(match_path="a.*")) is True
    assert is_better_match(
        Rule(type=RuleType.ERROR, match_path="a"), Rule(type=RuleType.WARN, match_path="a")
    ) is True


def test_event_str():
    e = Event(rule=Rule(type=RuleType.ERROR, match_path="a"), change=MODIFY_AB[0])
    assert str(e) == "(Error) Change: [Type: modify, Path: a.b]"


def test_filters():
    up = Event(Rule(match_path="a", action_type=ActionType.SCALE_UP), Change("a", ChangeType.CREATE))
    down = Event(
        Rule(type=RuleType.WARN, match_path="b", action_type=ActionType.SCALE_DOWN),
        Change("b", ChangeType.DELETE),
    )
    events = Events([up, down])
    assert events.filter_by_action(ActionType.SCALE_UP) == [up]
    assert events.filter_by_rule_type(RuleType.WARN) == [down]
    assert events.filter(lambda e: False) == []
    assert isinstance(events.filter(lambda e: True), Events)