import pytest

from kubitect.events import is_better_match, match_rule
from kubitect.rule_lists import (
    MODIFY_RULES,
    SCALE_RULES,
    UPGRADE_RULES,
    ApplyAction,
    to_apply_action,
)
from kubitect.rules import ActionType, ChangeType, RuleType


def test_to_apply_action_create():
    assert to_apply_action("create") is ApplyAction.CREATE


def test_to_apply_action_empty_is_create():
    assert to_apply_action("") is ApplyAction.CREATE


def test_to_apply_action_upgrade_from_str():
    assert to_apply_action(str(ApplyAction.UPGRADE)) is ApplyAction.UPGRADE


def test_to_apply_action_scale_from_value():
    assert to_apply_action(ApplyAction.SCALE.value) is ApplyAction.SCALE


def test_to_apply_action_invalid():
    with pytest.raises(ValueError, match="^unknown cluster action: invalid$"):
        to_apply_action("invalid")


def test_action_rules_mapping():
    assert ApplyAction.CREATE.rules() is MODIFY_RULES
    assert ApplyAction.SCALE.rules() is SCALE_RULES
    assert ApplyAction.UPGRADE.rules() is UPGRADE_RULES
    assert ApplyAction.UNKNOWN.rules() == []


@pytest.mark.parametrize(
    "rule", MODIFY_RULES + SCALE_RULES + UPGRADE_RULES, ids=lambda r: r.match_path.path
)
def test_builtin_rules_are_valid(rule):
    rule.validate()
    assert rule.match_path.matches(rule.match_path.path) is True
    assert is_better_match(rule, rule) is False


def test_upgrade_allows_version_change():
    rule = match_rule(UPGRADE_RULES, ChangeType.MODIFY, "kubernetes.version")
    assert rule.type == RuleType.ALLOW


def test_upgrade_rejects_other_changes():
    rule = match_rule(UPGRADE_RULES, ChangeType.MODIFY, "cluster.name")
    assert rule.is_of_type(RuleType.ERROR)
    assert "Upgrade action" in rule.message


def test_scale_up_worker():
    rule = match_rule(SCALE_RULES, ChangeType.CREATE, "cluster.nodes.worker.instances.3.id")
    assert rule.action_type is ActionType.SCALE_UP
    assert rule.match_path.find_anchor_path("cluster.nodes.worker.instances.3.id") == (
        "cluster.nodes.worker.instances.3"
    )


def test_scale_down_load_balancer():
    rule = match_rule(SCALE_RULES, ChangeType.DELETE, "cluster.nodes.loadBalancer.instances.1")
    assert rule.action_type is ActionType.SCALE_DOWN


def test_scale_master_create_is_error():
    rule = match_rule(SCALE_RULES, ChangeType.CREATE, "cluster.nodes.master.instances.2")
    assert rule.type == RuleType.ERROR
    assert rule.message == "Currently, control plane cannot be scaled."


def test_scale_other_change_is_error():
    rule = match_rule(SCALE_RULES, ChangeType.MODIFY, "kubernetes.version")
    assert rule.type == RuleType.ERROR


def test_modify_version_change_is_error():
    rule = match_rule(MODIFY_RULES, ChangeType.MODIFY, "kubernetes.version")
    assert rule.type == RuleType.ERROR
    assert "--action upgrade" in rule.message


def test_modify_main_resource_pool_warns():
    rule = match_rule(MODIFY_RULES, ChangeType.MODIFY, "hosts.h1.mainResourcePoolPath")
    assert rule.type == RuleType.WARN


def test_modify_node_cpu_is_error():
    rule = match_rule(MODIFY_RULES, ChangeType.MODIFY, "cluster.nodes.worker.instances.1.cpu")
    assert rule.type == RuleType.ERROR
    assert "physical properties" in rule.message


def test_modify_node_labels_allowed():
    rule = match_rule(
        MODIFY_RULES, ChangeType.MODIFY, "cluster.nodes.worker.instances.1.labels.x"
    )
    assert rule.type == RuleType.ALLOW


def test_modify_default_rule():
    rule = match_rule(MODIFY_RULES, ChangeType.MODIFY, "unknown.key")
    assert rule.message == "Change is not allowed."