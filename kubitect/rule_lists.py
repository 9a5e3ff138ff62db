"""Built-in rule sets used by the different cluster apply actions."""

from __future__ import annotations

from enum import Enum

from kubitect.rules import ActionType, ChangeType, Rule, RuleType

UPGRADE_RULES: list[Rule] = [
    Rule(
        type=RuleType.ALLOW,
        match_change_type=ChangeType.MODIFY,
        match_path="kubernetes.version",
    ),
    # Default rule.
    Rule(
        type=RuleType.ERROR,
        match_change_type=ChangeType.ANY,
        match_path="@",
        message=(
            "Change is not allowed. Upgrade action allows changing only "
            "'kubernetes.version'."
        ),
    ),
]

SCALE_RULES: list[Rule] = [
    Rule(
        type=RuleType.ALLOW,
        match_change_type=ChangeType.DELETE,
        match_path="cluster.nodes.worker.instances.@",
        action_type=ActionType.SCALE_DOWN,
    ),
    Rule(
        type=RuleType.ALLOW,
        match_change_type=ChangeType.CREATE,
        match_path="cluster.nodes.worker.instances.@",
        action_type=ActionType.SCALE_UP,
    ),
    Rule(
        type=RuleType.ALLOW,
        match_change_type=ChangeType.DELETE,
        match_path="cluster.nodes.loadBalancer.instances.@",
        action_type=ActionType.SCALE_DOWN,
    ),
    Rule(
        type=RuleType.ALLOW,
        match_change_type=ChangeType.CREATE,
        match_path="cluster.nodes.loadBalancer.instances.@",
        action_type=ActionType.SCALE_UP,
    ),
    Rule(
        type=RuleType.ERROR,
        match_change_type=ChangeType.CREATE,
        match_path="cluster.nodes.master.instances.@",
        message="Currently, control plane cannot be scaled.",
    ),
    Rule(
        type=RuleType.ALLOW,
        match_change_type=ChangeType.DELETE,
        match_path="cluster.nodes.master.instances.@",
        message="Currently, control plane cannot be scaled.",
    ),
    # Allow addition and deletion of hosts.
    Rule(
        type=RuleType.ALLOW,
        match_change_type=ChangeType.CREATE,
        match_path="hosts.@",
    ),
    Rule(
        type=RuleType.ALLOW,
        match_change_type=ChangeType.DELETE,
        match_path="hosts.@",
    ),
    # Default rule.
    Rule(
        type=RuleType.ERROR,
        match_change_type=ChangeType.ANY,
        match_path="*",
        message=(
            "Change is not allowed. Scale action allows only addition and "
            "removal of worker and load balancer nodes."
        ),
    ),
]

MODIFY_RULES: list[Rule] = [
    Rule(
        type=RuleType.WARN,
        match_change_type=ChangeType.MODIFY,
        match_path="hosts.*.mainResourcePoolPath",
        message=(
            "Changing main resource pool location will trigger recreation of "
            "all resources bound to that resource pool, such as virtual "
            "machines and data disks."
        ),
    ),
    Rule(
        type=RuleType.WARN,
        match_change_type=ChangeType.DELETE,
        match_path="hosts.*.dataResourcePools.*",
        message="Removing data resource pool will destroy all the data on that location.",
    ),
    Rule(
        type=RuleType.WARN,
        match_change_type=ChangeType.MODIFY,
        match_path="hosts.*.dataResourcePools.*.path",
        message=(
            "Changing data resource pool location will trigger recreation of "
            "all resources bound to that resource pool, such as virtual "
            "machines and data disks"
        ),
    ),
    Rule(
        type=RuleType.ALLOW,
        match_change_type=ChangeType.ANY,
        match_path="hosts.*.dataResourcePools.*",
    ),
    Rule(
        type=RuleType.ERROR,
        match_change_type=ChangeType.ANY,
        match_path="cluster.network",
        message=(
            "Once the cluster is created, further changes to the network "
            "properties are not allowed. Such action may render the cluster "
            "unusable."
        ),
    ),
    Rule(
        type=RuleType.ERROR,
        match_change_type=ChangeType.ANY,
        match_path="cluster.nodeTemplate",
        message=(
            "Once the cluster is created, further changes to the nodeTemplate "
            "properties are not allowed. Such action may render the cluster "
            "unusable."
        ),
    ),
    Rule(
        type=RuleType.ERROR,
        match_change_type=ChangeType.DELETE,
        match_path="cluster.nodes.{master, worker, loadBalancer}.instances.@",
        message="To remove existing nodes run apply command with '--action scale' flag.",
    ),
    Rule(
        type=RuleType.ERROR,
        match_change_type=ChangeType.CREATE,
        match_path="cluster.nodes.{master, worker, loadBalancer}.instances.@",
        message="To add new nodes run apply command with '--action scale' flag.",
    ),
    Rule(
        type=RuleType.ERROR,
        match_change_type=ChangeType.ANY,
        match_path="cluster.nodes.{master, worker, loadBalancer}.default.{cpu, ram, mainDiskSize}",
        message=(
            "Changing any default physical properties of nodes (cpu, ram, "
            "mainDiskSize) is not allowed. Such action may render the cluster "
            "unusable."
        ),
    ),
    Rule(
        type=RuleType.ERROR,
        match_change_type=ChangeType.MODIFY,
        match_path="cluster.nodes.{master, worker, loadBalancer}.instances.@.{cpu, ram, mainDiskSize}",
        message=(
            "Changing any physical properties of nodes (cpu, ram, "
            "mainDiskSize) is not allowed. Such action will recreate the node."
        ),
    ),
    Rule(
        type=RuleType.ERROR,
        match_change_type=ChangeType.MODIFY,
        match_path="cluster.nodes.{master, worker, loadBalancer}.instances.@.{ip, mac}",
        message=(
            "Changing IP or MAC address of the node is not allowed. Such "
            "action may render the cluster unusable."
        ),
    ),
    Rule(
        type=RuleType.WARN,
        match_change_type=ChangeType.MODIFY,
        match_path="cluster.nodes.{master, worker}.instances.*.dataDisks.*",
        message=(
            "Changing data disk properties, will recreate the disk (removing "
            "all of its content in the process)."
        ),
    ),
    Rule(
        type=RuleType.WARN,
        match_change_type=ChangeType.DELETE,
        match_path="cluster.nodes.{master, worker}.instances.*.dataDisks.*",
        message="One or more data disks will be removed.",
    ),
    Rule(
        type=RuleType.ALLOW,
        match_change_type=ChangeType.ANY,
        match_path="cluster.nodes.loadBalancer.forwardPorts.*",
    ),
    Rule(
        type=RuleType.ERROR,
        match_change_type=ChangeType.ANY,
        match_path="cluster.nodes.loadBalancer.vip",
        message=(
            "Once the cluster is created, changing virtual IP (VIP) is not "
            "allowed. Such action may render the cluster unusable."
        ),
    ),
    Rule(
        type=RuleType.ALLOW,
        match_change_type=ChangeType.ANY,
        match_path="cluster.nodes.{master, worker, loadBalancer}.instances.*",
    ),
    Rule(
        type=RuleType.ERROR,
        match_change_type=ChangeType.ANY,
        match_path="kubernetes.version",
        message=(
            "Changing Kubernetes is allowed only when upgrading the cluster.\n"
            "To upgrade the cluster run apply command with '--action upgrade' flag."
        ),
    ),
    Rule(
        type=RuleType.ALLOW,
        match_change_type=ChangeType.ANY,
        match_path="addons",
    ),
    # Default rule.
    Rule(
        type=RuleType.ERROR,
        match_change_type=ChangeType.ANY,
        match_path="@",
        message="Change is not allowed.",
    ),
]


class ApplyAction(str, Enum):
    """Action requested by the apply command."""

    UNKNOWN = "unknown"
    CREATE = "create"
    UPGRADE = "upgrade"
    SCALE = "scale"

    def __str__(self) -> str:
        return self.value

    def rules(self) -> list[Rule]:
        """Rule set that classifies configuration changes for this action."""
        if self is ApplyAction.CREATE:
            return MODIFY_RULES
        if self is ApplyAction.SCALE:
            return SCALE_RULES
        if self is ApplyAction.UPGRADE:
            return UPGRADE_RULES
        return []


def to_apply_action(value: str) -> ApplyAction:
    """Parse an action name; an empty name means create."""
    if value in ("", ApplyAction.CREATE.value):
        return ApplyAction.CREATE
    if value == ApplyAction.UPGRADE.value:
        return ApplyAction.UPGRADE
    if value == ApplyAction.SCALE.value:
        return ApplyAction.SCALE
    raise ValueError(f"unknown cluster action: {value}")