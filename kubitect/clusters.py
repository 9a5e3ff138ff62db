"""Cluster metadata and discovery of existing clusters."""

from __future__ import annotations

import os
from dataclasses import dataclass

from kubitect.app import AppContext

DEFAULT_CONFIG_DIR = "config"
DEFAULT_CACHE_DIR = "cache"
DEFAULT_TERRAFORM_DIR = os.path.join(DEFAULT_CONFIG_DIR, "terraform")

DEFAULT_NEW_CONFIG_FILENAME = "kubitect.yaml"
DEFAULT_APPLIED_CONFIG_FILENAME = "kubitect-applied.yaml"
DEFAULT_INFRA_CONFIG_FILENAME = "infrastructure.yaml"
DEFAULT_TERRAFORM_STATE_FILENAME = "terraform.tfstate"
DEFAULT_KUBECONFIG_FILENAME = "admin.conf"


@dataclass
class ClusterMeta:
    """Name and location of a cluster, with paths of its files."""

    ctx: AppContext
    name: str
    path: str
    local: bool = False

    @property
    def config_dir(self) -> str:
        return os.path.join(self.path, DEFAULT_CONFIG_DIR)

    @property
    def cache_dir(self) -> str:
        clusters_dir = self.ctx.local_clusters_dir if self.local else self.ctx.clusters_dir
        return os.path.normpath(os.path.join(clusters_dir, "..", DEFAULT_CACHE_DIR, self.name))

    @property
    def applied_config_path(self) -> str:
        return os.path.join(self.config_dir, DEFAULT_APPLIED_CONFIG_FILENAME)

    @property
    def infrastructure_config_path(self) -> str:
        return os.path.join(self.config_dir, DEFAULT_INFRA_CONFIG_FILENAME)

    @property
    def tf_state_path(self) -> str:
        return os.path.join(self.path, DEFAULT_TERRAFORM_DIR, DEFAULT_TERRAFORM_STATE_FILENAME)

    @property
    def kubeconfig_path(self) -> str:
        return os.path.join(self.config_dir, DEFAULT_KUBECONFIG_FILENAME)

    @property
    def private_ssh_key_path(self) -> str:
        return os.path.join(self.config_dir, ".ssh", "id_rsa")

    def contains_applied_config(self) -> bool:
        return os.path.exists(self.applied_config_path)

    def contains_tf_state_config(self) -> bool:
        return os.path.exists(self.tf_state_path)

    def contains_kubeconfig(self) -> bool:
        return os.path.exists(self.kubeconfig_path)


class MetaClusters(list):
    """A list of cluster metadata with lookup helpers."""

    def names(self) -> list[str]:
        return [c.name for c in self]

    def find_by_name(self, name: str) -> ClusterMeta | None:
        return next((c for c in self if c.name == name), None)

    def count_by_name(self, name: str) -> int:
        return sum(1 for c in self if c.name == name)


def all_clusters(ctx: AppContext) -> MetaClusters:
    """Clusters from the global directory, followed by local ones if any.

    Raises OSError if the global clusters directory cannot be read; an
    unreadable local directory is ignored.
    """
    found = _clusters(ctx, local=False)
    try:
        found.extend(_clusters(ctx, local=True))
    except OSError:
        pass
    return found


def _clusters(ctx: AppContext, local: bool) -> MetaClusters:
    if local:
        if ctx.local_clusters_dir == ctx.clusters_dir:
            return MetaClusters()
        directory = ctx.local_clusters_dir
    else:
        directory = ctx.clusters_dir

    try:
        entries = sorted(os.scandir(directory), key=lambda e: e.name)
    except OSError as err:
        raise OSError(f"failed to read clusters directory: {err}") from err

    return MetaClusters(
        ClusterMeta(ctx=ctx, name=e.name, path=os.path.join(directory, e.name), local=local)
        for e in entries
        if e.is_dir()
    )