"""Application context: the directories the tool works with."""

from __future__ import annotations

import os
import shutil
from dataclasses import dataclass

from kubitect import env

DEFAULT_HOME_DIR = ".kubitect"
DEFAULT_SHARE_DIR = "share"
DEFAULT_CLUSTERS_DIR = "clusters"


@dataclass(frozen=True)
class AppContext:
    """Paths and flags that every cluster action runs with."""

    working_dir: str
    home_dir: str
    local: bool = False
    show_terraform_plan: bool = False

    @property
    def share_dir(self) -> str:
        """Directory holding binaries shared among all clusters."""
        return os.path.join(self.home_dir, DEFAULT_SHARE_DIR)

    @property
    def clusters_dir(self) -> str:
        """Directory where clusters are created."""
        return os.path.join(self.home_dir, DEFAULT_CLUSTERS_DIR)

    @property
    def local_clusters_dir(self) -> str:
        """Directory where local clusters are created."""
        return os.path.join(self.working_dir, DEFAULT_HOME_DIR, DEFAULT_CLUSTERS_DIR)

    def verify_requirements(self) -> None:
        """Raise RuntimeError if any required application is not on PATH."""
        missing = [app for app in env.PROJECT_REQUIRED_APPS if not app_exists(app)]
        if missing:
            raise RuntimeError(f"Some requirements are not met: [{' '.join(missing)}]")


def create_app_context(local: bool = False, show_terraform_plan: bool = False) -> AppContext:
    """Build a context rooted in the user's home, or in the working directory if local."""
    working_dir = os.getcwd()
    base = working_dir if local else os.path.expanduser("~")
    return AppContext(
        working_dir=working_dir,
        home_dir=os.path.join(base, DEFAULT_HOME_DIR),
        local=local,
        show_terraform_plan=show_terraform_plan,
    )


def app_exists(command: str) -> bool:
    """Whether a command with the given name is found on PATH."""
    return shutil.which(command) is not None