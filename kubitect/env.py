"""Project-wide constants shared by the other modules."""

PROJECT_VERSION = "v3.5.0"
K3S_VERSION = "v0.0.1"
KUBESPRAY_VERSION = "v2.26.0"
KUBERNETES_VERSION = "v1.30.4"
TERRAFORM_VERSION = "1.5.2"

# Applications that must be available on PATH.
PROJECT_REQUIRED_APPS: list[str] = [
    "virtualenv",
    "python3",
    "git",
]

# Files and directories copied from bundled resources when a cluster is created.
PROJECT_REQUIRED_FILES: list[str] = [
    "ansible/",
    "terraform/",
]

# Options accepted by "apply --action".
PROJECT_APPLY_ACTIONS: tuple[str, ...] = (
    "create",
    "upgrade",
    "scale",
)

# Supported Kubernetes version ranges.
PROJECT_K8S_VERSIONS: list[str] = [
    "v1.30.0 - v1.30.4",
    "v1.29.0 - v1.29.7",
    "v1.28.0 - v1.28.12",
]