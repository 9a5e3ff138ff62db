"""Find Kubernetes cluster directories, export their files, and rule on configuration changes."""

__version__ = "3.5.0"