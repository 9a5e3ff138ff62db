"""Command line interface."""

from __future__ import annotations

import argparse
import posixpath
import sys

from kubitect.app import create_app_context
from kubitect.clusters import MetaClusters, all_clusters
from kubitect.env import PROJECT_VERSION


class _CommandError(Exception):
    pass


def long_desc(text: str) -> str:
    """Strip leading and trailing spaces from each line and from the whole text."""
    return "\n".join(line.strip() for line in text.split("\n")).strip()


def example(text: str) -> str:
    """Strip each line and indent it by two spaces."""
    lines = text.split("\n")
    if lines and lines[0] == "":
        lines = lines[1:]
    return "\n".join("  " + line.strip() for line in lines).rstrip(" ")


def preset_name(path: str) -> str:
    """File name without extension of the given slash-separated path."""
    if path == "":
        base = "."
    else:
        stripped = path.rstrip("/")
        base = posixpath.basename(stripped) if stripped else "/"
    dot = base.rfind(".")
    ext = base[dot:] if dot >= 0 else ""
    if base == ext:
        return base
    return base[: len(base) - len(ext)]


ROOT_LONG = long_desc("""
    Kubitect is a CLI tool that helps you manage multiple Kubernetes clusters.""")

EXPORT_SHORT = "Export specific configuration file"
EXPORT_LONG = long_desc("""
    Exports specific configuration file""")
EXPORT_EXAMPLE = example("""
    Export kubeconfig for cluster 'cls-name':
    > kubitect export kubeconfig --cluster cls-name""")

EXPORT_CONFIG_SHORT = "Export cluster config file"
EXPORT_CONFIG_LONG = long_desc("""
    Command export config outputs cluster's configuration file to standard output.""")
EXPORT_CONFIG_EXAMPLE = example("""
    To save a config to the specific file, redirect command output to that file:
    > kubitect export config --cluster lake > cls.yaml""")

EXPORT_KC_SHORT = "Export cluster kubeconfig file"
EXPORT_KC_LONG = long_desc("""
    Command export kubeconfig outputs cluster's kubeconfig file to standard output.""")
EXPORT_KC_EXAMPLE = example("""
    To save a kubeconfig to the specific file, redirect command output to that file:
    > kubitect export kubeconfig --cluster lake > lake.yaml

    Use kubeconfig with kubectl to access cluster:
    > kubectl --kubeconfig lake.yaml get nodes""")

LIST_SHORT = "List Kubitect resources"
LIST_LONG = long_desc("""
    List Kubitect resources.""")

LIST_CLUSTERS_SHORT = "List clusters"
LIST_CLUSTERS_LONG = long_desc("""
    Command list clusters lists all clusters including local clusters if
    a current (working) directory is Kubitect project.""")
LIST_CLUSTERS_EXAMPLE = example("""
    List all clusters:
    > kubitect list clusters""")


def _examples(text: str) -> str:
    return "Examples:\n" + text


def _find_single_cluster(name: str):
    try:
        clusters = all_clusters(create_app_context())
    except OSError:
        clusters = MetaClusters()

    cluster = clusters.find_by_name(name)
    if cluster is None:
        raise _CommandError(f"cluster '{name}' does not exist")

    count = clusters.count_by_name(name)
    if count > 1:
        raise _CommandError(
            f"multiple clusters ({count}) have been found with the name '{name}'"
        )
    return cluster


def _print_file(path: str) -> None:
    with open(path, encoding="utf-8") as fh:
        sys.stdout.write(fh.read())


def _export_config(args: argparse.Namespace) -> None:
    cluster = _find_single_cluster(args.cluster)
    if not cluster.contains_applied_config():
        raise _CommandError(f"cluster '{args.cluster}' does not contain a config file")
    _print_file(cluster.applied_config_path)


def _export_kubeconfig(args: argparse.Namespace) -> None:
    cluster = _find_single_cluster(args.cluster)
    if not cluster.contains_kubeconfig():
        raise _CommandError(f"cluster '{args.cluster}' does not have a Kubeconfig file")
    _print_file(cluster.kubeconfig_path)


def _list_clusters(args: argparse.Namespace) -> None:
    clusters = all_clusters(create_app_context())
    if not clusters:
        print("No clusters initialized yet. Run 'kubitect apply' to create the cluster.")
        return

    print("Clusters:")
    for cluster in clusters:
        tags = []
        if cluster.contains_tf_state_config():
            tags.append("active")
        if cluster.local:
            tags.append("local")
        if tags:
            print(f"  - {cluster.name} ({', '.join(tags)})")
        else:
            print(f"  - {cluster.name}")


def build_parser() -> argparse.ArgumentParser:
    """Build the argument parser for all commands."""
    fmt = argparse.RawDescriptionHelpFormatter
    parser = argparse.ArgumentParser(prog="kubitect", description=ROOT_LONG, formatter_class=fmt)
    parser.add_argument("--version", action="version", version=PROJECT_VERSION)
    commands = parser.add_subparsers(dest="command", title="commands")

    export_parser = commands.add_parser(
        "export", help=EXPORT_SHORT, description=EXPORT_LONG,
        epilog=_examples(EXPORT_EXAMPLE), formatter_class=fmt,
    )
    export_parser.set_defaults(help_parser=export_parser)
    export_commands = export_parser.add_subparsers(dest="export_command", title="commands")

    kc = export_commands.add_parser(
        "kubeconfig", help=EXPORT_KC_SHORT, description=EXPORT_KC_LONG,
        epilog=_examples(EXPORT_KC_EXAMPLE), formatter_class=fmt,
    )
    kc.add_argument("--cluster", required=True, help="specify the cluster to be used")
    kc.set_defaults(func=_export_kubeconfig)

    cfg = export_commands.add_parser(
        "config", help=EXPORT_CONFIG_SHORT, description=EXPORT_CONFIG_LONG,
        epilog=_examples(EXPORT_CONFIG_EXAMPLE), formatter_class=fmt,
    )
    cfg.add_argument("--cluster", required=True, help="specify the cluster to be used")
    cfg.set_defaults(func=_export_config)

    list_parser = commands.add_parser(
        "list", aliases=["ls"], help=LIST_SHORT, description=LIST_LONG, formatter_class=fmt,
    )
    list_parser.set_defaults(help_parser=list_parser)
    list_commands = list_parser.add_subparsers(dest="list_command", title="commands")

    lc = list_commands.add_parser(
        "clusters", aliases=["cluster"], help=LIST_CLUSTERS_SHORT,
        description=LIST_CLUSTERS_LONG, epilog=_examples(LIST_CLUSTERS_EXAMPLE),
        formatter_class=fmt,
    )
    lc.set_defaults(func=_list_clusters)

    return parser


def main(argv: list[str] | None = None) -> int:
    """Run the command line; returns the process exit code."""
    parser = build_parser()
    args = parser.parse_args(argv)

    func = getattr(args, "func", None)
    if func is None:
        getattr(args, "help_parser", parser).print_help(sys.stdout)
        return 0

    try:
        func(args)
    except (_CommandError, OSError) as err:
        print(f"Error: {err}", file=sys.stderr)
        return 1
    return 0