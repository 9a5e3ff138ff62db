# kubitect

Kubitect is a command-line tool and Python library for working with
Kubernetes cluster directories. Each cluster lives in its own directory.
By default these directories are under `~/.kubitect/clusters`. A project
can also keep clusters of its own in `./.kubitect/clusters` inside the
working directory. Kubitect finds both kinds.

The library also contains a rule engine. The rules decide which changes to
a cluster configuration are allowed for each kind of apply action.

## Installation

```
pip install .
```

To run the test suite:

```
pip install ".[test]"
pytest
```

## Command line

List every known cluster:

```
kubitect list clusters
```

`kubitect ls cluster` is the same command. Each cluster is marked as
follows:

- `active` if its directory contains a Terraform state file
  (`config/terraform/terraform.tfstate`);
- `local` if it was found in the working directory.

If there are no clusters, the command prints a short notice instead. The
command fails if the global clusters directory cannot be read.

Print the configuration that was last applied to a cluster
(`config/kubitect-applied.yaml`). To keep it, redirect the output to a
file:

```
kubitect export config --cluster lake > cls.yaml
```

Print a cluster's kubeconfig (`config/admin.conf`) and use it with
kubectl:

```
kubitect export kubeconfig --cluster lake > lake.yaml
kubectl --kubeconfig lake.yaml get nodes
```

The export commands print `Error: ...` to standard error and exit with
status 1 in these cases:

- the named cluster does not exist;
- more than one cluster has that name;
- the cluster does not have the requested file.

`kubitect --version` prints the version. `kubitect --help`,
`kubitect export` and `kubitect list` show the available commands and
their options.

## Library

- `kubitect.rules` defines `RulePath`, `RulePathSegment` and `Rule`.
  A rule path is a dot-separated path. It may use these elements:
  - `*` wildcards;
  - `@` anchors;
  - `{a, b}` option blocks;
  - a trailing `!`, which makes the path match only a change path of
    exactly the same length.

  `RulePath.matches(change_path)` tests a change path against the rule
  path. `RulePath.find_anchor_path(change_path)` returns the part of the
  change path up to the anchored segment. `validate()` on a rule, path or
  segment raises `RuleValidationError` if it is malformed.

  `RuleType` holds the priorities `ALLOW`, `WARN`, `ERROR` and `IGNORE`.
  `normalize_rule_type` and `rule_type_name` map any integer priority onto
  one of these.
- `kubitect.rule_lists` holds the rule sets `MODIFY_RULES`, `SCALE_RULES`
  and `UPGRADE_RULES`.
  - `to_apply_action(name)` accepts `create` (or an empty name), `upgrade`
    and `scale`. Any other name raises `ValueError`.
  - `ApplyAction.rules()` returns the rule set for the action.
- `kubitect.events` matches changes against rules.
  - `match_rule(rules, change_type, change_path)` picks the best rule for a
    change. When several rules match, the tie-breaks are, in order:
    1. the longer path wins;
    2. the path with fewer wildcards wins;
    3. the higher rule priority wins.
  - `generate_events(changes, rules, lookup=None)` validates the rules. It
    then turns a list of `Change` objects into `Events`. Changes that match
    an anchored rule are grouped into one event.
  - `Events.filter`, `filter_by_rule_type` and `filter_by_action` select
    events.
- `kubitect.app` provides `create_app_context(local=False,
  show_terraform_plan=False)`. It returns an `AppContext` that holds the
  home, share, clusters and local clusters directories.
  `AppContext.verify_requirements()` raises `RuntimeError` if any of
  `virtualenv`, `python3` or `git` is missing from the `PATH`.
- `kubitect.clusters` provides `ClusterMeta`, with the paths of a
  cluster's files, and `all_clusters(ctx)`. `all_clusters` returns a
  `MetaClusters` list, which supports `names()`, `find_by_name()` and
  `count_by_name()`.

## What this package does not do

Kubitect does not do any of the following:

- create, scale, upgrade or destroy clusters;
- provision virtual machines;
- install Kubernetes;
- ship configuration presets.

There is no `apply` or `destroy` command. The `list clusters` notice does
mention `kubitect apply`, but this package does not provide that command.

The package also does not compare two configuration files to find changes.
`generate_events` works on a list of `Change` objects that the caller
supplies.