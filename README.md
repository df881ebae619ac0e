# pvsadm

A Python library for looking after Power Virtual Server (PowerVS)
workspaces: deciding which resources fall inside a purge window, selecting
and deleting images, SSH keys, networks, virtual machines and volumes,
keeping a JSON-lines audit trail of deletions, reading and writing sync
specifications, and handling gzip and tar image files.

## Modules

| Module | Contents |
| --- | --- |
| `pvsadm.purge` | `is_purgeable(candidate, before, since)` |
| `pvsadm.purgecmd` | `Workspace`, `PurgeError`, `validate_purge_options`, `purge_images`, `purge_keys`, `purge_networks`, `purge_vms`, `purge_volumes` |
| `pvsadm.resources` | `ImageClient`, `InstanceClient`, `KeyClient`, `NetworkClient`, `VolumeClient` |
| `pvsadm.services` | `CloudConnectionClient`, `DatacenterClient`, `DHCPClient`, `EventsClient`, `JobClient`, `StorageTierClient` |
| `pvsadm.environments` | `ENVIRONMENTS`, `list_environments()`, `get_environment(env)`, `EnvironmentNotFoundError` |
| `pvsadm.audit` | `AuditLog`, `set_logger`, `log`, `delete_if_empty` |
| `pvsadm.spec` | `Source`, `TargetItem`, `Spec`, `load_specs`, `dump_specs` |
| `pvsadm.specgen` | `generate_random_string`, `generate_spec` |
| `pvsadm.archive` | `gzip_it`, `gunzip_it`, `is_gzip`, `sanitize_extract_path`, `untar` |
| `pvsadm.table` | `Table`, `format_value` |
| `pvsadm.helpers` | `format_processor`, `format_memory`, `contains`, `ensure_prerequisites_are_set`, `poll_until`, `spinner_poll_until` |
| `pvsadm.cmdexec` | `run_cmd(cmd, *args)` |
| `pvsadm.prompts` | `select_item`, `ask_confirmation`, `read_user_input` |
| `pvsadm.options` | `Options`, `ImageCommandOptions`, `TIMEOUT` |
| `pvsadm.constants` | Service and plan identifiers, `DELETE_PROMPT_MESSAGE` |
| `pvsadm.version` | `get()`, `version_line()` |

## The purge window

`is_purgeable` takes a candidate datetime (naive values are taken as UTC)
and two `timedelta`s:

* neither `before` nor `since` set: every candidate qualifies;
* only `before` set: candidates older than *now − before* qualify;
* only `since` set: candidates newer than *now − since* qualify;
* both set: nothing qualifies.

```python
from datetime import datetime, timedelta, timezone

from pvsadm.purge import is_purgeable

ten_hours_ago = datetime.now(timezone.utc) - timedelta(hours=10)
is_purgeable(ten_hours_ago, timedelta(hours=9), timedelta(0))   # True
is_purgeable(ten_hours_ago, timedelta(hours=11), timedelta(0))  # False
```

## Resource clients

Each client in `pvsadm.resources` and `pvsadm.services` is built from an API
object you supply and an optional workspace id, and forwards `get`,
`get_all`, `delete` and similar calls to it. The resource clients add the
selection used for purging:

* `ImageClient.get_all_purgeable`, `InstanceClient.get_all_purgeable`,
  `KeyClient.get_all_purgeable` filter by name (server name for instances)
  with a regular expression and by creation date;
* `VolumeClient.get_all_purgeable_by_last_update_date` filters by name and
  last update date;
* `NetworkClient.get_all_purgeable` filters by name only.

An empty expression selects everything, except for keys, where the
expression is always applied and only key names are returned. Records may be
mappings or objects, with snake_case or camelCase field names
(`creation_date` or `creationDate`), and dates may be `datetime` values or
ISO 8601 strings. `EventsClient.get_since(since)` calls the API's
`get_events` with the workspace id, a UTC `from_time` and `TIMEOUT`.

## Purging

Each `purge_*` function in `pvsadm.purgecmd` takes a `Workspace` (a name,
the resource clients and an optional output stream for tables), an
`Options` and an optional `confirm` callable (defaulting to
`pvsadm.prompts.ask_confirmation`). It lists the candidates, prints them as
a table, and unless `dry_run` is set asks for confirmation (skipped when
`no_prompt` is set) before deleting. It returns the names it deleted.

* With `ignore_errors` set a failed deletion is logged and the run goes on;
  otherwise the error is raised (as `PurgeError` for keys).
* Failures to list candidates are raised as `PurgeError`.
* `purge_keys` requires `expr` and does not look at `dry_run`.
* `purge_keys` and `purge_vms` refuse options with both `since` and `before`.
* `purge_volumes` deletes only volumes in the `available` state.
* `purge_networks(..., delete_ports=..., delete_instances=...)` can also
  delete each network's ports and the virtual machines attached to them.
* After each deletion attempt an entry is written with `pvsadm.audit.log`
  when an audit log has been installed.

`validate_purge_options` raises `PurgeError` unless an API key and a
workspace id or name are set.

## Audit trail

`AuditLog(path)` appends one JSON object per line with `name`, `op`,
`value` and a UTC `timestamp`; it is thread-safe and a context manager.
`set_logger` installs it for the module-level `log`, which raises
`RuntimeError` when none is installed. `delete_if_empty(path)` removes the
file if nothing was written to it.

## Environments

```python
from pvsadm.environments import EnvironmentNotFoundError, get_environment, list_environments

list_environments()          # ["test", "prod"]
endpoints = get_environment("prod")

try:
    get_environment("fake")
except EnvironmentNotFoundError:
    ...
```

## Sync specs

```python
from pvsadm.spec import dump_specs, load_specs

with open("spec.yaml") as handle:
    specs = load_specs(handle.read())
text = dump_specs(specs)
```

Each spec has a `source` (`bucket`, `cos`, `object`, `storageClass`,
`region`) and a list of `target` items (`bucket`, `storageClass`,
`region`). `pvsadm.specgen.generate_spec(n)` builds a random spec with `n`
targets.

## Files and processes

* `gzip_it`, `gunzip_it` compress and decompress; `is_gzip` checks the gzip
  signature and raises `EOFError` on an empty file.
* `untar(tarball, target, filename)` extracts the entries of an
  uncompressed tar whose names match a shell pattern; `sanitize_extract_path`
  raises `ValueError` for paths that would land outside the target.
* `run_cmd` runs a program, echoes its output and returns
  `(exit code, stdout, stderr)`; a program that cannot be found gives exit
  code 1 and the reason in place of stderr.
* `poll_until` and `spinner_poll_until` call a condition at an interval and
  raise `TimeoutError` when the timeout passes first; the latter shows a
  spinner on stderr.

## What the package does not do

The package has no command-line program and no way of reaching the cloud on
its own: it does not authenticate, look up workspaces or talk to the
service APIs. The clients wrap API objects that the caller provides. It does
not upload to or copy between object storage buckets, import images, or
convert disk images; `ImageCommandOptions` only holds settings for such
work.

## Tests

The test suite uses pytest, available through the `test` extra.