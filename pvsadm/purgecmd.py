"""Purge commands: delete images, SSH keys, networks, VMs and volumes of a workspace."""

from __future__ import annotations

import logging
from collections.abc import Callable, Mapping
from dataclasses import dataclass
from typing import IO, Any

from . import audit
from .constants import DELETE_PROMPT_MESSAGE
from .helpers import ensure_prerequisites_are_set, format_memory, format_processor
from .options import Options
from .prompts import ask_confirmation
from .resources import ImageClient, InstanceClient, KeyClient, NetworkClient, VolumeClient
from .table import Table, format_value

_log = logging.getLogger(__name__)

Confirm = Callable[[str], bool]


class PurgeError(Exception):
    """Raised when a purge command cannot run or a deletion fails."""


@dataclass
class Workspace:
    """A workspace and the clients used to reach its resources."""

    name: str
    images: ImageClient | None = None
    instances: InstanceClient | None = None
    keys: KeyClient | None = None
    networks: NetworkClient | None = None
    volumes: VolumeClient | None = None
    output: IO[str] | None = None

    def table(self) -> Table:
        return Table(self.output)


def _get(record: Any, *names: str) -> Any:
    for name in names:
        if isinstance(record, Mapping):
            if name in record:
                return record[name]
        elif hasattr(record, name):
            return getattr(record, name)
    return None


def _require(client: Any, what: str) -> Any:
    if client is None:
        raise PurgeError(f"workspace has no {what} client")
    return client


def _confirmed(options: Options, confirm: Confirm | None, kind: str) -> bool:
    if options.no_prompt:
        return True
    ask = confirm if confirm is not None else ask_confirmation
    return bool(ask(DELETE_PROMPT_MESSAGE % kind))


def _audit(kind: str, workspace: Workspace, name: str) -> None:
    try:
        audit.log(kind, "delete", f"{workspace.name}:{name}")
    except RuntimeError as err:
        _log.debug("audit entry not written: %s", err)


def _check_window(options: Options) -> None:
    if options.since and options.before:
        raise PurgeError("--since and --before are mutually exclusive")


def _log_workspace(kind: str, options: Options) -> None:
    if options.workspace_name:
        _log.info("Purge %s for the workspace: %s", kind, options.workspace_name)
    else:
        _log.info("Purge %s for the workspace ID: %s", kind, options.workspace_id)


def validate_purge_options(options: Options) -> None:
    """Raise PurgeError unless an API key and a workspace id or name are set."""
    try:
        ensure_prerequisites_are_set(
            options.api_key, options.workspace_id, options.workspace_name
        )
    except ValueError as err:
        raise PurgeError(str(err)) from err


def _delete(options: Options, action: Callable[[], None], failure: str, wrap: bool = False) -> bool:
    """Run one deletion; return whether it succeeded."""
    try:
        action()
    except Exception as err:
        if options.ignore_errors:
            _log.error("%s: %s", failure, err)
            return False
        if wrap:
            raise PurgeError(f"{failure}, err: {err}") from err
        raise
    return True


def purge_images(workspace: Workspace, options: Options, confirm: Confirm | None = None) -> list[str]:
    """Delete the purgeable images; return the names deleted."""
    _log_workspace("images", options)
    client = _require(workspace.images, "image")
    try:
        images = client.get_all_purgeable(options.before, options.since, options.expr)
    except Exception as err:
        raise PurgeError(f"failed to get the list of images: {err}") from err

    workspace.table().render(images, ["href", "specifications"])
    deleted: list[str] = []
    if options.dry_run or not images or not _confirmed(options, confirm, "images"):
        return deleted
    for image in images:
        name = _get(image, "name")
        image_id = _get(image, "image_id", "imageID")
        _log.info("Deleting image: %s with ID: %s", name, image_id)
        if _delete(
            options,
            lambda: client.delete(image_id),
            "error occurred while deleting the image",
        ):
            deleted.append(name)
        _audit("images", workspace, name)
    return deleted


def purge_keys(workspace: Workspace, options: Options, confirm: Confirm | None = None) -> list[str]:
    """Delete the SSH keys matching the expression; return the names deleted."""
    if not options.expr:
        raise PurgeError("--regexp is required and shouldn't be empty string")
    _check_window(options)
    _log_workspace("SSH keys", options)
    client = _require(workspace.keys, "key")
    try:
        keys = client.get_all_purgeable(options.before, options.since, options.expr)
    except Exception as err:
        raise PurgeError(f"failed to get the ssh keys, err: {err}") from err

    _log.info("keys matched are %s", keys)
    deleted: list[str] = []
    if not keys or not _confirmed(options, confirm, "keys"):
        return deleted
    for key in keys:
        if _delete(
            options,
            lambda: client.delete(key),
            "failed to delete a key",
            wrap=True,
        ):
            deleted.append(key)
        _log.info("Successfully deleted a key, id: %s", key)
    return deleted


def _purge_ports(
    workspace: Workspace,
    options: Options,
    network: Any,
    delete_ports: bool,
    delete_instances: bool,
) -> None:
    networks = _require(workspace.networks, "network")
    network_id = _get(network, "network_id", "networkID")
    network_name = _get(network, "name")
    try:
        ports = networks.get_all_ports(network_id)
    except Exception as err:
        raise PurgeError(f"failed to get the list of ports: {err}") from err

    port_list = _get(ports, "ports")
    if port_list is None:
        port_list = ports if isinstance(ports, list) else []
    for port in port_list:
        pvm_instance = _get(port, "pvm_instance", "pvmInstance")
        if delete_instances and pvm_instance:
            instances = _require(workspace.instances, "instance")
            instance_id = _get(pvm_instance, "pvm_instance_id", "pvmInstanceID")
            _delete(
                options,
                lambda: instances.delete(instance_id),
                f"error occurred while deleting PVMInstance: {instance_id} "
                f"associated with network {network_name}",
            )
            _log.info("Successfully deleted a instance %s using network '%s'", instance_id, network_name)
        if delete_ports:
            port_id = _get(port, "port_id", "portID")
            _delete(
                options,
                lambda: networks.delete_port(network_id, port_id),
                f"error occurred while deleting port: {port_id} "
                f"associated with network {network_name}",
            )
            _log.info("Successfully deleted a port %s using network '%s'", port_id, network_name)


def purge_networks(
    workspace: Workspace,
    options: Options,
    confirm: Confirm | None = None,
    delete_ports: bool = False,
    delete_instances: bool = False,
) -> list[str]:
    """Delete the networks matching the expression, optionally with their ports and instances."""
    client = _require(workspace.networks, "network")
    _log_workspace("networks", options)
    try:
        networks = client.get_all_purgeable(options.expr)
    except Exception as err:
        raise PurgeError(f"failed to get the list of networks: {err}") from err

    workspace.table().render(networks, ["href"])
    deleted: list[str] = []
    if options.dry_run or not networks or not _confirmed(options, confirm, "networks"):
        return deleted
    for network in networks:
        if delete_instances or delete_ports:
            _purge_ports(workspace, options, network, delete_ports, delete_instances)
        name = _get(network, "name")
        network_id = _get(network, "network_id", "networkID")
        _log.info("Deleting network: %s with ID: %s", name, network_id)
        if _delete(
            options,
            lambda: client.delete(network_id),
            "error occurred while deleting the network",
        ):
            deleted.append(name)
        _audit("networks", workspace, name)
    return deleted


def _vm_row(instance: Any, details: Any) -> list[str]:
    public: list[str] = []
    private: list[str] = []
    for address in _get(details, "networks") or []:
        external = _get(address, "external_ip", "externalIP") or ""
        if external:
            public.append(external)
        private.append(_get(address, "ip_address", "ipAddress") or "")
    ip_text = f"External: {', '.join(public)}\nPrivate: {', '.join(private)}"
    health = _get(instance, "health")
    health_status = (_get(health, "status") if health is not None else None) or ""
    status = f"Status: {_get(instance, 'status')}\nHealth: {health_status}"
    return [
        _get(instance, "server_name", "serverName"),
        ip_text,
        _get(instance, "image_id", "imageID"),
        format_processor(_get(instance, "processors") or 0),
        format_memory(_get(instance, "memory") or 0),
        status,
        format_value(_get(instance, "creation_date", "creationDate")),
    ]


def purge_vms(workspace: Workspace, options: Options, confirm: Confirm | None = None) -> list[str]:
    """Delete the purgeable virtual machines; return the server names deleted."""
    _check_window(options)
    client = _require(workspace.instances, "instance")
    instances = client.get_all_purgeable(options.before, options.since, options.expr)
    if not instances:
        _log.info("No data found to display")
        return []

    table = workspace.table()
    table.set_header(["Name", "IP Addresses", "Image", "CPUS", "RAM", "STATUS", "Creation Date"])
    for instance in instances:
        instance_id = _get(instance, "pvm_instance_id", "pvmInstanceID")
        try:
            details = client.get(instance_id)
        except Exception as err:
            _log.error("error occurred while getting the vm %s", err)
            continue
        table.append(_vm_row(instance, details))
    table.render_rows()

    deleted: list[str] = []
    if options.dry_run or not _confirmed(options, confirm, "instances"):
        return deleted
    for instance in instances:
        name = _get(instance, "server_name", "serverName")
        instance_id = _get(instance, "pvm_instance_id", "pvmInstanceID")
        _log.info("Deleting instance: %s with ID: %s", name, instance_id)
        if _delete(
            options,
            lambda: client.delete(instance_id),
            "error occurred while deleting the vm",
        ):
            deleted.append(name)
        _audit("vms", workspace, name)
    return deleted


def purge_volumes(workspace: Workspace, options: Options, confirm: Confirm | None = None) -> list[str]:
    """Delete the purgeable volumes that are in the available state."""
    client = _require(workspace.volumes, "volume")
    try:
        volumes = client.get_all_purgeable_by_last_update_date(
            options.before, options.since, options.expr
        )
    except Exception as err:
        raise PurgeError(f"failed to get the list of volumes: {err}") from err
    if not volumes:
        _log.info("No data found to display")
        return []

    table = workspace.table()
    table.set_header(["Name", "Volume ID", "State", "Last Update Date"])
    for volume in volumes:
        table.append([
            _get(volume, "name"),
            _get(volume, "volume_id", "volumeID"),
            _get(volume, "state"),
            format_value(_get(volume, "last_update_date", "lastUpdateDate")),
        ])
    table.render_rows()

    deleted: list[str] = []
    if options.dry_run or not _confirmed(options, confirm, "volumes"):
        return deleted
    _log.info("Deleting all the volumes in available state")
    for volume in volumes:
        if _get(volume, "state") != "available":
            continue
        name = _get(volume, "name")
        volume_id = _get(volume, "volume_id", "volumeID")
        _log.info("Deleting volume: %s with ID: %s", name, volume_id)
        if _delete(
            options,
            lambda: client.delete_volume(volume_id),
            "error occurred while deleting the volume",
        ):
            deleted.append(name)
        _audit("volumes", workspace, name)
    return deleted