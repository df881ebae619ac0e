"""Workspace resource clients: images, instances, SSH keys, networks, volumes.

Each client wraps an API object bound to one workspace and adds the
selection logic used when purging resources.
"""

from __future__ import annotations

import re
from collections.abc import Mapping
from datetime import datetime, timedelta
from typing import Any

from .purge import is_purgeable


def _value(record: Any, *names: str) -> Any:
    """Return the first of ``names`` present on ``record`` (mapping or object)."""
    for name in names:
        if isinstance(record, Mapping):
            if name in record:
                return record[name]
        elif hasattr(record, name):
            return getattr(record, name)
    raise KeyError(names[0])


def _items(result: Any, *keys: str) -> list[Any]:
    """Return the records held by a listing result."""
    if result is None:
        return []
    if isinstance(result, Mapping):
        for key in keys:
            if key in result:
                return list(result[key] or [])
        return []
    for key in keys:
        if hasattr(result, key):
            return list(getattr(result, key) or [])
    return list(result)


def _to_datetime(value: Any) -> datetime:
    if isinstance(value, datetime):
        return value
    if isinstance(value, str):
        text = value.strip()
        if text.endswith(("Z", "z")):
            text = text[:-1] + "+00:00"
        return datetime.fromisoformat(text)
    raise TypeError(f"cannot interpret {value!r} as a date")


def _matcher(expr: str) -> re.Pattern[str] | None:
    return re.compile(expr) if expr else None


class ImageClient:
    """Images of a workspace."""

    def __init__(self, api: Any, instance_id: str = "") -> None:
        self.api = api
        self.instance_id = instance_id

    def get(self, image_id: str) -> Any:
        return self.api.get(image_id)

    def get_all(self) -> Any:
        return self.api.get_all()

    def delete(self, image_id: str) -> None:
        self.api.delete(image_id)

    def create_cos_image(self, body: Mapping[str, Any]) -> Any:
        return self.api.create_cos_image(dict(body))

    def import_image(
        self,
        image_name: str,
        s3_filename: str,
        region: str,
        access_key: str,
        secret_key: str,
        bucket_name: str,
        storage_type: str,
        bucket_access: str,
    ) -> Any:
        """Start a job importing an image from an object storage bucket."""
        body: dict[str, Any] = {
            "imageName": image_name,
            "imageFilename": s3_filename,
            "region": region,
            "bucketName": bucket_name,
            "bucketAccess": bucket_access,
        }
        optional = {
            "accessKey": access_key,
            "secretKey": secret_key,
            "storageType": storage_type,
        }
        body.update({key: value for key, value in optional.items() if value})
        return self.create_cos_image(body)

    def get_all_purgeable(self, before: timedelta, since: timedelta, expr: str) -> list[Any]:
        """Return images whose name matches ``expr`` and whose creation date fits the window."""
        pattern = _matcher(expr)
        candidates = []
        for image in _items(self.get_all(), "images"):
            if pattern is not None and not pattern.search(_value(image, "name")):
                continue
            created = _to_datetime(_value(image, "creation_date", "creationDate"))
            if not is_purgeable(created, before, since):
                continue
            candidates.append(image)
        return candidates

    def get_image_by_name(self, image_name: str) -> Any | None:
        """Return the first image called ``image_name``, or None."""
        for image in _items(self.get_all(), "images"):
            if _value(image, "name") == image_name:
                return image
        return None


class InstanceClient:
    """Virtual machine instances of a workspace."""

    def __init__(self, api: Any, instance_id: str = "") -> None:
        self.api = api
        self.instance_id = instance_id

    def get(self, instance_id: str) -> Any:
        return self.api.get(instance_id)

    def get_all(self) -> Any:
        return self.api.get_all()

    def delete(self, instance_id: str) -> None:
        self.api.delete(instance_id)

    def get_all_purgeable(self, before: timedelta, since: timedelta, expr: str) -> list[Any]:
        """Return instances whose server name matches ``expr`` and fit the window."""
        pattern = _matcher(expr)
        candidates = []
        for ins in _items(self.get_all(), "pvm_instances", "pvmInstances"):
            if pattern is not None and not pattern.search(_value(ins, "server_name", "serverName")):
                continue
            created = _to_datetime(_value(ins, "creation_date", "creationDate"))
            if not is_purgeable(created, before, since):
                continue
            candidates.append(ins)
        return candidates


class KeyClient:
    """SSH keys of a workspace."""

    def __init__(self, api: Any, instance_id: str = "") -> None:
        self.api = api
        self.instance_id = instance_id

    def get(self, key_id: str) -> Any:
        return self.api.get(key_id)

    def create(self, body: Any) -> Any:
        return self.api.create(body)

    def delete(self, key_id: str) -> None:
        self.api.delete(key_id)

    def get_all_purgeable(self, before: timedelta, since: timedelta, expr: str) -> list[str]:
        """Return the names of keys matching ``expr`` whose creation date fits the window."""
        pattern = re.compile(expr)
        matched = []
        for key in _items(self.api.get_all(), "ssh_keys", "sshKeys"):
            name = _value(key, "name")
            if not pattern.search(name):
                continue
            created = _to_datetime(_value(key, "creation_date", "creationDate"))
            if not is_purgeable(created, before, since):
                continue
            matched.append(name)
        return matched


class NetworkClient:
    """Networks of a workspace and their ports."""

    def __init__(self, api: Any, instance_id: str = "") -> None:
        self.api = api
        self.instance_id = instance_id

    def get(self, network_id: str) -> Any:
        return self.api.get(network_id)

    def get_all_public(self) -> Any:
        return self.api.get_all_public()

    def get_all(self) -> Any:
        return self.api.get_all()

    def delete(self, network_id: str) -> None:
        self.api.delete(network_id)

    def get_all_purgeable(self, expr: str) -> list[Any]:
        """Return networks whose name matches ``expr`` (all when it is empty)."""
        pattern = _matcher(expr)
        return [
            network
            for network in _items(self.get_all(), "networks")
            if pattern is None or pattern.search(_value(network, "name"))
        ]

    def create_port(self, network_id: str, params: Any) -> Any:
        return self.api.create_port(network_id, params)

    def delete_port(self, network_id: str, port_id: str) -> None:
        self.api.delete_port(network_id, port_id)

    def get_port(self, network_id: str, port_id: str) -> Any:
        return self.api.get_port(network_id, port_id)

    def get_all_ports(self, network_id: str) -> Any:
        return self.api.get_all_ports(network_id)


class VolumeClient:
    """Storage volumes of a workspace."""

    def __init__(self, api: Any, instance_id: str = "") -> None:
        self.api = api
        self.instance_id = instance_id

    def get(self, volume_id: str) -> Any:
        return self.api.get(volume_id)

    def delete_volume(self, volume_id: str) -> None:
        self.api.delete_volume(volume_id)

    def get_all(self) -> Any:
        return self.api.get_all()

    def _get_all_purgeable(
        self, field_names: tuple[str, ...], before: timedelta, since: timedelta, expr: str
    ) -> list[Any]:
        pattern = _matcher(expr)
        candidates = []
        for vol in _items(self.get_all(), "volumes"):
            if pattern is not None and not pattern.search(_value(vol, "name")):
                continue
            moment = _to_datetime(_value(vol, *field_names))
            if not is_purgeable(moment, before, since):
                continue
            candidates.append(vol)
        return candidates

    def get_all_purgeable_by_last_update_date(
        self, before: timedelta, since: timedelta, expr: str
    ) -> list[Any]:
        """Return volumes matching ``expr`` whose last update date fits the window."""
        return self._get_all_purgeable(
            ("last_update_date", "lastUpdateDate"), before, since, expr
        )