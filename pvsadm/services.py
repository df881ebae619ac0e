"""Workspace service clients: cloud connections, datacenters, DHCP, events, jobs, storage tiers."""

from __future__ import annotations

from datetime import datetime, timedelta, timezone
from typing import Any

from .options import TIMEOUT


class CloudConnectionClient:
    """Cloud connections of a workspace."""

    def __init__(self, api: Any, instance_id: str = "") -> None:
        self.api = api
        self.instance_id = instance_id

    def get(self, connection_id: str) -> Any:
        return self.api.get(connection_id)

    def get_all(self) -> Any:
        return self.api.get_all()


class DatacenterClient:
    """Datacenters visible from a workspace."""

    def __init__(self, api: Any, instance_id: str = "") -> None:
        self.api = api
        self.instance_id = instance_id

    def get(self, datacenter_id: str) -> Any:
        return self.api.get(datacenter_id)

    def get_all(self) -> Any:
        return self.api.get_all()


class DHCPClient:
    """DHCP servers of a workspace."""

    def __init__(self, api: Any, instance_id: str = "") -> None:
        self.api = api
        self.instance_id = instance_id

    def get(self, server_id: str) -> Any:
        return self.api.get(server_id)

    def get_all(self) -> Any:
        return self.api.get_all()

    def create(self, body: Any) -> Any:
        return self.api.create(body)

    def delete(self, server_id: str) -> None:
        self.api.delete(server_id)


class EventsClient:
    """Events recorded for a workspace."""

    def __init__(self, api: Any, instance_id: str = "") -> None:
        self.api = api
        self.instance_id = instance_id

    def get_since(self, since: timedelta) -> Any:
        """Return the events recorded within ``since`` of now."""
        from_time = (datetime.now(timezone.utc) - since).strftime("%Y-%m-%dT%H:%M:%SZ")
        return self.api.get_events(self.instance_id, from_time=from_time, timeout=TIMEOUT)


class JobClient:
    """Jobs of a workspace."""

    def __init__(self, api: Any, instance_id: str = "") -> None:
        self.api = api
        self.instance_id = instance_id

    def get(self, job_id: str) -> Any:
        return self.api.get(job_id)

    def get_all(self) -> Any:
        return self.api.get_all()

    def delete(self, job_id: str) -> None:
        self.api.delete(job_id)


class StorageTierClient:
    """Storage tiers offered in the workspace's region."""

    def __init__(self, api: Any, instance_id: str = "") -> None:
        self.api = api
        self.instance_id = instance_id

    def get_all(self) -> Any:
        return self.api.get_all()