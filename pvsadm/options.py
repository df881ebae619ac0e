"""Option sets shared by the command-line commands."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import timedelta

TIMEOUT = timedelta(minutes=60)
"""Default timeout applied to long-running cloud API calls."""


@dataclass
class Options:
    """Global options understood by every resource command."""

    workspace_id: str = ""
    api_key: str = ""
    environment: str = ""
    region: str = ""
    zone: str = ""
    dry_run: bool = False
    debug: bool = False
    since: timedelta = field(default_factory=timedelta)
    before: timedelta = field(default_factory=timedelta)
    workspace_name: str = ""
    no_prompt: bool = False
    ignore_errors: bool = False
    audit_file: str = ""
    expr: str = ""


@dataclass
class ImageCommandOptions:
    """Options for the image sub-commands (qcow2ova, upload, import, sync)."""

    # qcow2ova
    image_dist: str = ""
    image_name: str = ""
    image_size: int = 0
    target_disk_size: int = 0
    image_url: str = ""
    os_password: str = ""
    preflight_skip: list[str] = field(default_factory=list)
    rhn_user: str = ""
    rhn_password: str = ""
    temp_dir: str = ""
    prep_template: str = ""
    prep_template_default: bool = False
    cloud_config: str = ""
    cloud_config_default: bool = False
    os_password_skip: bool = False
    # upload
    workspace_name: str = ""
    region: str = ""
    bucket_name: str = ""
    resource_group: str = ""
    service_plan: str = ""
    object_name: str = ""
    # import
    cos_instance_name: str = ""
    image_filename: str = ""
    access_key: str = ""
    secret_key: str = ""
    storage_type: str = ""
    workspace_id: str = ""
    service_cred_name: str = ""
    public: bool = False
    watch: bool = False
    watch_timeout: timedelta = field(default_factory=timedelta)
    # sync
    spec_yaml: str = ""