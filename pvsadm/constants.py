"""Identifiers of cloud services and plans, and shared messages."""

SERVICE_TYPE_CLOUD_OBJECT_STORAGE = "cloud-object-storage"

COS_RESOURCE_ID = "dff97f5c-bc5e-4455-b470-411c3edbe49c"
"""Cloud Object Storage service id."""

POWERVS_RESOURCE_ID = "abd259f0-9990-11e8-acc8-b9f54a8f1661"
"""Power Virtual Server (power-iaas) service id."""

POWERVS_RESOURCE_PLAN_ID = "f165dd34-3a40-423b-9d95-e90a23f724dd"
"""Power Virtual Server (power-iaas) plan id."""

COS_RESOURCE_PLAN_IDS: dict[str, str] = {
    "onerate": "1e4e33e4-cfa6-4f12-9016-be594a6d5f87",
    "lite": "2fdf0c08-2d32-4f46-84b5-32e0c92fffd8",
    "standard": "744bfc56-d12c-4866-88d5-dac9139e0e5d",
}

DELETE_PROMPT_MESSAGE = (
    "Deleting all the above %s and the action is irreversible. "
    "Do you really want to continue?"
)