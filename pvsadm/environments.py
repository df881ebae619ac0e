"""Known cloud environments and their service endpoints."""

from __future__ import annotations

DEFAULT_ENV_PROD = "prod"
TP_ENDPOINT = "TPEndpoint"
PI_ENDPOINT = "PIEndpoint"
RC_ENDPOINT = "RCEndpoint"

ENVIRONMENTS: dict[str, dict[str, str]] = {
    "test": {
        TP_ENDPOINT: "https://iam.test.cloud.ibm.com",
        RC_ENDPOINT: "https://resource-controller.test.cloud.ibm.com",
        PI_ENDPOINT: "power-iaas.test.cloud.ibm.com",
    },
    "prod": {
        TP_ENDPOINT: "https://iam.cloud.ibm.com",
        RC_ENDPOINT: "https://resource-controller.cloud.ibm.com",
        PI_ENDPOINT: "power-iaas.cloud.ibm.com",
    },
}


class EnvironmentNotFoundError(LookupError):
    """Raised when an unknown environment name is requested."""

    def __init__(self, env: str = "") -> None:
        super().__init__("error environment not found")
        self.env = env


def list_environments() -> list[str]:
    """Return the names of all known environments."""
    return list(ENVIRONMENTS)


def get_environment(env: str) -> dict[str, str]:
    """Return the endpoints of ``env``."""
    try:
        return dict(ENVIRONMENTS[env])
    except KeyError:
        raise EnvironmentNotFoundError(env) from None