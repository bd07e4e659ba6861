"""Display names and other scalar string constants."""

from typing import Final

from kubesizer.constants.enums import EnvironmentType, ServerRole

SHARED_CLUSTER_NAME: Final = "Shared Cluster"
BASELINE_LABEL: Final = "Current"

ENVIRONMENT_NAMES: Final[dict[EnvironmentType, str]] = {
    EnvironmentType.DEV: "Development",
    EnvironmentType.TEST: "Test",
    EnvironmentType.STAGE: "Staging",
    EnvironmentType.PROD: "Production",
    EnvironmentType.DR: "Disaster Recovery",
}

ROLE_NAMES: Final[dict[ServerRole, str]] = {
    ServerRole.WEB: "Web Server",
    ServerRole.APP: "Application Server",
    ServerRole.DATABASE: "Database Server",
    ServerRole.CACHE: "Cache Server",
    ServerRole.MESSAGE_QUEUE: "Message Queue",
    ServerRole.SEARCH: "Search Server",
    ServerRole.STORAGE: "Storage Server",
    ServerRole.MONITORING: "Monitoring Server",
    ServerRole.BASTION: "Bastion Host",
}

__all__ = [
    "BASELINE_LABEL",
    "ENVIRONMENT_NAMES",
    "ROLE_NAMES",
    "SHARED_CLUSTER_NAME",
]
