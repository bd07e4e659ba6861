"""Constants module for KubeSizer.

Centralized constants organized by domain:
- enums.py: All Enum class definitions
- values.py: Display names and scalar strings
- limits.py: Node policy values, validation ranges and thresholds
- defaults.py: Default values for settings
- multipliers.py: HA/DR factor tables
- distributions.py, technologies.py, roles.py: default lookup tables
"""

from kubesizer.constants.defaults import (
    HEADROOM_PROD_DEFAULT,
    REPLICAS_NON_PROD_DEFAULT,
    REPLICAS_PROD_DEFAULT,
    SYSTEM_OVERHEAD_PERCENT_DEFAULT,
)
from kubesizer.constants.enums import (
    AppTier,
    BackupStrategy,
    ClusterMode,
    ControlPlaneHA,
    Distribution,
    DRPattern,
    EnvironmentType,
    GrowthPattern,
    HAPattern,
    K8sDRPattern,
    LoadBalancerOption,
    NodeDistribution,
    RecommendationType,
    ServerRole,
    Technology,
    WarningSeverity,
    WarningType,
)
from kubesizer.constants.limits import (
    MAX_INFRA_NODES,
    MIN_HA_CONTROL_PLANE_NODES,
    MIN_INFRA_NODES,
    MIN_WORKERS,
    SYSTEM_RESERVE_PERCENT,
)
from kubesizer.constants.values import ENVIRONMENT_NAMES, SHARED_CLUSTER_NAME

__all__ = [
    "ENVIRONMENT_NAMES",
    "HEADROOM_PROD_DEFAULT",
    "MAX_INFRA_NODES",
    "MIN_HA_CONTROL_PLANE_NODES",
    "MIN_INFRA_NODES",
    "MIN_WORKERS",
    "REPLICAS_NON_PROD_DEFAULT",
    "REPLICAS_PROD_DEFAULT",
    "SHARED_CLUSTER_NAME",
    "SYSTEM_OVERHEAD_PERCENT_DEFAULT",
    "SYSTEM_RESERVE_PERCENT",
    "AppTier",
    "BackupStrategy",
    "ClusterMode",
    "ControlPlaneHA",
    "DRPattern",
    "Distribution",
    "EnvironmentType",
    "GrowthPattern",
    "HAPattern",
    "K8sDRPattern",
    "LoadBalancerOption",
    "NodeDistribution",
    "RecommendationType",
    "ServerRole",
    "Technology",
    "WarningSeverity",
    "WarningType",
]
