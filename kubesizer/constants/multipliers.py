"""HA/DR factor tables.

Factors are Decimal so composed multipliers and the totals they scale
round up to whole units without binary float drift.
"""

from decimal import Decimal
from typing import Final

from kubesizer.constants.enums import (
    BackupStrategy,
    ControlPlaneHA,
    DRPattern,
    HAPattern,
    K8sDRPattern,
    NodeDistribution,
)

# ============================================================================
# Kubernetes HA/DR axes
# ============================================================================

CONTROL_PLANE_FACTORS: Final[dict[ControlPlaneHA, Decimal]] = {
    ControlPlaneHA.MANAGED: Decimal("1.00"),
    ControlPlaneHA.SINGLE: Decimal("1.00"),
    ControlPlaneHA.STACKED_HA: Decimal("1.05"),
    ControlPlaneHA.EXTERNAL_ETCD: Decimal("1.10"),
}

NODE_DISTRIBUTION_FACTORS: Final[dict[NodeDistribution, Decimal]] = {
    NodeDistribution.SINGLE_AZ: Decimal("1.00"),
    NodeDistribution.DUAL_AZ: Decimal("1.05"),
    NodeDistribution.MULTI_AZ: Decimal("1.10"),
    NodeDistribution.MULTI_REGION: Decimal("1.50"),
}

K8S_DR_FACTORS: Final[dict[K8sDRPattern, Decimal]] = {
    K8sDRPattern.NONE: Decimal("1.00"),
    K8sDRPattern.BACKUP_RESTORE: Decimal("1.05"),
    K8sDRPattern.WARM_STANDBY: Decimal("1.30"),
    K8sDRPattern.HOT_STANDBY: Decimal("1.80"),
    K8sDRPattern.ACTIVE_ACTIVE: Decimal("2.00"),
}

# Backup only counts when no DR pattern is configured.
BACKUP_FACTORS: Final[dict[BackupStrategy, Decimal]] = {
    BackupStrategy.NONE: Decimal("1.00"),
    BackupStrategy.VELERO: Decimal("1.02"),
    BackupStrategy.CLOUD_NATIVE: Decimal("1.03"),
    BackupStrategy.KASTEN: Decimal("1.05"),
    BackupStrategy.CUSTOM: Decimal("1.00"),
    BackupStrategy.PORTWORX: Decimal("1.08"),
}

MULTIPLIER_QUANTUM: Final = Decimal("0.0001")

# ============================================================================
# VM HA/DR
# ============================================================================

HA_SPARE_INSTANCES: Final[dict[HAPattern, int]] = {
    HAPattern.NONE: 0,
    HAPattern.ACTIVE_ACTIVE: 0,
    HAPattern.ACTIVE_PASSIVE: 1,
    HAPattern.N_PLUS_1: 1,
    HAPattern.N_PLUS_2: 2,
}

# Secondary-site share of the primary footprint; MultiRegion is per extra region.
VM_DR_FRACTIONS: Final[dict[DRPattern, Decimal]] = {
    DRPattern.NONE: Decimal("0"),
    DRPattern.PILOT_LIGHT: Decimal("0.10"),
    DRPattern.WARM_STANDBY: Decimal("0.50"),
    DRPattern.HOT_STANDBY: Decimal("1.00"),
    DRPattern.MULTI_REGION: Decimal("1.00"),
}

__all__ = [
    "BACKUP_FACTORS",
    "CONTROL_PLANE_FACTORS",
    "HA_SPARE_INSTANCES",
    "K8S_DR_FACTORS",
    "MULTIPLIER_QUANTUM",
    "NODE_DISTRIBUTION_FACTORS",
    "VM_DR_FRACTIONS",
]
