"""HA/DR cost multiplier for Kubernetes clusters.

The multiplier is the product of four independent axis factors. It scales the
resource totals of an environment after node counts have been fixed.
"""

from __future__ import annotations

import logging
from decimal import Decimal

from pydantic import BaseModel, ConfigDict

from kubesizer.constants.enums import (
    BackupStrategy,
    ControlPlaneHA,
    K8sDRPattern,
    NodeDistribution,
)
from kubesizer.constants.multipliers import (
    BACKUP_FACTORS,
    CONTROL_PLANE_FACTORS,
    K8S_DR_FACTORS,
    MULTIPLIER_QUANTUM,
    NODE_DISTRIBUTION_FACTORS,
)

logger = logging.getLogger(__name__)

_ONE = Decimal("1")


class HADRBreakdown(BaseModel):
    """Per-axis factors and their product."""

    model_config = ConfigDict(frozen=True)

    control_plane: Decimal
    node_distribution: Decimal
    dr: Decimal
    backup: Decimal

    @property
    def multiplier(self) -> Decimal:
        product = self.control_plane * self.node_distribution * self.dr * self.backup
        return product.quantize(MULTIPLIER_QUANTUM)


def hadr_breakdown(
    control_plane_ha: ControlPlaneHA,
    node_distribution: NodeDistribution,
    dr_pattern: K8sDRPattern,
    backup_strategy: BackupStrategy,
    *,
    managed_control_plane: bool = False,
) -> HADRBreakdown:
    """Resolve each axis factor from the decision tables.

    A provider-managed control plane costs nothing extra whatever mode is set.
    Backup tooling only counts when no DR pattern is configured, since every
    DR pattern already carries its own copy of the data.
    """
    control_plane = (
        _ONE if managed_control_plane else CONTROL_PLANE_FACTORS[control_plane_ha]
    )
    backup = (
        BACKUP_FACTORS[backup_strategy] if dr_pattern is K8sDRPattern.NONE else _ONE
    )
    return HADRBreakdown(
        control_plane=control_plane,
        node_distribution=NODE_DISTRIBUTION_FACTORS[node_distribution],
        dr=K8S_DR_FACTORS[dr_pattern],
        backup=backup,
    )


def hadr_multiplier(
    control_plane_ha: ControlPlaneHA,
    node_distribution: NodeDistribution,
    dr_pattern: K8sDRPattern,
    backup_strategy: BackupStrategy,
    *,
    managed_control_plane: bool = False,
) -> Decimal:
    """Return the composed multiplier, quantized to four decimal places."""
    breakdown = hadr_breakdown(
        control_plane_ha,
        node_distribution,
        dr_pattern,
        backup_strategy,
        managed_control_plane=managed_control_plane,
    )
    multiplier = breakdown.multiplier
    logger.debug(
        "HA/DR multiplier %s (cp=%s nodes=%s dr=%s backup=%s)",
        multiplier,
        breakdown.control_plane,
        breakdown.node_distribution,
        breakdown.dr,
        breakdown.backup,
    )
    return multiplier
