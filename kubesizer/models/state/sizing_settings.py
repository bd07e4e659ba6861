"""Sizing policy settings and configuration errors."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field, model_validator

from kubesizer.constants.limits import (
    APPS_PER_INFRA_NODE,
    LARGE_CLUSTER_CONTROL_PLANE_NODES,
    LARGE_CLUSTER_WORKER_THRESHOLD,
    LARGE_PROD_APP_THRESHOLD,
    LARGE_PROD_INFRA_NODES,
    LIMIT_CRITICAL_PCT,
    LIMIT_INFO_PCT,
    LIMIT_WARNING_PCT,
    MAX_INFRA_NODES,
    MIN_HA_CONTROL_PLANE_NODES,
    MIN_INFRA_NODES,
    MIN_WORKERS,
    SYSTEM_RESERVE_PERCENT,
)


class SizingSettings(BaseModel):
    """Node-count policy applied by the Kubernetes engine and growth planner."""

    model_config = ConfigDict(frozen=True)

    # Worker capacity
    system_reserve_percent: float = Field(
        default=SYSTEM_RESERVE_PERCENT, ge=0, lt=100
    )
    min_workers: int = Field(default=MIN_WORKERS, ge=0)

    # Control plane
    min_ha_control_plane_nodes: int = Field(default=MIN_HA_CONTROL_PLANE_NODES, ge=1)
    large_cluster_control_plane_nodes: int = Field(
        default=LARGE_CLUSTER_CONTROL_PLANE_NODES, ge=1
    )
    large_cluster_worker_threshold: int = LARGE_CLUSTER_WORKER_THRESHOLD

    # Infra pool
    apps_per_infra: int = Field(default=APPS_PER_INFRA_NODE, ge=1)
    min_infra: int = Field(default=MIN_INFRA_NODES, ge=0)
    max_infra: int = Field(default=MAX_INFRA_NODES, ge=0)
    large_deployment_threshold: int = LARGE_PROD_APP_THRESHOLD
    min_prod_infra_large: int = LARGE_PROD_INFRA_NODES

    # Growth warning thresholds (percent of a platform ceiling)
    limit_info_pct: float = LIMIT_INFO_PCT
    limit_warning_pct: float = LIMIT_WARNING_PCT
    limit_critical_pct: float = LIMIT_CRITICAL_PCT

    @model_validator(mode="after")
    def _check_infra_bounds(self) -> SizingSettings:
        if self.min_infra > self.max_infra:
            raise ValueError(
                f"min_infra ({self.min_infra}) exceeds max_infra ({self.max_infra})"
            )
        return self

    @property
    def system_reserve_factor(self) -> float:
        return 1 - self.system_reserve_percent / 100


class ConfigError(Exception):
    """Base exception for configuration errors."""


class ConfigLoadError(ConfigError):
    """Raised when a sizing table file fails to load."""
