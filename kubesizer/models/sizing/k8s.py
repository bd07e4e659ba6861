"""Kubernetes sizing input and result models."""

from __future__ import annotations

from datetime import datetime, timezone
from decimal import Decimal

from pydantic import BaseModel, ConfigDict, Field

from kubesizer.constants.defaults import (
    AVAILABILITY_ZONES_DEFAULT,
    CONTROL_PLANE_NODES_DEFAULT,
    HEADROOM_DEV_DEFAULT,
    HEADROOM_DR_DEFAULT,
    HEADROOM_PROD_DEFAULT,
    HEADROOM_STAGE_DEFAULT,
    HEADROOM_TEST_DEFAULT,
    OVERCOMMIT_CPU_DEFAULT,
    OVERCOMMIT_MEMORY_DEFAULT,
    REPLICAS_NON_PROD_DEFAULT,
    REPLICAS_PROD_DEFAULT,
    REPLICAS_STAGE_DEFAULT,
)
from kubesizer.constants.enums import (
    BackupStrategy,
    ClusterMode,
    ControlPlaneHA,
    Distribution,
    EnvironmentType,
    K8sDRPattern,
    NodeDistribution,
    Technology,
)
from kubesizer.constants.limits import (
    CPU_OVERCOMMIT_MAX,
    CPU_OVERCOMMIT_MIN,
    HEADROOM_MAX,
    HEADROOM_MIN,
    MEMORY_OVERCOMMIT_MAX,
    MEMORY_OVERCOMMIT_MIN,
    REPLICAS_MAX,
    REPLICAS_MIN,
)
from kubesizer.models.sizing.specs import AppConfig, DistributionConfig
from kubesizer.sizing.hadr import HADRBreakdown, hadr_breakdown, hadr_multiplier

_ALL_ENVIRONMENTS = frozenset(EnvironmentType)


# ============================================================================
# Tuning knobs
# ============================================================================


class ReplicaSettings(BaseModel):
    """Application replicas per environment class."""

    model_config = ConfigDict(frozen=True)

    prod: int = Field(default=REPLICAS_PROD_DEFAULT, ge=REPLICAS_MIN, le=REPLICAS_MAX)
    non_prod: int = Field(
        default=REPLICAS_NON_PROD_DEFAULT, ge=REPLICAS_MIN, le=REPLICAS_MAX
    )
    stage: int = Field(default=REPLICAS_STAGE_DEFAULT, ge=REPLICAS_MIN, le=REPLICAS_MAX)

    def for_environment(self, env: EnvironmentType) -> int:
        if env.is_prod:
            return self.prod
        if env is EnvironmentType.STAGE:
            return self.stage
        return self.non_prod


class HeadroomSettings(BaseModel):
    """Headroom percentage added to raw demand, per environment."""

    model_config = ConfigDict(frozen=True)

    dev: float = Field(default=HEADROOM_DEV_DEFAULT, ge=HEADROOM_MIN, le=HEADROOM_MAX)
    test: float = Field(default=HEADROOM_TEST_DEFAULT, ge=HEADROOM_MIN, le=HEADROOM_MAX)
    stage: float = Field(
        default=HEADROOM_STAGE_DEFAULT, ge=HEADROOM_MIN, le=HEADROOM_MAX
    )
    prod: float = Field(default=HEADROOM_PROD_DEFAULT, ge=HEADROOM_MIN, le=HEADROOM_MAX)
    dr: float = Field(default=HEADROOM_DR_DEFAULT, ge=HEADROOM_MIN, le=HEADROOM_MAX)

    def for_environment(self, env: EnvironmentType) -> float:
        return {
            EnvironmentType.DEV: self.dev,
            EnvironmentType.TEST: self.test,
            EnvironmentType.STAGE: self.stage,
            EnvironmentType.PROD: self.prod,
            EnvironmentType.DR: self.dr,
        }[env]


class OvercommitSettings(BaseModel):
    """Independent CPU and memory overcommit ratios."""

    model_config = ConfigDict(frozen=True)

    cpu: float = Field(
        default=OVERCOMMIT_CPU_DEFAULT, ge=CPU_OVERCOMMIT_MIN, le=CPU_OVERCOMMIT_MAX
    )
    memory: float = Field(
        default=OVERCOMMIT_MEMORY_DEFAULT,
        ge=MEMORY_OVERCOMMIT_MIN,
        le=MEMORY_OVERCOMMIT_MAX,
    )


class K8sHADRConfig(BaseModel):
    """High availability and disaster recovery policy for a cluster."""

    model_config = ConfigDict(frozen=True)

    control_plane_ha: ControlPlaneHA = ControlPlaneHA.MANAGED
    control_plane_nodes: int = Field(default=CONTROL_PLANE_NODES_DEFAULT, ge=1)
    node_distribution: NodeDistribution = NodeDistribution.SINGLE_AZ
    availability_zones: int = Field(default=AVAILABILITY_ZONES_DEFAULT, ge=1)
    dr_pattern: K8sDRPattern = K8sDRPattern.NONE
    backup_strategy: BackupStrategy = BackupStrategy.NONE
    backup_frequency_hours: int = Field(default=24, ge=1)
    backup_retention_days: int = Field(default=30, ge=1)
    dr_region: str | None = None
    rto_minutes: int | None = None
    rpo_minutes: int | None = None

    @classmethod
    def default_for(cls, distribution: DistributionConfig) -> K8sHADRConfig:
        """Policy used when the caller supplies none."""
        if distribution.has_managed_control_plane:
            return cls(control_plane_ha=ControlPlaneHA.MANAGED)
        return cls(control_plane_ha=ControlPlaneHA.STACKED_HA)

    @property
    def effective_zones(self) -> int:
        if self.node_distribution is NodeDistribution.SINGLE_AZ:
            return 1
        if self.node_distribution is NodeDistribution.DUAL_AZ:
            return 2
        return self.availability_zones

    def get_cost_breakdown(self, distribution: DistributionConfig) -> HADRBreakdown:
        return hadr_breakdown(
            self.control_plane_ha,
            self.node_distribution,
            self.dr_pattern,
            self.backup_strategy,
            managed_control_plane=distribution.has_managed_control_plane,
        )

    def get_cost_multiplier(self, distribution: DistributionConfig) -> Decimal:
        """Composed resource multiplier of this policy on ``distribution``."""
        return hadr_multiplier(
            self.control_plane_ha,
            self.node_distribution,
            self.dr_pattern,
            self.backup_strategy,
            managed_control_plane=distribution.has_managed_control_plane,
        )

    def summary(self) -> str:
        parts: list[str] = []
        if self.control_plane_ha is ControlPlaneHA.MANAGED:
            parts.append("Managed CP")
        elif self.control_plane_ha is ControlPlaneHA.SINGLE:
            parts.append("Single CP")
        else:
            parts.append(f"{self.control_plane_nodes}x {self.control_plane_ha.value}")
        if self.node_distribution is not NodeDistribution.SINGLE_AZ:
            parts.append(self.node_distribution.value)
        if self.dr_pattern is not K8sDRPattern.NONE:
            parts.append(f"DR: {self.dr_pattern.value}")
        elif self.backup_strategy is not BackupStrategy.NONE:
            parts.append(f"Backup: {self.backup_strategy.value}")
        return ", ".join(parts)


# ============================================================================
# Input
# ============================================================================


class K8sSizingInput(BaseModel):
    """Everything the Kubernetes engine needs for one calculation."""

    model_config = ConfigDict(frozen=True)

    distribution: Distribution = Distribution.OPENSHIFT
    technology: Technology = Technology.DOTNET
    cluster_mode: ClusterMode = ClusterMode.MULTI_CLUSTER
    prod_apps: AppConfig = AppConfig()
    non_prod_apps: AppConfig = AppConfig()
    # Per-environment app counts take precedence over the prod/non-prod pools
    environment_apps: dict[EnvironmentType, AppConfig] = {}
    enabled_environments: frozenset[EnvironmentType] = _ALL_ENVIRONMENTS
    selected_environment: EnvironmentType = EnvironmentType.PROD
    replicas: ReplicaSettings = ReplicaSettings()
    headroom: HeadroomSettings = HeadroomSettings()
    enable_headroom: bool = True
    prod_overcommit: OvercommitSettings = OvercommitSettings()
    non_prod_overcommit: OvercommitSettings = OvercommitSettings()
    custom_node_specs: DistributionConfig | None = None
    hadr: K8sHADRConfig | None = None
    environment_hadr: dict[EnvironmentType, K8sHADRConfig] = {}

    def apps_for(self, env: EnvironmentType) -> AppConfig:
        if env in self.environment_apps:
            return self.environment_apps[env]
        return self.prod_apps if env.is_prod else self.non_prod_apps

    def overcommit_for(self, env: EnvironmentType) -> OvercommitSettings:
        return self.prod_overcommit if env.is_prod else self.non_prod_overcommit

    def headroom_for(self, env: EnvironmentType) -> float:
        return self.headroom.for_environment(env) if self.enable_headroom else 0.0

    def hadr_for(
        self, env: EnvironmentType, distribution: DistributionConfig
    ) -> K8sHADRConfig:
        if env in self.environment_hadr:
            return self.environment_hadr[env]
        return self.hadr or K8sHADRConfig.default_for(distribution)

    def sorted_environments(self) -> list[EnvironmentType]:
        return sorted(self.enabled_environments, key=lambda env: env.order)

    def scaled(self, factor: float) -> K8sSizingInput:
        """Return a copy with every application pool scaled by ``factor``."""
        return self.model_copy(
            update={
                "prod_apps": self.prod_apps.scaled(factor),
                "non_prod_apps": self.non_prod_apps.scaled(factor),
                "environment_apps": {
                    env: apps.scaled(factor)
                    for env, apps in self.environment_apps.items()
                },
            }
        )


# ============================================================================
# Results
# ============================================================================


class EnvironmentResult(BaseModel):
    """Sizing of one environment, or of the merged shared cluster."""

    model_config = ConfigDict(frozen=True)

    environment: EnvironmentType
    environment_name: str
    is_prod: bool
    apps: int
    replicas: int
    pods: int
    masters: int
    infra: int
    workers: int
    total_nodes: int
    cpu_demand: float  # cores, after headroom
    ram_demand: float  # GB, after headroom
    availability_zones: int = 1
    hadr_multiplier: Decimal = Decimal("1")
    total_cpu: int
    total_ram: int
    total_disk: int
    app_storage: int


class K8sGrandTotal(BaseModel):
    """Field-wise sum of environment rows."""

    model_config = ConfigDict(frozen=True)

    total_nodes: int = 0
    total_masters: int = 0
    total_infra: int = 0
    total_workers: int = 0
    total_cpu: int = 0
    total_ram: int = 0
    total_disk: int = 0
    total_app_storage: int = 0
    total_pods: int = 0

    @classmethod
    def from_rows(cls, rows: list[EnvironmentResult]) -> K8sGrandTotal:
        return cls(
            total_nodes=sum(r.total_nodes for r in rows),
            total_masters=sum(r.masters for r in rows),
            total_infra=sum(r.infra for r in rows),
            total_workers=sum(r.workers for r in rows),
            total_cpu=sum(r.total_cpu for r in rows),
            total_ram=sum(r.total_ram for r in rows),
            total_disk=sum(r.total_disk for r in rows),
            total_app_storage=sum(r.app_storage for r in rows),
            total_pods=sum(r.pods for r in rows),
        )


class K8sSizingResult(BaseModel):
    """Complete Kubernetes sizing result."""

    model_config = ConfigDict(frozen=True)

    environments: tuple[EnvironmentResult, ...]
    grand_total: K8sGrandTotal
    configuration: K8sSizingInput
    distribution_name: str
    technology_name: str
    node_specs: DistributionConfig
    calculated_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))

    @property
    def cluster_mode(self) -> ClusterMode:
        return self.configuration.cluster_mode

    @property
    def total_apps(self) -> int:
        return sum(env.apps for env in self.environments)

    @property
    def largest_cluster(self) -> EnvironmentResult | None:
        if not self.environments:
            return None
        return max(self.environments, key=lambda env: env.total_nodes)
