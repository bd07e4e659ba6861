"""Lookup value models: tier, node, technology and distribution specs."""

from __future__ import annotations

import math

from pydantic import BaseModel, ConfigDict, Field

from kubesizer.constants.enums import AppTier, Distribution, EnvironmentType, Technology


class AppConfig(BaseModel):
    """Application counts per size tier for one environment."""

    model_config = ConfigDict(frozen=True)

    small: int = Field(default=0, ge=0)
    medium: int = Field(default=0, ge=0)
    large: int = Field(default=0, ge=0)
    xlarge: int = Field(default=0, ge=0)

    @property
    def total_apps(self) -> int:
        return self.small + self.medium + self.large + self.xlarge

    def count(self, tier: AppTier) -> int:
        """Return the number of apps in ``tier``."""
        return {
            AppTier.SMALL: self.small,
            AppTier.MEDIUM: self.medium,
            AppTier.LARGE: self.large,
            AppTier.XLARGE: self.xlarge,
        }[tier]

    def items(self) -> list[tuple[AppTier, int]]:
        return [(tier, self.count(tier)) for tier in AppTier]

    def scaled(self, factor: float) -> AppConfig:
        """Return a copy with every tier count multiplied and rounded up."""

        def _scale(value: int) -> int:
            # round() first so 10 * 1.2 does not become 13
            return max(0, math.ceil(round(value * factor, 9)))

        return AppConfig(
            small=_scale(self.small),
            medium=_scale(self.medium),
            large=_scale(self.large),
            xlarge=_scale(self.xlarge),
        )

    def __add__(self, other: AppConfig) -> AppConfig:
        return AppConfig(
            small=self.small + other.small,
            medium=self.medium + other.medium,
            large=self.large + other.large,
            xlarge=self.xlarge + other.xlarge,
        )


class TierSpecs(BaseModel):
    """Resources required by one application instance of a tier."""

    model_config = ConfigDict(frozen=True)

    cpu: float = Field(ge=0)  # cores
    ram: float = Field(ge=0)  # GB
    storage: float = Field(default=0.0, ge=0)  # GB of persistent volume


class NodeSpecs(BaseModel):
    """Capacity of a single cluster node or VM."""

    model_config = ConfigDict(frozen=True)

    cpu: int = Field(ge=0)  # cores
    ram: int = Field(ge=0)  # GB
    disk: int = Field(default=100, ge=0)  # GB

    @classmethod
    def from_shape(cls, shape: tuple[int, int, int]) -> NodeSpecs:
        cpu, ram, disk = shape
        return cls(cpu=cpu, ram=ram, disk=disk)

    @property
    def is_zero(self) -> bool:
        return self.cpu == 0 and self.ram == 0 and self.disk == 0


ZERO_NODE = NodeSpecs(cpu=0, ram=0, disk=0)


class TechnologyConfig(BaseModel):
    """Tier table for one application technology."""

    model_config = ConfigDict(frozen=True)

    technology: Technology
    name: str
    vendor: str = ""
    tiers: dict[AppTier, TierSpecs]


class DistributionConfig(BaseModel):
    """Policy facts and default node shapes for a Kubernetes distribution."""

    model_config = ConfigDict(frozen=True)

    distribution: Distribution
    name: str
    vendor: str = ""
    tags: tuple[str, ...] = ()
    prod_control_plane: NodeSpecs = ZERO_NODE
    non_prod_control_plane: NodeSpecs = ZERO_NODE
    prod_worker: NodeSpecs
    non_prod_worker: NodeSpecs
    prod_infra: NodeSpecs = ZERO_NODE
    non_prod_infra: NodeSpecs = ZERO_NODE
    has_infra_nodes: bool = False
    has_managed_control_plane: bool = False

    def control_plane_for(self, env: EnvironmentType) -> NodeSpecs:
        return self.prod_control_plane if env.is_prod else self.non_prod_control_plane

    def worker_for(self, env: EnvironmentType) -> NodeSpecs:
        return self.prod_worker if env.is_prod else self.non_prod_worker

    def infra_for(self, env: EnvironmentType) -> NodeSpecs:
        return self.prod_infra if env.is_prod else self.non_prod_infra


class ClusterLimits(BaseModel):
    """Platform ceilings for a single cluster."""

    model_config = ConfigDict(frozen=True)

    nodes: int
    pods_per_node: int
    total_pods: int
