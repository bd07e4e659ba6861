"""VM sizing input and result models."""

from __future__ import annotations

import math
from datetime import datetime, timezone

from pydantic import BaseModel, ConfigDict, Field

from kubesizer.constants.defaults import (
    DR_REGIONS_DEFAULT,
    SYSTEM_OVERHEAD_PERCENT_DEFAULT,
    VM_DISK_DEFAULT_GB,
)
from kubesizer.constants.enums import (
    AppTier,
    DRPattern,
    EnvironmentType,
    HAPattern,
    LoadBalancerOption,
    ServerRole,
    Technology,
)
from kubesizer.constants.limits import (
    SYSTEM_OVERHEAD_MAX,
    VM_DISK_MAX_GB,
    VM_DISK_MIN_GB,
    VM_INSTANCES_MAX,
    VM_INSTANCES_MIN,
    VM_STORAGE_MAX_GB,
)

_DEFAULT_VM_ENVIRONMENTS = frozenset(
    {EnvironmentType.DEV, EnvironmentType.TEST, EnvironmentType.PROD}
)


class VMRoleConfig(BaseModel):
    """One server role deployed in an environment."""

    model_config = ConfigDict(frozen=True)

    role: ServerRole
    size: AppTier = AppTier.MEDIUM
    instance_count: int = Field(default=1, ge=VM_INSTANCES_MIN, le=VM_INSTANCES_MAX)
    disk_gb: int = Field(default=VM_DISK_DEFAULT_GB, ge=VM_DISK_MIN_GB, le=VM_DISK_MAX_GB)
    memory_multiplier: float = Field(default=1.0, gt=0)
    custom_cpu: int | None = Field(default=None, ge=1)
    custom_ram: int | None = Field(default=None, ge=1)
    role_name: str | None = None

    def scaled(self, factor: float) -> VMRoleConfig:
        """Return a copy whose instance count is scaled and rounded up.

        The copy skips field validation, so projected counts may exceed the
        range accepted from callers.
        """
        count = math.ceil(round(self.instance_count * factor, 9))
        return self.model_copy(update={"instance_count": count})


class VMEnvironmentConfig(BaseModel):
    """Roles and HA/DR policy of one VM environment."""

    model_config = ConfigDict(frozen=True)

    enabled: bool = True
    roles: tuple[VMRoleConfig, ...] = ()
    ha_pattern: HAPattern = HAPattern.NONE
    dr_pattern: DRPattern = DRPattern.NONE
    dr_regions: int = Field(default=DR_REGIONS_DEFAULT, ge=1)
    load_balancer: LoadBalancerOption = LoadBalancerOption.NONE
    storage_gb: int = Field(default=VM_DISK_DEFAULT_GB, ge=0, le=VM_STORAGE_MAX_GB)


class VMSizingInput(BaseModel):
    """Everything the VM engine needs for one calculation."""

    model_config = ConfigDict(frozen=True)

    technology: Technology = Technology.DOTNET
    environment_configs: dict[EnvironmentType, VMEnvironmentConfig] = {}
    enabled_environments: frozenset[EnvironmentType] = _DEFAULT_VM_ENVIRONMENTS
    system_overhead_percent: float = Field(
        default=SYSTEM_OVERHEAD_PERCENT_DEFAULT, ge=0, le=SYSTEM_OVERHEAD_MAX
    )

    def scaled(self, factor: float) -> VMSizingInput:
        """Return a copy with every role instance count scaled by ``factor``."""
        configs = {
            env: config.model_copy(
                update={"roles": tuple(role.scaled(factor) for role in config.roles)}
            )
            for env, config in self.environment_configs.items()
        }
        return self.model_copy(update={"environment_configs": configs})


class VMRoleResult(BaseModel):
    """Sized role within an environment."""

    model_config = ConfigDict(frozen=True)

    role: ServerRole
    role_name: str
    size: AppTier
    base_instances: int
    total_instances: int
    cpu_per_instance: int
    ram_per_instance: int
    disk_per_instance: int
    total_cpu: int
    total_ram: int
    total_disk: int


class VMDRResult(BaseModel):
    """Secondary-site resources added by a DR pattern."""

    model_config = ConfigDict(frozen=True)

    pattern: DRPattern = DRPattern.NONE
    vms: int = 0
    cpu: int = 0
    ram: int = 0
    disk: int = 0


class VMEnvironmentResult(BaseModel):
    """Sizing of one VM environment including LB and DR lines."""

    model_config = ConfigDict(frozen=True)

    environment: EnvironmentType
    environment_name: str
    is_prod: bool
    ha_pattern: HAPattern
    dr_pattern: DRPattern
    load_balancer: LoadBalancerOption
    roles: tuple[VMRoleResult, ...]
    load_balancer_vms: int
    load_balancer_cpu: int
    load_balancer_ram: int
    primary_vms: int
    primary_cpu: int
    primary_ram: int
    primary_disk: int
    dr: VMDRResult
    total_vms: int
    total_cpu: int
    total_ram: int
    total_disk: int


class VMGrandTotal(BaseModel):
    """Field-wise sum of VM environment rows."""

    model_config = ConfigDict(frozen=True)

    total_vms: int = 0
    total_cpu: int = 0
    total_ram: int = 0
    total_disk: int = 0
    total_load_balancer_vms: int = 0
    total_dr_vms: int = 0

    @classmethod
    def from_rows(cls, rows: list[VMEnvironmentResult]) -> VMGrandTotal:
        return cls(
            total_vms=sum(r.total_vms for r in rows),
            total_cpu=sum(r.total_cpu for r in rows),
            total_ram=sum(r.total_ram for r in rows),
            total_disk=sum(r.total_disk for r in rows),
            total_load_balancer_vms=sum(r.load_balancer_vms for r in rows),
            total_dr_vms=sum(r.dr.vms for r in rows),
        )


class VMSizingResult(BaseModel):
    """Complete VM sizing result."""

    model_config = ConfigDict(frozen=True)

    environments: tuple[VMEnvironmentResult, ...]
    grand_total: VMGrandTotal
    configuration: VMSizingInput
    technology_name: str
    calculated_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))
