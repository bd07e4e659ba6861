"""VM fleet sizing engine."""

from __future__ import annotations

import logging
import math
from decimal import ROUND_CEILING, Decimal

from kubesizer.constants.enums import DRPattern, EnvironmentType, Technology
from kubesizer.constants.multipliers import VM_DR_FRACTIONS
from kubesizer.constants.values import ENVIRONMENT_NAMES, ROLE_NAMES
from kubesizer.models.sizing.vm import (
    VMDRResult,
    VMEnvironmentConfig,
    VMEnvironmentResult,
    VMGrandTotal,
    VMRoleConfig,
    VMRoleResult,
    VMSizingInput,
    VMSizingResult,
)
from kubesizer.sizing.tables import SizingTables

logger = logging.getLogger(__name__)


def _fraction_of(value: int, fraction: Decimal) -> int:
    return int((Decimal(value) * fraction).to_integral_value(rounding=ROUND_CEILING))


class VMSizingCalculator:
    """Sizes environment-isolated VM fleets from role instance counts."""

    def __init__(self, tables: SizingTables | None = None) -> None:
        self.tables = tables or SizingTables.default()

    def calculate(self, sizing_input: VMSizingInput) -> VMSizingResult:
        """Size every enabled environment that also has an enabled config.

        Raises:
            TableLookupError: A role, technology or load balancer option has
                no table entry.
        """
        technology = self.tables.get_technology_config(sizing_input.technology)

        rows: list[VMEnvironmentResult] = []
        for env in sorted(sizing_input.enabled_environments, key=lambda e: e.order):
            config = sizing_input.environment_configs.get(env)
            if config is None or not config.enabled:
                logger.debug("Skipping %s: no enabled VM configuration", env.value)
                continue
            rows.append(self._calculate_environment(env, config, sizing_input))

        return VMSizingResult(
            environments=tuple(rows),
            grand_total=VMGrandTotal.from_rows(rows),
            configuration=sizing_input,
            technology_name=technology.name,
        )

    def _calculate_environment(
        self,
        env: EnvironmentType,
        config: VMEnvironmentConfig,
        sizing_input: VMSizingInput,
    ) -> VMEnvironmentResult:
        spares = self.tables.get_ha_spares(config.ha_pattern)
        roles = [
            self.calculate_role(
                role,
                technology=sizing_input.technology,
                spares=spares,
                overhead_percent=sizing_input.system_overhead_percent,
            )
            for role in config.roles
        ]

        lb_vms, lb_cpu, lb_ram = self.tables.get_load_balancer_specs(config.load_balancer)
        lb_total_cpu = lb_vms * lb_cpu
        lb_total_ram = lb_vms * lb_ram

        primary_vms = sum(r.total_instances for r in roles) + lb_vms
        primary_cpu = sum(r.total_cpu for r in roles) + lb_total_cpu
        primary_ram = sum(r.total_ram for r in roles) + lb_total_ram
        primary_disk = sum(r.total_disk for r in roles) + config.storage_gb

        dr = self.calculate_dr(
            config.dr_pattern,
            config.dr_regions,
            vms=primary_vms,
            cpu=primary_cpu,
            ram=primary_ram,
            disk=primary_disk,
        )
        logger.debug(
            "%s: %d primary VMs, %d DR VMs (%s, %s)",
            env.value,
            primary_vms,
            dr.vms,
            config.ha_pattern.value,
            config.dr_pattern.value,
        )
        return VMEnvironmentResult(
            environment=env,
            environment_name=ENVIRONMENT_NAMES[env],
            is_prod=env.is_prod,
            ha_pattern=config.ha_pattern,
            dr_pattern=config.dr_pattern,
            load_balancer=config.load_balancer,
            roles=tuple(roles),
            load_balancer_vms=lb_vms,
            load_balancer_cpu=lb_total_cpu,
            load_balancer_ram=lb_total_ram,
            primary_vms=primary_vms,
            primary_cpu=primary_cpu,
            primary_ram=primary_ram,
            primary_disk=primary_disk,
            dr=dr,
            total_vms=primary_vms + dr.vms,
            total_cpu=primary_cpu + dr.cpu,
            total_ram=primary_ram + dr.ram,
            total_disk=primary_disk + dr.disk,
        )

    def calculate_role(
        self,
        role: VMRoleConfig,
        *,
        technology: Technology,
        spares: int,
        overhead_percent: float,
    ) -> VMRoleResult:
        """Size one role; every standby or spare instance is charged in full."""
        base_cpu, base_ram = self.tables.get_role_specs(role.role, role.size, technology)
        cpu = role.custom_cpu if role.custom_cpu is not None else base_cpu
        ram = role.custom_ram if role.custom_ram is not None else base_ram
        ram = ram * role.memory_multiplier

        overhead = 1 + overhead_percent / 100
        cpu_per_instance = math.ceil(round(cpu * overhead, 9))
        ram_per_instance = math.ceil(round(ram * overhead, 9))

        total_instances = role.instance_count + spares
        return VMRoleResult(
            role=role.role,
            role_name=role.role_name or ROLE_NAMES[role.role],
            size=role.size,
            base_instances=role.instance_count,
            total_instances=total_instances,
            cpu_per_instance=cpu_per_instance,
            ram_per_instance=ram_per_instance,
            disk_per_instance=role.disk_gb,
            total_cpu=total_instances * cpu_per_instance,
            total_ram=total_instances * ram_per_instance,
            total_disk=total_instances * role.disk_gb,
        )

    @staticmethod
    def calculate_dr(
        pattern: DRPattern,
        regions: int,
        *,
        vms: int,
        cpu: int,
        ram: int,
        disk: int,
    ) -> VMDRResult:
        """Secondary-site line as a fraction of the primary footprint."""
        fraction = VM_DR_FRACTIONS[pattern]
        if pattern is DRPattern.MULTI_REGION:
            fraction *= regions
        if not fraction:
            return VMDRResult(pattern=pattern)
        return VMDRResult(
            pattern=pattern,
            vms=_fraction_of(vms, fraction),
            cpu=_fraction_of(cpu, fraction),
            ram=_fraction_of(ram, fraction),
            disk=_fraction_of(disk, fraction),
        )
