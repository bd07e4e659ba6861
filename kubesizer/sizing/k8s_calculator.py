"""Kubernetes cluster sizing engine."""

from __future__ import annotations

import logging
import math
from decimal import ROUND_CEILING, Decimal

from kubesizer.constants.enums import (
    ClusterMode,
    ControlPlaneHA,
    EnvironmentType,
    NodeDistribution,
    Technology,
)
from kubesizer.constants.values import ENVIRONMENT_NAMES, SHARED_CLUSTER_NAME
from kubesizer.models.sizing.k8s import (
    EnvironmentResult,
    K8sGrandTotal,
    K8sHADRConfig,
    K8sSizingInput,
    K8sSizingResult,
    OvercommitSettings,
)
from kubesizer.models.sizing.specs import AppConfig, DistributionConfig, NodeSpecs
from kubesizer.models.state.sizing_settings import SizingSettings
from kubesizer.sizing.errors import SizingInputError, ValidationIssue
from kubesizer.sizing.tables import SizingTables

logger = logging.getLogger(__name__)


def _scale_up(value: float, multiplier: Decimal) -> int:
    """Multiply ``value`` by ``multiplier`` and round up to a whole unit."""
    scaled = Decimal(str(value)) * multiplier
    return int(scaled.to_integral_value(rounding=ROUND_CEILING))


class K8sSizingCalculator:
    """Turns application demand into master, infra and worker node counts.

    The calculator holds only read-only tables and policy settings, so a
    single instance can serve concurrent calculations.
    """

    def __init__(
        self,
        tables: SizingTables | None = None,
        settings: SizingSettings | None = None,
    ) -> None:
        self.tables = tables or SizingTables.default()
        self.settings = settings or SizingSettings()

    def calculate(self, sizing_input: K8sSizingInput) -> K8sSizingResult:
        """Size every cluster described by ``sizing_input``.

        Raises:
            TableLookupError: A distribution or technology has no table entry.
            SizingInputError: The HA/DR policy contradicts the distribution.
        """
        distribution = sizing_input.custom_node_specs or self.tables.get_distribution_config(
            sizing_input.distribution
        )
        technology = self.tables.get_technology_config(sizing_input.technology)

        if sizing_input.cluster_mode is ClusterMode.SHARED_CLUSTER:
            rows = [self._calculate_shared_cluster(sizing_input, distribution)]
        elif sizing_input.cluster_mode is ClusterMode.PER_ENVIRONMENT:
            rows = [self._calculate_single_environment(sizing_input, distribution)]
        else:
            rows = [
                self._calculate_environment(env, sizing_input, distribution)
                for env in sizing_input.sorted_environments()
            ]

        grand_total = K8sGrandTotal.from_rows(rows)
        logger.debug(
            "Sized %s (%s) for %d environment row(s): %d nodes",
            distribution.name,
            sizing_input.cluster_mode.value,
            len(rows),
            grand_total.total_nodes,
        )
        return K8sSizingResult(
            environments=tuple(rows),
            grand_total=grand_total,
            configuration=sizing_input,
            distribution_name=distribution.name,
            technology_name=technology.name,
            node_specs=distribution,
        )

    # ------------------------------------------------------------------
    # Topologies
    # ------------------------------------------------------------------

    def _calculate_environment(
        self,
        env: EnvironmentType,
        sizing_input: K8sSizingInput,
        distribution: DistributionConfig,
    ) -> EnvironmentResult:
        """Size one independent cluster for ``env``."""
        return self._build_row(
            env=env,
            name=ENVIRONMENT_NAMES[env],
            is_prod=env.is_prod,
            apps=sizing_input.apps_for(env),
            replicas=sizing_input.replicas.for_environment(env),
            headroom=sizing_input.headroom_for(env),
            overcommit=sizing_input.overcommit_for(env),
            hadr=sizing_input.hadr_for(env, distribution),
            sizing_input=sizing_input,
            distribution=distribution,
            master_specs=distribution.control_plane_for(env),
            infra_specs=distribution.infra_for(env),
        )

    def _calculate_single_environment(
        self, sizing_input: K8sSizingInput, distribution: DistributionConfig
    ) -> EnvironmentResult:
        """Size one cluster for the selected environment with production node specs."""
        env = sizing_input.selected_environment
        return self._build_row(
            env=env,
            name=f"{ENVIRONMENT_NAMES[env]} Cluster",
            is_prod=env.is_prod,
            apps=sizing_input.apps_for(env),
            replicas=sizing_input.replicas.for_environment(env),
            headroom=sizing_input.headroom_for(env),
            overcommit=sizing_input.prod_overcommit,
            hadr=sizing_input.hadr_for(env, distribution),
            sizing_input=sizing_input,
            distribution=distribution,
            master_specs=distribution.prod_control_plane,
            infra_specs=distribution.prod_infra,
        )

    def _calculate_shared_cluster(
        self, sizing_input: K8sSizingInput, distribution: DistributionConfig
    ) -> EnvironmentResult:
        """Merge every enabled environment into one production-grade cluster."""
        apps = AppConfig()
        for env in sizing_input.sorted_environments():
            apps = apps + sizing_input.apps_for(env)

        return self._build_row(
            env=EnvironmentType.PROD,
            name=SHARED_CLUSTER_NAME,
            is_prod=True,
            apps=apps,
            replicas=sizing_input.replicas.prod,
            headroom=sizing_input.headroom_for(EnvironmentType.PROD),
            overcommit=sizing_input.prod_overcommit,
            hadr=sizing_input.hadr_for(EnvironmentType.PROD, distribution),
            sizing_input=sizing_input,
            distribution=distribution,
            master_specs=distribution.prod_control_plane,
            infra_specs=distribution.prod_infra,
        )

    # ------------------------------------------------------------------
    # Row assembly
    # ------------------------------------------------------------------

    def _build_row(
        self,
        *,
        env: EnvironmentType,
        name: str,
        is_prod: bool,
        apps: AppConfig,
        replicas: int,
        headroom: float,
        overcommit: OvercommitSettings,
        hadr: K8sHADRConfig,
        sizing_input: K8sSizingInput,
        distribution: DistributionConfig,
        master_specs: NodeSpecs,
        infra_specs: NodeSpecs,
    ) -> EnvironmentResult:
        cpu, ram, storage = self.app_demand(apps, sizing_input.technology, replicas)
        cpu_demand = cpu * (1 + headroom / 100)
        ram_demand = ram * (1 + headroom / 100)

        # Worker capacity always uses the production worker shape
        worker_specs = distribution.prod_worker
        workers = self.worker_count(cpu_demand, ram_demand, worker_specs, overcommit)
        masters = self.master_count(workers, hadr, distribution)
        infra = self.infra_count(
            apps.total_apps,
            is_prod=is_prod,
            has_infra_nodes=distribution.has_infra_nodes,
            node_distribution=hadr.node_distribution,
        )

        raw_cpu = (
            masters * master_specs.cpu + infra * infra_specs.cpu + workers * worker_specs.cpu
        )
        raw_ram = (
            masters * master_specs.ram + infra * infra_specs.ram + workers * worker_specs.ram
        )
        raw_disk = (
            masters * master_specs.disk
            + infra * infra_specs.disk
            + workers * worker_specs.disk
        )

        multiplier = hadr.get_cost_multiplier(distribution)
        logger.debug(
            "%s: cpu=%.3f ram=%.3f workers=%d masters=%d infra=%d hadr=%s",
            name,
            cpu_demand,
            ram_demand,
            workers,
            masters,
            infra,
            multiplier,
        )
        return EnvironmentResult(
            environment=env,
            environment_name=name,
            is_prod=is_prod,
            apps=apps.total_apps,
            replicas=replicas,
            pods=apps.total_apps * replicas,
            masters=masters,
            infra=infra,
            workers=workers,
            total_nodes=masters + infra + workers,
            cpu_demand=cpu_demand,
            ram_demand=ram_demand,
            availability_zones=hadr.effective_zones,
            hadr_multiplier=multiplier,
            total_cpu=_scale_up(raw_cpu, multiplier),
            total_ram=_scale_up(raw_ram, multiplier),
            total_disk=_scale_up(raw_disk, multiplier),
            app_storage=_scale_up(storage, multiplier),
        )

    # ------------------------------------------------------------------
    # Node policy
    # ------------------------------------------------------------------

    def app_demand(
        self, apps: AppConfig, technology: Technology, replicas: int
    ) -> tuple[float, float, float]:
        """Return raw ``(cpu, ram, storage)`` for ``apps``.

        CPU and RAM count every replica; persistent storage is per app.
        """
        cpu = ram = storage = 0.0
        for tier, count in apps.items():
            if count == 0:
                continue
            spec = self.tables.get_tier_specs(technology, tier)
            cpu += count * spec.cpu * replicas
            ram += count * spec.ram * replicas
            storage += count * spec.storage
        return cpu, ram, storage

    def worker_count(
        self,
        cpu_demand: float,
        ram_demand: float,
        worker_specs: NodeSpecs,
        overcommit: OvercommitSettings,
    ) -> int:
        """Pack demand onto workers; the tighter dimension decides."""
        if cpu_demand <= 0 and ram_demand <= 0:
            return 0

        reserve = self.settings.system_reserve_factor
        effective_cpu = worker_specs.cpu * reserve * overcommit.cpu
        effective_ram = worker_specs.ram * reserve * overcommit.memory

        by_cpu = math.ceil(round(cpu_demand / effective_cpu, 9)) if effective_cpu else 0
        by_ram = math.ceil(round(ram_demand / effective_ram, 9)) if effective_ram else 0
        return max(by_cpu, by_ram, self.settings.min_workers)

    def master_count(
        self, workers: int, hadr: K8sHADRConfig, distribution: DistributionConfig
    ) -> int:
        """Control plane nodes charged to the user."""
        if distribution.has_managed_control_plane:
            return 0

        mode = hadr.control_plane_ha
        if mode is ControlPlaneHA.MANAGED:
            raise SizingInputError(
                ValidationIssue(
                    code="BR-V011",
                    field="hadr.control_plane_ha",
                    message=(
                        f"{distribution.name} has no managed control plane; "
                        "choose Single, StackedHA or ExternalEtcd"
                    ),
                )
            )
        if mode is ControlPlaneHA.SINGLE:
            return 1

        nodes = max(hadr.control_plane_nodes, self.settings.min_ha_control_plane_nodes)
        if workers > self.settings.large_cluster_worker_threshold:
            nodes = max(nodes, self.settings.large_cluster_control_plane_nodes)
        return nodes

    def infra_count(
        self,
        total_apps: int,
        *,
        is_prod: bool,
        has_infra_nodes: bool,
        node_distribution: NodeDistribution = NodeDistribution.SINGLE_AZ,
    ) -> int:
        """Dedicated infra pool (router, registry, monitoring) size."""
        if not has_infra_nodes:
            return 0

        settings = self.settings
        infra = max(settings.min_infra, math.ceil(total_apps / settings.apps_per_infra))
        if is_prod and total_apps >= settings.large_deployment_threshold:
            infra = max(infra, settings.min_prod_infra_large)
        infra = min(infra, settings.max_infra)

        if node_distribution is NodeDistribution.MULTI_REGION:
            infra *= 2
        return infra
