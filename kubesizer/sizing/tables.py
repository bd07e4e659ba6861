"""Read-only lookup tables shared by every sizing engine.

A ``SizingTables`` instance is built once, from the default constants or from
a YAML override file, and passed explicitly to the calculators.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Mapping
from decimal import Decimal
from types import MappingProxyType

from kubesizer.constants.distributions import (
    CLUSTER_LIMITS,
    DEFAULT_CLUSTER_LIMITS,
    DEFAULT_DISTRIBUTIONS,
    DistributionRow,
)
from kubesizer.constants.enums import (
    AppTier,
    Distribution,
    HAPattern,
    LoadBalancerOption,
    ServerRole,
    Technology,
)
from kubesizer.constants.multipliers import HA_SPARE_INSTANCES
from kubesizer.constants.roles import (
    BASTION_SPECS,
    DEFAULT_LOAD_BALANCERS,
    DEFAULT_ROLE_SPECS,
    HIGH_MEMORY_MULTIPLIER,
    HIGH_MEMORY_TECHNOLOGIES,
)
from kubesizer.constants.technologies import DEFAULT_TECHNOLOGIES, TIER_STORAGE_GB
from kubesizer.models.sizing.specs import (
    ClusterLimits,
    DistributionConfig,
    NodeSpecs,
    TechnologyConfig,
    TierSpecs,
)
from kubesizer.sizing.errors import TableLookupError

logger = logging.getLogger(__name__)


def _build_technologies(
    raw: Iterable[tuple[Technology, str, str, dict[AppTier, tuple[float, float]]]],
    storage: Mapping[AppTier, float],
) -> dict[Technology, TechnologyConfig]:
    """Build TechnologyConfig entries from raw tuples."""
    configs: dict[Technology, TechnologyConfig] = {}
    for technology, name, vendor, tiers in raw:
        configs[technology] = TechnologyConfig(
            technology=technology,
            name=name,
            vendor=vendor,
            tiers={
                tier: TierSpecs(cpu=cpu, ram=ram, storage=storage.get(tier, 0.0))
                for tier, (cpu, ram) in tiers.items()
            },
        )
    return configs


def _build_distributions(
    raw: Iterable[DistributionRow],
) -> dict[Distribution, DistributionConfig]:
    """Build DistributionConfig entries from raw tuples."""
    configs: dict[Distribution, DistributionConfig] = {}
    for (
        distribution,
        name,
        vendor,
        tags,
        managed,
        infra,
        (cp_prod, cp_non_prod),
        (worker_prod, worker_non_prod),
        (infra_prod, infra_non_prod),
    ) in raw:
        configs[distribution] = DistributionConfig(
            distribution=distribution,
            name=name,
            vendor=vendor,
            tags=tags,
            prod_control_plane=NodeSpecs.from_shape(cp_prod),
            non_prod_control_plane=NodeSpecs.from_shape(cp_non_prod),
            prod_worker=NodeSpecs.from_shape(worker_prod),
            non_prod_worker=NodeSpecs.from_shape(worker_non_prod),
            prod_infra=NodeSpecs.from_shape(infra_prod),
            non_prod_infra=NodeSpecs.from_shape(infra_non_prod),
            has_infra_nodes=infra,
            has_managed_control_plane=managed,
        )
    return configs


def _build_cluster_limits(
    raw: Mapping[Distribution, tuple[int, int, int]],
) -> dict[Distribution, ClusterLimits]:
    return {
        distribution: ClusterLimits(nodes=nodes, pods_per_node=per_node, total_pods=pods)
        for distribution, (nodes, per_node, pods) in raw.items()
    }


class SizingTables:
    """Immutable lookup object for tiers, distributions, roles and limits."""

    def __init__(
        self,
        *,
        technologies: Mapping[Technology, TechnologyConfig],
        distributions: Mapping[Distribution, DistributionConfig],
        role_specs: Mapping[ServerRole, Mapping[AppTier, tuple[int, int]]],
        bastion_specs: tuple[int, int] = BASTION_SPECS,
        high_memory_technologies: Iterable[Technology] = HIGH_MEMORY_TECHNOLOGIES,
        high_memory_multiplier: float = HIGH_MEMORY_MULTIPLIER,
        load_balancers: Mapping[LoadBalancerOption, tuple[int, int, int]] = (
            DEFAULT_LOAD_BALANCERS
        ),
        ha_spares: Mapping[HAPattern, int] = HA_SPARE_INSTANCES,
        cluster_limits: Mapping[Distribution, ClusterLimits] | None = None,
        default_cluster_limits: ClusterLimits | None = None,
    ) -> None:
        self._technologies = MappingProxyType(dict(technologies))
        self._distributions = MappingProxyType(dict(distributions))
        self._role_specs = MappingProxyType(
            {role: MappingProxyType(dict(tiers)) for role, tiers in role_specs.items()}
        )
        self._bastion_specs = bastion_specs
        self._high_memory_technologies = frozenset(high_memory_technologies)
        self._high_memory_multiplier = high_memory_multiplier
        self._load_balancers = MappingProxyType(dict(load_balancers))
        self._ha_spares = MappingProxyType(dict(ha_spares))
        self._cluster_limits = MappingProxyType(
            dict(cluster_limits if cluster_limits is not None
                 else _build_cluster_limits(CLUSTER_LIMITS))
        )
        self._default_cluster_limits = default_cluster_limits or ClusterLimits(
            nodes=DEFAULT_CLUSTER_LIMITS[0],
            pods_per_node=DEFAULT_CLUSTER_LIMITS[1],
            total_pods=DEFAULT_CLUSTER_LIMITS[2],
        )

    @classmethod
    def default(cls) -> SizingTables:
        """Build tables from the bundled constants."""
        return cls(
            technologies=_build_technologies(DEFAULT_TECHNOLOGIES, TIER_STORAGE_GB),
            distributions=_build_distributions(DEFAULT_DISTRIBUTIONS),
            role_specs=DEFAULT_ROLE_SPECS,
        )

    def replace(self, **overrides: object) -> SizingTables:
        """Return new tables with some components swapped out."""
        components: dict[str, object] = {
            "technologies": self._technologies,
            "distributions": self._distributions,
            "role_specs": self._role_specs,
            "bastion_specs": self._bastion_specs,
            "high_memory_technologies": self._high_memory_technologies,
            "high_memory_multiplier": self._high_memory_multiplier,
            "load_balancers": self._load_balancers,
            "ha_spares": self._ha_spares,
            "cluster_limits": self._cluster_limits,
            "default_cluster_limits": self._default_cluster_limits,
        }
        unknown = set(overrides) - set(components)
        if unknown:
            raise TypeError(f"Unknown table components: {sorted(unknown)}")
        components.update(overrides)
        return SizingTables(**components)  # type: ignore[arg-type]

    # ------------------------------------------------------------------
    # Technology tiers
    # ------------------------------------------------------------------

    @property
    def technologies(self) -> Mapping[Technology, TechnologyConfig]:
        return self._technologies

    def get_technology_config(self, technology: Technology) -> TechnologyConfig:
        try:
            return self._technologies[technology]
        except KeyError:
            logger.error("Technology table has no entry for %s", technology)
            raise TableLookupError("technology", technology) from None

    def get_tier_specs(self, technology: Technology, tier: AppTier) -> TierSpecs:
        """Resources of one app instance of ``tier`` built with ``technology``."""
        config = self.get_technology_config(technology)
        try:
            return config.tiers[tier]
        except KeyError:
            logger.error("Tier table for %s has no entry for %s", technology, tier)
            raise TableLookupError(f"{technology.value} tier", tier) from None

    # ------------------------------------------------------------------
    # Distributions
    # ------------------------------------------------------------------

    @property
    def distributions(self) -> Mapping[Distribution, DistributionConfig]:
        return self._distributions

    def get_distribution_config(self, distribution: Distribution) -> DistributionConfig:
        try:
            return self._distributions[distribution]
        except KeyError:
            logger.error("Distribution table has no entry for %s", distribution)
            raise TableLookupError("distribution", distribution) from None

    def get_distributions_by_tag(self, tag: str) -> list[DistributionConfig]:
        wanted = tag.lower()
        return [
            config
            for config in self._distributions.values()
            if any(t.lower() == wanted for t in config.tags)
        ]

    def get_cluster_limits(self, distribution: Distribution) -> ClusterLimits:
        """Platform ceilings, falling back to the generic limits."""
        return self._cluster_limits.get(distribution, self._default_cluster_limits)

    # ------------------------------------------------------------------
    # VM roles
    # ------------------------------------------------------------------

    @property
    def role_specs(self) -> Mapping[ServerRole, Mapping[AppTier, tuple[int, int]]]:
        return self._role_specs

    @property
    def load_balancers(self) -> Mapping[LoadBalancerOption, tuple[int, int, int]]:
        return self._load_balancers

    def get_role_specs(
        self, role: ServerRole, tier: AppTier, technology: Technology
    ) -> tuple[int, int]:
        """Return ``(cpu, ram)`` per instance of ``role`` at ``tier``.

        Bastion hosts ignore the tier. Memory-hungry runtimes get their RAM
        raised by the high-memory multiplier, truncated to whole GB.
        """
        if role is ServerRole.BASTION:
            cpu, ram = self._bastion_specs
        else:
            tiers = self._role_specs.get(role)
            if tiers is None or tier not in tiers:
                logger.error("Role table has no entry for %s/%s", role, tier)
                raise TableLookupError("server role", f"{role.value}/{tier.value}")
            cpu, ram = tiers[tier]

        if technology in self._high_memory_technologies:
            ram = int(ram * self._high_memory_multiplier)
        return cpu, ram

    def get_ha_spares(self, pattern: HAPattern) -> int:
        try:
            return self._ha_spares[pattern]
        except KeyError:
            logger.error("HA pattern table has no entry for %s", pattern)
            raise TableLookupError("HA pattern", pattern) from None

    def get_ha_multiplier(self, pattern: HAPattern, instance_count: int = 1) -> Decimal:
        """Effective-to-configured instance ratio for ``pattern``.

        ActiveActive is already redundant and returns 1. Standby and spare
        patterns add whole instances, so the ratio depends on the count.

        Raises:
            ValueError: ``instance_count`` is below 1.
        """
        if instance_count < 1:
            raise ValueError(f"instance_count must be at least 1, got {instance_count}")
        spares = self.get_ha_spares(pattern)
        return Decimal(instance_count + spares) / Decimal(instance_count)

    def get_load_balancer_specs(self, option: LoadBalancerOption) -> tuple[int, int, int]:
        """Return ``(vm_count, cpu_per_vm, ram_per_vm)`` for ``option``."""
        try:
            return self._load_balancers[option]
        except KeyError:
            logger.error("Load balancer table has no entry for %s", option)
            raise TableLookupError("load balancer", option) from None
