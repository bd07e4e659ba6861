"""Default VM server role table and load balancer shapes."""

from __future__ import annotations

from kubesizer.constants.enums import (
    AppTier,
    LoadBalancerOption,
    ServerRole,
    Technology,
)

_GENERAL: dict[AppTier, tuple[int, int]] = {
    AppTier.SMALL: (2, 4),
    AppTier.MEDIUM: (4, 8),
    AppTier.LARGE: (8, 16),
    AppTier.XLARGE: (16, 32),
}

_MEMORY_HEAVY: dict[AppTier, tuple[int, int]] = {
    AppTier.SMALL: (4, 16),
    AppTier.MEDIUM: (8, 32),
    AppTier.LARGE: (16, 64),
    AppTier.XLARGE: (32, 128),
}

_CACHE: dict[AppTier, tuple[int, int]] = {
    AppTier.SMALL: (2, 8),
    AppTier.MEDIUM: (4, 16),
    AppTier.LARGE: (8, 32),
    AppTier.XLARGE: (16, 64),
}

# (cpu_cores, ram_gb) per instance, by role and tier
DEFAULT_ROLE_SPECS: dict[ServerRole, dict[AppTier, tuple[int, int]]] = {
    ServerRole.WEB: _GENERAL,
    ServerRole.APP: _GENERAL,
    ServerRole.DATABASE: _MEMORY_HEAVY,
    ServerRole.CACHE: _CACHE,
    ServerRole.MESSAGE_QUEUE: _GENERAL,
    ServerRole.SEARCH: _MEMORY_HEAVY,
    ServerRole.STORAGE: _GENERAL,
    ServerRole.MONITORING: _GENERAL,
}

# Bastion hosts are a fixed size whatever tier is requested
BASTION_SPECS: tuple[int, int] = (2, 4)

HIGH_MEMORY_TECHNOLOGIES: frozenset[Technology] = frozenset(
    {Technology.JAVA, Technology.MENDIX, Technology.OUTSYSTEMS}
)
HIGH_MEMORY_MULTIPLIER: float = 1.5

# (vm_count, cpu_per_vm, ram_per_vm)
DEFAULT_LOAD_BALANCERS: dict[LoadBalancerOption, tuple[int, int, int]] = {
    LoadBalancerOption.NONE: (0, 0, 0),
    LoadBalancerOption.SINGLE: (1, 2, 4),
    LoadBalancerOption.HA_PAIR: (2, 2, 4),
    LoadBalancerOption.CLOUD_LB: (0, 0, 0),
}
