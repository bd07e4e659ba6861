"""KubeSizer: Kubernetes and VM infrastructure sizing with growth projection.

The functions below are the entry points for callers. Each accepts optional
``tables`` and ``settings`` so alternative lookup tables can be injected; by
default a process-wide copy of the bundled tables is built on first use.
"""

from __future__ import annotations

from decimal import Decimal
from functools import lru_cache

from kubesizer.constants.enums import (
    AppTier,
    Distribution,
    HAPattern,
    LoadBalancerOption,
    ServerRole,
    Technology,
)
from kubesizer.models.growth.projection import (
    BaselineMetrics,
    GrowthProjection,
    GrowthSettings,
)
from kubesizer.models.sizing.k8s import K8sSizingInput, K8sSizingResult
from kubesizer.models.sizing.vm import VMSizingInput, VMSizingResult
from kubesizer.models.state.sizing_settings import SizingSettings
from kubesizer.sizing.errors import (
    SizingError,
    SizingInputError,
    TableLookupError,
    ValidationIssue,
)
from kubesizer.sizing.growth_planner import GrowthPlanner
from kubesizer.sizing.k8s_calculator import K8sSizingCalculator
from kubesizer.sizing.tables import SizingTables
from kubesizer.sizing.vm_calculator import VMSizingCalculator


@lru_cache(maxsize=1)
def default_tables() -> SizingTables:
    """Bundled lookup tables, built once per process."""
    return SizingTables.default()


def calculate_k8s(
    sizing_input: K8sSizingInput,
    *,
    tables: SizingTables | None = None,
    settings: SizingSettings | None = None,
) -> K8sSizingResult:
    return K8sSizingCalculator(tables or default_tables(), settings).calculate(
        sizing_input
    )


def calculate_vm(
    sizing_input: VMSizingInput, *, tables: SizingTables | None = None
) -> VMSizingResult:
    return VMSizingCalculator(tables or default_tables()).calculate(sizing_input)


def get_role_specs(
    role: ServerRole,
    tier: AppTier,
    technology: Technology,
    *,
    tables: SizingTables | None = None,
) -> tuple[int, int]:
    """Per-instance ``(cpu, ram)`` of a VM role."""
    return (tables or default_tables()).get_role_specs(role, tier, technology)


def get_ha_multiplier(
    pattern: HAPattern,
    instance_count: int = 1,
    *,
    tables: SizingTables | None = None,
) -> Decimal:
    return (tables or default_tables()).get_ha_multiplier(pattern, instance_count)


def get_load_balancer_specs(
    option: LoadBalancerOption, *, tables: SizingTables | None = None
) -> tuple[int, int, int]:
    """``(vm_count, cpu_per_vm, ram_per_vm)`` of a load balancer option."""
    return (tables or default_tables()).get_load_balancer_specs(option)


def project_growth(
    baseline: BaselineMetrics | K8sSizingInput | VMSizingInput,
    growth: GrowthSettings | None = None,
    *,
    monthly_cost: float = 0.0,
    distribution: Distribution | None = None,
    tables: SizingTables | None = None,
    settings: SizingSettings | None = None,
) -> GrowthProjection:
    """Project ``baseline`` over the growth horizon.

    Sizing inputs are re-sized every year. Scalar metrics are extrapolated,
    with cluster limit warnings only when ``distribution`` is given.
    """
    planner = GrowthPlanner(tables or default_tables(), settings)
    if isinstance(baseline, K8sSizingInput):
        return planner.project_k8s(baseline, growth, monthly_cost)
    if isinstance(baseline, VMSizingInput):
        return planner.project_vm(baseline, growth, monthly_cost)
    if isinstance(baseline, BaselineMetrics):
        return planner.project(baseline, growth, distribution)
    raise TypeError(f"Cannot project growth from {type(baseline).__name__}")


__all__ = [
    "BaselineMetrics",
    "GrowthPlanner",
    "GrowthProjection",
    "GrowthSettings",
    "K8sSizingCalculator",
    "K8sSizingInput",
    "K8sSizingResult",
    "SizingError",
    "SizingInputError",
    "SizingSettings",
    "SizingTables",
    "TableLookupError",
    "VMSizingCalculator",
    "VMSizingInput",
    "VMSizingResult",
    "ValidationIssue",
    "calculate_k8s",
    "calculate_vm",
    "default_tables",
    "get_ha_multiplier",
    "get_load_balancer_specs",
    "get_role_specs",
    "project_growth",
]
