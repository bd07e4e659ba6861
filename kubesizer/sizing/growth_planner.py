"""Multi-year growth projection, cluster limit warnings and scaling advice."""

from __future__ import annotations

import logging
import math
from collections.abc import Mapping

from kubesizer.constants.enums import (
    ClusterMode,
    Distribution,
    EnvironmentType,
    GrowthPattern,
    RecommendationType,
    WarningSeverity,
    WarningType,
)
from kubesizer.constants.limits import (
    AUTOSCALING_PRIORITY_GROWTH_PCT,
    COST_OPTIMIZATION_GROWTH_PCT,
    K3S_MANAGED_SERVICE_NODES,
    MICROK8S_MANAGED_SERVICE_NODES,
    NODE_UPGRADE_GROWTH_PCT,
    YEAR_TO_LIMIT_HORIZON,
)
from kubesizer.constants.values import BASELINE_LABEL
from kubesizer.models.growth.projection import (
    BaselineMetrics,
    ClusterLimitWarning,
    EnvironmentProjection,
    GrowthProjection,
    GrowthSettings,
    ProjectionPoint,
    ProjectionSummary,
    ScalingRecommendation,
)
from kubesizer.models.sizing.k8s import K8sSizingInput, K8sSizingResult
from kubesizer.models.sizing.specs import ClusterLimits
from kubesizer.models.sizing.vm import VMSizingInput, VMSizingResult
from kubesizer.models.state.sizing_settings import SizingSettings
from kubesizer.sizing.k8s_calculator import K8sSizingCalculator
from kubesizer.sizing.tables import SizingTables
from kubesizer.sizing.vm_calculator import VMSizingCalculator

logger = logging.getLogger(__name__)

# Share of total cost a resource optimization pass is expected to save
_OPTIMIZATION_SAVINGS = 0.15

# Lightweight distributions and the node count past which they are outgrown
_MANAGED_SERVICE_NODES: dict[Distribution, int] = {
    Distribution.K3S: K3S_MANAGED_SERVICE_NODES,
    Distribution.MICROK8S: MICROK8S_MANAGED_SERVICE_NODES,
}


def _s_curve_fraction(year: int, horizon: int) -> float:
    """Normalized logistic: 0 at year 0, 1 at ``horizon``, steepest mid-way."""
    if horizon <= 0:
        return 1.0
    steepness = 7.5 / horizon
    midpoint = horizon / 2

    def logistic(x: float) -> float:
        return 1 / (1 + math.exp(-steepness * (x - midpoint)))

    start = logistic(0)
    return (logistic(year) - start) / (logistic(horizon) - start)


def growth_factor(
    year: int,
    rate: float,
    pattern: GrowthPattern,
    horizon: int,
    custom_rates: Mapping[int, float] | None = None,
) -> float:
    """Cumulative growth multiplier of ``year`` relative to year 0.

    ``rate`` and the custom rates are percentages. The result never drops
    below zero.
    """
    if year <= 0:
        return 1.0

    r = rate / 100
    if pattern is GrowthPattern.LINEAR:
        factor = 1 + r * year
    elif pattern is GrowthPattern.EXPONENTIAL:
        factor = (1 + r) ** year
    elif pattern is GrowthPattern.S_CURVE:
        factor = 1 + r * horizon * _s_curve_fraction(year, horizon)
    else:
        rates = dict(custom_rates or {})
        last_year = max(rates) if rates else None
        factor = 1.0
        for y in range(1, year + 1):
            if y in rates:
                year_rate = rates[y]
            elif last_year is not None and y > last_year:
                year_rate = rates[last_year]
            else:
                year_rate = rate
            factor *= 1 + year_rate / 100
    return max(0.0, factor)


def _grow(value: int, factor: float) -> int:
    return math.ceil(round(value * factor, 9))


def _pct_change(new: float, old: float) -> float:
    return (new - old) / old * 100 if old > 0 else 0.0


class GrowthPlanner:
    """Projects a sizing footprint forward by re-running the sizing engines."""

    def __init__(
        self,
        tables: SizingTables | None = None,
        settings: SizingSettings | None = None,
    ) -> None:
        self.tables = tables or SizingTables.default()
        self.settings = settings or SizingSettings()
        self.k8s_calculator = K8sSizingCalculator(self.tables, self.settings)
        self.vm_calculator = VMSizingCalculator(self.tables)

    # ------------------------------------------------------------------
    # Entry points
    # ------------------------------------------------------------------

    def project_k8s(
        self,
        sizing_input: K8sSizingInput,
        growth: GrowthSettings | None = None,
        monthly_cost: float = 0.0,
    ) -> GrowthProjection:
        """Project a Kubernetes footprint, re-sizing clusters every year."""
        growth = growth or GrowthSettings()
        baseline_result = self.k8s_calculator.calculate(sizing_input)
        baseline = self._k8s_point(0, baseline_result, baseline_result, monthly_cost, growth)

        points = []
        for year in range(1, growth.projection_years + 1):
            factor = self._factor(year, growth)
            result = self.k8s_calculator.calculate(sizing_input.scaled(factor))
            points.append(
                self._k8s_point(year, result, baseline_result, monthly_cost, growth)
            )
        points = self._with_growth_rates(baseline, points)

        limits = self.tables.get_cluster_limits(sizing_input.distribution)
        return self._assemble(
            growth,
            baseline,
            points,
            limits=limits,
            distribution=sizing_input.distribution,
            cluster_mode=sizing_input.cluster_mode,
        )

    def project_vm(
        self,
        sizing_input: VMSizingInput,
        growth: GrowthSettings | None = None,
        monthly_cost: float = 0.0,
    ) -> GrowthProjection:
        """Project a VM fleet by scaling role instance counts."""
        growth = growth or GrowthSettings()
        baseline_result = self.vm_calculator.calculate(sizing_input)
        baseline = self._vm_point(0, baseline_result, baseline_result, monthly_cost, growth)

        points = []
        for year in range(1, growth.projection_years + 1):
            factor = self._factor(year, growth)
            result = self.vm_calculator.calculate(sizing_input.scaled(factor))
            points.append(
                self._vm_point(year, result, baseline_result, monthly_cost, growth)
            )
        points = self._with_growth_rates(baseline, points)
        return self._assemble(growth, baseline, points)

    def project(
        self,
        metrics: BaselineMetrics,
        growth: GrowthSettings | None = None,
        distribution: Distribution | None = None,
    ) -> GrowthProjection:
        """Extrapolate scalar metrics when no sizing input is available.

        Cluster limit warnings need a distribution to know the ceilings.
        """
        growth = growth or GrowthSettings()
        largest_nodes = (
            metrics.largest_cluster_nodes
            if metrics.largest_cluster_nodes is not None
            else metrics.nodes
        )
        largest_pods = (
            metrics.largest_cluster_pods
            if metrics.largest_cluster_pods is not None
            else metrics.pods
        )
        baseline = ProjectionPoint(
            year=0,
            label=BASELINE_LABEL,
            projected_apps=metrics.apps,
            projected_nodes=metrics.nodes,
            projected_worker_nodes=metrics.worker_nodes,
            projected_cpu=metrics.cpu,
            projected_ram=metrics.ram,
            projected_storage=metrics.storage,
            projected_pods=metrics.pods,
            largest_cluster_nodes=largest_nodes,
            largest_cluster_pods=largest_pods,
            projected_monthly_cost=metrics.monthly_cost,
            projected_yearly_cost=metrics.monthly_cost * 12,
        )

        points = []
        for year in range(1, growth.projection_years + 1):
            factor = self._factor(year, growth)
            monthly = self._project_cost(metrics.monthly_cost, factor, year, growth)
            points.append(
                ProjectionPoint(
                    year=year,
                    label=f"Year {year}",
                    projected_apps=_grow(metrics.apps, factor),
                    projected_nodes=_grow(metrics.nodes, factor),
                    projected_worker_nodes=_grow(metrics.worker_nodes, factor),
                    projected_cpu=_grow(metrics.cpu, factor),
                    projected_ram=_grow(metrics.ram, factor),
                    projected_storage=_grow(metrics.storage, factor),
                    projected_pods=_grow(metrics.pods, factor),
                    largest_cluster_nodes=_grow(largest_nodes, factor),
                    largest_cluster_pods=_grow(largest_pods, factor),
                    projected_monthly_cost=monthly,
                    projected_yearly_cost=monthly * 12,
                )
            )
        points = self._with_growth_rates(baseline, points)

        limits = (
            self.tables.get_cluster_limits(distribution) if distribution is not None else None
        )
        return self._assemble(
            growth, baseline, points, limits=limits, distribution=distribution
        )

    def year_to_limit(
        self,
        current: float,
        limit: float,
        annual_growth_rate: float,
        pattern: GrowthPattern = GrowthPattern.LINEAR,
    ) -> int | None:
        """First year a growing value reaches ``limit``.

        Returns 0 when the value is already there and ``None`` when growth is
        not positive or the limit stays out of reach within the horizon.
        """
        if current >= limit:
            return 0
        if annual_growth_rate <= 0:
            return None

        for year in range(1, YEAR_TO_LIMIT_HORIZON + 1):
            factor = growth_factor(
                year, annual_growth_rate, pattern, YEAR_TO_LIMIT_HORIZON
            )
            if current * factor >= limit:
                return year
        return None

    # ------------------------------------------------------------------
    # Points
    # ------------------------------------------------------------------

    def _factor(self, year: int, growth: GrowthSettings) -> float:
        return growth_factor(
            year,
            growth.annual_growth_rate,
            growth.pattern,
            growth.projection_years,
            growth.custom_rates,
        )

    @staticmethod
    def _project_cost(
        monthly_cost: float, resource_ratio: float, year: int, growth: GrowthSettings
    ) -> float:
        if not growth.include_cost_projections:
            return 0.0
        inflation = (1 + growth.annual_cost_inflation / 100) ** year
        return monthly_cost * resource_ratio * inflation

    def _point_cost(
        self,
        year: int,
        cpu: int,
        baseline_cpu: int,
        monthly_cost: float,
        growth: GrowthSettings,
    ) -> float:
        """Monthly cost follows provisioned CPU, then inflation."""
        if year == 0:
            return monthly_cost
        ratio = cpu / baseline_cpu if baseline_cpu else self._factor(year, growth)
        return self._project_cost(monthly_cost, ratio, year, growth)

    def _k8s_point(
        self,
        year: int,
        result: K8sSizingResult,
        baseline: K8sSizingResult,
        monthly_cost: float,
        growth: GrowthSettings,
    ) -> ProjectionPoint:
        total = result.grand_total
        monthly = self._point_cost(
            year, total.total_cpu, baseline.grand_total.total_cpu, monthly_cost, growth
        )

        breakdown: dict[EnvironmentType, EnvironmentProjection] = {}
        for row in result.environments:
            share = row.total_cpu / total.total_cpu if total.total_cpu else 0.0
            breakdown[row.environment] = EnvironmentProjection(
                environment=row.environment,
                apps=row.apps,
                nodes=row.total_nodes,
                cpu=row.total_cpu,
                ram=row.total_ram,
                monthly_cost=monthly * share,
            )

        largest = result.largest_cluster
        return ProjectionPoint(
            year=year,
            label=BASELINE_LABEL if year == 0 else f"Year {year}",
            projected_apps=result.total_apps,
            projected_nodes=total.total_nodes,
            projected_worker_nodes=total.total_workers,
            projected_cpu=total.total_cpu,
            projected_ram=total.total_ram,
            projected_storage=total.total_disk,
            projected_pods=total.total_pods,
            largest_cluster_nodes=largest.total_nodes if largest else 0,
            largest_cluster_pods=largest.pods if largest else 0,
            projected_monthly_cost=monthly,
            projected_yearly_cost=monthly * 12,
            environment_breakdown=breakdown,
        )

    def _vm_point(
        self,
        year: int,
        result: VMSizingResult,
        baseline: VMSizingResult,
        monthly_cost: float,
        growth: GrowthSettings,
    ) -> ProjectionPoint:
        total = result.grand_total
        monthly = self._point_cost(
            year, total.total_cpu, baseline.grand_total.total_cpu, monthly_cost, growth
        )

        breakdown = {
            row.environment: EnvironmentProjection(
                environment=row.environment,
                apps=row.total_vms,
                nodes=row.total_vms,
                cpu=row.total_cpu,
                ram=row.total_ram,
                monthly_cost=monthly * row.total_cpu / total.total_cpu
                if total.total_cpu
                else 0.0,
            )
            for row in result.environments
        }
        # VM counts stand in for apps
        return ProjectionPoint(
            year=year,
            label=BASELINE_LABEL if year == 0 else f"Year {year}",
            projected_apps=total.total_vms,
            projected_nodes=total.total_vms,
            projected_worker_nodes=total.total_vms,
            projected_cpu=total.total_cpu,
            projected_ram=total.total_ram,
            projected_storage=total.total_disk,
            projected_monthly_cost=monthly,
            projected_yearly_cost=monthly * 12,
            environment_breakdown=breakdown,
        )

    @staticmethod
    def _with_growth_rates(
        baseline: ProjectionPoint, points: list[ProjectionPoint]
    ) -> list[ProjectionPoint]:
        """Fill year-over-year and cumulative app growth percentages."""
        updated: list[ProjectionPoint] = []
        previous = baseline
        for point in points:
            point = point.model_copy(
                update={
                    "growth_from_previous": _pct_change(
                        point.projected_apps, previous.projected_apps
                    ),
                    "cumulative_growth": _pct_change(
                        point.projected_apps, baseline.projected_apps
                    ),
                }
            )
            updated.append(point)
            previous = point
        return updated

    # ------------------------------------------------------------------
    # Warnings, recommendations and summary
    # ------------------------------------------------------------------

    def _assemble(
        self,
        growth: GrowthSettings,
        baseline: ProjectionPoint,
        points: list[ProjectionPoint],
        *,
        limits: ClusterLimits | None = None,
        distribution: Distribution | None = None,
        cluster_mode: ClusterMode | None = None,
    ) -> GrowthProjection:
        warnings: list[ClusterLimitWarning] = []
        if growth.show_cluster_limit_warnings and limits is not None:
            warnings = self.check_cluster_limits(baseline, points, limits)

        summary = self.summarize(baseline, points, warnings)
        recommendations = self.generate_recommendations(
            growth,
            baseline,
            points,
            warnings,
            summary,
            distribution=distribution,
            cluster_mode=cluster_mode,
        )
        logger.debug(
            "Projected %d year(s): %d warning(s), %d recommendation(s)",
            len(points),
            len(warnings),
            len(recommendations),
        )
        return GrowthProjection(
            settings=growth,
            baseline=baseline,
            points=(baseline, *points),
            warnings=tuple(warnings),
            recommendations=tuple(recommendations),
            summary=summary,
        )

    def _severity(self, percentage: float) -> WarningSeverity | None:
        if percentage >= self.settings.limit_critical_pct:
            return WarningSeverity.CRITICAL
        if percentage >= self.settings.limit_warning_pct:
            return WarningSeverity.WARNING
        if percentage >= self.settings.limit_info_pct:
            return WarningSeverity.INFO
        return None

    def check_cluster_limits(
        self,
        baseline: ProjectionPoint,
        points: list[ProjectionPoint],
        limits: ClusterLimits,
    ) -> list[ClusterLimitWarning]:
        """Compare the largest cluster of each year against platform ceilings.

        Only the first year that reaches a given severity is reported.
        """
        checks = (
            (WarningType.NODE_LIMIT, "Nodes", limits.nodes, "largest_cluster_nodes"),
            (WarningType.POD_LIMIT, "Pods", limits.total_pods, "largest_cluster_pods"),
        )
        warnings: list[ClusterLimitWarning] = []
        seen: set[tuple[WarningType, WarningSeverity]] = set()

        for point in points:
            for warning_type, resource, limit, attr in checks:
                if limit <= 0:
                    continue
                value = getattr(point, attr)
                percentage = value / limit * 100
                severity = self._severity(percentage)
                if severity is None or (warning_type, severity) in seen:
                    continue
                seen.add((warning_type, severity))
                warnings.append(
                    ClusterLimitWarning(
                        type=warning_type,
                        severity=severity,
                        year_triggered=point.year,
                        message=(
                            f"{resource} ({value}) will reach {percentage:.0f}% of "
                            f"the cluster limit ({limit}) by Year {point.year}"
                        ),
                        current_value=getattr(baseline, attr),
                        projected_value=value,
                        limit=limit,
                        percentage_of_limit=percentage,
                        resource_type=resource,
                    )
                )
        return warnings

    @staticmethod
    def summarize(
        baseline: ProjectionPoint,
        points: list[ProjectionPoint],
        warnings: list[ClusterLimitWarning],
    ) -> ProjectionSummary:
        final = points[-1] if points else baseline
        critical = [w for w in warnings if w.severity is WarningSeverity.CRITICAL]
        yearly_costs = [p.projected_yearly_cost for p in points]

        return ProjectionSummary(
            total_app_growth=final.projected_apps - baseline.projected_apps,
            percentage_app_growth=_pct_change(final.projected_apps, baseline.projected_apps),
            total_node_growth=final.projected_nodes - baseline.projected_nodes,
            percentage_node_growth=_pct_change(
                final.projected_nodes, baseline.projected_nodes
            ),
            total_cost_over_period=baseline.projected_yearly_cost + sum(yearly_costs),
            average_yearly_cost=(
                sum(yearly_costs) / len(yearly_costs)
                if yearly_costs
                else baseline.projected_yearly_cost
            ),
            cost_increase=final.projected_yearly_cost - baseline.projected_yearly_cost,
            percentage_cost_increase=_pct_change(
                final.projected_yearly_cost, baseline.projected_yearly_cost
            ),
            major_scaling_year=min((w.year_triggered for w in critical), default=None),
            warning_count=len(warnings),
            critical_warning_count=len(critical),
        )

    def generate_recommendations(
        self,
        growth: GrowthSettings,
        baseline: ProjectionPoint,
        points: list[ProjectionPoint],
        warnings: list[ClusterLimitWarning],
        summary: ProjectionSummary,
        *,
        distribution: Distribution | None = None,
        cluster_mode: ClusterMode | None = None,
    ) -> list[ScalingRecommendation]:
        final = points[-1] if points else baseline
        recommendations: list[ScalingRecommendation] = []

        high_growth = final.cumulative_growth > AUTOSCALING_PRIORITY_GROWTH_PCT
        recommendations.append(
            ScalingRecommendation(
                type=RecommendationType.ENABLE_AUTOSCALING,
                recommended_year=1,
                priority=1 if high_growth else 3,
                title="Enable Cluster Autoscaling",
                description=(
                    f"With {final.cumulative_growth:.0f}% projected growth, autoscaling "
                    "absorbs demand spikes without permanent capacity."
                ),
            )
        )

        node_growth = _pct_change(final.projected_nodes, baseline.projected_nodes)
        if node_growth > NODE_UPGRADE_GROWTH_PCT:
            recommendations.append(
                ScalingRecommendation(
                    type=RecommendationType.UPGRADE_NODE_SIZE,
                    recommended_year=max(1, growth.projection_years // 2),
                    priority=2,
                    title="Consider Larger Node Sizes",
                    description=(
                        f"Node count grows by {node_growth:.0f}%. Larger nodes may cost "
                        "less than adding more small ones."
                    ),
                )
            )

        critical = [w for w in warnings if w.severity is WarningSeverity.CRITICAL]
        if critical:
            first = min(critical, key=lambda w: w.year_triggered)
            if cluster_mode is ClusterMode.SHARED_CLUSTER:
                rec_type = RecommendationType.ADD_CLUSTER
                title = "Move Environments to a Separate Cluster"
            else:
                rec_type = RecommendationType.SPLIT_CLUSTER
                title = "Plan for Cluster Split"
            recommendations.append(
                ScalingRecommendation(
                    type=rec_type,
                    recommended_year=max(1, first.year_triggered - 1),
                    priority=1,
                    title=title,
                    description=(
                        f"Cluster limits are reached by Year {first.year_triggered}. "
                        "Spread workloads across more clusters before then."
                    ),
                )
            )

        if summary.percentage_cost_increase > COST_OPTIMIZATION_GROWTH_PCT:
            recommendations.append(
                ScalingRecommendation(
                    type=RecommendationType.OPTIMIZE_RESOURCES,
                    recommended_year=1,
                    priority=2,
                    title="Review Resource Optimization",
                    description=(
                        f"Costs rise by {summary.percentage_cost_increase:.0f}%. Reserved "
                        "capacity, spot instances or right-sizing can offset part of it."
                    ),
                    estimated_cost_impact=-(
                        summary.total_cost_over_period * _OPTIMIZATION_SAVINGS
                    ),
                )
            )

        managed_threshold = (
            _MANAGED_SERVICE_NODES.get(distribution) if distribution is not None else None
        )
        if managed_threshold is not None and final.projected_nodes > managed_threshold:
            recommendations.append(
                ScalingRecommendation(
                    type=RecommendationType.CONSIDER_MANAGED_SERVICE,
                    recommended_year=1,
                    priority=2,
                    title="Consider a Managed or Enterprise Distribution",
                    description=(
                        f"{distribution.value} targets small deployments; "
                        f"{final.projected_nodes} nodes is beyond its sweet spot."
                    ),
                )
            )

        recommendations.sort(key=lambda r: (r.priority, r.recommended_year))
        return recommendations
