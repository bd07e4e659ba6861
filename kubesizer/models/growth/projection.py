"""Growth settings and projection models."""

from __future__ import annotations

from datetime import datetime, timezone

from pydantic import BaseModel, ConfigDict, Field

from kubesizer.constants.defaults import (
    ANNUAL_COST_INFLATION_DEFAULT,
    ANNUAL_GROWTH_RATE_DEFAULT,
    CUSTOM_GROWTH_RATES_DEFAULT,
    PROJECTION_YEARS_DEFAULT,
)
from kubesizer.constants.enums import (
    EnvironmentType,
    GrowthPattern,
    RecommendationType,
    WarningSeverity,
    WarningType,
)
from kubesizer.constants.limits import (
    GROWTH_RATE_MAX,
    GROWTH_RATE_MIN,
    PROJECTION_YEARS_MAX,
    PROJECTION_YEARS_MIN,
)


class GrowthSettings(BaseModel):
    """How demand is extrapolated over the projection horizon."""

    model_config = ConfigDict(frozen=True)

    annual_growth_rate: float = Field(
        default=ANNUAL_GROWTH_RATE_DEFAULT, ge=GROWTH_RATE_MIN, le=GROWTH_RATE_MAX
    )
    projection_years: int = Field(
        default=PROJECTION_YEARS_DEFAULT, ge=PROJECTION_YEARS_MIN, le=PROJECTION_YEARS_MAX
    )
    pattern: GrowthPattern = GrowthPattern.LINEAR
    include_cost_projections: bool = True
    annual_cost_inflation: float = Field(default=ANNUAL_COST_INFLATION_DEFAULT, ge=0)
    show_cluster_limit_warnings: bool = True
    # Year -> growth percent, only read by the Custom pattern
    custom_rates: dict[int, float] = Field(
        default_factory=lambda: dict(CUSTOM_GROWTH_RATES_DEFAULT)
    )


class BaselineMetrics(BaseModel):
    """Scalar footprint used when no sizing input is available."""

    model_config = ConfigDict(frozen=True)

    apps: int = Field(ge=0)
    nodes: int = Field(default=0, ge=0)
    worker_nodes: int = Field(default=0, ge=0)
    cpu: int = Field(default=0, ge=0)
    ram: int = Field(default=0, ge=0)
    storage: int = Field(default=0, ge=0)
    pods: int = Field(default=0, ge=0)
    monthly_cost: float = Field(default=0.0, ge=0)
    largest_cluster_nodes: int | None = None
    largest_cluster_pods: int | None = None


class EnvironmentProjection(BaseModel):
    """Per-environment slice of a projection point."""

    model_config = ConfigDict(frozen=True)

    environment: EnvironmentType
    apps: int
    nodes: int
    cpu: int
    ram: int
    monthly_cost: float = 0.0


class ProjectionPoint(BaseModel):
    """Projected footprint at one year index."""

    model_config = ConfigDict(frozen=True)

    year: int
    label: str
    projected_apps: int
    projected_nodes: int
    projected_worker_nodes: int
    projected_cpu: int
    projected_ram: int
    projected_storage: int
    projected_pods: int = 0
    largest_cluster_nodes: int = 0
    largest_cluster_pods: int = 0
    projected_monthly_cost: float = 0.0
    projected_yearly_cost: float = 0.0
    growth_from_previous: float = 0.0  # percent
    cumulative_growth: float = 0.0  # percent
    environment_breakdown: dict[EnvironmentType, EnvironmentProjection] = {}


class ClusterLimitWarning(BaseModel):
    """A projected value approaching a platform ceiling."""

    model_config = ConfigDict(frozen=True)

    type: WarningType
    severity: WarningSeverity
    year_triggered: int
    message: str
    current_value: float
    projected_value: float
    limit: float
    percentage_of_limit: float
    resource_type: str


class ScalingRecommendation(BaseModel):
    """Suggested action tied to a projection year."""

    model_config = ConfigDict(frozen=True)

    type: RecommendationType
    recommended_year: int
    priority: int  # 1 = highest
    title: str
    description: str
    estimated_cost_impact: float = 0.0


class ProjectionSummary(BaseModel):
    """Aggregates across the projection horizon."""

    model_config = ConfigDict(frozen=True)

    total_app_growth: int = 0
    percentage_app_growth: float = 0.0
    total_node_growth: int = 0
    percentage_node_growth: float = 0.0
    total_cost_over_period: float = 0.0
    average_yearly_cost: float = 0.0
    cost_increase: float = 0.0
    percentage_cost_increase: float = 0.0
    major_scaling_year: int | None = None
    warning_count: int = 0
    critical_warning_count: int = 0


class GrowthProjection(BaseModel):
    """Baseline, yearly points, warnings, recommendations and summary."""

    model_config = ConfigDict(frozen=True)

    settings: GrowthSettings
    baseline: ProjectionPoint
    # Index equals year: the baseline first, then one point per projected year
    points: tuple[ProjectionPoint, ...]
    warnings: tuple[ClusterLimitWarning, ...] = ()
    recommendations: tuple[ScalingRecommendation, ...] = ()
    summary: ProjectionSummary = ProjectionSummary()
    calculated_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))

    @property
    def final_point(self) -> ProjectionPoint:
        return self.points[-1] if self.points else self.baseline
