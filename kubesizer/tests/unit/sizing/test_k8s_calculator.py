"""Unit tests for K8sSizingCalculator."""

from __future__ import annotations

from decimal import Decimal

import pytest

from kubesizer.constants.enums import (
    ClusterMode,
    ControlPlaneHA,
    Distribution,
    EnvironmentType,
    K8sDRPattern,
    NodeDistribution,
    Technology,
)
from kubesizer.constants.values import SHARED_CLUSTER_NAME
from kubesizer.models.sizing.k8s import (
    K8sHADRConfig,
    K8sSizingInput,
    OvercommitSettings,
)
from kubesizer.models.sizing.specs import AppConfig, NodeSpecs
from kubesizer.models.state.sizing_settings import SizingSettings
from kubesizer.sizing.errors import SizingInputError
from kubesizer.sizing.k8s_calculator import K8sSizingCalculator
from kubesizer.sizing.tables import SizingTables

_TABLES = SizingTables.default()

_ALL = frozenset(EnvironmentType)


def _make_input(
    distribution: Distribution = Distribution.OPENSHIFT,
    prod: AppConfig | None = None,
    non_prod: AppConfig | None = None,
    environments: frozenset[EnvironmentType] = _ALL,
    cluster_mode: ClusterMode = ClusterMode.MULTI_CLUSTER,
    **kwargs,
) -> K8sSizingInput:
    """Create a K8sSizingInput with 70 Medium apps in each pool by default."""
    return K8sSizingInput(
        distribution=distribution,
        technology=Technology.DOTNET,
        cluster_mode=cluster_mode,
        prod_apps=prod if prod is not None else AppConfig(medium=70),
        non_prod_apps=non_prod if non_prod is not None else AppConfig(medium=70),
        enabled_environments=environments,
        **kwargs,
    )


def _calculator(**settings) -> K8sSizingCalculator:
    return K8sSizingCalculator(_TABLES, SizingSettings(**settings))


def _rows_by_env(result):
    return {row.environment: row for row in result.environments}


# =============================================================================
# Reference scenario
# =============================================================================


class TestReferenceScenario:
    """70 Medium .NET apps on OpenShift, one cluster per environment."""

    def test_worker_counts(self) -> None:
        rows = _rows_by_env(_calculator().calculate(_make_input()))

        assert rows[EnvironmentType.DEV].workers == 4
        assert rows[EnvironmentType.TEST].workers == 4
        assert rows[EnvironmentType.STAGE].workers == 6
        assert rows[EnvironmentType.PROD].workers == 11
        assert rows[EnvironmentType.DR].workers == 11

    def test_infra_counts(self) -> None:
        rows = _rows_by_env(_calculator().calculate(_make_input()))

        assert rows[EnvironmentType.DEV].infra == 3
        assert rows[EnvironmentType.TEST].infra == 3
        assert rows[EnvironmentType.STAGE].infra == 3
        assert rows[EnvironmentType.PROD].infra == 5
        assert rows[EnvironmentType.DR].infra == 5

    def test_prod_demand_includes_replicas_and_headroom(self) -> None:
        rows = _rows_by_env(_calculator().calculate(_make_input()))
        prod = rows[EnvironmentType.PROD]

        # 70 apps x 0.5 cores x 3 replicas x 1.375 headroom
        assert prod.cpu_demand == pytest.approx(144.375)
        assert prod.ram_demand == pytest.approx(288.75)
        assert prod.pods == 210

    def test_self_managed_masters_use_stacked_ha(self) -> None:
        result = _calculator().calculate(_make_input())

        assert all(row.masters == 3 for row in result.environments)
        assert result.grand_total.total_nodes == 70

    def test_rows_ordered_by_environment(self) -> None:
        result = _calculator().calculate(_make_input())

        assert [row.environment for row in result.environments] == [
            EnvironmentType.DEV,
            EnvironmentType.TEST,
            EnvironmentType.STAGE,
            EnvironmentType.PROD,
            EnvironmentType.DR,
        ]

    def test_resource_totals_scaled_by_hadr_multiplier(self) -> None:
        rows = _rows_by_env(_calculator().calculate(_make_input()))
        prod = rows[EnvironmentType.PROD]
        dev = rows[EnvironmentType.DEV]

        assert prod.hadr_multiplier == Decimal("1.0500")
        # 3 x 8 + 5 x 8 + 11 x 16 = 240 cores before the multiplier
        assert prod.total_cpu == 252
        # Dev: 3 x 8 + 3 x 8 + 4 x 16 = 112, x 1.05 = 117.6
        assert dev.total_cpu == 118
        assert prod.app_storage == 735

    def test_names_reported(self) -> None:
        result = _calculator().calculate(_make_input())

        assert result.distribution_name == "OpenShift (On-Prem)"
        assert result.technology_name == ".NET"
        assert result.cluster_mode is ClusterMode.MULTI_CLUSTER
        assert result.total_apps == 350


class TestDevTestProdScenario:
    def test_grand_total_equals_sum_of_rows(self) -> None:
        environments = frozenset(
            {EnvironmentType.DEV, EnvironmentType.TEST, EnvironmentType.PROD}
        )
        result = _calculator().calculate(
            _make_input(Distribution.KUBERNETES, environments=environments)
        )

        assert len(result.environments) == 3
        assert result.grand_total.total_nodes == sum(
            row.total_nodes for row in result.environments
        )
        for row in result.environments:
            assert row.workers >= 1


# =============================================================================
# Grand total
# =============================================================================


class TestGrandTotal:
    @pytest.mark.parametrize("mode", list(ClusterMode))
    def test_grand_total_is_field_wise_sum(self, mode: ClusterMode) -> None:
        result = _calculator().calculate(
            _make_input(
                cluster_mode=mode,
                prod=AppConfig(small=12, large=7, xlarge=2),
                non_prod=AppConfig(medium=30),
            )
        )
        rows = result.environments
        total = result.grand_total

        assert total.total_nodes == sum(r.total_nodes for r in rows)
        assert total.total_masters == sum(r.masters for r in rows)
        assert total.total_infra == sum(r.infra for r in rows)
        assert total.total_workers == sum(r.workers for r in rows)
        assert total.total_cpu == sum(r.total_cpu for r in rows)
        assert total.total_ram == sum(r.total_ram for r in rows)
        assert total.total_disk == sum(r.total_disk for r in rows)
        assert total.total_app_storage == sum(r.app_storage for r in rows)
        assert total.total_pods == sum(r.pods for r in rows)


# =============================================================================
# Topologies
# =============================================================================


class TestSharedCluster:
    def test_single_row_merges_pools(self) -> None:
        environments = frozenset({EnvironmentType.DEV, EnvironmentType.PROD})
        result = _calculator().calculate(
            _make_input(
                cluster_mode=ClusterMode.SHARED_CLUSTER,
                environments=environments,
                prod=AppConfig(medium=70),
                non_prod=AppConfig(medium=30),
            )
        )

        assert len(result.environments) == 1
        row = result.environments[0]
        assert row.environment_name == SHARED_CLUSTER_NAME
        assert row.environment is EnvironmentType.PROD
        assert row.apps == 100
        # Both pools at prod replicas (3) and prod headroom (37.5%)
        assert row.cpu_demand == pytest.approx(100 * 0.5 * 3 * 1.375)
        assert row.pods == 300

    def test_shared_cluster_uses_prod_hadr_policy(self) -> None:
        prod_policy = K8sHADRConfig(
            control_plane_ha=ControlPlaneHA.STACKED_HA,
            dr_pattern=K8sDRPattern.WARM_STANDBY,
        )
        result = _calculator().calculate(
            _make_input(
                cluster_mode=ClusterMode.SHARED_CLUSTER,
                environment_hadr={EnvironmentType.PROD: prod_policy},
            )
        )

        assert result.environments[0].hadr_multiplier == Decimal("1.3650")


class TestPerEnvironment:
    def test_only_selected_environment_is_sized(self) -> None:
        result = _calculator().calculate(
            _make_input(
                cluster_mode=ClusterMode.PER_ENVIRONMENT,
                selected_environment=EnvironmentType.STAGE,
            )
        )

        assert len(result.environments) == 1
        row = result.environments[0]
        assert row.environment is EnvironmentType.STAGE
        assert row.workers == 6
        assert result.grand_total.total_nodes == row.total_nodes


# =============================================================================
# Node policy
# =============================================================================


class TestMasters:
    @pytest.mark.parametrize(
        "distribution", [Distribution.EKS, Distribution.AKS, Distribution.GKE]
    )
    def test_managed_control_plane_has_no_masters(
        self, distribution: Distribution
    ) -> None:
        hadr = K8sHADRConfig(control_plane_ha=ControlPlaneHA.STACKED_HA)
        result = _calculator().calculate(_make_input(distribution, hadr=hadr))

        assert result.grand_total.total_masters == 0

    def test_single_control_plane(self) -> None:
        hadr = K8sHADRConfig(control_plane_ha=ControlPlaneHA.SINGLE, control_plane_nodes=1)
        result = _calculator().calculate(_make_input(Distribution.KUBERNETES, hadr=hadr))

        assert all(row.masters == 1 for row in result.environments)

    def test_ha_control_plane_clamped_to_three(self) -> None:
        calc = _calculator()
        hadr = K8sHADRConfig(control_plane_ha=ControlPlaneHA.EXTERNAL_ETCD, control_plane_nodes=1)
        distribution = _TABLES.get_distribution_config(Distribution.KUBERNETES)

        assert calc.master_count(10, hadr, distribution) == 3

    def test_large_cluster_gets_five_masters(self) -> None:
        hadr = K8sHADRConfig(control_plane_ha=ControlPlaneHA.STACKED_HA)
        result = _calculator().calculate(
            _make_input(
                Distribution.KUBERNETES,
                prod=AppConfig(xlarge=300),
                environments=frozenset({EnvironmentType.PROD}),
                hadr=hadr,
            )
        )
        prod = result.environments[0]

        assert prod.workers > 100
        assert prod.masters == 5

    def test_managed_mode_on_self_managed_distribution_raises(self) -> None:
        with pytest.raises(SizingInputError) as exc_info:
            _calculator().calculate(
                _make_input(Distribution.KUBERNETES, hadr=K8sHADRConfig())
            )

        assert exc_info.value.fields == ["hadr.control_plane_ha"]
        assert exc_info.value.issues[0].code == "BR-V011"


class TestWorkers:
    def test_zero_apps_yields_no_workers_but_keeps_masters(self) -> None:
        result = _calculator().calculate(
            _make_input(Distribution.KUBERNETES, prod=AppConfig(), non_prod=AppConfig())
        )

        for row in result.environments:
            assert row.workers == 0
            assert row.masters >= 1

    def test_minimum_one_worker_for_any_demand(self) -> None:
        result = _calculator().calculate(
            _make_input(
                Distribution.KUBERNETES,
                prod=AppConfig(small=1),
                environments=frozenset({EnvironmentType.PROD}),
            )
        )

        assert result.environments[0].workers == 1

    def test_tighter_dimension_decides(self) -> None:
        calc = _calculator()
        specs = NodeSpecs(cpu=10, ram=100)
        overcommit = OvercommitSettings()

        # CPU needs 2 nodes (8.5 effective cores each), RAM needs 1
        assert calc.worker_count(17.0, 10.0, specs, overcommit) == 2
        # RAM needs 3 nodes (85 effective GB each), CPU needs 1
        assert calc.worker_count(1.0, 200.0, specs, overcommit) == 3

    def test_overcommit_applies_per_dimension(self) -> None:
        calc = _calculator()
        specs = NodeSpecs(cpu=10, ram=100)

        without = calc.worker_count(34.0, 10.0, specs, OvercommitSettings())
        with_cpu = calc.worker_count(34.0, 10.0, specs, OvercommitSettings(cpu=2.0))

        assert without == 4
        assert with_cpu == 2

    def test_headroom_disabled(self) -> None:
        result = _calculator().calculate(
            _make_input(
                environments=frozenset({EnvironmentType.PROD}), enable_headroom=False
            )
        )

        assert result.environments[0].cpu_demand == pytest.approx(105.0)

    @pytest.mark.parametrize("tier", ["small", "medium", "large", "xlarge"])
    def test_more_apps_never_reduce_workers(self, tier: str) -> None:
        calc = _calculator()
        previous = -1
        for count in range(0, 200, 13):
            result = calc.calculate(
                _make_input(
                    prod=AppConfig(**{tier: count}),
                    environments=frozenset({EnvironmentType.PROD}),
                )
            )
            workers = result.environments[0].workers
            assert workers >= previous
            previous = workers


class TestInfra:
    def test_no_infra_without_infra_pool(self) -> None:
        result = _calculator().calculate(_make_input(Distribution.EKS))

        assert result.grand_total.total_infra == 0

    def test_infra_capped(self) -> None:
        calc = _calculator()

        assert calc.infra_count(1000, is_prod=True, has_infra_nodes=True) == 10

    def test_multi_region_doubles_infra(self) -> None:
        calc = _calculator()

        assert (
            calc.infra_count(
                70,
                is_prod=True,
                has_infra_nodes=True,
                node_distribution=NodeDistribution.MULTI_REGION,
            )
            == 10
        )

    def test_infra_scales_with_apps(self) -> None:
        calc = _calculator()

        assert calc.infra_count(10, is_prod=False, has_infra_nodes=True) == 3
        assert calc.infra_count(110, is_prod=False, has_infra_nodes=True) == 5


class TestCalculatorState:
    def test_identical_input_gives_identical_output(self) -> None:
        calc = _calculator()
        sizing_input = _make_input()

        first = calc.calculate(sizing_input)
        second = calc.calculate(sizing_input)

        assert first.environments == second.environments
        assert first.grand_total == second.grand_total

    def test_custom_settings_change_reserve(self) -> None:
        environments = frozenset({EnvironmentType.PROD})
        default = _calculator().calculate(_make_input(environments=environments))
        no_reserve = _calculator(system_reserve_percent=0).calculate(
            _make_input(environments=environments)
        )

        assert no_reserve.environments[0].workers < default.environments[0].workers
