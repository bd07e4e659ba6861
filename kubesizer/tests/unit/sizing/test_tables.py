"""Unit tests for SizingTables lookups."""

from __future__ import annotations

from decimal import Decimal

import pytest

from kubesizer.constants.enums import (
    AppTier,
    Distribution,
    HAPattern,
    LoadBalancerOption,
    ServerRole,
    Technology,
)
from kubesizer.sizing.errors import TableLookupError
from kubesizer.sizing.tables import SizingTables

_TABLES = SizingTables.default()


class TestTechnologyTiers:
    def test_every_technology_has_every_tier(self) -> None:
        for technology in Technology:
            config = _TABLES.get_technology_config(technology)
            assert set(config.tiers) == set(AppTier)

    def test_dotnet_medium(self) -> None:
        spec = _TABLES.get_tier_specs(Technology.DOTNET, AppTier.MEDIUM)

        assert spec.cpu == pytest.approx(0.5)
        assert spec.ram == pytest.approx(1.0)
        assert spec.storage == pytest.approx(10.0)

    def test_missing_technology_raises(self) -> None:
        tables = _TABLES.replace(technologies={})

        with pytest.raises(TableLookupError) as exc_info:
            tables.get_technology_config(Technology.GO)

        assert exc_info.value.table == "technology"
        assert exc_info.value.key is Technology.GO


class TestDistributions:
    def test_every_distribution_has_an_entry(self) -> None:
        for distribution in Distribution:
            config = _TABLES.get_distribution_config(distribution)
            assert config.prod_worker.cpu > 0

    def test_managed_distributions_have_no_control_plane_specs(self) -> None:
        for config in _TABLES.distributions.values():
            if config.has_managed_control_plane:
                assert config.prod_control_plane.is_zero

    def test_openshift_specs(self) -> None:
        config = _TABLES.get_distribution_config(Distribution.OPENSHIFT)

        assert config.has_infra_nodes
        assert not config.has_managed_control_plane
        assert (config.prod_worker.cpu, config.prod_worker.ram) == (16, 64)
        assert config.prod_infra.disk == 500

    def test_by_tag_ignores_case(self) -> None:
        managed = _TABLES.get_distributions_by_tag("MANAGED")
        names = {config.distribution for config in managed}

        assert Distribution.EKS in names
        assert Distribution.OPENSHIFT not in names

    def test_cluster_limits_fall_back_to_default(self) -> None:
        tables = _TABLES.replace(cluster_limits={})

        assert tables.get_cluster_limits(Distribution.K3S).nodes == 2000
        assert _TABLES.get_cluster_limits(Distribution.DOKS).nodes == 2000

    def test_k3s_limits(self) -> None:
        limits = _TABLES.get_cluster_limits(Distribution.K3S)

        assert limits.nodes == 500


class TestRoleSpecs:
    def test_web_medium(self) -> None:
        assert _TABLES.get_role_specs(
            ServerRole.WEB, AppTier.MEDIUM, Technology.DOTNET
        ) == (4, 8)

    def test_database_medium(self) -> None:
        assert _TABLES.get_role_specs(
            ServerRole.DATABASE, AppTier.MEDIUM, Technology.DOTNET
        ) == (8, 32)

    @pytest.mark.parametrize("tier", list(AppTier))
    def test_bastion_fixed(self, tier: AppTier) -> None:
        assert _TABLES.get_role_specs(ServerRole.BASTION, tier, Technology.DOTNET) == (
            2,
            4,
        )

    @pytest.mark.parametrize(
        "technology", [Technology.JAVA, Technology.MENDIX, Technology.OUTSYSTEMS]
    )
    def test_high_memory_technologies(self, technology: Technology) -> None:
        assert _TABLES.get_role_specs(ServerRole.WEB, AppTier.SMALL, technology) == (
            2,
            6,
        )

    def test_missing_role_raises(self) -> None:
        tables = _TABLES.replace(role_specs={})

        with pytest.raises(TableLookupError):
            tables.get_role_specs(ServerRole.WEB, AppTier.SMALL, Technology.DOTNET)


class TestHAMultiplier:
    def test_active_active_is_one(self) -> None:
        assert _TABLES.get_ha_multiplier(HAPattern.ACTIVE_ACTIVE, 4) == Decimal(1)

    def test_active_passive_pair(self) -> None:
        assert _TABLES.get_ha_multiplier(HAPattern.ACTIVE_PASSIVE) == Decimal(2)

    def test_n_plus_two_depends_on_count(self) -> None:
        assert _TABLES.get_ha_multiplier(HAPattern.N_PLUS_2, 4) == Decimal("1.5")

    @pytest.mark.parametrize("count", [0, -5])
    def test_non_positive_count_rejected(self, count: int) -> None:
        with pytest.raises(ValueError, match="instance_count"):
            _TABLES.get_ha_multiplier(HAPattern.N_PLUS_1, count)


class TestLoadBalancers:
    def test_ha_pair(self) -> None:
        assert _TABLES.get_load_balancer_specs(LoadBalancerOption.HA_PAIR) == (2, 2, 4)

    def test_cloud_lb_has_no_vms(self) -> None:
        assert _TABLES.get_load_balancer_specs(LoadBalancerOption.CLOUD_LB)[0] == 0


class TestReplace:
    def test_unknown_component_rejected(self) -> None:
        with pytest.raises(TypeError):
            _TABLES.replace(widgets={})

    def test_source_tables_untouched(self) -> None:
        _TABLES.replace(load_balancers={})

        assert LoadBalancerOption.SINGLE in _TABLES.load_balancers
