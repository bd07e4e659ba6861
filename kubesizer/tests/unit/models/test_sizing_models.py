"""Unit tests for sizing input models."""

from __future__ import annotations

import pytest
from pydantic import ValidationError

from kubesizer.constants.enums import (
    AppTier,
    BackupStrategy,
    ControlPlaneHA,
    EnvironmentType,
    K8sDRPattern,
    NodeDistribution,
    ServerRole,
)
from kubesizer.models.sizing.k8s import (
    HeadroomSettings,
    K8sHADRConfig,
    K8sSizingInput,
    OvercommitSettings,
    ReplicaSettings,
)
from kubesizer.models.sizing.specs import AppConfig
from kubesizer.models.sizing.vm import VMEnvironmentConfig, VMRoleConfig, VMSizingInput
from kubesizer.models.state.sizing_settings import SizingSettings

# =============================================================================
# AppConfig
# =============================================================================


class TestAppConfig:
    def test_total_apps(self) -> None:
        assert AppConfig(small=1, medium=2, large=3, xlarge=4).total_apps == 10

    def test_count_by_tier(self) -> None:
        apps = AppConfig(large=7)

        assert apps.count(AppTier.LARGE) == 7
        assert apps.count(AppTier.SMALL) == 0

    def test_scaled_rounds_up(self) -> None:
        apps = AppConfig(small=10, medium=3).scaled(1.2)

        assert apps.small == 12
        assert apps.medium == 4

    def test_add(self) -> None:
        total = AppConfig(small=1, xlarge=2) + AppConfig(small=4, medium=1)

        assert total == AppConfig(small=5, medium=1, xlarge=2)

    def test_negative_counts_rejected(self) -> None:
        with pytest.raises(ValidationError):
            AppConfig(small=-1)

    def test_frozen(self) -> None:
        apps = AppConfig()

        with pytest.raises(ValidationError):
            apps.small = 3  # type: ignore[misc]


# =============================================================================
# Kubernetes settings
# =============================================================================


class TestKnobs:
    def test_replicas_per_environment(self) -> None:
        replicas = ReplicaSettings()

        assert replicas.for_environment(EnvironmentType.PROD) == 3
        assert replicas.for_environment(EnvironmentType.DR) == 3
        assert replicas.for_environment(EnvironmentType.STAGE) == 2
        assert replicas.for_environment(EnvironmentType.DEV) == 1

    def test_replicas_range(self) -> None:
        with pytest.raises(ValidationError):
            ReplicaSettings(prod=11)

    def test_headroom_defaults(self) -> None:
        headroom = HeadroomSettings()

        assert headroom.for_environment(EnvironmentType.DEV) == 33.0
        assert headroom.for_environment(EnvironmentType.STAGE) == 0.0
        assert headroom.for_environment(EnvironmentType.PROD) == 37.5

    def test_memory_overcommit_ceiling(self) -> None:
        with pytest.raises(ValidationError):
            OvercommitSettings(memory=5.0)

    def test_headroom_disabled_reads_zero(self) -> None:
        sizing_input = K8sSizingInput(enable_headroom=False)

        assert sizing_input.headroom_for(EnvironmentType.PROD) == 0.0

    def test_environment_apps_override_pools(self) -> None:
        sizing_input = K8sSizingInput(
            prod_apps=AppConfig(small=5),
            non_prod_apps=AppConfig(small=2),
            environment_apps={EnvironmentType.STAGE: AppConfig(large=9)},
        )

        assert sizing_input.apps_for(EnvironmentType.STAGE) == AppConfig(large=9)
        assert sizing_input.apps_for(EnvironmentType.DR) == AppConfig(small=5)
        assert sizing_input.apps_for(EnvironmentType.TEST) == AppConfig(small=2)

    def test_scaled_input(self) -> None:
        sizing_input = K8sSizingInput(
            prod_apps=AppConfig(medium=10),
            environment_apps={EnvironmentType.DEV: AppConfig(small=5)},
        ).scaled(1.5)

        assert sizing_input.prod_apps.medium == 15
        assert sizing_input.environment_apps[EnvironmentType.DEV].small == 8


class TestK8sHADRConfig:
    def test_effective_zones(self) -> None:
        assert K8sHADRConfig().effective_zones == 1
        assert (
            K8sHADRConfig(node_distribution=NodeDistribution.DUAL_AZ).effective_zones
            == 2
        )
        assert (
            K8sHADRConfig(
                node_distribution=NodeDistribution.MULTI_AZ, availability_zones=4
            ).effective_zones
            == 4
        )

    def test_summary_managed(self) -> None:
        assert K8sHADRConfig().summary() == "Managed CP"

    def test_summary_full(self) -> None:
        hadr = K8sHADRConfig(
            control_plane_ha=ControlPlaneHA.STACKED_HA,
            node_distribution=NodeDistribution.MULTI_AZ,
            dr_pattern=K8sDRPattern.WARM_STANDBY,
            backup_strategy=BackupStrategy.VELERO,
        )

        assert hadr.summary() == "3x StackedHA, MultiAZ, DR: WarmStandby"

    def test_summary_backup_only(self) -> None:
        hadr = K8sHADRConfig(
            control_plane_ha=ControlPlaneHA.SINGLE,
            control_plane_nodes=1,
            backup_strategy=BackupStrategy.KASTEN,
        )

        assert hadr.summary() == "Single CP, Backup: Kasten"


# =============================================================================
# VM models
# =============================================================================


class TestVMModels:
    def test_role_scaled_rounds_up(self) -> None:
        role = VMRoleConfig(role=ServerRole.WEB, instance_count=80)

        assert role.scaled(1.1).instance_count == 88
        assert role.scaled(1.01).instance_count == 81

    def test_role_scaled_past_input_range(self) -> None:
        role = VMRoleConfig(role=ServerRole.WEB, instance_count=80)

        assert role.scaled(2.0).instance_count == 160

    def test_role_disk_range(self) -> None:
        with pytest.raises(ValidationError):
            VMRoleConfig(role=ServerRole.WEB, disk_gb=5)

    def test_input_scaled(self) -> None:
        sizing_input = VMSizingInput(
            environment_configs={
                EnvironmentType.PROD: VMEnvironmentConfig(
                    roles=(VMRoleConfig(role=ServerRole.APP, instance_count=4),)
                )
            }
        ).scaled(1.25)

        assert sizing_input.environment_configs[EnvironmentType.PROD].roles[
            0
        ].instance_count == 5

    def test_default_environments(self) -> None:
        assert VMSizingInput().enabled_environments == frozenset(
            {EnvironmentType.DEV, EnvironmentType.TEST, EnvironmentType.PROD}
        )


# =============================================================================
# Sizing settings
# =============================================================================


class TestSizingSettings:
    def test_reserve_factor(self) -> None:
        assert SizingSettings(system_reserve_percent=20).system_reserve_factor == (
            pytest.approx(0.8)
        )

    def test_equal_infra_bounds_allowed(self) -> None:
        settings = SizingSettings(min_infra=4, max_infra=4)

        assert settings.min_infra == settings.max_infra

    def test_min_infra_above_max_rejected(self) -> None:
        with pytest.raises(ValidationError, match="min_infra"):
            SizingSettings(min_infra=12, max_infra=10)
