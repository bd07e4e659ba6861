"""Tests for loading sizing table overrides from YAML."""

from __future__ import annotations

import logging
from pathlib import Path

import pytest

from kubesizer.constants.enums import (
    AppTier,
    Distribution,
    LoadBalancerOption,
    ServerRole,
    Technology,
)
from kubesizer.models.state.sizing_settings import ConfigLoadError
from kubesizer.sizing.tables import SizingTables
from kubesizer.utils.tables_loader import load_settings, load_tables


def _write(tmp_path: Path, content: str) -> Path:
    path = tmp_path / "tables.yaml"
    path.write_text(content, encoding="utf-8")
    return path


# =============================================================================
# load_tables
# =============================================================================


class TestLoadTables:
    def test_empty_file_returns_defaults(self, tmp_path: Path) -> None:
        tables = load_tables(_write(tmp_path, ""))

        assert tables.get_tier_specs(
            Technology.DOTNET, AppTier.MEDIUM
        ) == SizingTables.default().get_tier_specs(Technology.DOTNET, AppTier.MEDIUM)

    def test_technology_tier_merged(self, tmp_path: Path) -> None:
        path = _write(
            tmp_path,
            "technologies:\n"
            "  Java:\n"
            "    tiers:\n"
            "      Medium: {cpu: 1500m, ram: 3Gi}\n",
        )
        tables = load_tables(path)
        medium = tables.get_tier_specs(Technology.JAVA, AppTier.MEDIUM)
        small = tables.get_tier_specs(Technology.JAVA, AppTier.SMALL)

        assert medium.cpu == pytest.approx(1.5)
        assert medium.ram == pytest.approx(3.0)
        # Untouched fields and tiers keep their defaults
        assert medium.storage == pytest.approx(10.0)
        assert small.cpu == pytest.approx(0.5)
        assert tables.get_technology_config(Technology.JAVA).name == "Java"

    def test_keys_match_enum_names_case_insensitively(self, tmp_path: Path) -> None:
        path = _write(
            tmp_path,
            "distributions:\n"
            "  k3s:\n"
            "    prod_worker: {cpu: 8, ram: 32Gi, disk: 200}\n",
        )
        worker = load_tables(path).get_distribution_config(Distribution.K3S).prod_worker

        assert (worker.cpu, worker.ram, worker.disk) == (8, 32, 200)

    def test_distribution_partial_node_spec(self, tmp_path: Path) -> None:
        path = _write(
            tmp_path,
            "distributions:\n"
            "  OpenShift:\n"
            "    infra_nodes: false\n"
            "    prod_worker: {cpu: 32}\n",
        )
        config = load_tables(path).get_distribution_config(Distribution.OPENSHIFT)

        assert not config.has_infra_nodes
        assert (config.prod_worker.cpu, config.prod_worker.ram) == (32, 64)

    def test_roles_and_load_balancers(self, tmp_path: Path) -> None:
        path = _write(
            tmp_path,
            "roles:\n"
            "  Web:\n"
            "    Medium: {cpu: 6, ram: 12}\n"
            "load_balancers:\n"
            "  HAPair: {vms: 2, cpu: 4, ram: 8Gi}\n",
        )
        tables = load_tables(path)

        assert tables.get_role_specs(ServerRole.WEB, AppTier.MEDIUM, Technology.GO) == (
            6,
            12,
        )
        assert tables.get_role_specs(ServerRole.WEB, AppTier.SMALL, Technology.GO) == (
            2,
            4,
        )
        assert tables.get_load_balancer_specs(LoadBalancerOption.HA_PAIR) == (2, 4, 8)

    def test_cluster_limits(self, tmp_path: Path) -> None:
        tables = load_tables(_write(tmp_path, "cluster_limits:\n  K3s: {nodes: 300}\n"))
        limits = tables.get_cluster_limits(Distribution.K3S)

        assert limits.nodes == 300
        assert limits.total_pods == 50_000

    def test_base_tables_respected(self, tmp_path: Path) -> None:
        base = SizingTables.default().replace(load_balancers={})
        tables = load_tables(_write(tmp_path, "cluster_limits: {}\n"), base)

        assert tables.load_balancers == {}

    def test_unknown_section_logged(
        self, tmp_path: Path, caplog: pytest.LogCaptureFixture
    ) -> None:
        with caplog.at_level(logging.WARNING, logger="kubesizer.utils.tables_loader"):
            load_tables(_write(tmp_path, "widgets: {}\n"))

        assert "widgets" in caplog.text

    def test_missing_file(self, tmp_path: Path) -> None:
        with pytest.raises(ConfigLoadError):
            load_tables(tmp_path / "missing.yaml")

    def test_malformed_yaml(self, tmp_path: Path) -> None:
        with pytest.raises(ConfigLoadError):
            load_tables(_write(tmp_path, "technologies: [unclosed\n"))

    def test_top_level_must_be_mapping(self, tmp_path: Path) -> None:
        with pytest.raises(ConfigLoadError, match="mapping"):
            load_tables(_write(tmp_path, "- one\n- two\n"))

    def test_unknown_enum_key(self, tmp_path: Path) -> None:
        with pytest.raises(ConfigLoadError, match="Unknown Technology"):
            load_tables(_write(tmp_path, "technologies:\n  Cobol: {}\n"))

    def test_invalid_value(self, tmp_path: Path) -> None:
        path = _write(
            tmp_path,
            "distributions:\n  EKS:\n    prod_worker: {cpu: 1500m}\n",
        )

        with pytest.raises(ConfigLoadError, match="Invalid sizing table entry"):
            load_tables(path)


# =============================================================================
# load_settings
# =============================================================================


class TestLoadSettings:
    def test_reads_settings_section(self, tmp_path: Path) -> None:
        path = _write(
            tmp_path,
            "settings:\n  system_reserve_percent: 10\n  max_infra: 8\n",
        )
        settings = load_settings(path)

        assert settings.system_reserve_percent == 10
        assert settings.system_reserve_factor == pytest.approx(0.9)
        assert settings.max_infra == 8

    def test_missing_section_gives_defaults(self, tmp_path: Path) -> None:
        settings = load_settings(_write(tmp_path, "technologies: {}\n"))

        assert settings.min_workers == 1

    def test_unknown_setting_ignored(
        self, tmp_path: Path, caplog: pytest.LogCaptureFixture
    ) -> None:
        with caplog.at_level(logging.WARNING, logger="kubesizer.utils.tables_loader"):
            settings = load_settings(_write(tmp_path, "settings:\n  turbo: true\n"))

        assert settings.min_workers == 1
        assert "turbo" in caplog.text

    def test_invalid_setting(self, tmp_path: Path) -> None:
        with pytest.raises(ConfigLoadError):
            load_settings(_write(tmp_path, "settings:\n  system_reserve_percent: 150\n"))
