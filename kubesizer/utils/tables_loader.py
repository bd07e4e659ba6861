"""Load sizing table overrides from YAML.

An override file only lists what differs from the bundled tables, for
example::

    technologies:
      Java:
        tiers:
          Medium: {cpu: 1500m, ram: 3Gi}
    distributions:
      K3s:
        prod_worker: {cpu: 8, ram: 32Gi, disk: 200}
    cluster_limits:
      K3s: {nodes: 300}
    settings:
      system_reserve_percent: 10

Technology, distribution and cluster limit entries are merged field by
field onto the defaults; role and load balancer entries replace whole rows.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from enum import Enum
from pathlib import Path
from typing import Any, TypeVar

import yaml
from pydantic import ValidationError

from kubesizer.constants.enums import (
    AppTier,
    Distribution,
    LoadBalancerOption,
    ServerRole,
    Technology,
)
from kubesizer.models.sizing.specs import (
    ClusterLimits,
    DistributionConfig,
    NodeSpecs,
    TechnologyConfig,
    TierSpecs,
)
from kubesizer.models.state.sizing_settings import ConfigLoadError, SizingSettings
from kubesizer.sizing.tables import SizingTables
from kubesizer.utils.resource_parser import (
    parse_cpu,
    parse_memory_gb,
    parse_whole_cores,
    parse_whole_gb,
)

logger = logging.getLogger(__name__)

_E = TypeVar("_E", bound=Enum)

_TABLE_SECTIONS = frozenset(
    {"technologies", "distributions", "roles", "load_balancers", "cluster_limits"}
)
_KNOWN_SECTIONS = _TABLE_SECTIONS | {"settings"}

_NODE_FIELDS = (
    "prod_control_plane",
    "non_prod_control_plane",
    "prod_worker",
    "non_prod_worker",
    "prod_infra",
    "non_prod_infra",
)


def _read_document(path: Path) -> dict[str, Any]:
    try:
        with open(path, encoding="utf-8") as handle:
            content = yaml.safe_load(handle)
    except (OSError, yaml.YAMLError) as e:
        raise ConfigLoadError(f"Failed to read sizing tables from {path}: {e}") from e

    if content is None:
        return {}
    if not isinstance(content, dict):
        raise ConfigLoadError(f"{path}: top level must be a mapping")

    for key in content:
        if key not in _KNOWN_SECTIONS:
            logger.warning("Ignoring unknown section %r in %s", key, path)
    return content


def _section(document: dict[str, Any], name: str) -> dict[Any, Any]:
    value = document.get(name) or {}
    if not isinstance(value, dict):
        raise ConfigLoadError(f"Section {name!r} must be a mapping")
    return value


def _enum_key(enum_cls: type[_E], raw: object, section: str) -> _E:
    """Resolve an enum member from its value or name, ignoring case."""
    wanted = str(raw).strip().lower()
    for member in enum_cls:
        if wanted in (member.value.lower(), member.name.lower()):
            return member
    raise ConfigLoadError(f"Unknown {enum_cls.__name__} {raw!r} in section {section!r}")


def _node_specs(raw: dict[str, Any], base: NodeSpecs | None = None) -> NodeSpecs:
    fields = base.model_dump() if base is not None else {}
    if "cpu" in raw:
        fields["cpu"] = parse_whole_cores(raw["cpu"])
    if "ram" in raw:
        fields["ram"] = parse_whole_gb(raw["ram"])
    if "disk" in raw:
        fields["disk"] = parse_whole_gb(raw["disk"])
    return NodeSpecs(**fields)


def _merge_technologies(
    section: dict[Any, Any], base: dict[Technology, TechnologyConfig]
) -> dict[Technology, TechnologyConfig]:
    merged = dict(base)
    for raw_key, raw in section.items():
        technology = _enum_key(Technology, raw_key, "technologies")
        current = merged.get(technology)
        tiers = dict(current.tiers) if current is not None else {}
        for raw_tier, spec in (raw.get("tiers") or {}).items():
            tier = _enum_key(AppTier, raw_tier, f"technologies.{technology.value}")
            previous = tiers.get(tier)
            tiers[tier] = TierSpecs(
                cpu=parse_cpu(spec["cpu"]) if "cpu" in spec else previous.cpu,
                ram=parse_memory_gb(spec["ram"]) if "ram" in spec else previous.ram,
                storage=(
                    parse_memory_gb(spec["storage"])
                    if "storage" in spec
                    else (previous.storage if previous is not None else 0.0)
                ),
            )
        merged[technology] = TechnologyConfig(
            technology=technology,
            name=raw.get("name", current.name if current else technology.value),
            vendor=raw.get("vendor", current.vendor if current else ""),
            tiers=tiers,
        )
    return merged


def _merge_distributions(
    section: dict[Any, Any], base: dict[Distribution, DistributionConfig]
) -> dict[Distribution, DistributionConfig]:
    merged = dict(base)
    for raw_key, raw in section.items():
        distribution = _enum_key(Distribution, raw_key, "distributions")
        current = merged.get(distribution)
        fields: dict[str, Any] = current.model_dump() if current is not None else {
            "distribution": distribution,
            "name": distribution.value,
        }
        for key in ("name", "vendor"):
            if key in raw:
                fields[key] = str(raw[key])
        if "tags" in raw:
            fields["tags"] = tuple(str(tag) for tag in raw["tags"])
        if "managed_control_plane" in raw:
            fields["has_managed_control_plane"] = bool(raw["managed_control_plane"])
        if "infra_nodes" in raw:
            fields["has_infra_nodes"] = bool(raw["infra_nodes"])
        for key in _NODE_FIELDS:
            if key in raw:
                base_specs = getattr(current, key) if current is not None else None
                fields[key] = _node_specs(raw[key], base_specs)
        merged[distribution] = DistributionConfig(**fields)
    return merged


def _merge_roles(
    section: dict[Any, Any], base: Mapping[ServerRole, Mapping[AppTier, tuple[int, int]]]
) -> dict[ServerRole, dict[AppTier, tuple[int, int]]]:
    merged = {role: dict(tiers) for role, tiers in base.items()}
    for raw_key, raw in section.items():
        role = _enum_key(ServerRole, raw_key, "roles")
        tiers = merged.setdefault(role, {})
        for raw_tier, spec in raw.items():
            tier = _enum_key(AppTier, raw_tier, f"roles.{role.value}")
            tiers[tier] = (parse_whole_cores(spec["cpu"]), parse_whole_gb(spec["ram"]))
    return merged


def _merge_load_balancers(
    section: dict[Any, Any], base: Mapping[LoadBalancerOption, tuple[int, int, int]]
) -> dict[LoadBalancerOption, tuple[int, int, int]]:
    merged = dict(base)
    for raw_key, raw in section.items():
        option = _enum_key(LoadBalancerOption, raw_key, "load_balancers")
        merged[option] = (
            int(raw["vms"]),
            parse_whole_cores(raw["cpu"]),
            parse_whole_gb(raw["ram"]),
        )
    return merged


def _merge_cluster_limits(
    section: dict[Any, Any], tables: SizingTables
) -> dict[Distribution, ClusterLimits]:
    merged = {d: tables.get_cluster_limits(d) for d in Distribution}
    for raw_key, raw in section.items():
        distribution = _enum_key(Distribution, raw_key, "cluster_limits")
        merged[distribution] = merged[distribution].model_copy(
            update={key: int(value) for key, value in raw.items()}
        )
    return merged


def load_tables(path: str | Path, base: SizingTables | None = None) -> SizingTables:
    """Build lookup tables from ``base`` (bundled defaults) plus a YAML file.

    Raises:
        ConfigLoadError: The file is unreadable or holds invalid entries.
    """
    path = Path(path)
    base = base or SizingTables.default()
    document = _read_document(path)

    overrides: dict[str, object] = {}
    try:
        if "technologies" in document:
            overrides["technologies"] = _merge_technologies(
                _section(document, "technologies"), dict(base.technologies)
            )
        if "distributions" in document:
            overrides["distributions"] = _merge_distributions(
                _section(document, "distributions"), dict(base.distributions)
            )
        if "roles" in document:
            overrides["role_specs"] = _merge_roles(
                _section(document, "roles"), base.role_specs
            )
        if "load_balancers" in document:
            overrides["load_balancers"] = _merge_load_balancers(
                _section(document, "load_balancers"), base.load_balancers
            )
        if "cluster_limits" in document:
            overrides["cluster_limits"] = _merge_cluster_limits(
                _section(document, "cluster_limits"), base
            )
    except ConfigLoadError:
        raise
    except (AttributeError, KeyError, TypeError, ValueError, ValidationError) as e:
        raise ConfigLoadError(f"Invalid sizing table entry in {path}: {e}") from e

    tables = base.replace(**overrides) if overrides else base
    logger.info(
        "Loaded sizing tables from %s (%s)",
        path,
        ", ".join(sorted(overrides)) or "no overrides",
    )
    return tables


def load_settings(path: str | Path) -> SizingSettings:
    """Read the ``settings`` section of a table file into :class:`SizingSettings`.

    Raises:
        ConfigLoadError: The file is unreadable or the settings are invalid.
    """
    path = Path(path)
    section = _section(_read_document(path), "settings")
    unknown = set(section) - set(SizingSettings.model_fields)
    for key in sorted(unknown):
        logger.warning("Ignoring unknown setting %r in %s", key, path)
    try:
        settings = SizingSettings(
            **{key: value for key, value in section.items() if key not in unknown}
        )
    except ValidationError as e:
        raise ConfigLoadError(f"Invalid sizing settings in {path}: {e}") from e
    logger.info("Loaded sizing settings from %s", path)
    return settings
