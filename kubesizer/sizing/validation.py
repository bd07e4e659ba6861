"""Business-rule checks callers run before invoking the sizing engines.

Field ranges are enforced by the pydantic models themselves; the rules here
cover combinations of fields. Each violation carries a stable ``BR-*`` code.
"""

from __future__ import annotations

import logging

from kubesizer.constants.enums import ClusterMode, ControlPlaneHA, EnvironmentType
from kubesizer.models.sizing.k8s import K8sHADRConfig, K8sSizingInput
from kubesizer.models.sizing.specs import DistributionConfig
from kubesizer.models.sizing.vm import VMSizingInput
from kubesizer.sizing.errors import SizingInputError, ValidationIssue
from kubesizer.sizing.tables import SizingTables

logger = logging.getLogger(__name__)

_SELF_MANAGED_HA = (ControlPlaneHA.STACKED_HA, ControlPlaneHA.EXTERNAL_ETCD)


def _validate_hadr(
    hadr: K8sHADRConfig, distribution: DistributionConfig, field: str
) -> list[ValidationIssue]:
    issues: list[ValidationIssue] = []
    mode = hadr.control_plane_ha

    if mode is ControlPlaneHA.MANAGED and not distribution.has_managed_control_plane:
        issues.append(
            ValidationIssue(
                code="BR-V011",
                field=f"{field}.control_plane_ha",
                message=f"{distribution.name} does not offer a managed control plane",
            )
        )
    elif mode is not ControlPlaneHA.MANAGED and distribution.has_managed_control_plane:
        issues.append(
            ValidationIssue(
                code="BR-V011",
                field=f"{field}.control_plane_ha",
                message=f"{distribution.name} control plane is managed by the provider",
            )
        )

    if mode in _SELF_MANAGED_HA:
        nodes = hadr.control_plane_nodes
        if nodes < 3 or nodes % 2 == 0:
            issues.append(
                ValidationIssue(
                    code="BR-V012",
                    field=f"{field}.control_plane_nodes",
                    message=(
                        f"{mode.value} needs an odd number of at least 3 control "
                        f"plane nodes for etcd quorum, got {nodes}"
                    ),
                )
            )
    elif mode is ControlPlaneHA.SINGLE and hadr.control_plane_nodes != 1:
        issues.append(
            ValidationIssue(
                code="BR-V013",
                field=f"{field}.control_plane_nodes",
                message=f"Single control plane uses 1 node, got {hadr.control_plane_nodes}",
            )
        )
    return issues


def validate_k8s_input(
    sizing_input: K8sSizingInput, tables: SizingTables | None = None
) -> list[ValidationIssue]:
    """Return every business-rule violation in ``sizing_input``."""
    tables = tables or SizingTables.default()
    issues: list[ValidationIssue] = []
    environments = sizing_input.enabled_environments

    if not environments:
        issues.append(
            ValidationIssue(
                code="BR-E001",
                field="enabled_environments",
                message="At least one environment must be enabled",
            )
        )
    elif EnvironmentType.PROD not in environments:
        issues.append(
            ValidationIssue(
                code="BR-E002",
                field="enabled_environments",
                message="The Prod environment must be enabled",
            )
        )

    if (
        sizing_input.cluster_mode is ClusterMode.PER_ENVIRONMENT
        and sizing_input.selected_environment not in environments
    ):
        issues.append(
            ValidationIssue(
                code="BR-V010",
                field="selected_environment",
                message=(
                    f"{sizing_input.selected_environment.value} is not an enabled "
                    "environment"
                ),
            )
        )

    distribution = sizing_input.custom_node_specs or tables.get_distribution_config(
        sizing_input.distribution
    )
    if sizing_input.hadr is not None:
        issues.extend(_validate_hadr(sizing_input.hadr, distribution, "hadr"))
    for env, hadr in sorted(
        sizing_input.environment_hadr.items(), key=lambda item: item[0].order
    ):
        issues.extend(
            _validate_hadr(hadr, distribution, f"environment_hadr.{env.value}")
        )

    if issues:
        logger.debug("K8s input has %d rule violation(s)", len(issues))
    return issues


def validate_vm_input(sizing_input: VMSizingInput) -> list[ValidationIssue]:
    """Return every business-rule violation in ``sizing_input``."""
    issues: list[ValidationIssue] = []

    if not sizing_input.enabled_environments:
        issues.append(
            ValidationIssue(
                code="BR-E001",
                field="enabled_environments",
                message="At least one environment must be enabled",
            )
        )

    for env in sorted(sizing_input.enabled_environments, key=lambda e: e.order):
        config = sizing_input.environment_configs.get(env)
        if config is None:
            issues.append(
                ValidationIssue(
                    code="BR-V020",
                    field=f"environment_configs.{env.value}",
                    message=f"{env.value} is enabled but has no VM configuration",
                )
            )
        elif config.enabled and not config.roles:
            issues.append(
                ValidationIssue(
                    code="BR-V021",
                    field=f"environment_configs.{env.value}.roles",
                    message=f"{env.value} needs at least one server role",
                )
            )

    if issues:
        logger.debug("VM input has %d rule violation(s)", len(issues))
    return issues


def ensure_valid_k8s_input(
    sizing_input: K8sSizingInput, tables: SizingTables | None = None
) -> None:
    """Raise :class:`SizingInputError` if any business rule is violated."""
    issues = validate_k8s_input(sizing_input, tables)
    if issues:
        raise SizingInputError(issues)


def ensure_valid_vm_input(sizing_input: VMSizingInput) -> None:
    issues = validate_vm_input(sizing_input)
    if issues:
        raise SizingInputError(issues)
