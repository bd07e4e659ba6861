"""Sizing input, result and lookup value models."""

from kubesizer.models.sizing.k8s import (
    EnvironmentResult,
    HeadroomSettings,
    K8sGrandTotal,
    K8sHADRConfig,
    K8sSizingInput,
    K8sSizingResult,
    OvercommitSettings,
    ReplicaSettings,
)
from kubesizer.models.sizing.specs import (
    AppConfig,
    ClusterLimits,
    DistributionConfig,
    NodeSpecs,
    TechnologyConfig,
    TierSpecs,
)
from kubesizer.models.sizing.vm import (
    VMDRResult,
    VMEnvironmentConfig,
    VMEnvironmentResult,
    VMGrandTotal,
    VMRoleConfig,
    VMRoleResult,
    VMSizingInput,
    VMSizingResult,
)

__all__ = [
    "AppConfig",
    "ClusterLimits",
    "DistributionConfig",
    "EnvironmentResult",
    "HeadroomSettings",
    "K8sGrandTotal",
    "K8sHADRConfig",
    "K8sSizingInput",
    "K8sSizingResult",
    "NodeSpecs",
    "OvercommitSettings",
    "ReplicaSettings",
    "TechnologyConfig",
    "TierSpecs",
    "VMDRResult",
    "VMEnvironmentConfig",
    "VMEnvironmentResult",
    "VMGrandTotal",
    "VMRoleConfig",
    "VMRoleResult",
    "VMSizingInput",
    "VMSizingResult",
]
