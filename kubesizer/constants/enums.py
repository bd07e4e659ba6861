"""All enum definitions for the sizing engine.

This module consolidates all enumerations used throughout the package.
Member values match the names used in table files and API payloads.
"""

from enum import Enum

# =============================================================================
# Workload Enums
# =============================================================================


class Technology(Enum):
    """Application technology stacks with a tier table."""

    DOTNET = "DotNet"
    JAVA = "Java"
    NODEJS = "NodeJs"
    PYTHON = "Python"
    GO = "Go"
    MENDIX = "Mendix"
    OUTSYSTEMS = "OutSystems"


class AppTier(Enum):
    """Application size classification."""

    SMALL = "Small"
    MEDIUM = "Medium"
    LARGE = "Large"
    XLARGE = "XLarge"


class EnvironmentType(Enum):
    """Deployment environments, declared in reporting order."""

    DEV = "Dev"
    TEST = "Test"
    STAGE = "Stage"
    PROD = "Prod"
    DR = "DR"

    @property
    def is_prod(self) -> bool:
        """Prod and DR are sized with production settings."""
        return self in (EnvironmentType.PROD, EnvironmentType.DR)

    @property
    def order(self) -> int:
        return list(EnvironmentType).index(self)


# =============================================================================
# Kubernetes Enums
# =============================================================================


class Distribution(Enum):
    """Kubernetes distributions with a policy table entry."""

    # On-premises
    OPENSHIFT = "OpenShift"
    KUBERNETES = "Kubernetes"
    RANCHER = "Rancher"
    RKE2 = "RKE2"
    K3S = "K3s"
    MICROK8S = "MicroK8s"
    CHARMED = "Charmed"
    TANZU = "Tanzu"
    # OpenShift cloud variants
    OPENSHIFT_ROSA = "OpenShiftROSA"
    OPENSHIFT_ARO = "OpenShiftARO"
    OPENSHIFT_DEDICATED = "OpenShiftDedicated"
    OPENSHIFT_IBM = "OpenShiftIBM"
    # Rancher cloud variants
    RANCHER_HOSTED = "RancherHosted"
    RANCHER_EKS = "RancherEKS"
    RANCHER_AKS = "RancherAKS"
    RANCHER_GKE = "RancherGKE"
    # Tanzu cloud variants
    TANZU_CLOUD = "TanzuCloud"
    TANZU_AWS = "TanzuAWS"
    TANZU_AZURE = "TanzuAzure"
    TANZU_GCP = "TanzuGCP"
    # Major cloud managed
    EKS = "EKS"
    AKS = "AKS"
    GKE = "GKE"
    OKE = "OKE"
    IKS = "IKS"
    ACK = "ACK"
    TKE = "TKE"
    CCE = "CCE"
    # Developer cloud managed
    DOKS = "DOKS"
    LKE = "LKE"
    VKE = "VKE"
    HETZNER_K8S = "HetznerK8s"
    OVH_KUBERNETES = "OVHKubernetes"
    SCALEWAY_KAPSULE = "ScalewayKapsule"


class ClusterMode(Enum):
    """Cluster topology across environments."""

    MULTI_CLUSTER = "MultiCluster"
    SHARED_CLUSTER = "SharedCluster"
    PER_ENVIRONMENT = "PerEnvironment"


class ControlPlaneHA(Enum):
    """Control plane availability modes."""

    MANAGED = "Managed"
    SINGLE = "Single"
    STACKED_HA = "StackedHA"
    EXTERNAL_ETCD = "ExternalEtcd"


class NodeDistribution(Enum):
    """Worker node placement strategies."""

    SINGLE_AZ = "SingleAZ"
    DUAL_AZ = "DualAZ"
    MULTI_AZ = "MultiAZ"
    MULTI_REGION = "MultiRegion"


class K8sDRPattern(Enum):
    """Cluster disaster recovery patterns."""

    NONE = "None"
    BACKUP_RESTORE = "BackupRestore"
    WARM_STANDBY = "WarmStandby"
    HOT_STANDBY = "HotStandby"
    ACTIVE_ACTIVE = "ActiveActive"


class BackupStrategy(Enum):
    """Cluster backup tooling."""

    NONE = "None"
    VELERO = "Velero"
    KASTEN = "Kasten"
    PORTWORX = "Portworx"
    CLOUD_NATIVE = "CloudNative"
    CUSTOM = "Custom"


# =============================================================================
# VM Enums
# =============================================================================


class ServerRole(Enum):
    """VM server roles."""

    WEB = "Web"
    APP = "App"
    DATABASE = "Database"
    CACHE = "Cache"
    MESSAGE_QUEUE = "MessageQueue"
    SEARCH = "Search"
    STORAGE = "Storage"
    MONITORING = "Monitoring"
    BASTION = "Bastion"


class HAPattern(Enum):
    """VM high availability patterns."""

    NONE = "None"
    ACTIVE_ACTIVE = "ActiveActive"
    ACTIVE_PASSIVE = "ActivePassive"
    N_PLUS_1 = "NPlus1"
    N_PLUS_2 = "NPlus2"


class DRPattern(Enum):
    """VM disaster recovery patterns."""

    NONE = "None"
    PILOT_LIGHT = "PilotLight"
    WARM_STANDBY = "WarmStandby"
    HOT_STANDBY = "HotStandby"
    MULTI_REGION = "MultiRegion"


class LoadBalancerOption(Enum):
    """Load balancer deployment options for VM environments."""

    NONE = "None"
    SINGLE = "Single"
    HA_PAIR = "HAPair"
    CLOUD_LB = "CloudLB"


# =============================================================================
# Growth Enums
# =============================================================================


class GrowthPattern(Enum):
    """Shapes used to extrapolate demand."""

    LINEAR = "Linear"
    EXPONENTIAL = "Exponential"
    S_CURVE = "SCurve"
    CUSTOM = "Custom"


class WarningType(Enum):
    """Capacity warning categories."""

    NODE_LIMIT = "NodeLimit"
    POD_LIMIT = "PodLimit"
    CPU_CAPACITY = "CpuCapacity"
    MEMORY_CAPACITY = "MemoryCapacity"
    STORAGE_CAPACITY = "StorageCapacity"
    COST_THRESHOLD = "CostThreshold"
    CLUSTER_SPLIT = "ClusterSplit"


class WarningSeverity(Enum):
    """Capacity warning severity, ordered from least to most severe."""

    INFO = "Info"
    WARNING = "Warning"
    CRITICAL = "Critical"


class RecommendationType(Enum):
    """Scaling recommendation categories."""

    UPGRADE_NODE_SIZE = "UpgradeNodeSize"
    ADD_WORKER_NODES = "AddWorkerNodes"
    SPLIT_CLUSTER = "SplitCluster"
    ADD_CLUSTER = "AddCluster"
    ENABLE_AUTOSCALING = "EnableAutoscaling"
    OPTIMIZE_RESOURCES = "OptimizeResources"
    REVIEW_OVERPROVISIONING = "ReviewOverprovisioning"
    CONSIDER_MANAGED_SERVICE = "ConsiderManagedService"
