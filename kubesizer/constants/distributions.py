"""Default Kubernetes distribution policy table."""

from __future__ import annotations

from kubesizer.constants.enums import Distribution

# Node spec shapes: (cpu_cores, ram_gb, disk_gb)
NodeShape = tuple[int, int, int]

_NONE: NodeShape = (0, 0, 0)

_OPENSHIFT_CP_PROD: NodeShape = (8, 32, 200)
_OPENSHIFT_CP_NON_PROD: NodeShape = (8, 32, 100)
_OPENSHIFT_WORKER_PROD: NodeShape = (16, 64, 200)
_OPENSHIFT_WORKER_NON_PROD: NodeShape = (8, 32, 100)
_OPENSHIFT_INFRA_PROD: NodeShape = (8, 32, 500)
_OPENSHIFT_INFRA_NON_PROD: NodeShape = (8, 32, 200)

_STANDARD_CP_PROD: NodeShape = (4, 16, 100)
_STANDARD_CP_NON_PROD: NodeShape = (2, 8, 50)
_STANDARD_WORKER_PROD: NodeShape = (8, 32, 100)
_STANDARD_WORKER_NON_PROD: NodeShape = (4, 16, 50)

_LIGHT_CP_PROD: NodeShape = (2, 4, 50)
_LIGHT_CP_NON_PROD: NodeShape = (1, 2, 25)
_LIGHT_WORKER_PROD: NodeShape = (4, 8, 50)
_LIGHT_WORKER_NON_PROD: NodeShape = (2, 4, 25)

_DEVELOPER_WORKER_PROD: NodeShape = (4, 16, 100)
_DEVELOPER_WORKER_NON_PROD: NodeShape = (2, 8, 50)

# Format: (distribution, name, vendor, tags, managed_control_plane, infra_nodes,
#          (prod_cp, non_prod_cp), (prod_worker, non_prod_worker), (prod_infra, non_prod_infra))
DistributionRow = tuple[
    Distribution,
    str,
    str,
    tuple[str, ...],
    bool,
    bool,
    tuple[NodeShape, NodeShape],
    tuple[NodeShape, NodeShape],
    tuple[NodeShape, NodeShape],
]

_OPENSHIFT_WORKERS = (_OPENSHIFT_WORKER_PROD, _OPENSHIFT_WORKER_NON_PROD)
_OPENSHIFT_INFRA = (_OPENSHIFT_INFRA_PROD, _OPENSHIFT_INFRA_NON_PROD)
_STANDARD_CP = (_STANDARD_CP_PROD, _STANDARD_CP_NON_PROD)
_STANDARD_WORKERS = (_STANDARD_WORKER_PROD, _STANDARD_WORKER_NON_PROD)
_LIGHT_CP = (_LIGHT_CP_PROD, _LIGHT_CP_NON_PROD)
_DEVELOPER_WORKERS = (_DEVELOPER_WORKER_PROD, _DEVELOPER_WORKER_NON_PROD)
_NO_NODES = (_NONE, _NONE)

_MANAGED_CLOUD = ("cloud", "managed")
_MANAGED_ENTERPRISE = ("cloud", "managed", "enterprise")
_MANAGED_DEVELOPER = ("cloud", "managed", "developer")

DEFAULT_DISTRIBUTIONS: list[DistributionRow] = [
    # OpenShift family
    (
        Distribution.OPENSHIFT, "OpenShift (On-Prem)", "Red Hat",
        ("enterprise", "on-prem"), False, True,
        (_OPENSHIFT_CP_PROD, _OPENSHIFT_CP_NON_PROD), _OPENSHIFT_WORKERS, _OPENSHIFT_INFRA,
    ),
    (
        Distribution.OPENSHIFT_ROSA, "OpenShift ROSA (AWS)", "Red Hat / AWS",
        ("enterprise", "cloud", "managed"), True, True,
        _NO_NODES, _OPENSHIFT_WORKERS, _OPENSHIFT_INFRA,
    ),
    (
        Distribution.OPENSHIFT_ARO, "OpenShift ARO (Azure)", "Red Hat / Microsoft",
        ("enterprise", "cloud", "managed"), True, True,
        _NO_NODES, _OPENSHIFT_WORKERS, _OPENSHIFT_INFRA,
    ),
    (
        Distribution.OPENSHIFT_DEDICATED, "OpenShift Dedicated (GCP)", "Red Hat / Google",
        ("enterprise", "cloud", "managed"), True, True,
        _NO_NODES, _OPENSHIFT_WORKERS, _OPENSHIFT_INFRA,
    ),
    (
        Distribution.OPENSHIFT_IBM, "OpenShift on IBM Cloud", "Red Hat / IBM",
        ("enterprise", "cloud", "managed"), True, True,
        _NO_NODES, _OPENSHIFT_WORKERS, _OPENSHIFT_INFRA,
    ),
    # Self-managed
    (
        Distribution.KUBERNETES, "Vanilla Kubernetes", "CNCF",
        ("on-prem", "open-source"), False, False,
        _STANDARD_CP, _STANDARD_WORKERS, _NO_NODES,
    ),
    (
        Distribution.RANCHER, "Rancher (On-Prem)", "SUSE",
        ("on-prem", "enterprise"), False, False,
        _STANDARD_CP, _STANDARD_WORKERS, _NO_NODES,
    ),
    (
        Distribution.RKE2, "RKE2", "SUSE",
        ("on-prem", "enterprise", "security"), False, False,
        _STANDARD_CP, _STANDARD_WORKERS, _NO_NODES,
    ),
    (
        Distribution.K3S, "K3s", "SUSE",
        ("on-prem", "lightweight", "edge"), False, False,
        _LIGHT_CP, (_LIGHT_WORKER_PROD, _LIGHT_WORKER_NON_PROD), _NO_NODES,
    ),
    (
        Distribution.MICROK8S, "MicroK8s", "Canonical",
        ("on-prem", "lightweight"), False, False,
        _LIGHT_CP, (_LIGHT_WORKER_PROD, _LIGHT_WORKER_NON_PROD), _NO_NODES,
    ),
    (
        Distribution.CHARMED, "Charmed Kubernetes", "Canonical",
        ("on-prem", "enterprise"), False, False,
        _STANDARD_CP, _STANDARD_WORKERS, _NO_NODES,
    ),
    (
        Distribution.TANZU, "VMware Tanzu (On-Prem)", "Broadcom",
        ("on-prem", "enterprise"), False, False,
        _STANDARD_CP, _STANDARD_WORKERS, _NO_NODES,
    ),
    (
        Distribution.HETZNER_K8S, "Hetzner Kubernetes", "Hetzner",
        ("cloud", "developer", "cost-effective"), False, False,
        _LIGHT_CP, _DEVELOPER_WORKERS, _NO_NODES,
    ),
    # Rancher hosted
    (
        Distribution.RANCHER_HOSTED, "Rancher Hosted (Cloud)", "SUSE",
        _MANAGED_ENTERPRISE, True, False, _NO_NODES, _STANDARD_WORKERS, _NO_NODES,
    ),
    (
        Distribution.RANCHER_EKS, "Rancher on EKS", "SUSE / AWS",
        _MANAGED_ENTERPRISE, True, False, _NO_NODES, _STANDARD_WORKERS, _NO_NODES,
    ),
    (
        Distribution.RANCHER_AKS, "Rancher on AKS", "SUSE / Microsoft",
        _MANAGED_ENTERPRISE, True, False, _NO_NODES, _STANDARD_WORKERS, _NO_NODES,
    ),
    (
        Distribution.RANCHER_GKE, "Rancher on GKE", "SUSE / Google",
        _MANAGED_ENTERPRISE, True, False, _NO_NODES, _STANDARD_WORKERS, _NO_NODES,
    ),
    # Tanzu cloud
    (
        Distribution.TANZU_CLOUD, "VMware Tanzu Cloud", "Broadcom",
        _MANAGED_ENTERPRISE, True, False, _NO_NODES, _STANDARD_WORKERS, _NO_NODES,
    ),
    (
        Distribution.TANZU_AWS, "VMware Tanzu on AWS", "Broadcom / AWS",
        _MANAGED_ENTERPRISE, True, False, _NO_NODES, _STANDARD_WORKERS, _NO_NODES,
    ),
    (
        Distribution.TANZU_AZURE, "VMware Tanzu on Azure", "Broadcom / Microsoft",
        _MANAGED_ENTERPRISE, True, False, _NO_NODES, _STANDARD_WORKERS, _NO_NODES,
    ),
    (
        Distribution.TANZU_GCP, "VMware Tanzu on GCP", "Broadcom / Google",
        _MANAGED_ENTERPRISE, True, False, _NO_NODES, _STANDARD_WORKERS, _NO_NODES,
    ),
    # Major cloud managed
    (
        Distribution.EKS, "Amazon EKS", "AWS",
        _MANAGED_CLOUD, True, False, _NO_NODES, _STANDARD_WORKERS, _NO_NODES,
    ),
    (
        Distribution.AKS, "Azure AKS", "Microsoft",
        _MANAGED_CLOUD, True, False, _NO_NODES, _STANDARD_WORKERS, _NO_NODES,
    ),
    (
        Distribution.GKE, "Google GKE", "Google",
        _MANAGED_CLOUD, True, False, _NO_NODES, _STANDARD_WORKERS, _NO_NODES,
    ),
    (
        Distribution.OKE, "Oracle OKE", "Oracle",
        _MANAGED_CLOUD, True, False, _NO_NODES, _STANDARD_WORKERS, _NO_NODES,
    ),
    (
        Distribution.IKS, "IBM Kubernetes Service", "IBM",
        _MANAGED_CLOUD, True, False, _NO_NODES, _STANDARD_WORKERS, _NO_NODES,
    ),
    (
        Distribution.ACK, "Alibaba ACK", "Alibaba",
        _MANAGED_CLOUD, True, False, _NO_NODES, _STANDARD_WORKERS, _NO_NODES,
    ),
    (
        Distribution.TKE, "Tencent TKE", "Tencent",
        _MANAGED_CLOUD, True, False, _NO_NODES, _STANDARD_WORKERS, _NO_NODES,
    ),
    (
        Distribution.CCE, "Huawei CCE", "Huawei",
        _MANAGED_CLOUD, True, False, _NO_NODES, _STANDARD_WORKERS, _NO_NODES,
    ),
    # Developer cloud managed
    (
        Distribution.DOKS, "DigitalOcean Kubernetes", "DigitalOcean",
        _MANAGED_DEVELOPER, True, False, _NO_NODES, _DEVELOPER_WORKERS, _NO_NODES,
    ),
    (
        Distribution.LKE, "Linode/Akamai LKE", "Akamai",
        _MANAGED_DEVELOPER, True, False, _NO_NODES, _DEVELOPER_WORKERS, _NO_NODES,
    ),
    (
        Distribution.VKE, "Vultr VKE", "Vultr",
        _MANAGED_DEVELOPER, True, False, _NO_NODES, _DEVELOPER_WORKERS, _NO_NODES,
    ),
    (
        Distribution.OVH_KUBERNETES, "OVHcloud Kubernetes", "OVH",
        _MANAGED_DEVELOPER, True, False, _NO_NODES, _DEVELOPER_WORKERS, _NO_NODES,
    ),
    (
        Distribution.SCALEWAY_KAPSULE, "Scaleway Kapsule", "Scaleway",
        _MANAGED_DEVELOPER, True, False, _NO_NODES, _DEVELOPER_WORKERS, _NO_NODES,
    ),
]

# Platform ceilings per cluster: (max_nodes, max_pods_per_node, max_total_pods)
DEFAULT_CLUSTER_LIMITS: tuple[int, int, int] = (2000, 110, 150_000)

CLUSTER_LIMITS: dict[Distribution, tuple[int, int, int]] = {
    # Cloud managed
    Distribution.EKS: (5000, 110, 150_000),
    Distribution.AKS: (5000, 250, 150_000),
    Distribution.GKE: (15_000, 110, 150_000),
    Distribution.OKE: (2000, 110, 150_000),
    # OpenShift
    Distribution.OPENSHIFT: (2000, 250, 150_000),
    Distribution.OPENSHIFT_ROSA: (5000, 250, 150_000),
    Distribution.OPENSHIFT_ARO: (5000, 250, 150_000),
    # Rancher and Tanzu
    Distribution.RANCHER: (2000, 110, 150_000),
    Distribution.RANCHER_HOSTED: (2000, 110, 150_000),
    Distribution.TANZU: (2000, 110, 150_000),
    Distribution.TANZU_CLOUD: (2000, 110, 150_000),
    # Lightweight
    Distribution.K3S: (500, 110, 50_000),
    Distribution.MICROK8S: (200, 110, 20_000),
    # Enterprise on-prem
    Distribution.CHARMED: (1000, 110, 100_000),
    Distribution.KUBERNETES: (5000, 110, 150_000),
}
