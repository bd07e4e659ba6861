"""Limit and threshold constants for the sizing engine.

Node-count policy values, validation ranges and warning thresholds.
"""

from typing import Final

# ============================================================================
# Node policy
# ============================================================================

MIN_WORKERS: Final = 1
SYSTEM_RESERVE_PERCENT: Final = 15.0  # share of each worker kept for kubelet/OS
MIN_HA_CONTROL_PLANE_NODES: Final = 3
LARGE_CLUSTER_CONTROL_PLANE_NODES: Final = 5
LARGE_CLUSTER_WORKER_THRESHOLD: Final = 100
MIN_INFRA_NODES: Final = 3
MAX_INFRA_NODES: Final = 10
APPS_PER_INFRA_NODE: Final = 25
LARGE_PROD_INFRA_NODES: Final = 5
LARGE_PROD_APP_THRESHOLD: Final = 50

# ============================================================================
# Validation limits
# ============================================================================

REPLICAS_MIN: Final = 1
REPLICAS_MAX: Final = 10
HEADROOM_MIN: Final = 0.0
HEADROOM_MAX: Final = 100.0
CPU_OVERCOMMIT_MIN: Final = 1.0
CPU_OVERCOMMIT_MAX: Final = 10.0
MEMORY_OVERCOMMIT_MIN: Final = 1.0
MEMORY_OVERCOMMIT_MAX: Final = 4.0
VM_INSTANCES_MIN: Final = 1
VM_INSTANCES_MAX: Final = 100
VM_DISK_MIN_GB: Final = 10
VM_DISK_MAX_GB: Final = 10_000
VM_STORAGE_MAX_GB: Final = 1_000_000
SYSTEM_OVERHEAD_MAX: Final = 50.0
PROJECTION_YEARS_MIN: Final = 1
PROJECTION_YEARS_MAX: Final = 10
GROWTH_RATE_MIN: Final = -50.0
GROWTH_RATE_MAX: Final = 500.0

# ============================================================================
# Growth thresholds (percent of a platform ceiling or of baseline)
# ============================================================================

LIMIT_INFO_PCT: Final = 60.0
LIMIT_WARNING_PCT: Final = 80.0
LIMIT_CRITICAL_PCT: Final = 100.0
AUTOSCALING_PRIORITY_GROWTH_PCT: Final = 100.0
NODE_UPGRADE_GROWTH_PCT: Final = 50.0
COST_OPTIMIZATION_GROWTH_PCT: Final = 75.0
K3S_MANAGED_SERVICE_NODES: Final = 200
MICROK8S_MANAGED_SERVICE_NODES: Final = 100
YEAR_TO_LIMIT_HORIZON: Final = 10

__all__ = [
    "APPS_PER_INFRA_NODE",
    "AUTOSCALING_PRIORITY_GROWTH_PCT",
    "COST_OPTIMIZATION_GROWTH_PCT",
    "CPU_OVERCOMMIT_MAX",
    "CPU_OVERCOMMIT_MIN",
    "GROWTH_RATE_MAX",
    "GROWTH_RATE_MIN",
    "HEADROOM_MAX",
    "HEADROOM_MIN",
    "K3S_MANAGED_SERVICE_NODES",
    "LARGE_CLUSTER_CONTROL_PLANE_NODES",
    "LARGE_CLUSTER_WORKER_THRESHOLD",
    "LARGE_PROD_APP_THRESHOLD",
    "LARGE_PROD_INFRA_NODES",
    "LIMIT_CRITICAL_PCT",
    "LIMIT_INFO_PCT",
    "LIMIT_WARNING_PCT",
    "MAX_INFRA_NODES",
    "MEMORY_OVERCOMMIT_MAX",
    "MEMORY_OVERCOMMIT_MIN",
    "MICROK8S_MANAGED_SERVICE_NODES",
    "MIN_HA_CONTROL_PLANE_NODES",
    "MIN_INFRA_NODES",
    "MIN_WORKERS",
    "NODE_UPGRADE_GROWTH_PCT",
    "PROJECTION_YEARS_MAX",
    "PROJECTION_YEARS_MIN",
    "REPLICAS_MAX",
    "REPLICAS_MIN",
    "SYSTEM_OVERHEAD_MAX",
    "SYSTEM_RESERVE_PERCENT",
    "VM_DISK_MAX_GB",
    "VM_DISK_MIN_GB",
    "VM_INSTANCES_MAX",
    "VM_INSTANCES_MIN",
    "VM_STORAGE_MAX_GB",
    "YEAR_TO_LIMIT_HORIZON",
]
