"""Default values for sizing settings.

All default values used in the input models and sizing settings.
"""

from typing import Final

# ============================================================================
# Replica defaults
# ============================================================================

REPLICAS_PROD_DEFAULT: Final = 3
REPLICAS_NON_PROD_DEFAULT: Final = 1
REPLICAS_STAGE_DEFAULT: Final = 2

# ============================================================================
# Headroom defaults (percent)
# ============================================================================

HEADROOM_DEV_DEFAULT: Final = 33.0
HEADROOM_TEST_DEFAULT: Final = 33.0
HEADROOM_STAGE_DEFAULT: Final = 0.0
HEADROOM_PROD_DEFAULT: Final = 37.5
HEADROOM_DR_DEFAULT: Final = 37.5

# ============================================================================
# Overcommit defaults (ratio)
# ============================================================================

OVERCOMMIT_CPU_DEFAULT: Final = 1.0
OVERCOMMIT_MEMORY_DEFAULT: Final = 1.0

# ============================================================================
# Node and VM defaults
# ============================================================================

NODE_DISK_DEFAULT_GB: Final = 100
VM_DISK_DEFAULT_GB: Final = 100
SYSTEM_OVERHEAD_PERCENT_DEFAULT: Final = 15.0
CONTROL_PLANE_NODES_DEFAULT: Final = 3
AVAILABILITY_ZONES_DEFAULT: Final = 3
DR_REGIONS_DEFAULT: Final = 1

# ============================================================================
# Growth defaults
# ============================================================================

ANNUAL_GROWTH_RATE_DEFAULT: Final = 20.0
PROJECTION_YEARS_DEFAULT: Final = 3
ANNUAL_COST_INFLATION_DEFAULT: Final = 3.0
CUSTOM_GROWTH_RATES_DEFAULT: Final = {1: 30.0, 2: 25.0, 3: 20.0, 4: 15.0, 5: 10.0}

__all__ = [
    "ANNUAL_COST_INFLATION_DEFAULT",
    "ANNUAL_GROWTH_RATE_DEFAULT",
    "AVAILABILITY_ZONES_DEFAULT",
    "CONTROL_PLANE_NODES_DEFAULT",
    "CUSTOM_GROWTH_RATES_DEFAULT",
    "DR_REGIONS_DEFAULT",
    "HEADROOM_DEV_DEFAULT",
    "HEADROOM_DR_DEFAULT",
    "HEADROOM_PROD_DEFAULT",
    "HEADROOM_STAGE_DEFAULT",
    "HEADROOM_TEST_DEFAULT",
    "NODE_DISK_DEFAULT_GB",
    "OVERCOMMIT_CPU_DEFAULT",
    "OVERCOMMIT_MEMORY_DEFAULT",
    "PROJECTION_YEARS_DEFAULT",
    "REPLICAS_NON_PROD_DEFAULT",
    "REPLICAS_PROD_DEFAULT",
    "REPLICAS_STAGE_DEFAULT",
    "SYSTEM_OVERHEAD_PERCENT_DEFAULT",
    "VM_DISK_DEFAULT_GB",
]
