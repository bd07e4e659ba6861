"""Default per-technology application tier table."""

from __future__ import annotations

from kubesizer.constants.enums import AppTier, Technology

# Persistent volume size (GB) per application instance, shared by every technology
TIER_STORAGE_GB: dict[AppTier, float] = {
    AppTier.SMALL: 5.0,
    AppTier.MEDIUM: 10.0,
    AppTier.LARGE: 20.0,
    AppTier.XLARGE: 40.0,
}

# Format: (technology, name, vendor, {tier: (cpu_cores, ram_gb)})
DEFAULT_TECHNOLOGIES: list[
    tuple[Technology, str, str, dict[AppTier, tuple[float, float]]]
] = [
    (
        Technology.DOTNET, ".NET", "Microsoft",
        {
            AppTier.SMALL: (0.25, 0.5),
            AppTier.MEDIUM: (0.5, 1.0),
            AppTier.LARGE: (1.0, 2.0),
            AppTier.XLARGE: (2.0, 4.0),
        },
    ),
    (
        Technology.JAVA, "Java", "Oracle",
        {
            AppTier.SMALL: (0.5, 1.0),
            AppTier.MEDIUM: (1.0, 2.0),
            AppTier.LARGE: (2.0, 4.0),
            AppTier.XLARGE: (4.0, 8.0),
        },
    ),
    (
        Technology.NODEJS, "Node.js", "OpenJS Foundation",
        {
            AppTier.SMALL: (0.25, 1.0),
            AppTier.MEDIUM: (0.5, 1.0),
            AppTier.LARGE: (1.0, 2.0),
            AppTier.XLARGE: (2.0, 4.0),
        },
    ),
    (
        Technology.PYTHON, "Python", "Python Software Foundation",
        {
            AppTier.SMALL: (0.25, 1.0),
            AppTier.MEDIUM: (0.5, 1.0),
            AppTier.LARGE: (1.0, 2.0),
            AppTier.XLARGE: (2.0, 4.0),
        },
    ),
    (
        Technology.GO, "Go", "Google",
        {
            AppTier.SMALL: (0.125, 0.25),
            AppTier.MEDIUM: (0.25, 0.5),
            AppTier.LARGE: (0.5, 1.0),
            AppTier.XLARGE: (1.0, 2.0),
        },
    ),
    (
        Technology.MENDIX, "Mendix", "Siemens",
        {
            AppTier.SMALL: (1.0, 2.0),
            AppTier.MEDIUM: (2.0, 4.0),
            AppTier.LARGE: (4.0, 8.0),
            AppTier.XLARGE: (8.0, 16.0),
        },
    ),
    (
        Technology.OUTSYSTEMS, "OutSystems", "OutSystems",
        {
            AppTier.SMALL: (1.0, 2.0),
            AppTier.MEDIUM: (2.0, 4.0),
            AppTier.LARGE: (4.0, 8.0),
            AppTier.XLARGE: (8.0, 16.0),
        },
    ),
]
