"""Parsing of Kubernetes-style quantities found in sizing table files.

Table files may give sizes either as plain numbers (cores, GB) or as
Kubernetes quantity strings:
- CPU: "500m" -> 0.5 cores, "2" -> 2.0 cores
- Memory and disk: "16Gi" -> 16 GB, "512Mi" -> 0.5 GB, "1Ti" -> 1024 GB
"""

from __future__ import annotations

_GIB = 1024**3

# Suffix multipliers to convert a quantity to bytes.
_MEMORY_BYTES_MULTIPLIERS: tuple[tuple[str, int], ...] = (
    ("Ki", 1024),
    ("Mi", 1024**2),
    ("Gi", 1024**3),
    ("Ti", 1024**4),
)

# CPU suffixes and the number of units per core.
_CPU_DIVISORS: tuple[tuple[str, int], ...] = (
    ("n", 1_000_000_000),
    ("u", 1_000_000),
    ("m", 1000),
)


def parse_cpu(value: str | float) -> float:
    """Parse a CPU quantity to cores.

    Args:
        value: Number of cores, or a string such as "250m" or "1.5".

    Returns:
        CPU value in cores.

    Raises:
        ValueError: The value is empty or not a CPU quantity.
    """
    if isinstance(value, bool):
        raise ValueError(f"Invalid CPU quantity: {value!r}")
    if isinstance(value, (int, float)):
        return float(value)

    text = str(value).strip()
    if not text:
        raise ValueError("Empty CPU quantity")

    for suffix, divisor in _CPU_DIVISORS:
        if text.endswith(suffix):
            return float(text[: -len(suffix)]) / divisor
    return float(text)


def memory_str_to_bytes(memory_str: str) -> float:
    """Convert a binary-suffixed memory string ("512Mi", "1Gi") to bytes.

    A string without suffix is taken as bytes.

    Raises:
        ValueError: The string is empty or malformed.
    """
    text = str(memory_str).strip()
    if not text:
        raise ValueError("Empty memory quantity")

    for suffix, mult in _MEMORY_BYTES_MULTIPLIERS:
        if text.endswith(suffix):
            return float(text[:-2]) * mult
    return float(text)


def parse_memory_gb(value: str | float) -> float:
    """Parse a memory or disk size to GB.

    Plain numbers, and numeric strings without suffix, are already GB.
    """
    if isinstance(value, bool):
        raise ValueError(f"Invalid memory quantity: {value!r}")
    if isinstance(value, (int, float)):
        return float(value)

    text = str(value).strip()
    if any(text.endswith(suffix) for suffix, _ in _MEMORY_BYTES_MULTIPLIERS):
        return memory_str_to_bytes(text) / _GIB
    if not text:
        raise ValueError("Empty memory quantity")
    return float(text)


def parse_whole_gb(value: str | float) -> int:
    """Parse a node or VM size that must be a whole number of GB."""
    gb = parse_memory_gb(value)
    if gb != int(gb):
        raise ValueError(f"Size must be a whole number of GB: {value!r}")
    return int(gb)


def parse_whole_cores(value: str | float) -> int:
    """Parse a node or VM CPU count that must be a whole number of cores."""
    cores = parse_cpu(value)
    if cores != int(cores):
        raise ValueError(f"CPU must be a whole number of cores: {value!r}")
    return int(cores)
