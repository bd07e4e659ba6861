"""Utility functions for KubeSizer table files."""

from kubesizer.utils.resource_parser import (
    memory_str_to_bytes,
    parse_cpu,
    parse_memory_gb,
)
from kubesizer.utils.tables_loader import load_settings, load_tables

__all__ = [
    # Quantities
    "memory_str_to_bytes",
    "parse_cpu",
    "parse_memory_gb",
    # Table files
    "load_settings",
    "load_tables",
]
