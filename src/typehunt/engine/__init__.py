"""Scan orchestration engine.

This package provides the main entry points for running a duplicate-type
scan, including configuration and result types.
"""

from typehunt.engine.config import FILE_READ_CONCURRENCY, ScanConfig, ScanResult
from typehunt.engine.runner import (
    build_groups,
    collect_declarations,
    collect_file_declarations,
    run_scan,
    scan_units,
)

__all__ = [
    "FILE_READ_CONCURRENCY",
    "ScanConfig",
    "ScanResult",
    "build_groups",
    "collect_declarations",
    "collect_file_declarations",
    "run_scan",
    "scan_units",
]
