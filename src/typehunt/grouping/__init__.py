"""Duplicate grouping.

Buckets declaration records by name or shape fingerprint and ranks the
resulting duplicate groups deterministically.
"""

from typehunt.grouping.engine import (
    GroupingMode,
    KeyFn,
    by_name,
    by_shape,
    group_records,
)

__all__ = [
    "GroupingMode",
    "KeyFn",
    "by_name",
    "by_shape",
    "group_records",
]
