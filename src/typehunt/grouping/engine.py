"""Bucket declaration records into ranked duplicate groups."""

from collections.abc import Callable, Iterable
from enum import StrEnum

from typehunt.models import DeclarationRecord, DuplicateGroup

__all__ = ["GroupingMode", "KeyFn", "by_name", "by_shape", "group_records"]

KeyFn = Callable[[DeclarationRecord], str]


class GroupingMode(StrEnum):
    """Which duplicate reports to build.

    Attributes
    ----------
    NAME : str
        Group by declared name only.
    SHAPE : str
        Group by shape fingerprint only.
    BOTH : str
        Build both reports.
    """

    NAME = "name"
    SHAPE = "shape"
    BOTH = "both"

    @property
    def includes_name(self) -> bool:
        return self in (GroupingMode.NAME, GroupingMode.BOTH)

    @property
    def includes_shape(self) -> bool:
        return self in (GroupingMode.SHAPE, GroupingMode.BOTH)


def by_name(record: DeclarationRecord) -> str:
    return record.name


def by_shape(record: DeclarationRecord) -> str:
    return record.shape_fingerprint


def group_records(
    records: Iterable[DeclarationRecord],
    key_fn: KeyFn,
    min_count: int,
) -> list[DuplicateGroup]:
    """Group records by key and keep buckets of at least ``min_count``.

    Parameters
    ----------
    records : Iterable[DeclarationRecord]
        Records in encounter order.
    key_fn : KeyFn
        Grouping key, typically ``by_name`` or ``by_shape``.
    min_count : int
        Minimum bucket size to report. Callers guarantee ``min_count >= 2``.

    Returns
    -------
    list[DuplicateGroup]
        Groups sorted by descending count, ties broken by ascending key.
        Members keep their encounter order.

    Notes
    -----
    Records whose key is empty are never grouped; empty declarations would
    otherwise all collapse into one false duplicate group.
    """
    buckets: dict[str, list[DeclarationRecord]] = {}
    for record in records:
        key = key_fn(record)
        if not key:
            continue
        buckets.setdefault(key, []).append(record)

    groups = [
        DuplicateGroup(key=key, members=tuple(members))
        for key, members in buckets.items()
        if len(members) >= min_count
    ]
    groups.sort(key=lambda g: (-g.count, g.key))
    return groups
