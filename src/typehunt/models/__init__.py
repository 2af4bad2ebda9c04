"""Shared data types for typehunt.

This package contains the record and group dataclasses consumed across the
extraction, grouping and reporting stages.
"""

from typehunt.models.records import (
    DeclarationKind,
    DeclarationRecord,
    DuplicateGroup,
    SourceLocation,
    UnitError,
)

__all__ = [
    "DeclarationKind",
    "DeclarationRecord",
    "DuplicateGroup",
    "SourceLocation",
    "UnitError",
]
