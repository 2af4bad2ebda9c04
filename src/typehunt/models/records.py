"""Declaration record data models for typehunt.

This module defines the internal schema for discovered type declarations.
All downstream modules (grouping, reporting) consume records in this format.
"""

from dataclasses import dataclass
from enum import StrEnum
from typing import Any

from typehunt.normalize._helpers import format_snippet


class DeclarationKind(StrEnum):
    """Closed set of declaration kinds recognised by the extractor.

    Attributes
    ----------
    INTERFACE : str
        ``interface Foo { ... }``.
    TYPE_ALIAS : str
        ``type Foo = ...``.
    ENUM : str
        ``enum Foo { ... }`` and ``const enum Foo { ... }``.
    REEXPORT : str
        A name re-exported via ``export { Foo } from "..."``.
    """

    INTERFACE = "interface"
    TYPE_ALIAS = "type"
    ENUM = "enum"
    REEXPORT = "reexport"


@dataclass(frozen=True)
class SourceLocation:
    """Where a declaration was found.

    Attributes
    ----------
    unit_id : str
        Source unit identifier (POSIX path relative to the scan base).
    line : int
        1-based line number of the first line of the declaration.
    """

    unit_id: str
    line: int

    def __str__(self) -> str:
        return f"{self.unit_id}:{self.line}"


@dataclass(frozen=True)
class DeclarationRecord:
    """One discovered declaration.

    Records are created once per declaration during extraction and never
    mutated afterwards.

    Attributes
    ----------
    name : str
        Declared (or re-exported) name.
    kind : DeclarationKind
        Declaration kind.
    location : SourceLocation
        Source unit and line.
    raw_snippet : str
        Exact source text of the declaration.
    shape_fingerprint : str
        Normalized structural fingerprint of ``raw_snippet``.
    is_reexport : bool
        True for records produced by ``export { ... } from`` statements.
    property_names : tuple[str, ...]
        Member names, sorted ascending.
    """

    name: str
    kind: DeclarationKind
    location: SourceLocation
    raw_snippet: str
    shape_fingerprint: str
    is_reexport: bool = False
    property_names: tuple[str, ...] = ()

    @property
    def unit_id(self) -> str:
        return self.location.unit_id

    @property
    def line(self) -> int:
        return self.location.line

    @property
    def property_count(self) -> int:
        return len(self.property_names)

    @property
    def snippet(self) -> str:
        """Compact, truncated snippet for display."""
        return format_snippet(self.raw_snippet)

    def to_dict(self) -> dict[str, Any]:
        """Convert to the report declaration entry.

        Returns
        -------
        dict[str, Any]
            Dictionary with ``file``, ``line``, ``kind``, ``name``,
            ``snippet`` and ``isReExport`` keys.
        """
        return {
            "file": self.unit_id,
            "line": self.line,
            "kind": str(self.kind),
            "name": self.name,
            "snippet": self.snippet,
            "isReExport": self.is_reexport,
        }


@dataclass(frozen=True)
class DuplicateGroup:
    """Records sharing a grouping key.

    Attributes
    ----------
    key : str
        Shared name or shape fingerprint.
    members : tuple[DeclarationRecord, ...]
        Member records in first-seen order.
    """

    key: str
    members: tuple[DeclarationRecord, ...]

    @property
    def count(self) -> int:
        return len(self.members)

    @property
    def names(self) -> list[str]:
        """Distinct member names in first-seen order."""
        return list(dict.fromkeys(m.name for m in self.members))


@dataclass(frozen=True)
class UnitError:
    """A source unit that was skipped.

    Attributes
    ----------
    unit_id : str
        Source unit identifier.
    message : str
        Human-readable reason.
    kind : str
        ``"read"`` or ``"parse"``.
    """

    unit_id: str
    message: str
    kind: str = "read"

    def to_dict(self) -> dict[str, str]:
        """Convert to the report error entry."""
        return {"file": self.unit_id, "error": self.message}
