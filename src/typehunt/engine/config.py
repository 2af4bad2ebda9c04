"""Scan configuration and result dataclasses."""

from dataclasses import asdict, dataclass, field
from pathlib import Path
from typing import Any

from typehunt.errors import ConfigurationError
from typehunt.grouping import GroupingMode
from typehunt.models import DeclarationRecord, DuplicateGroup, UnitError

# Number of files read concurrently during declaration collection
FILE_READ_CONCURRENCY = 50


@dataclass
class ScanConfig:
    """Configuration for a duplicate-type scan.

    Attributes
    ----------
    root : Path
        Directory walked when no tsconfig is given (default: src).
    tsconfig : Path | None
        Path to tsconfig.json. When set, its file list is scanned instead.
    exclude : list[str]
        Path tokens to exclude (exact, prefix or substring match).
    mode : GroupingMode
        Duplicate detection mode: name, shape or both.
    min_group_size : int
        Minimum declarations per reported group; must be >= 2.
    include_enums : bool
        Extract enum declarations.
    skip_reexports : bool
        Drop re-export records before grouping.
    concurrency : int
        Maximum number of source units read and parsed at once.
    """

    root: Path = Path("src")
    tsconfig: Path | None = None
    exclude: list[str] = field(default_factory=list)
    mode: GroupingMode | str = GroupingMode.BOTH
    min_group_size: int = 2
    include_enums: bool = True
    skip_reexports: bool = True
    concurrency: int = FILE_READ_CONCURRENCY

    def __post_init__(self) -> None:
        """Coerce types and validate.

        Raises
        ------
        ConfigurationError
            If any value is out of range.
        """
        try:
            self.mode = GroupingMode(self.mode)
        except ValueError as e:
            allowed = ", ".join(m.value for m in GroupingMode)
            raise ConfigurationError(
                f"Invalid mode: {self.mode!r}. Expected: {allowed}"
            ) from e

        if isinstance(self.min_group_size, bool) or not isinstance(self.min_group_size, int):
            raise ConfigurationError(
                f"min_group_size must be an integer, got {self.min_group_size!r}"
            )
        if self.min_group_size < 2:
            raise ConfigurationError(f"min_group_size must be >= 2, got {self.min_group_size}")

        if self.concurrency < 1:
            raise ConfigurationError(f"concurrency must be >= 1, got {self.concurrency}")

        self.root = Path(self.root)
        if self.tsconfig is not None:
            self.tsconfig = Path(self.tsconfig)

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary."""
        data = asdict(self)
        data["root"] = str(self.root)
        data["tsconfig"] = str(self.tsconfig) if self.tsconfig is not None else None
        data["mode"] = str(self.mode)
        return data


@dataclass
class ScanResult:
    """Results from a scan.

    Attributes
    ----------
    files_scanned : int
        Number of source units submitted for extraction.
    file_source : str
        Human-readable description of where the file list came from.
    declarations : list[DeclarationRecord]
        All records that took part in grouping (after re-export filtering).
    errors : list[UnitError]
        Units skipped because they could not be read or parsed.
    mode : GroupingMode
        Mode the groups were built for.
    name_groups : list[DuplicateGroup]
        Groups keyed by name; empty unless the mode includes names.
    shape_groups : list[DuplicateGroup]
        Groups keyed by shape fingerprint; empty unless the mode includes shapes.
    """

    files_scanned: int
    file_source: str
    declarations: list[DeclarationRecord]
    errors: list[UnitError]
    mode: GroupingMode
    name_groups: list[DuplicateGroup] = field(default_factory=list)
    shape_groups: list[DuplicateGroup] = field(default_factory=list)

    @property
    def declarations_scanned(self) -> int:
        return len(self.declarations)

    @property
    def duplicate_count(self) -> int:
        """Number of reported groups across requested modes."""
        return len(self.name_groups) + len(self.shape_groups)

    def to_dict(self) -> dict[str, Any]:
        """Convert to a summary dictionary."""
        return {
            "files_scanned": self.files_scanned,
            "file_source": self.file_source,
            "declarations_scanned": self.declarations_scanned,
            "mode": str(self.mode),
            "name_groups": len(self.name_groups),
            "shape_groups": len(self.shape_groups),
            "errors": [e.to_dict() for e in self.errors],
        }
